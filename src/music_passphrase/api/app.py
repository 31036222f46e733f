import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from music_passphrase.api.schemas import ErrorResponse, GeneratePassphrasesRequest, GeneratePassphrasesResponse
from music_passphrase.config import get_settings
from music_passphrase.errors import ValidationError
from music_passphrase.pipeline.request import GenerationRequest
from music_passphrase.service.build_info import format_build_time, get_build_info, short_version
from music_passphrase.service.generator import GenerateService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """Answers accepted preflights with an empty body instead of 'OK'."""

    def preflight_response(self, request_headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


app = FastAPI(title="music-passphrase", version="0.1.0")
app.add_middleware(
    EmptyPreflightCORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
service = GenerateService()
started_at = time.monotonic()


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 405:
        return JSONResponse(status_code=405, content={"error": "Method not allowed"}, headers=exc.headers)
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request.invalid path=%s errors=%d", request.url.path, len(exc.errors()))
    return JSONResponse(status_code=400, content=ErrorResponse(error="Invalid request body").model_dump(exclude_none=True))


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.get("/api/health")
async def health() -> dict:
    info = get_build_info(get_settings())
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "build": {
            **info.as_dict(),
            "short_version": short_version(info),
            "build_time_display": format_build_time(info.build_time),
            "is_production": info.is_production,
            "is_development": info.is_development,
        },
        "uptime": round(time.monotonic() - started_at, 3),
    }


@app.options("/api/generate-passphrases")
async def generate_passphrases_preflight() -> Response:
    return Response(status_code=200)


@app.post(
    "/api/generate-passphrases",
    response_model=GeneratePassphrasesResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_passphrases(req: GeneratePassphrasesRequest):
    try:
        request = GenerationRequest.create(
            req.keywords,
            add_number=req.add_number,
            add_special_char=req.add_special_char,
            include_spaces=req.include_spaces,
        )
    except ValidationError as exc:
        return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump(exclude_none=True))

    outcome = await service.generate(request)
    if not outcome.success:
        return JSONResponse(status_code=500, content=outcome.as_payload())
    return GeneratePassphrasesResponse(passphrases=outcome.passphrases)
