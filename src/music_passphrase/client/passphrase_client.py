import logging
import random
from dataclasses import dataclass
from typing import Any

import httpx

from music_passphrase.config import Settings, get_settings
from music_passphrase.errors import FailureKind
from music_passphrase.pipeline.decorate import RandomSource
from music_passphrase.pipeline.fallback import FallbackGenerator
from music_passphrase.pipeline.request import GenerationRequest

logger = logging.getLogger(__name__)
GENERATE_PATH = "/api/generate-passphrases"


@dataclass(frozen=True)
class ClientResult:
    passphrases: list[str]
    source: str
    failure_kind: FailureKind | None = None
    detail: str = ""

    @property
    def used_fallback(self) -> bool:
        return self.source == "fallback"


class PassphraseClient:
    """Calls the passphrase API and falls back to template phrases on failure.

    Only blank keywords surface as an error; every remote failure yields a
    ``fallback`` result that still records why the remote path was skipped.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        fallback: FallbackGenerator | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.base_url = (base_url or self.settings.passphrase_api_url).rstrip("/")
        self.transport = transport
        self.fallback = fallback or FallbackGenerator(
            templates=self.settings.fallback_templates,
            count=self.settings.passphrase_count,
            rng=rng or random.Random(),
        )

    async def generate(
        self,
        keywords: str | None,
        add_number: bool = True,
        add_special_char: bool = True,
        include_spaces: bool = True,
    ) -> ClientResult:
        request = GenerationRequest.create(
            keywords,
            add_number=add_number,
            add_special_char=add_special_char,
            include_spaces=include_spaces,
        )
        try:
            payload = await self._post(request)
        except httpx.HTTPError as exc:
            return self._fall_back(request, FailureKind.UPSTREAM, f"{exc.__class__.__name__}: {exc}")

        passphrases = payload.get("passphrases")
        if payload.get("success") is True and self._is_phrase_list(passphrases):
            logger.info("client.remote count=%d keywords=%s", len(passphrases), request.keywords)
            return ClientResult(passphrases=list(passphrases), source="remote")

        return self._fall_back(request, self._failure_kind(payload), str(payload.get("error", "invalid payload")))

    async def _post(self, request: GenerationRequest) -> dict[str, Any]:
        body = {
            "keywords": request.keywords,
            "addNumber": request.add_number,
            "addSpecialChar": request.add_special_char,
            "includeSpaces": request.include_spaces,
        }
        async with httpx.AsyncClient(
            base_url=self.base_url,
            transport=self.transport,
            timeout=self.settings.client_timeout_seconds,
        ) as client:
            response = await client.post(GENERATE_PATH, json=body)
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        if response.status_code != 200:
            payload.setdefault("success", False)
            payload.setdefault("error", f"status_code={response.status_code}")
        return payload

    def _fall_back(self, request: GenerationRequest, kind: FailureKind, detail: str) -> ClientResult:
        logger.warning("fallback.used kind=%s detail=%s keywords=%s", kind.value, detail, request.keywords)
        return ClientResult(
            passphrases=self.fallback.generate(request.keywords, request.options),
            source="fallback",
            failure_kind=kind,
            detail=detail,
        )

    @staticmethod
    def _failure_kind(payload: dict[str, Any]) -> FailureKind:
        try:
            return FailureKind(payload.get("kind"))
        except ValueError:
            return FailureKind.UPSTREAM

    @staticmethod
    def _is_phrase_list(value: Any) -> bool:
        return isinstance(value, list) and bool(value) and all(isinstance(item, str) and item for item in value)
