import asyncio
import json

import httpx
import pytest

from music_passphrase.api import app as api_app
from music_passphrase.client.passphrase_client import PassphraseClient
from music_passphrase.config import Settings
from music_passphrase.errors import FailureKind, ValidationError
from music_passphrase.pipeline.request import GenerationRequest
from music_passphrase.service.generator import GenerationOutcome


def _client(handler, fixed_random) -> PassphraseClient:
    return PassphraseClient(
        settings=Settings(_env_file=None),
        base_url="http://api.test",
        transport=httpx.MockTransport(handler),
        rng=fixed_random,
    )


def test_remote_success(fixed_random) -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"passphrases": ["Skyfall 42#"], "success": True})

    result = asyncio.run(_client(handler, fixed_random).generate(" Adele "))

    assert result.source == "remote"
    assert result.passphrases == ["Skyfall 42#"]
    assert result.failure_kind is None
    assert seen["path"] == "/api/generate-passphrases"
    assert seen["body"] == {"keywords": "Adele", "addNumber": True, "addSpecialChar": True, "includeSpaces": True}


@pytest.mark.parametrize(
    ("kind", "expected"),
    [("configuration", FailureKind.CONFIGURATION), ("empty_result", FailureKind.EMPTY_RESULT), (None, FailureKind.UPSTREAM)],
)
def test_server_failure_falls_back_with_kind(kind, expected, fixed_random) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = {"error": "Failed to generate passphrases", "success": False}
        if kind:
            body["kind"] = kind
        return httpx.Response(500, json=body)

    result = asyncio.run(_client(handler, fixed_random).generate("Adele", include_spaces=False))

    assert result.used_fallback is True
    assert result.failure_kind is expected
    assert len(result.passphrases) == 5
    assert all(" " not in phrase and "adele" in phrase for phrase in result.passphrases)


def test_transport_error_falls_back(fixed_random) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = asyncio.run(_client(handler, fixed_random).generate("Adele"))

    assert result.source == "fallback"
    assert result.failure_kind is FailureKind.UPSTREAM
    assert "ConnectError" in result.detail


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"passphrases": [], "success": True}),
        httpx.Response(200, json=["Skyfall"]),
    ],
)
def test_unusable_payload_falls_back(response, fixed_random) -> None:
    result = asyncio.run(_client(lambda request: response, fixed_random).generate("Adele"))

    assert result.used_fallback is True
    assert len(result.passphrases) == 5


def test_blank_keywords_never_hit_network(fixed_random) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(ValidationError):
        asyncio.run(_client(handler, fixed_random).generate("   "))


def test_in_process_app_round_trip(monkeypatch, fixed_random) -> None:
    async def fake_generate(request: GenerationRequest) -> GenerationOutcome:
        return GenerationOutcome(passphrases=[f"{request.keywords} remote"])

    monkeypatch.setattr(api_app.service, "generate", fake_generate)
    client = PassphraseClient(
        settings=Settings(_env_file=None),
        base_url="http://music-passphrase.local",
        transport=httpx.ASGITransport(app=api_app.app),
        rng=fixed_random,
    )

    result = asyncio.run(client.generate("Adele"))

    assert result.source == "remote"
    assert result.passphrases == ["Adele remote"]
