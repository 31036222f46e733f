import argparse
import asyncio
import logging
import sys

from music_passphrase.client.passphrase_client import ClientResult, PassphraseClient
from music_passphrase.client.preferences import Preferences, PreferencesStore
from music_passphrase.config import Settings, get_settings
from music_passphrase.errors import ValidationError
from music_passphrase.pipeline.fallback import FallbackGenerator
from music_passphrase.pipeline.request import GenerationRequest

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="music-passphrase",
        description="Generate passphrases from a music artist's song titles.",
    )
    parser.add_argument("keywords", nargs="?", default=None, help="Artist name. Defaults to the last one used.")
    parser.add_argument("--number", action=argparse.BooleanOptionalAction, default=None, help="Append a 2-digit number.")
    parser.add_argument(
        "--special",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Append one special character.",
    )
    parser.add_argument(
        "--spaces",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Keep spaces between words.",
    )
    parser.add_argument("--api-url", default="", help="Passphrase API base URL.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--local", action="store_true", help="Serve the request with the in-process app.")
    mode.add_argument("--offline", action="store_true", help="Skip the API and use template phrases only.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level.")
    return parser.parse_args(argv)


def resolve_preferences(args: argparse.Namespace, saved: Preferences) -> Preferences:
    return Preferences(
        keywords=args.keywords if args.keywords is not None else saved.keywords,
        add_number=saved.add_number if args.number is None else args.number,
        add_special_char=saved.add_special_char if args.special is None else args.special,
        include_spaces=saved.include_spaces if args.spaces is None else args.spaces,
    )


async def generate(args: argparse.Namespace, prefs: Preferences, settings: Settings) -> ClientResult:
    if args.offline:
        request = GenerationRequest.create(
            prefs.keywords,
            add_number=prefs.add_number,
            add_special_char=prefs.add_special_char,
            include_spaces=prefs.include_spaces,
        )
        generator = FallbackGenerator(templates=settings.fallback_templates, count=settings.passphrase_count)
        return ClientResult(passphrases=generator.generate(request.keywords, request.options), source="fallback")

    transport = None
    base_url = args.api_url or None
    if args.local:
        import httpx

        from music_passphrase.api.app import app

        transport = httpx.ASGITransport(app=app)
        base_url = "http://music-passphrase.local"

    client = PassphraseClient(settings=settings, base_url=base_url, transport=transport)
    return await client.generate(
        prefs.keywords,
        add_number=prefs.add_number,
        add_special_char=prefs.add_special_char,
        include_spaces=prefs.include_spaces,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    settings = get_settings()
    store = PreferencesStore(settings.preferences_path)
    prefs = resolve_preferences(args, store.load())
    store.save(prefs)

    try:
        result = asyncio.run(generate(args, prefs, settings))
    except ValidationError:
        print("error: please enter a music artist name", file=sys.stderr)
        return 2

    if result.used_fallback and result.failure_kind is not None:
        logger.info("cli.fallback kind=%s", result.failure_kind.value)
    for phrase in result.passphrases:
        print(phrase)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
