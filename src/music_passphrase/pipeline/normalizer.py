import logging
import random

from music_passphrase.errors import EmptyResultError
from music_passphrase.pipeline.decorate import RandomSource, capitalize, clean_phrase, decorate
from music_passphrase.pipeline.request import DecorationOptions

logger = logging.getLogger(__name__)


class PassphraseNormalizer:
    """Turn a free-text completion into at most ``count`` decorated passphrases.

    Lines are trimmed, blank lines dropped and exact duplicates collapsed
    (case-sensitive, first occurrence wins) before truncation. Lines that are
    nothing but quotes or an enumeration marker are treated as blank.
    """

    def __init__(self, count: int = 5, rng: RandomSource | None = None) -> None:
        self.count = count
        self.rng = rng or random.Random()

    def normalize(self, raw_text: str, options: DecorationOptions) -> list[str]:
        phrases = self.extract_lines(raw_text)
        if not phrases:
            raise EmptyResultError("Failed to extract passphrases from completion")
        processed = [decorate(capitalize(phrase), options, self.rng) for phrase in phrases]
        logger.info(
            "normalize.result count=%d number=%s special=%s spaces=%s",
            len(processed),
            options.add_number,
            options.add_special_char,
            options.include_spaces,
        )
        return processed

    def extract_lines(self, raw_text: str) -> list[str]:
        seen: set[str] = set()
        phrases: list[str] = []
        for line in (raw_text or "").strip().split("\n"):
            line = line.strip()
            if not line or line in seen:
                continue
            seen.add(line)
            cleaned = clean_phrase(line)
            if not cleaned:
                continue
            phrases.append(cleaned)
            if len(phrases) >= self.count:
                break
        return phrases
