import re
from collections.abc import MutableSequence, Sequence
from typing import Protocol, TypeVar

from music_passphrase.pipeline.request import DecorationOptions

T = TypeVar("T")

SPECIAL_CHARS = "!@#$%&*?"
NUMBER_RANGE = (10, 99)

QUOTES_RE = re.compile("[\"'“”‘’]")
ENUMERATION_RE = re.compile(r"^\d+[.)\-\s]+")
WHITESPACE_RE = re.compile(r"\s+")


class RandomSource(Protocol):
    """Subset of ``random.Random`` the pipeline draws from."""

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...

    def shuffle(self, x: MutableSequence[T]) -> None: ...


def clean_phrase(phrase: str) -> str:
    """Drop quote marks and a leading ``1.``/``2)``/``3-`` marker."""
    cleaned = QUOTES_RE.sub("", phrase.strip())
    cleaned = ENUMERATION_RE.sub("", cleaned)
    return cleaned.strip()


def capitalize(phrase: str) -> str:
    # Internal words are lowercased on purpose, title case is not preserved.
    return phrase[:1].upper() + phrase[1:].lower()


def decorate(phrase: str, options: DecorationOptions, rng: RandomSource) -> str:
    decorated = phrase
    if not options.include_spaces:
        decorated = WHITESPACE_RE.sub("", decorated)
    if options.add_number:
        number = rng.randint(*NUMBER_RANGE)
        decorated += f" {number}" if options.include_spaces else str(number)
    if options.add_special_char:
        decorated += rng.choice(SPECIAL_CHARS)
    return decorated
