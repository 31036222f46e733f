import random
import re

import pytest

from music_passphrase.errors import EmptyResultError
from music_passphrase.pipeline.normalizer import PassphraseNormalizer
from music_passphrase.pipeline.request import DecorationOptions

PLAIN = DecorationOptions(add_number=False, add_special_char=False, include_spaces=True)


def test_exact_match_dedupe_keeps_case_variants(fixed_random) -> None:
    normalizer = PassphraseNormalizer(rng=fixed_random)

    result = normalizer.normalize("1. Love Story\nlove story\n  \nBlank Space", PLAIN)

    assert result == ["Love story", "Love story", "Blank space"]


def test_identical_lines_collapse_in_first_seen_order(fixed_random) -> None:
    normalizer = PassphraseNormalizer(rng=fixed_random)

    result = normalizer.normalize("Shake It Off\nStyle\nShake It Off\nWildest Dreams", PLAIN)

    assert result == ["Shake it off", "Style", "Wildest dreams"]


def test_truncates_to_five(fixed_random) -> None:
    normalizer = PassphraseNormalizer(rng=fixed_random)
    raw = "\n".join(f"song title number {word}" for word in "abcdefg")

    result = normalizer.normalize(raw, PLAIN)

    assert len(result) == 5
    assert result[0] == "Song title number a"
    assert result[-1] == "Song title number e"


def test_strips_quotes_and_enumeration(fixed_random) -> None:
    normalizer = PassphraseNormalizer(rng=fixed_random)
    raw = '\n'.join(
        [
            '1. "Rolling in the Deep"',
            "2) ‘Set Fire to the Rain’",
            "3- “Someone Like You”",
            "4 Send My Love to Your New Lover",
            "Don't You Remember",
        ]
    )

    result = normalizer.normalize(raw, PLAIN)

    assert result == [
        "Rolling in the deep",
        "Set fire to the rain",
        "Someone like you",
        "Send my love to your new lover",
        "Dont you remember",
    ]
    for phrase in result:
        assert not re.search("[\"'“”‘’]", phrase)


def test_marker_only_lines_count_as_blank(fixed_random) -> None:
    normalizer = PassphraseNormalizer(rng=fixed_random)

    result = normalizer.normalize('1.\n""\nHello From The Other Side', PLAIN)

    assert result == ["Hello from the other side"]


@pytest.mark.parametrize("raw", ["", "   ", "\n\n  \n", '1.\n""\n2) '])
def test_nothing_usable_raises(raw: str, fixed_random) -> None:
    normalizer = PassphraseNormalizer(rng=fixed_random)

    with pytest.raises(EmptyResultError):
        normalizer.normalize(raw, PLAIN)


def test_number_and_symbol_with_spaces(fixed_random) -> None:
    normalizer = PassphraseNormalizer(rng=fixed_random)
    options = DecorationOptions(add_number=True, add_special_char=True, include_spaces=True)

    result = normalizer.normalize("Hello", options)

    assert result == ["Hello 42#"]


def test_number_without_spaces_has_no_separator(fixed_random) -> None:
    normalizer = PassphraseNormalizer(rng=fixed_random)
    options = DecorationOptions(add_number=True, add_special_char=False, include_spaces=False)

    result = normalizer.normalize("Rolling In The Deep", options)

    assert result == ["Rollinginthedeep42"]


def test_symbol_only_is_appended_directly(fixed_random) -> None:
    normalizer = PassphraseNormalizer(rng=fixed_random)
    options = DecorationOptions(add_number=False, add_special_char=True, include_spaces=True)

    result = normalizer.normalize("Skyfall", options)

    assert result == ["Skyfall#"]


def test_fully_decorated_adele_output_shape() -> None:
    normalizer = PassphraseNormalizer(rng=random.Random(7))
    options = DecorationOptions(add_number=True, add_special_char=True, include_spaces=False)
    raw = "\n".join(
        [
            "Rolling in the Deep",
            "Set Fire to the Rain",
            "Someone Like You",
            "Chasing Pavements",
            "When We Were Young",
        ]
    )

    result = normalizer.normalize(raw, options)

    assert len(result) == 5
    for phrase in result:
        assert re.fullmatch(r"[A-Z][a-z]+\d{2}[!@#$%&*?]", phrase)
        assert 10 <= int(phrase[-3:-1]) <= 99


def test_random_numbers_stay_in_two_digit_range() -> None:
    normalizer = PassphraseNormalizer(rng=random.Random(1))
    options = DecorationOptions(add_number=True, add_special_char=False, include_spaces=True)

    for _ in range(50):
        for phrase in normalizer.normalize("a b\nc d\ne f", options):
            assert 10 <= int(phrase.rsplit(" ", 1)[1]) <= 99
