from dataclasses import dataclass
from enum import Enum


class PromptMode(str, Enum):
    ARTIST = "artist"
    KEYWORD = "keyword"


@dataclass(frozen=True)
class PromptSpec:
    text: str
    temperature: float
    max_tokens: int
    top_p: float | None = None


def build_prompt(keywords: str, mode: PromptMode | str = PromptMode.ARTIST, count: int = 5) -> PromptSpec:
    mode = PromptMode(mode)
    keywords = keywords.strip()
    if mode is PromptMode.KEYWORD:
        return PromptSpec(
            text=_keyword_prompt(keywords, count),
            temperature=0.8,
            max_tokens=500,
        )
    return PromptSpec(
        text=_artist_prompt(keywords, count),
        temperature=0.1,
        max_tokens=200,
        top_p=0.9,
    )


def _artist_prompt(artist: str, count: int) -> str:
    return (
        f'Generate {count} unique short phrases (MINIMUM 4 words, maximum 10 words each) '
        f'from the artist "{artist}".\n'
        "\n"
        "Requirements:\n"
        "- Use ACTUAL CONSECUTIVE WORDS from published song titles\n"
        "- Do NOT invent or modify titles\n"
        "- Do NOT change the order of words\n"
        "- Do NOT provide duplicates\n"
        "- Each phrase must be exactly as it appears in the original public song titles\n"
        "\n"
        "RESPONSE FORMAT: Return ONLY the phrases, one per line, "
        "with NO explanatory text, NO introductions, NO headers.\n"
        "\n"
        "If you're not certain about exact lyrics, don't guess."
    )


def _keyword_prompt(keyword: str, count: int) -> str:
    return (
        f'Given the keyword: "{keyword}"\n'
        "\n"
        f"Generate {count} passphrases that:\n"
        "- Are 5 to 8 words long\n"
        "- Use natural, everyday English\n"
        "- Words are lowercase and space-separated\n"
        "- Do not include punctuation or quotation marks\n"
        "\n"
        f"Return only the {count} passphrases, one per line."
    )
