from dataclasses import dataclass

from music_passphrase.errors import ValidationError


@dataclass(frozen=True)
class DecorationOptions:
    add_number: bool = False
    add_special_char: bool = False
    include_spaces: bool = True


@dataclass(frozen=True)
class GenerationRequest:
    """One user action worth of input, consumed once by the pipeline."""

    keywords: str
    add_number: bool = False
    add_special_char: bool = False
    include_spaces: bool = True

    @classmethod
    def create(
        cls,
        keywords: str | None,
        add_number: bool = False,
        add_special_char: bool = False,
        include_spaces: bool = True,
    ) -> "GenerationRequest":
        trimmed = (keywords or "").strip()
        if not trimmed:
            raise ValidationError("Keywords are required")
        return cls(
            keywords=trimmed,
            add_number=add_number,
            add_special_char=add_special_char,
            include_spaces=include_spaces,
        )

    @property
    def options(self) -> DecorationOptions:
        return DecorationOptions(
            add_number=self.add_number,
            add_special_char=self.add_special_char,
            include_spaces=self.include_spaces,
        )
