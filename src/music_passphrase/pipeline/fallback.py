import logging
import random

from music_passphrase.config import default_fallback_templates
from music_passphrase.errors import ValidationError
from music_passphrase.pipeline.decorate import RandomSource, capitalize, decorate
from music_passphrase.pipeline.request import DecorationOptions

logger = logging.getLogger(__name__)


class FallbackGenerator:
    """Template-based passphrases used when the remote path is unusable.

    Output goes through the same capitalization and decoration as the
    normalizer, so callers cannot tell the two sources apart by shape.
    """

    def __init__(
        self,
        templates: list[str] | None = None,
        count: int = 5,
        rng: RandomSource | None = None,
    ) -> None:
        self.templates = list(templates or default_fallback_templates())
        self.count = count
        self.rng = rng or random.Random()

    def generate(self, keywords: str, options: DecorationOptions | None = None) -> list[str]:
        keyword = (keywords or "").strip().lower()
        if not keyword:
            raise ValidationError("Keywords are required")
        options = options or DecorationOptions()

        bank = [template.replace("{keyword}", keyword) for template in self.templates]
        self.rng.shuffle(bank)
        selected = bank[: self.count]
        logger.info("fallback.generated count=%d templates=%d", len(selected), len(self.templates))
        return [decorate(capitalize(phrase), options, self.rng) for phrase in selected]
