import logging
from dataclasses import dataclass, field
from typing import Any

from music_passphrase.errors import FailureKind, PassphraseError
from music_passphrase.pipeline.request import GenerationRequest
from music_passphrase.workflow.generation import GenerationWorkflow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOutcome:
    """Success with passphrases, or failure tagged with its kind.

    ``message`` is for server logs and diagnostics only; ``as_payload`` never
    includes it.
    """

    passphrases: list[str] = field(default_factory=list)
    failure_kind: FailureKind | None = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.failure_kind is None

    def as_payload(self) -> dict[str, Any]:
        if self.success:
            return {"passphrases": self.passphrases, "success": True}
        return {
            "error": "Failed to generate passphrases",
            "kind": self.failure_kind.value,
            "success": False,
        }


class GenerateService:
    def __init__(self, workflow: GenerationWorkflow | None = None) -> None:
        self.workflow = workflow or GenerationWorkflow()

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        try:
            output = await self.workflow.run(request)
        except PassphraseError as exc:
            logger.exception("generate.failed kind=%s keywords=%s", exc.kind.value, request.keywords)
            return GenerationOutcome(failure_kind=exc.kind, message=str(exc))
        except Exception as exc:
            logger.exception("generate.failed kind=internal keywords=%s", request.keywords)
            return GenerationOutcome(failure_kind=FailureKind.INTERNAL, message=f"{exc.__class__.__name__}: {exc}")

        logger.info("generate.ok count=%d keywords=%s", len(output.passphrases), request.keywords)
        return GenerationOutcome(passphrases=output.passphrases)
