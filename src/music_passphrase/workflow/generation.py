import logging
import random
from dataclasses import dataclass

from music_passphrase.config import Settings, get_settings
from music_passphrase.errors import PassphraseError
from music_passphrase.pipeline.decorate import RandomSource
from music_passphrase.pipeline.normalizer import PassphraseNormalizer
from music_passphrase.pipeline.request import GenerationRequest
from music_passphrase.prompts.builder import PromptMode, PromptSpec, build_prompt
from music_passphrase.providers.llm.groq import GroqCompletionClient

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    passphrases: list[str]
    raw_completion: str
    prompt: PromptSpec


class GenerationWorkflow:
    """prompt -> complete -> normalize, wired as LangGraph nodes.

    Typed errors from any node propagate to the caller unchanged.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        completion_client: GroqCompletionClient | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.mode = PromptMode(self.settings.prompt_mode)
        self.completion_client = completion_client or GroqCompletionClient(self.settings)
        self.normalizer = PassphraseNormalizer(
            count=self.settings.passphrase_count,
            rng=rng or random.Random(),
        )

    async def run(self, request: GenerationRequest) -> GenerationResult:
        from typing import TypedDict
        from langgraph.graph import END, START, StateGraph

        class WorkflowState(TypedDict):
            request: GenerationRequest
            prompt: PromptSpec | None
            raw_completion: str
            passphrases: list[str]

        async def prompt_node(state: WorkflowState) -> dict:
            logger.info("prompt mode=%s", self.mode.value)
            return {"prompt": build_prompt(state["request"].keywords, self.mode, self.settings.passphrase_count)}

        async def complete_node(state: WorkflowState) -> dict:
            logger.info("complete")
            return {"raw_completion": await self.completion_client.complete(state["prompt"])}

        async def normalize_node(state: WorkflowState) -> dict:
            logger.info("normalize")
            passphrases = self.normalizer.normalize(state["raw_completion"], state["request"].options)
            return {"passphrases": passphrases}

        graph = StateGraph(WorkflowState)
        graph.add_node("prompt_step", prompt_node)
        graph.add_node("complete_step", complete_node)
        graph.add_node("normalize_step", normalize_node)
        graph.add_edge(START, "prompt_step")
        graph.add_edge("prompt_step", "complete_step")
        graph.add_edge("complete_step", "normalize_step")
        graph.add_edge("normalize_step", END)

        app = graph.compile()
        try:
            final_state = await app.ainvoke(
                {
                    "request": request,
                    "prompt": None,
                    "raw_completion": "",
                    "passphrases": [],
                }
            )
        except PassphraseError as exc:
            logger.error("generate.error kind=%s detail=%s", exc.kind.value, exc)
            raise

        return GenerationResult(
            passphrases=list(final_state["passphrases"]),
            raw_completion=final_state["raw_completion"],
            prompt=final_state["prompt"],
        )
