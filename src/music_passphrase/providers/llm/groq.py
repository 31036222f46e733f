import logging
from typing import Any

from music_passphrase.config import Settings
from music_passphrase.errors import ConfigurationError, UpstreamError
from music_passphrase.prompts.builder import PromptSpec

logger = logging.getLogger(__name__)
ERROR_LOG_LIMIT = 1000


class GroqCompletionClient:
    """Single-shot chat completion against Groq's OpenAI-compatible API.

    No retries and no streaming; the caller decides whether to fall back.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.model = settings.groq_model
        self._llms: dict[tuple[float, int, float | None], Any] = {}

    async def complete(self, prompt: PromptSpec) -> str:
        if not self.settings.groq_api_key:
            raise ConfigurationError("Groq API key not configured")

        llm = self._get_llm(prompt)
        logger.info(
            "llm.call model=%s temperature=%.2f max_tokens=%d",
            self.model,
            prompt.temperature,
            prompt.max_tokens,
        )
        logger.info("llm.request.full model=%s\n%s", self.model, prompt.text)
        try:
            response = await llm.ainvoke(prompt.text)
        except Exception as exc:
            logger.error(
                "llm.error model=%s type=%s detail=%s",
                self.model,
                exc.__class__.__name__,
                self._extract_error_detail(exc),
            )
            raise UpstreamError(f"Completion request failed: {exc.__class__.__name__}") from exc

        text = self._message_text(getattr(response, "content", response))
        logger.info("llm.response.full model=%s\n%s", self.model, text)
        if not text:
            raise UpstreamError("No response content from completion service")
        return text

    def _get_llm(self, prompt: PromptSpec):
        key = (prompt.temperature, prompt.max_tokens, prompt.top_p)
        if key not in self._llms:
            from langchain_openai import ChatOpenAI

            kwargs: dict[str, Any] = {}
            if prompt.top_p is not None:
                kwargs["top_p"] = prompt.top_p
            self._llms[key] = ChatOpenAI(
                model=self.model,
                api_key=self.settings.groq_api_key,
                base_url=self.settings.groq_base_url,
                temperature=prompt.temperature,
                max_tokens=prompt.max_tokens,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=0,
                streaming=False,
                **kwargs,
            )
        return self._llms[key]

    @staticmethod
    def _message_text(content: Any) -> str:
        if content is None:
            return ""
        if isinstance(content, str):
            return content.strip()
        if isinstance(content, list):
            parts: list[str] = []
            for item in content:
                if isinstance(item, dict):
                    parts.append(str(item.get("text", "")))
                else:
                    parts.append(str(item))
            return "\n".join(parts).strip()
        return str(content).strip()

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"

    def _extract_error_detail(self, exc: Exception) -> str:
        status_code = getattr(exc, "status_code", None)
        message = getattr(exc, "message", None) or str(exc)
        body = getattr(exc, "body", None)
        details = [f"status_code={status_code}" if status_code is not None else ""]
        if body is not None:
            details.append(f"body={body}")
        details.append(f"message={message}")
        return self._clip(" ".join([part for part in details if part]).strip(), ERROR_LOG_LIMIT)
