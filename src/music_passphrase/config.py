from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROMPT_MODES = ("artist", "keyword")


def default_fallback_templates() -> list[str]:
    return [
        "bright {keyword} morning coffee ritual",
        "dancing {keyword} under silver moonlight",
        "where {keyword} whispers ancient forest secrets",
        "golden {keyword} sunset painting memories",
        "watching {keyword} flow through mountain streams",
        "purple {keyword} dreams floating softly",
        "letting {keyword} create magical garden moments",
        "singing {keyword} birds welcome dawn",
        "quiet {keyword} rain on city rooftops",
        "hearing {keyword} echo across the empty stage",
    ]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    groq_api_key: str = Field(default="", alias="GROQ_API_KEY")
    groq_base_url: str = Field(default="https://api.groq.com/openai/v1", alias="GROQ_BASE_URL")
    groq_model: str = Field(default="llama-3.1-8b-instant", alias="GROQ_MODEL")
    llm_timeout_seconds: float | None = Field(default=None, alias="LLM_TIMEOUT_SECONDS")

    prompt_mode: str = Field(default="artist", alias="PROMPT_MODE")
    passphrase_count: int = Field(default=5, alias="PASSPHRASE_COUNT")
    fallback_templates: list[str] = Field(
        default_factory=default_fallback_templates,
        alias="FALLBACK_TEMPLATES",
    )

    passphrase_api_url: str = Field(default="http://127.0.0.1:8000", alias="PASSPHRASE_API_URL")
    client_timeout_seconds: float = Field(default=30.0, alias="CLIENT_TIMEOUT_SECONDS")

    build_commit_hash: str = Field(default="unknown", alias="BUILD_COMMIT_HASH")
    build_time: str = Field(default="unknown", alias="BUILD_TIME")
    build_version: str = Field(default="unknown", alias="BUILD_VERSION")
    app_env: str = Field(default="development", alias="APP_ENV")

    preferences_path: str = Field(
        default="~/.music-passphrase/preferences.json",
        alias="PREFERENCES_PATH",
    )

    def model_post_init(self, __context: Any) -> None:  # type: ignore[override]
        self.prompt_mode = self.prompt_mode.strip().lower()
        if self.prompt_mode not in PROMPT_MODES:
            self.prompt_mode = "artist"
        self.passphrase_count = max(self.passphrase_count, 1)
        templates = [item.strip() for item in self.fallback_templates if "{keyword}" in item]
        if len(templates) < self.passphrase_count:
            templates = default_fallback_templates()
        self.fallback_templates = templates


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
