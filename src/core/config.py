import os
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RESOURCES_PATH = str(Path(__file__).resolve().parent.parent / "resources")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "featbit-doc-router"

    env: str = "development"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # LLM provider: openai, claude/anthropic, or empty for auto-detection
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "")
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")
    ANTHROPIC_MODEL: str = os.getenv("ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022")
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")
    LLM_TIMEOUT_SECONDS: int = 60
    LLM_TEMPERATURE: float = 0.0
    LLM_MAX_TOKENS: int = 1000

    SELECTION_MAX_ATTEMPTS: int = 3
    SELECTION_BACKOFF_SECONDS: float = 0.5
    # Per-attempt LLM timeout; 0 leaves timeouts to the client
    SELECTION_ATTEMPT_TIMEOUT_SECONDS: float = 0.0
    DOC_URL_LIMIT: int = 3

    RESOURCES_PATH: str = os.getenv("RESOURCES_PATH", DEFAULT_RESOURCES_PATH)

    # Comma separated list of enabled feature flag keys
    FEATURE_FLAGS: str = os.getenv("FEATURE_FLAGS", "")

    @property
    def enabled_feature_flags(self) -> List[str]:
        return [flag.strip().lower() for flag in self.FEATURE_FLAGS.split(",") if flag.strip()]

settings = Settings()
