"""Provider selection for the LLM collaborator."""
import logging
from enum import Enum
from typing import Optional

from src.core.config import Settings, settings as default_settings
from src.services.doc_routing.exceptions import LLMUnavailableError

from .base_client import BaseLLMClient, LLMCompletion
from .claude_client import ClaudeClient
from .openai_client import OpenAIClient

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    OPENAI = "openai"
    CLAUDE = "claude"


PROVIDER_ALIASES = {
    "openai": LLMProvider.OPENAI,
    "claude": LLMProvider.CLAUDE,
    "anthropic": LLMProvider.CLAUDE,
}


class NullLLMClient(BaseLLMClient):
    """Stand-in when no provider is configured; every call fails fast."""

    def __init__(self):
        super().__init__(api_key="", model="none")

    @property
    def provider_name(self) -> str:
        return "none"

    async def generate_completion(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
        **kwargs
    ) -> LLMCompletion:
        raise LLMUnavailableError("No LLM provider configured; set LLM_PROVIDER and an API key")


class LLMFactory:
    """Builds the configured LLM client."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def create(self, provider: Optional[str] = None) -> BaseLLMClient:
        requested = (provider if provider is not None else self.settings.LLM_PROVIDER).strip().lower()

        if requested:
            resolved = PROVIDER_ALIASES.get(requested)
            if resolved is None:
                raise ValueError(
                    f"Unsupported LLM provider '{requested}'. "
                    f"Supported: {', '.join(sorted(PROVIDER_ALIASES))}"
                )
            client = self._build(resolved)
        else:
            logger.debug("No LLM provider configured, trying auto-detection")
            client = self._build(LLMProvider.OPENAI) or self._build(LLMProvider.CLAUDE)

        if client is None:
            logger.warning(
                "No LLM provider configured. Selection will use rule-based fallbacks only."
            )
            return NullLLMClient()

        logger.info(f"LLM client initialized: provider={client.provider_name}, model={client.model}")
        return client

    def _build(self, provider: LLMProvider) -> Optional[BaseLLMClient]:
        s = self.settings
        if provider == LLMProvider.OPENAI:
            if not s.OPENAI_API_KEY:
                logger.debug("OpenAI API key not found in configuration")
                return None
            return OpenAIClient(
                api_key=s.OPENAI_API_KEY,
                model=s.OPENAI_MODEL,
                max_tokens=s.LLM_MAX_TOKENS,
                temperature=s.LLM_TEMPERATURE,
                timeout=s.LLM_TIMEOUT_SECONDS,
                base_url=s.OPENAI_BASE_URL or None,
            )
        if not s.ANTHROPIC_API_KEY:
            logger.debug("Anthropic API key not found in configuration")
            return None
        return ClaudeClient(
            api_key=s.ANTHROPIC_API_KEY,
            model=s.ANTHROPIC_MODEL,
            max_tokens=s.LLM_MAX_TOKENS,
            temperature=s.LLM_TEMPERATURE,
            timeout=s.LLM_TIMEOUT_SECONDS,
        )


def get_llm_client(settings: Optional[Settings] = None, provider: Optional[str] = None) -> BaseLLMClient:
    """Convenience wrapper around LLMFactory."""
    return LLMFactory(settings).create(provider)
