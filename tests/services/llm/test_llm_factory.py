"""Unit Tests for LLMFactory."""

import pytest

from src.core.config import Settings
from src.services.doc_routing import LLMUnavailableError
from src.services.llm import ClaudeClient, OpenAIClient
from src.services.llm.llm_factory import LLMFactory, NullLLMClient


def make_settings(**overrides) -> Settings:
    values = {"LLM_PROVIDER": "", "OPENAI_API_KEY": "", "ANTHROPIC_API_KEY": ""}
    values.update(overrides)
    return Settings(**values)


class TestProviderSelection:
    """Explicit providers, aliases and auto-detection."""

    def test_explicit_openai(self):
        client = LLMFactory(make_settings(LLM_PROVIDER="openai", OPENAI_API_KEY="sk-test")).create()

        assert isinstance(client, OpenAIClient)
        assert client.provider_name == "openai"

    @pytest.mark.parametrize("provider", ["claude", "Anthropic", " CLAUDE "])
    def test_claude_aliases(self, provider):
        client = LLMFactory(make_settings(LLM_PROVIDER=provider, ANTHROPIC_API_KEY="key")).create()

        assert isinstance(client, ClaudeClient)

    def test_auto_detect_prefers_openai(self):
        client = LLMFactory(make_settings(OPENAI_API_KEY="sk-test", ANTHROPIC_API_KEY="key")).create()

        assert isinstance(client, OpenAIClient)

    def test_auto_detect_claude(self):
        client = LLMFactory(make_settings(ANTHROPIC_API_KEY="key")).create()

        assert isinstance(client, ClaudeClient)

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported LLM provider"):
            LLMFactory(make_settings(LLM_PROVIDER="gemini")).create()


class TestNullClient:
    def test_no_keys_gives_null_client(self):
        client = LLMFactory(make_settings()).create()

        assert isinstance(client, NullLLMClient)
        assert client.provider_name == "none"

    def test_configured_provider_without_key(self):
        assert isinstance(LLMFactory(make_settings(LLM_PROVIDER="openai")).create(), NullLLMClient)

    @pytest.mark.asyncio
    async def test_null_client_fails_fast(self):
        with pytest.raises(LLMUnavailableError):
            await NullLLMClient().generate_completion("prompt")
