"""Unit Tests for build_services."""

from unittest.mock import Mock

import pytest

from src.core.config import Settings
from src.core.container import build_services
from src.services.llm.llm_factory import NullLLMClient


class TestBuildServices:
    def test_registers_namespaces(self, mock_llm_client):
        services = build_services(llm_client=mock_llm_client)

        assert services.registry.namespaces == ["deployments", "sdks/dotnet"]
        assert services.router.namespaces == ["deployments", "sdks/dotnet", "docs"]
        assert services.cost_tracker.provider == "mock"

    def test_selector_config_from_settings(self, mock_llm_client):
        settings = Settings(SELECTION_MAX_ATTEMPTS=5, SELECTION_BACKOFF_SECONDS=0.0, DOC_URL_LIMIT=2)

        services = build_services(settings, llm_client=mock_llm_client)

        assert services.router.selector.config.max_attempts == 5
        assert services.router.assembler.max_urls == 2
        assert services.router.selector.config.attempt_timeout_seconds is None

    def test_attempt_timeout_from_settings(self, mock_llm_client):
        services = build_services(Settings(SELECTION_ATTEMPT_TIMEOUT_SECONDS=12.5), llm_client=mock_llm_client)

        assert services.router.selector.config.attempt_timeout_seconds == 12.5
        assert services.docs.narrower.page_selector.config.attempt_timeout_seconds == 12.5

    def test_settings_read_env_file(self):
        assert Settings.model_config["env_file"] == ".env"
        assert Settings.model_config["extra"] == "ignore"

    @pytest.mark.asyncio
    async def test_works_without_llm_provider(self):
        """Rule fallbacks keep deployments answerable with no provider configured."""
        settings = Settings(
            LLM_PROVIDER="", OPENAI_API_KEY="", ANTHROPIC_API_KEY="", SELECTION_BACKOFF_SECONDS=0.0
        )

        services = build_services(settings, feature_flags=Mock(is_enabled=Mock(return_value=False)))
        content = await services.deployments.get_deployment_documentation("helm-charts", "kubernetes")

        assert isinstance(services.router.selector.llm_client, NullLLMClient)
        assert "Helm" in content
