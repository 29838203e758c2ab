"""
Unit Tests for TwoPhaseNarrower

Section-then-pages routing, the Phase 1 short-circuit and the not-found
feature flag hook.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from src.models.schemas.doc_routing import ContentKind, DocTree
from src.services.doc_routing import ContentAssembler, Selector, TwoPhaseNarrower
from src.services.doc_routing.two_phase_narrower import section_namespace
from src.services.feature_flags import DOC_NOT_FOUND

TARGETING_URL = "https://docs.example/feature-flags/targeting-rules"


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def doc_tree(sample_doc_tree):
    return DocTree.model_validate(sample_doc_tree)


@pytest.fixture
def feature_flags():
    evaluator = Mock()
    evaluator.is_enabled.return_value = True
    return evaluator


@pytest.fixture
def narrower(mock_llm_client, fast_config, memory_loader, doc_tree, feature_flags):
    selector = Selector(mock_llm_client, config=fast_config, sleep=AsyncMock())
    return TwoPhaseNarrower(
        section_selector=selector,
        page_selector=selector,
        assembler=ContentAssembler(memory_loader),
        tree_provider=AsyncMock(return_value=doc_tree),
        feature_flags=feature_flags,
    )


# ============================================================================
# ROUTING TESTS
# ============================================================================

class TestTwoPhaseRouting:
    """Section selection followed by URL selection."""

    @pytest.mark.asyncio
    async def test_single_url_returned(self, narrower, mock_llm_client, make_completion, feature_flags):
        """Test that a one-URL Phase 2 answer yields a list of length 1."""
        mock_llm_client.generate_completion.side_effect = [
            make_completion({"Title": "Feature Flags", "Reason": "Targeting is a flag feature"}),
            make_completion({"Urls": [TARGETING_URL], "Reason": "Direct match"}),
        ]

        content = await narrower.route("targeting rules")

        assert content.kind == ContentKind.URLS
        assert content.urls == [TARGETING_URL]
        assert mock_llm_client.generate_completion.await_count == 2
        feature_flags.is_enabled.assert_not_called()

    @pytest.mark.asyncio
    async def test_phase_two_only_sees_section_pages(self, narrower, mock_llm_client, make_completion):
        mock_llm_client.generate_completion.side_effect = [
            make_completion({"Names": ["feature flags"]}),
            make_completion({"Urls": [TARGETING_URL]}),
        ]

        await narrower.route("targeting rules")

        page_prompt = mock_llm_client.generate_completion.await_args_list[1].args[0]
        assert TARGETING_URL in page_prompt
        assert "https://docs.example/feature-flags/create-flags" in page_prompt
        assert '"docs-section:feature-flags"' in page_prompt

    @pytest.mark.asyncio
    async def test_phase_one_failure_short_circuits(self, narrower, mock_llm_client, make_completion):
        """Test that Phase 2 file gathering is never invoked without a section."""
        mock_llm_client.generate_completion.return_value = make_completion({"Title": "Billing"})

        with patch.object(narrower, "gather_files", wraps=narrower.gather_files) as gather_spy:
            content = await narrower.route("invoices and billing")

        gather_spy.assert_not_called()
        assert content.is_empty
        assert mock_llm_client.generate_completion.await_count == 3

    @pytest.mark.asyncio
    async def test_nothing_relevant_in_section(self, narrower, mock_llm_client, make_completion):
        mock_llm_client.generate_completion.side_effect = [
            make_completion({"Title": "Feature Flags"}),
            make_completion({"Urls": [], "Reason": "No page covers SSO"}),
        ]

        content = await narrower.route("single sign-on")

        assert content.is_empty
        assert content.reason == "No page covers SSO"

    @pytest.mark.asyncio
    async def test_missing_tree(self, mock_llm_client, fast_config, memory_loader):
        narrower = TwoPhaseNarrower(
            section_selector=Selector(mock_llm_client, config=fast_config),
            page_selector=Selector(mock_llm_client, config=fast_config),
            assembler=ContentAssembler(memory_loader),
            tree_provider=AsyncMock(return_value=None),
        )

        content = await narrower.route("anything")

        assert content.is_empty
        mock_llm_client.generate_completion.assert_not_called()

    @pytest.mark.asyncio
    async def test_relative_url_resolved_against_base_url(self, mock_llm_client, make_completion, fast_config, memory_loader):
        """Test that a page without fullUrl is offered and returned as an absolute URL."""
        tree = DocTree.model_validate({
            "baseUrl": "https://docs.example",
            "sections": [{
                "title": "Feature Flags",
                "summary": "Flags",
                "files": [{"path": "feature-flags/targeting-rules.md", "url": "/feature-flags/targeting-rules"}],
            }],
        })
        selector = Selector(mock_llm_client, config=fast_config, sleep=AsyncMock())
        narrower = TwoPhaseNarrower(
            section_selector=selector,
            page_selector=selector,
            assembler=ContentAssembler(memory_loader),
            tree_provider=AsyncMock(return_value=tree),
        )
        mock_llm_client.generate_completion.side_effect = [
            make_completion({"Title": "Feature Flags"}),
            make_completion({"Urls": [TARGETING_URL]}),
        ]

        content = await narrower.route("targeting rules")

        assert content.urls == [TARGETING_URL]
        page_prompt = mock_llm_client.generate_completion.await_args_list[1].args[0]
        assert '"/feature-flags/targeting-rules"' not in page_prompt

    @pytest.mark.asyncio
    async def test_max_results_caps_page_selection(self, narrower, mock_llm_client, make_completion):
        mock_llm_client.generate_completion.side_effect = [
            make_completion({"Title": "Feature Flags"}),
            make_completion({"Urls": [TARGETING_URL, "https://docs.example/feature-flags/create-flags"]}),
        ]

        content = await narrower.route("flags", max_results=1)

        assert content.urls == [TARGETING_URL]
        system_prompt = mock_llm_client.generate_completion.await_args_list[1].kwargs["system_prompt"]
        assert "up to 1 most relevant urls" in system_prompt


# ============================================================================
# FEATURE FLAG TESTS
# ============================================================================

class TestDocNotFoundFlag:
    """The doc-not-found flag is consulted once per empty result."""

    @pytest.mark.asyncio
    async def test_flag_checked_on_empty_result(self, narrower, mock_llm_client, make_completion, feature_flags):
        mock_llm_client.generate_completion.return_value = make_completion({"Title": "Billing"})

        with patch("src.services.doc_routing.two_phase_narrower.logger") as mock_logger:
            await narrower.route("billing")

        feature_flags.is_enabled.assert_called_once_with(DOC_NOT_FOUND)
        assert any("No documentation found" in c.args[0] for c in mock_logger.info.call_args_list)

    @pytest.mark.asyncio
    async def test_disabled_flag_still_returns_empty(self, narrower, mock_llm_client, make_completion, feature_flags):
        feature_flags.is_enabled.return_value = False
        mock_llm_client.generate_completion.return_value = make_completion({"Title": "Billing"})

        content = await narrower.route("billing")

        assert content.is_empty
        feature_flags.is_enabled.assert_called_once_with(DOC_NOT_FOUND)


class TestSectionNamespace:
    def test_slug(self):
        section = Mock()
        section.title = "Feature Flags & Segments"

        assert section_namespace(section) == "docs-section:feature-flags-segments"
