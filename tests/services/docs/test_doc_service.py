"""Unit Tests for DocService."""

import json
from unittest.mock import AsyncMock

import pytest

from src.services.doc_routing import ContentAssembler, Selector
from src.services.docs import DocService

TARGETING_URL = "https://docs.example/feature-flags/targeting-rules"


@pytest.fixture
def docs_loader(loader_factory, sample_doc_tree):
    return loader_factory({"Docs": {"docs-tree.json": json.dumps(sample_doc_tree)}})


@pytest.fixture
def make_service(mock_llm_client, fast_config):
    def _make(loader):
        selector = Selector(mock_llm_client, config=fast_config, sleep=AsyncMock())
        return DocService(loader, selector, selector, ContentAssembler(loader))
    return _make


class TestDocTree:
    """Lazy, single load of the documentation tree."""

    @pytest.mark.asyncio
    async def test_tree_loaded_once(self, make_service, docs_loader):
        service = make_service(docs_loader)

        first = await service.get_doc_tree()
        second = await service.get_doc_tree()

        assert first is second
        assert first.sections[0].title == "Feature Flags"
        assert docs_loader.load_calls == ["docs-tree.json"]

    @pytest.mark.asyncio
    async def test_missing_tree_retried(self, make_service, loader_factory, sample_doc_tree):
        loader = loader_factory()
        service = make_service(loader)

        assert await service.get_doc_tree() is None

        loader.add("Docs", "docs-tree.json", json.dumps(sample_doc_tree))
        tree = await service.get_doc_tree()

        assert tree is not None
        assert len(loader.load_calls) == 2

    @pytest.mark.asyncio
    async def test_invalid_tree(self, make_service, loader_factory):
        loader = loader_factory({"Docs": {"docs-tree.json": json.dumps({"sections": "not-a-list"})}})

        assert await make_service(loader).get_doc_tree() is None


class TestGetDocumentationUrls:
    @pytest.mark.asyncio
    async def test_urls_returned(self, make_service, docs_loader, mock_llm_client, make_completion):
        mock_llm_client.generate_completion.side_effect = [
            make_completion({"Title": "Feature Flags", "Reason": "flags"}),
            make_completion({"Urls": [TARGETING_URL], "Reason": "direct"}),
        ]

        urls = await make_service(docs_loader).get_documentation_urls("how do targeting rules work")

        assert urls == [TARGETING_URL]

    @pytest.mark.asyncio
    async def test_no_tree_returns_empty_list(self, make_service, loader_factory, mock_llm_client):
        urls = await make_service(loader_factory()).get_documentation_urls("anything")

        assert urls == []
        mock_llm_client.generate_completion.assert_not_called()
