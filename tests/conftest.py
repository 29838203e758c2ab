"""
Global test configuration and fixtures for document routing tests.

Provides an in-memory document loader, a mocked LLM client and the sample
catalogs shared by several test modules.
"""

import fnmatch
import json
from typing import Any, Callable, Dict, List, Optional, Union
from unittest.mock import AsyncMock, Mock

import pytest

from src.models.schemas.doc_routing import Catalog, CatalogEntry
from src.services.doc_routing import SelectorConfig
from src.services.document_loader import DocumentLoader
from src.services.llm import LLMCompletion, TokenUsage


class InMemoryDocumentLoader(DocumentLoader):
    """Document loader over a ``{path: {doc_id: content}}`` mapping."""

    def __init__(self, documents: Optional[Dict[str, Dict[str, str]]] = None):
        self.documents = {self._key(path): dict(docs) for path, docs in (documents or {}).items()}
        self.load_calls: List[str] = []

    @staticmethod
    def _key(path: str) -> str:
        return path.replace(".", "/").strip("/").lower()

    def add(self, path: str, doc_id: str, content: str) -> None:
        self.documents.setdefault(self._key(path), {})[doc_id] = content

    async def list_ids(self, namespace: str, pattern: str = "*.md") -> List[str]:
        docs = self.documents.get(self._key(namespace), {})
        return sorted(doc_id for doc_id in docs if fnmatch.fnmatch(doc_id, pattern))

    async def load_content(self, doc_id: str, namespace: str) -> Optional[str]:
        self.load_calls.append(doc_id)
        return self.documents.get(self._key(namespace), {}).get(doc_id)

    async def load_json(self, file_name: str, namespace: str) -> Optional[Dict[str, Any]]:
        content = await self.load_content(file_name, namespace)
        return json.loads(content) if content is not None else None


# ============================================================================
# LLM FIXTURES
# ============================================================================

@pytest.fixture
def make_completion() -> Callable[[Union[dict, str]], LLMCompletion]:
    """Build an LLMCompletion from a JSON payload or raw text."""
    def _make(payload: Union[dict, str]) -> LLMCompletion:
        content = payload if isinstance(payload, str) else json.dumps(payload)
        return LLMCompletion(
            content=content,
            model="mock-model",
            stop_reason="end_turn",
            usage=TokenUsage(input_tokens=100, output_tokens=20),
        )
    return _make


@pytest.fixture
def mock_llm_client():
    """Create a mock LLM client."""
    client = Mock()
    client.provider_name = "mock"
    client.model = "mock-model"
    client.generate_completion = AsyncMock()
    return client


@pytest.fixture
def fast_config() -> SelectorConfig:
    """Selector config without backoff waits."""
    return SelectorConfig(max_attempts=3, backoff_seconds=0)


# ============================================================================
# CATALOG / DOCUMENT FIXTURES
# ============================================================================

HELM_CONTENT = "# Helm\n\nDeploy FeatBit on Kubernetes with Helm."
DOCKER_COMPOSE_CONTENT = "# Docker Compose\n\nRun FeatBit locally."


@pytest.fixture
def deployment_catalog() -> Catalog:
    """Two-entry deployments catalog."""
    return Catalog(
        namespace="deployments",
        entries=[
            CatalogEntry(id="HelmDeployment.md", description="Deploy on Kubernetes"),
            CatalogEntry(id="DockerComposeDeployment.md", description="Local single-server deploy"),
        ],
    )


@pytest.fixture
def memory_loader() -> InMemoryDocumentLoader:
    """Loader holding the two deployment documents."""
    return InMemoryDocumentLoader({
        "Deployments": {
            "HelmDeployment.md": HELM_CONTENT,
            "DockerComposeDeployment.md": DOCKER_COMPOSE_CONTENT,
        }
    })


@pytest.fixture
def sample_doc_tree() -> dict:
    """DocTree JSON with a single 'Feature Flags' section holding two pages."""
    return {
        "version": "1.0",
        "generatedAt": "2025-01-15T00:00:00Z",
        "description": "Test docs",
        "baseUrl": "https://docs.example",
        "sections": [
            {
                "title": "Feature Flags",
                "path": "/feature-flags",
                "summary": "Create and manage feature flags",
                "files": [
                    {
                        "path": "feature-flags/targeting-rules.md",
                        "url": "/feature-flags/targeting-rules",
                        "fullUrl": "https://docs.example/feature-flags/targeting-rules",
                        "summary": "Targeting rules",
                    },
                    {
                        "path": "feature-flags/create-flags.md",
                        "url": "/feature-flags/create-flags",
                        "fullUrl": "https://docs.example/feature-flags/create-flags",
                        "summary": "Create flags",
                    },
                ],
            }
        ],
    }


@pytest.fixture
def loader_factory():
    """Factory for in-memory loaders with custom documents."""
    return InMemoryDocumentLoader
