"""
Document Router

Single entry point over every routable namespace. Document namespaces go
catalog -> selection -> assembly; URL namespaces are delegated to a
TwoPhaseNarrower over the documentation tree.
"""

import logging
from typing import Dict, List, Optional

from src.models.schemas.doc_routing import (
    AssemblyMode,
    ResolvedContent,
    SelectionMode,
    SelectionRequest,
    normalize_namespace,
)

from .catalog_builder import CatalogRegistry
from .content_assembler import ContentAssembler
from .exceptions import CatalogNamespaceError
from .selector import Selector
from .two_phase_narrower import TwoPhaseNarrower

logger = logging.getLogger(__name__)


class DocumentRouter:
    """Routes a query to the documents or URLs of one registered namespace."""

    def __init__(self, registry: CatalogRegistry, selector: Selector, assembler: ContentAssembler):
        self.registry = registry
        self.selector = selector
        self.assembler = assembler
        self._url_namespaces: Dict[str, TwoPhaseNarrower] = {}

    def register_url_namespace(self, namespace: str, narrower: TwoPhaseNarrower) -> None:
        """Route ``namespace`` through ``narrower``; results are URL lists."""
        key = normalize_namespace(namespace)
        if key in self._url_namespaces or key in self.registry.namespaces:
            raise ValueError(f"Namespace already registered: {key}")
        self._url_namespaces[key] = narrower

    @property
    def namespaces(self) -> List[str]:
        return self.registry.namespaces + list(self._url_namespaces)

    async def route_query(
        self,
        query: str,
        namespace_hint: str,
        max_results: int = 1,
        hints: Optional[Dict[str, str]] = None,
    ) -> ResolvedContent:
        """
        Select and assemble content for ``query`` in ``namespace_hint``.

        Args:
            query: Literal user query
            namespace_hint: Registered namespace (``deployments``, ``Sdks.DotNet``, ``docs``...)
            max_results: 1 for a single document or URL, more for several
            hints: Structured routing fields passed to the prompt and rule fallback

        Returns:
            ResolvedContent (document text or URL list), or the empty sentinel

        Raises:
            CatalogNamespaceError: If the namespace was never registered
            ValueError: If max_results is below 1
        """
        if max_results < 1:
            raise ValueError(f"max_results must be at least 1, got {max_results}")

        key = normalize_namespace(namespace_hint)
        narrower = self._url_namespaces.get(key)
        if narrower is not None:
            return await narrower.route(query, max_results=max_results)

        if key not in self.registry.namespaces:
            raise CatalogNamespaceError(namespace_hint, self.namespaces)

        registration = self.registry.registration(namespace_hint)
        catalog = await self.registry.get(namespace_hint)
        if catalog.is_empty:
            logger.warning(f"No documents in '{catalog.namespace}', nothing to route")
            return ResolvedContent.empty(f"No documents available in '{catalog.namespace}'")

        single = max_results == 1
        request = SelectionRequest(
            query=query,
            namespace=catalog.namespace,
            max_results=max_results,
            mode=SelectionMode.SINGLE_BEST if single else SelectionMode.BEST_OF_N,
            hints=hints or {},
            default_id=registration.default_id,
        )
        selection = await self.selector.select(request, catalog, prompt_builder=registration.prompt_builder)

        logger.info(
            f"Routed '{query}' in '{catalog.namespace}' to {selection.selected_ids} "
            f"({selection.outcome.value})"
        )
        return await self.assembler.assemble(
            selection.selected_ids,
            registration.resource_path,
            AssemblyMode.SINGLE if single else AssemblyMode.CONCATENATE,
            reason=selection.rationale,
        )
