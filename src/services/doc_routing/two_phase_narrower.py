"""
Two-Phase Narrower

Routes a query over a large documentation tree in two LLM selections:
first the single most relevant section, then up to N pages inside it.
"""

import logging
import re
from typing import Awaitable, Callable, List, Optional

from opentelemetry import trace

from src.models.schemas.doc_routing import (
    AssemblyMode,
    Catalog,
    CatalogEntry,
    DocTree,
    DocTreeFile,
    DocTreeSection,
    ResolvedContent,
    ResponseShape,
    SelectionMode,
    SelectionRequest,
)
from src.services.feature_flags import DOC_NOT_FOUND, FeatureFlagEvaluator

from .content_assembler import ContentAssembler
from .selector import Selector

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

SECTIONS_NAMESPACE = "docs"

DocTreeProvider = Callable[[], Awaitable[Optional[DocTree]]]


def section_namespace(section: DocTreeSection) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", section.title.lower()).strip("-")
    return f"docs-section:{slug}"


class TwoPhaseNarrower:
    """Section-then-pages router over a DocTree."""

    def __init__(
        self,
        section_selector: Selector,
        page_selector: Selector,
        assembler: ContentAssembler,
        tree_provider: DocTreeProvider,
        feature_flags: Optional[FeatureFlagEvaluator] = None,
        max_urls: int = 3,
    ):
        self.section_selector = section_selector
        self.page_selector = page_selector
        self.assembler = assembler
        self.tree_provider = tree_provider
        self.feature_flags = feature_flags
        self.max_urls = max_urls

    async def route(self, query: str, max_results: Optional[int] = None) -> ResolvedContent:
        """
        Return up to ``max_results`` documentation URLs for ``query``, or the empty sentinel.

        ``max_results`` is capped at ``max_urls``; omitted means ``max_urls``.
        """
        limit = min(max_results, self.max_urls) if max_results else self.max_urls
        tree = await self.tree_provider()
        if tree is None or not tree.sections:
            logger.error("Documentation tree unavailable or has no sections")
            return self._not_found(query, "Documentation tree unavailable")

        # Phase 1: exactly one section
        section = await self.select_section(query, tree)
        if section is None:
            logger.warning(f"No matching section found for topic: {query}")
            return self._not_found(query, "No matching documentation section")

        # Phase 2: pages within that section
        files = self.gather_files(section)
        if not files:
            logger.warning(f"No files found in section: {section.title}")
            return self._not_found(query, f"Section '{section.title}' has no pages")

        namespace = section_namespace(section)
        catalog = self._file_catalog(namespace, files, tree.base_url)
        request = SelectionRequest(
            query=query,
            namespace=namespace,
            mode=SelectionMode.BEST_OF_N,
            max_results=limit,
            shape=ResponseShape.URLS,
        )
        selection = await self.page_selector.select(request, catalog)
        content = await self.assembler.assemble(
            selection.selected_ids,
            namespace,
            AssemblyMode.URL_LIST,
            reason=selection.rationale,
        )

        if content.is_empty:
            logger.warning(f"No URLs selected for topic '{query}' in section '{section.title}'")
            return self._not_found(query, content.reason or selection.rationale)

        logger.info(f"Selected URLs: {', '.join(content.urls)}, Reason: {selection.rationale}")
        return content

    async def select_section(self, query: str, tree: DocTree) -> Optional[DocTreeSection]:
        catalog = Catalog(
            namespace=SECTIONS_NAMESPACE,
            entries=[
                CatalogEntry(
                    id=section.title,
                    description=section.summary,
                    metadata={"path": section.path},
                )
                for section in tree.sections
            ],
        )
        request = SelectionRequest(
            query=query,
            namespace=SECTIONS_NAMESPACE,
            mode=SelectionMode.SINGLE_BEST,
            shape=ResponseShape.NAMES,
        )
        selection = await self.section_selector.select(request, catalog)
        if selection.is_empty:
            return None

        section = tree.find_section(selection.selected_ids[0])
        if section is None:
            logger.warning(f"Section not found in doc tree: {selection.selected_ids[0]}")
        return section

    def gather_files(self, section: DocTreeSection) -> List[DocTreeFile]:
        """Files of the section and its direct subsections."""
        return section.all_files()

    @staticmethod
    def _file_catalog(namespace: str, files: List[DocTreeFile], base_url: str = "") -> Catalog:
        entries = []
        seen = set()
        for file in files:
            url = file.absolute_url(base_url)
            if not url or url.lower() in seen:
                continue
            seen.add(url.lower())
            entries.append(CatalogEntry(id=url, description=file.summary or file.path, metadata={"path": file.path}))
        return Catalog(namespace=namespace, entries=entries)

    def _not_found(self, query: str, reason: str) -> ResolvedContent:
        """Empty result; the feature flag only decides whether a telemetry event is emitted."""
        if self.feature_flags is not None and self.feature_flags.is_enabled(DOC_NOT_FOUND):
            with tracer.start_as_current_span("DocRouting.DocNotFound") as span:
                span.add_event("doc_not_found", {"topic": query, "reason": reason})
            logger.info(f"No documentation found for topic '{query}': {reason}")
        return ResolvedContent.empty(reason)
