"""
Content Assembler

Turns validated identifiers into the final ResolvedContent: one document,
several documents joined with a visible separator, or a bounded URL list.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from src.models.schemas.doc_routing import AssemblyMode, ContentKind, ResolvedContent
from src.services.document_loader import DocumentLoader

from .exceptions import ContentLoadFailure, DocumentLoadError

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "\n\n---\n\n"
DEFAULT_MAX_URLS = 3

UrlResolver = Callable[[str], Optional[str]]


class ContentAssembler:
    """Loads and joins selected documents, with a per-document content cache."""

    def __init__(self, loader: DocumentLoader, max_urls: int = DEFAULT_MAX_URLS, separator: str = DOCUMENT_SEPARATOR):
        self.loader = loader
        self.max_urls = max_urls
        self.separator = separator
        # Documents are static for the process lifetime
        self._content_cache: Dict[Tuple[str, str], str] = {}

    async def assemble(
        self,
        selected_ids: Sequence[str],
        resource_path: str,
        mode: AssemblyMode,
        url_resolver: Optional[UrlResolver] = None,
        reason: str = "",
    ) -> ResolvedContent:
        """
        Assemble content for ``selected_ids`` in selection order.

        Args:
            selected_ids: Validated catalog ids, most relevant first
            resource_path: Loader path the documents live under
            mode: single, concatenate or url_list
            url_resolver: Maps an id to its absolute URL (url_list mode; identity if omitted)
            reason: Rationale carried through to the result

        Returns:
            ResolvedContent, or the empty sentinel when nothing could be assembled
        """
        if not selected_ids:
            return ResolvedContent.empty(reason or "No documents selected")

        if mode == AssemblyMode.URL_LIST:
            return self._assemble_urls(selected_ids, url_resolver, reason)

        ids = list(selected_ids[:1]) if mode == AssemblyMode.SINGLE else list(selected_ids)
        loaded: List[Tuple[str, str]] = []
        for doc_id in ids:
            content = await self._load(doc_id, resource_path)
            if content is not None:
                loaded.append((doc_id, content))

        if not loaded:
            return ResolvedContent.empty(f"None of the selected documents could be loaded: {ids}")

        return ResolvedContent(
            kind=ContentKind.DOCUMENT,
            text=self.separator.join(content for _, content in loaded),
            sources=[doc_id for doc_id, _ in loaded],
            reason=reason,
        )

    def _assemble_urls(
        self,
        selected_ids: Sequence[str],
        url_resolver: Optional[UrlResolver],
        reason: str,
    ) -> ResolvedContent:
        urls: List[str] = []
        sources: List[str] = []
        for doc_id in selected_ids:
            url = url_resolver(doc_id) if url_resolver else doc_id
            if not url:
                logger.warning(f"No URL known for '{doc_id}', skipping")
                continue
            if url not in urls:
                urls.append(url)
                sources.append(doc_id)

        # Capped independently of the Selector bound
        urls, sources = urls[:self.max_urls], sources[:self.max_urls]
        if not urls:
            return ResolvedContent.empty(reason or "No URLs resolved")
        return ResolvedContent(kind=ContentKind.URLS, urls=urls, sources=sources, reason=reason)

    async def _load(self, doc_id: str, resource_path: str) -> Optional[str]:
        key = (resource_path, doc_id.lower())
        if key in self._content_cache:
            return self._content_cache[key]

        try:
            content = await self.loader.load_content(doc_id, resource_path)
        except DocumentLoadError as e:
            logger.warning(str(ContentLoadFailure(doc_id, resource_path, e.message)))
            return None

        if content is None:
            logger.warning(str(ContentLoadFailure(doc_id, resource_path)))
            return None

        self._content_cache[key] = content
        return content
