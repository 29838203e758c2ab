"""
Catalog Builder

Discovers the selectable documents of a namespace and attaches a short
description to each. Built catalogs are memoized by the CatalogRegistry for
the lifetime of the process.
"""

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from src.models.schemas.doc_routing import Catalog, CatalogEntry, CatalogErrorPolicy, normalize_namespace
from src.services.document_loader import DocumentLoader

from .exceptions import CatalogNamespaceError, CatalogUnavailableError
from .markdown_parser import MarkdownParser
from .prompt_builder import SelectionPromptBuilder

logger = logging.getLogger(__name__)

CatalogProvider = Callable[[], Awaitable[Catalog]]


class CatalogBuilder:
    """Builds catalogs from a document loader or from static entry lists."""

    def __init__(self, loader: DocumentLoader, parser: Optional[MarkdownParser] = None):
        self.loader = loader
        self.parser = parser or MarkdownParser()

    async def build(
        self,
        namespace: str,
        resource_path: Optional[str] = None,
        document_ids: Optional[Sequence[str]] = None,
        static_entries: Optional[Sequence[CatalogEntry]] = None,
        on_error: CatalogErrorPolicy = CatalogErrorPolicy.INCLUDE_ID,
    ) -> Catalog:
        """
        Build the catalog for one namespace.

        Args:
            namespace: Namespace key the catalog is registered under
            resource_path: Loader path of the documents (defaults to namespace)
            document_ids: Explicit ids; discovered through the loader when omitted
            static_entries: Pre-described entries, used verbatim (no content reads)
            on_error: What to do with an entry whose description cannot be loaded

        Returns:
            Catalog in discovery order
        """
        key = normalize_namespace(namespace)

        if static_entries is not None:
            entries = list(static_entries)
        else:
            path = resource_path or namespace
            ids = list(document_ids) if document_ids is not None else await self.loader.list_ids(path)
            entries = []
            for doc_id in ids:
                entry = await self._describe(doc_id, path, on_error)
                if entry is not None:
                    entries.append(entry)

        catalog = Catalog(namespace=key, entries=self._dedupe(entries, key))
        if catalog.is_empty:
            logger.warning(str(CatalogUnavailableError(key)))
        else:
            logger.info(f"Built catalog '{key}' with {len(catalog)} entries")
        return catalog

    async def _describe(
        self,
        doc_id: str,
        resource_path: str,
        on_error: CatalogErrorPolicy,
    ) -> Optional[CatalogEntry]:
        try:
            content = await self.loader.load_content(doc_id, resource_path)
        except Exception as e:
            content = None
            reason = str(e)
        else:
            reason = "not found"

        if content is None:
            if on_error == CatalogErrorPolicy.SKIP:
                logger.warning(f"Skipping catalog entry {resource_path}/{doc_id}: {reason}")
                return None
            logger.warning(f"Describing {resource_path}/{doc_id} by id only: {reason}")
            return CatalogEntry(id=doc_id, description=doc_id)

        parsed = self.parser.parse_document(doc_id, content)
        return CatalogEntry(
            id=doc_id,
            display_name=parsed.name,
            description=parsed.description,
            metadata=parsed.metadata,
        )

    @staticmethod
    def _dedupe(entries: List[CatalogEntry], namespace: str) -> List[CatalogEntry]:
        seen = set()
        unique = []
        for entry in entries:
            folded = entry.id.lower()
            if folded in seen:
                logger.warning(f"Duplicate catalog id '{entry.id}' in '{namespace}' dropped")
                continue
            seen.add(folded)
            unique.append(entry)
        return unique

    def provider(self, namespace: str, **build_kwargs) -> CatalogProvider:
        """Bind build arguments into a zero-argument provider for the registry."""
        return partial(self.build, namespace, **build_kwargs)


@dataclass
class NamespaceRegistration:
    """How one namespace is built and routed."""

    provider: CatalogProvider
    resource_path: str
    default_id: Optional[str] = None
    prompt_builder: Optional[SelectionPromptBuilder] = None


class CatalogRegistry:
    """
    Namespace key -> catalog provider, with construct-once caching.

    Concurrent first requests for the same namespace share a single build.
    """

    def __init__(self):
        self._registrations: Dict[str, NamespaceRegistration] = {}
        self._catalogs: Dict[str, Catalog] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def register(
        self,
        namespace: str,
        provider: CatalogProvider,
        resource_path: Optional[str] = None,
        default_id: Optional[str] = None,
        prompt_builder: Optional[SelectionPromptBuilder] = None,
    ) -> None:
        key = normalize_namespace(namespace)
        if key in self._registrations:
            raise ValueError(f"Catalog namespace already registered: {key}")
        self._registrations[key] = NamespaceRegistration(
            provider=provider,
            resource_path=resource_path or namespace,
            default_id=default_id,
            prompt_builder=prompt_builder,
        )
        self._locks[key] = asyncio.Lock()

    @property
    def namespaces(self) -> List[str]:
        return list(self._registrations)

    def registration(self, namespace: str) -> NamespaceRegistration:
        key = normalize_namespace(namespace)
        registration = self._registrations.get(key)
        if registration is None:
            raise CatalogNamespaceError(namespace, self.namespaces)
        return registration

    async def get(self, namespace: str) -> Catalog:
        key = normalize_namespace(namespace)
        cached = self._catalogs.get(key)
        if cached is not None:
            return cached

        registration = self.registration(namespace)
        async with self._locks[key]:
            cached = self._catalogs.get(key)
            if cached is None:
                cached = await registration.provider()
                self._catalogs[key] = cached
        return cached
