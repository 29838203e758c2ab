"""SDK guide providers: routed by LLM selection, or mapped statically to files."""
from abc import ABC, abstractmethod
from typing import Sequence

from src.models.schemas.doc_routing import AssemblyMode, ResolvedContent
from src.services.doc_routing import CatalogRegistry, ContentAssembler, DocumentRouter


class SdkGuide(ABC):
    """Produces integration documentation for one SDK family."""

    @abstractmethod
    async def generate(self, sdk: str, topic: str = "") -> ResolvedContent:
        pass


class StaticSdkGuide(SdkGuide):
    """Fixed file list, concatenated in order."""

    def __init__(self, assembler: ContentAssembler, resource_path: str, files: Sequence[str]):
        if not files:
            raise ValueError("StaticSdkGuide needs at least one file")
        self.assembler = assembler
        self.resource_path = resource_path
        self.files = list(files)

    async def generate(self, sdk: str, topic: str = "") -> ResolvedContent:
        mode = AssemblyMode.SINGLE if len(self.files) == 1 else AssemblyMode.CONCATENATE
        return await self.assembler.assemble(self.files, self.resource_path, mode, reason=f"Static mapping for {sdk}")


class RoutedSdkGuide(SdkGuide):
    """
    Selects one document of a namespace for the topic.

    An empty topic resolves to the namespace default without an LLM call.
    """

    def __init__(self, router: DocumentRouter, registry: CatalogRegistry, namespace: str):
        self.router = router
        self.registry = registry
        self.namespace = namespace

    async def generate(self, sdk: str, topic: str = "") -> ResolvedContent:
        if topic and topic.strip():
            return await self.router.route_query(topic, self.namespace)

        registration = self.registry.registration(self.namespace)
        catalog = await self.registry.get(self.namespace)
        default_id = registration.default_id or (catalog.ids[0] if catalog.ids else None)
        if default_id is None:
            return ResolvedContent.empty(f"No documents available in '{catalog.namespace}'")
        return await self.router.assembler.assemble(
            [default_id],
            registration.resource_path,
            AssemblyMode.SINGLE,
            reason="No topic given, using the default document",
        )
