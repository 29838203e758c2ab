from .catalog import Catalog, CatalogEntry, CatalogErrorPolicy, normalize_namespace
from .content import AssemblyMode, ContentKind, ResolvedContent
from .doc_tree import DocTree, DocTreeFile, DocTreeSection, DocTreeSubsection
from .selection import (
    LLMSelectionOutput,
    ResponseShape,
    SelectionMode,
    SelectionOutcome,
    SelectionRequest,
    SelectionResponse,
    StructuredPrompt,
)

__all__ = [
    "AssemblyMode",
    "Catalog",
    "CatalogEntry",
    "CatalogErrorPolicy",
    "ContentKind",
    "DocTree",
    "DocTreeFile",
    "DocTreeSection",
    "DocTreeSubsection",
    "LLMSelectionOutput",
    "ResolvedContent",
    "ResponseShape",
    "SelectionMode",
    "SelectionOutcome",
    "SelectionRequest",
    "SelectionResponse",
    "StructuredPrompt",
    "normalize_namespace",
]
