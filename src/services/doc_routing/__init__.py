"""
Document routing engine.

Catalog building, LLM-backed selection with validation/retry/fallback, and
content assembly. Exceptions are imported first; collaborator packages
depend on them.
"""

from .exceptions import (
    CatalogNamespaceError,
    CatalogUnavailableError,
    ContentLoadFailure,
    DocRoutingError,
    DocumentLoadError,
    InvalidSelectionError,
    LLMClientError,
    LLMTimeoutError,
    LLMUnavailableError,
    SelectionError,
    SelectionExhaustedError,
    TransientSelectionError,
)
from .markdown_parser import MarkdownParser, ParsedDocument
from .catalog_builder import CatalogBuilder, CatalogProvider, CatalogRegistry, NamespaceRegistration
from .prompt_builder import SelectionPromptBuilder, build_response_schema
from .retry import linear_backoff, with_retry
from .rule_based_selector import RuleBasedSelector, RuleMatch
from .selector import Selector, SelectorConfig
from .content_assembler import ContentAssembler
from .two_phase_narrower import TwoPhaseNarrower
from .router import DocumentRouter

__all__ = [
    "CatalogBuilder",
    "CatalogNamespaceError",
    "CatalogProvider",
    "CatalogRegistry",
    "CatalogUnavailableError",
    "ContentAssembler",
    "ContentLoadFailure",
    "DocRoutingError",
    "DocumentLoadError",
    "DocumentRouter",
    "InvalidSelectionError",
    "LLMClientError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "MarkdownParser",
    "NamespaceRegistration",
    "ParsedDocument",
    "RuleBasedSelector",
    "RuleMatch",
    "SelectionError",
    "SelectionExhaustedError",
    "SelectionPromptBuilder",
    "Selector",
    "SelectorConfig",
    "TransientSelectionError",
    "TwoPhaseNarrower",
    "build_response_schema",
    "linear_backoff",
    "with_retry",
]
