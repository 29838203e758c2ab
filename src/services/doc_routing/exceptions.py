"""
Document Routing Exception Hierarchy

Error taxonomy for catalog building, LLM-backed selection and content
assembly. Only namespace misconfiguration (and cancellation) reaches callers;
everything LLM-related is absorbed through retry and fallback.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class DocRoutingError(Exception):
    """Base exception for all document routing errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.recoverable = recoverable
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "timestamp": self.timestamp.isoformat()
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


# ============================================================================
# CATALOG ERRORS
# ============================================================================

class CatalogUnavailableError(DocRoutingError):
    """Raised when a namespace has zero candidate documents."""

    def __init__(self, namespace: str):
        super().__init__(
            message=f"No documents available in namespace '{namespace}'",
            error_code="CATALOG_UNAVAILABLE",
            details={"namespace": namespace},
            recoverable=False
        )


class CatalogNamespaceError(DocRoutingError):
    """Raised when a namespace has no registered catalog provider."""

    def __init__(self, namespace: str, known_namespaces: Optional[List[str]] = None):
        super().__init__(
            message=f"Unknown catalog namespace '{namespace}'",
            error_code="CATALOG_NAMESPACE_UNKNOWN",
            details={
                "namespace": namespace,
                "known_namespaces": known_namespaces or []
            },
            recoverable=False  # Configuration problem
        )


# ============================================================================
# SELECTION ERRORS
# ============================================================================

class SelectionError(DocRoutingError):
    """Base class for a failed selection attempt."""
    pass


class TransientSelectionError(SelectionError):
    """Network, parse or schema failure during a single LLM attempt."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(
            message=message,
            error_code="TRANSIENT_SELECTION_FAILURE",
            details={"cause": type(cause).__name__ if cause else None},
            recoverable=True
        )


class InvalidSelectionError(SelectionError):
    """The LLM answered, but with no identifier present in the catalog."""

    def __init__(self, message: str, rejected_ids: Optional[List[str]] = None):
        super().__init__(
            message=message,
            error_code="INVALID_SELECTION",
            details={"rejected_ids": rejected_ids or []},
            recoverable=True  # Same prompt may produce a valid answer
        )


class SelectionExhaustedError(SelectionError):
    """All attempts consumed without a usable result."""

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None):
        super().__init__(
            message=f"Selection exhausted after {attempts} attempts",
            error_code="SELECTION_EXHAUSTED",
            details={
                "attempts": attempts,
                "last_error": str(last_error) if last_error else None
            },
            recoverable=False
        )
        self.attempts = attempts
        self.last_error = last_error


# ============================================================================
# CONTENT ERRORS
# ============================================================================

class DocumentLoadError(DocRoutingError):
    """Raised by a document loader for unexpected (non not-found) failures."""

    def __init__(self, doc_id: str, namespace: str, reason: str = ""):
        super().__init__(
            message=f"Failed to load document '{doc_id}' from '{namespace}': {reason}",
            error_code="DOCUMENT_LOAD_FAILED",
            details={"doc_id": doc_id, "namespace": namespace},
            recoverable=True
        )


class ContentLoadFailure(DocRoutingError):
    """A validated identifier could not be loaded during assembly."""

    def __init__(self, doc_id: str, namespace: str, reason: str = "not found"):
        super().__init__(
            message=f"Content for '{doc_id}' in '{namespace}' unavailable: {reason}",
            error_code="CONTENT_LOAD_FAILURE",
            details={"doc_id": doc_id, "namespace": namespace, "reason": reason},
            recoverable=True  # Assembly continues with the remaining documents
        )


# ============================================================================
# LLM CLIENT ERRORS
# ============================================================================

class LLMClientError(DocRoutingError):
    """Base class for LLM client errors."""
    pass


class LLMUnavailableError(LLMClientError):
    """Raised when no LLM provider is configured."""

    def __init__(self, message: str = "No LLM provider configured"):
        super().__init__(
            message=message,
            error_code="LLM_UNAVAILABLE",
            recoverable=False
        )


class LLMTimeoutError(LLMClientError):
    """Raised when an LLM request times out."""

    def __init__(self, message: str, timeout_seconds: float = 0.0):
        super().__init__(
            message=message,
            error_code="LLM_TIMEOUT",
            details={"timeout_seconds": timeout_seconds},
            recoverable=True
        )
