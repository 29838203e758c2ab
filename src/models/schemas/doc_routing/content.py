"""
Resolved Content Models

What the routing engine hands back to its caller: document text, an ordered
URL list, or the explicit "nothing found" sentinel.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class AssemblyMode(str, Enum):
    SINGLE = "single"            # One document, verbatim
    CONCATENATE = "concatenate"  # Several documents joined by a separator
    URL_LIST = "url_list"        # Absolute URLs, no content fetch


class ContentKind(str, Enum):
    DOCUMENT = "document"
    URLS = "urls"
    EMPTY = "empty"


class ResolvedContent(BaseModel):
    """Final routing result."""

    kind: ContentKind
    text: str = ""
    urls: List[str] = Field(default_factory=list)
    sources: List[str] = Field(default_factory=list, description="Catalog ids the content came from")
    reason: str = ""

    @property
    def is_empty(self) -> bool:
        """True only for the sentinel, never for a found-but-empty document."""
        return self.kind == ContentKind.EMPTY

    @classmethod
    def empty(cls, reason: str = "") -> "ResolvedContent":
        return cls(kind=ContentKind.EMPTY, reason=reason)
