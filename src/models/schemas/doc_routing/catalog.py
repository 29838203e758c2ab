"""
Catalog Models

Pydantic schemas for the set of documents eligible for selection within a
namespace. A catalog is built once per namespace and treated as read-only.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


def normalize_namespace(namespace: str) -> str:
    """Normalize a namespace hint (``Sdks.DotNETSdks`` -> ``sdks/dotnetsdks``)."""
    return namespace.strip().replace(".", "/").replace("\\", "/").strip("/").lower()


class CatalogErrorPolicy(str, Enum):
    """What the catalog builder does with an entry whose metadata failed to load."""
    SKIP = "skip"                # Drop the entry and log a warning
    INCLUDE_ID = "include_id"    # Keep the entry, description falls back to the id


class CatalogEntry(BaseModel):
    """Single selectable document."""

    id: str = Field(..., description="Identifier, unique (case-insensitive) within the namespace", min_length=1)
    display_name: str = Field("", description="Human-readable name")
    description: str = Field("", description="Short machine-readable description shown to the LLM")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Structured routing metadata")
    keywords: List[str] = Field(default_factory=list, description="Keywords used by the rule-based fallback")

    @model_validator(mode="after")
    def fill_defaults(self) -> "CatalogEntry":
        """Description and display name never stay empty."""
        if not self.description.strip():
            self.description = self.id
        if not self.display_name.strip():
            self.display_name = self.id
        return self


class Catalog(BaseModel):
    """Ordered, described set of documents for one namespace."""

    namespace: str = Field(..., description="Normalized namespace key")
    entries: List[CatalogEntry] = Field(default_factory=list)

    @property
    def ids(self) -> List[str]:
        return [entry.id for entry in self.entries]

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def find(self, entry_id: str) -> Optional[CatalogEntry]:
        """Case-insensitive lookup by id."""
        wanted = entry_id.strip().lower()
        for entry in self.entries:
            if entry.id.lower() == wanted:
                return entry
        return None

    def __len__(self) -> int:
        return len(self.entries)
