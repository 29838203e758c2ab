"""Document loader interface."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class DocumentLoader(ABC):
    """
    Loads documentation from some storage (bundled resources, filesystem, object storage).

    Expected misses are reported as ``None`` / empty lists, never raised.
    Unexpected storage failures raise ``DocumentLoadError``.
    """

    @abstractmethod
    async def list_ids(self, namespace: str, pattern: str = "*.md") -> List[str]:
        """Discover document ids in a namespace, in stable (sorted) order."""
        pass

    @abstractmethod
    async def load_content(self, doc_id: str, namespace: str) -> Optional[str]:
        """Return the raw text of a document, or None if it does not exist."""
        pass

    @abstractmethod
    async def load_json(self, file_name: str, namespace: str) -> Optional[Dict[str, Any]]:
        """Load and decode a JSON configuration artifact, or None if missing/invalid."""
        pass
