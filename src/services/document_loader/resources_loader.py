"""Filesystem-backed document loader over the bundled resources tree."""
import asyncio
import fnmatch
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.services.doc_routing.exceptions import DocumentLoadError

from .base import DocumentLoader

logger = logging.getLogger(__name__)


class ResourcesDocumentLoader(DocumentLoader):
    """
    Loads documents from ``<root>/<namespace path>/<doc id>``.

    Namespaces may use ``/`` or ``.`` as separators, so ``Sdks.DotNETSdks``
    and ``Sdks/DotNETSdks`` resolve to the same directory.
    """

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def _namespace_dir(self, namespace: str) -> Path:
        parts = [p for p in namespace.replace("\\", "/").replace(".", "/").split("/") if p]
        return self.root.joinpath(*parts)

    def _resolve(self, doc_id: str, namespace: str) -> Optional[Path]:
        directory = self._namespace_dir(namespace).resolve()
        candidate = (directory / doc_id).resolve()
        # Reject ids that escape the namespace directory
        if directory not in candidate.parents:
            logger.warning(f"Rejected document id outside namespace: {doc_id} ({namespace})")
            return None
        return candidate

    async def list_ids(self, namespace: str, pattern: str = "*.md") -> List[str]:
        directory = self._namespace_dir(namespace)
        return await asyncio.to_thread(self._list_sync, directory, pattern)

    @staticmethod
    def _list_sync(directory: Path, pattern: str) -> List[str]:
        if not directory.is_dir():
            return []
        return sorted(
            entry.name for entry in directory.iterdir()
            if entry.is_file() and fnmatch.fnmatch(entry.name, pattern)
        )

    async def load_content(self, doc_id: str, namespace: str) -> Optional[str]:
        path = self._resolve(doc_id, namespace)
        if path is None:
            return None
        return await asyncio.to_thread(self._read_sync, path, doc_id, namespace)

    @staticmethod
    def _read_sync(path: Path, doc_id: str, namespace: str) -> Optional[str]:
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(doc_id, namespace, str(e)) from e

    async def load_json(self, file_name: str, namespace: str) -> Optional[Dict[str, Any]]:
        content = await self.load_content(file_name, namespace)
        if content is None:
            logger.error(f"JSON configuration not found: {namespace}/{file_name}")
            return None
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {namespace}/{file_name}: {e}")
            return None
        if not isinstance(data, dict):
            logger.error(f"JSON configuration {namespace}/{file_name} is not an object")
            return None
        return data
