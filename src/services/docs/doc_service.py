"""
Documentation URL routing.

Answers a FeatBit question with up to N public documentation URLs, chosen
section-first from the bundled documentation tree.
"""

import asyncio
from typing import List, Optional

from pydantic import ValidationError

from src.models.schemas.doc_routing import DocTree
from src.services.doc_routing import ContentAssembler, Selector, TwoPhaseNarrower
from src.services.document_loader import DocumentLoader
from src.services.feature_flags import FeatureFlagEvaluator
from src.utils.logging.otel_logger import logger

DOCS_NAMESPACE = "docs"
DOC_TREE_FILE = "docs-tree.json"
DOC_TREE_RESOURCE_PATH = "Docs"


class DocService:
    """Owns the documentation tree and the two-phase narrower over it."""

    def __init__(
        self,
        loader: DocumentLoader,
        section_selector: Selector,
        page_selector: Selector,
        assembler: ContentAssembler,
        feature_flags: Optional[FeatureFlagEvaluator] = None,
        max_urls: int = 3,
    ):
        self.loader = loader
        self._doc_tree: Optional[DocTree] = None
        self._lock = asyncio.Lock()
        self.narrower = TwoPhaseNarrower(
            section_selector=section_selector,
            page_selector=page_selector,
            assembler=assembler,
            tree_provider=self.get_doc_tree,
            feature_flags=feature_flags,
            max_urls=max_urls,
        )

    async def get_doc_tree(self) -> Optional[DocTree]:
        """Load ``Docs/docs-tree.json`` once; a failed load is retried on the next call."""
        if self._doc_tree is not None:
            return self._doc_tree

        async with self._lock:
            if self._doc_tree is None:
                self._doc_tree = await self._load_doc_tree()
        return self._doc_tree

    async def _load_doc_tree(self) -> Optional[DocTree]:
        data = await self.loader.load_json(DOC_TREE_FILE, DOC_TREE_RESOURCE_PATH)
        if data is None:
            logger.error(f"Failed to load {DOC_TREE_FILE}")
            return None
        try:
            tree = DocTree.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid {DOC_TREE_FILE}: {e}")
            return None
        logger.info(f"Loaded documentation tree with {len(tree.sections)} sections")
        return tree

    async def get_documentation_urls(self, topic: str) -> List[str]:
        """Up to ``max_urls`` documentation URLs, most relevant first; [] when nothing matches."""
        logger.info(f"Getting documentation URLs for topic={topic}")
        content = await self.narrower.route(topic)
        return list(content.urls)
