"""
Rule-Based Selector

Deterministic single-document selection used once every LLM attempt has
failed. No network, no randomness: identical input gives identical output.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from src.models.schemas.doc_routing import Catalog, CatalogEntry, SelectionRequest

logger = logging.getLogger(__name__)

STOPWORDS = {
    "the", "and", "for", "how", "what", "which", "with", "can", "does", "use",
    "using", "into", "from", "about", "this", "that", "are", "you", "your", "want",
    "need", "should", "would", "could", "when", "where", "why", "get", "set",
}

TOKEN_PATTERN = re.compile(r"[a-z0-9][a-z0-9.+#-]*")


def tokenize(text: str, min_length: int = 3) -> List[str]:
    """Lower-cased query tokens without stopwords, in order, de-duplicated."""
    seen: Set[str] = set()
    tokens = []
    for token in TOKEN_PATTERN.findall((text or "").lower()):
        token = token.strip(".-")
        if len(token) < min_length or token in STOPWORDS or token in seen:
            continue
        seen.add(token)
        tokens.append(token)
    return tokens


@dataclass
class RuleMatch:
    entry_id: str
    rule: str
    score: float = 0.0


class RuleBasedSelector:
    """
    Picks one catalog entry by rules, in priority order:

    1. Exact method + platform match (``metadata['method']`` / ``metadata['platforms']``)
    2. Partial match: method or platform hint against entry metadata, method
       used as a platform, or substring matches between them
    3. Keyword match: query tokens against keywords, metadata, description and id
    4. The configured default id
    """

    def __init__(
        self,
        default_id: Optional[str] = None,
        keyword_weight: float = 2.0,
        text_weight: float = 1.0,
    ):
        self.default_id = default_id
        self.keyword_weight = keyword_weight
        self.text_weight = text_weight

    def select(self, request: SelectionRequest, catalog: Catalog) -> Optional[RuleMatch]:
        if catalog.is_empty:
            return None

        method = request.hints.get("method", "").strip().lower()
        platform = request.hints.get("platform", "").strip().lower()

        match = (
            self._exact_match(catalog, method, platform)
            or self._partial_match(catalog, method, platform)
            or self._keyword_match(catalog, request.query)
            or self._default_match(catalog, request.default_id or self.default_id)
        )

        if match:
            logger.info(f"Rule-based selection picked '{match.entry_id}' via {match.rule}")
        else:
            logger.info(f"Rule-based selection found nothing in '{catalog.namespace}'")
        return match

    @staticmethod
    def _entry_method(entry: CatalogEntry) -> str:
        return str(entry.metadata.get("method", "")).lower()

    @staticmethod
    def _entry_platforms(entry: CatalogEntry) -> List[str]:
        platforms = entry.metadata.get("platforms", [])
        if isinstance(platforms, str):
            platforms = platforms.split(",")
        return [str(p).strip().lower() for p in platforms if str(p).strip()]

    def _exact_match(self, catalog: Catalog, method: str, platform: str) -> Optional[RuleMatch]:
        if not method or not platform:
            return None
        for entry in catalog.entries:
            if self._entry_method(entry) == method and platform in self._entry_platforms(entry):
                return RuleMatch(entry.id, "exact method+platform match", 1.0)
        return None

    def _partial_match(self, catalog: Catalog, method: str, platform: str) -> Optional[RuleMatch]:
        if method:
            for entry in catalog.entries:
                if self._entry_method(entry) == method or method in self._entry_platforms(entry):
                    return RuleMatch(entry.id, "method match", 0.8)
            for entry in catalog.entries:
                entry_method = self._entry_method(entry)
                if entry_method and entry_method != "all" and (method in entry_method or entry_method in method):
                    return RuleMatch(entry.id, "partial method match", 0.7)
        if platform:
            for entry in catalog.entries:
                if platform in self._entry_platforms(entry):
                    return RuleMatch(entry.id, "platform match", 0.6)
            for entry in catalog.entries:
                if any(platform in p or p in platform for p in self._entry_platforms(entry) if p != "all"):
                    return RuleMatch(entry.id, "partial platform match", 0.5)
        return None

    def _keyword_match(self, catalog: Catalog, query: str) -> Optional[RuleMatch]:
        tokens = tokenize(query)
        if not tokens:
            return None

        best: Optional[Tuple[float, CatalogEntry]] = None
        for entry in catalog.entries:
            score = self._score(entry, tokens)
            # Strictly greater keeps the earliest entry on ties
            if score > 0 and (best is None or score > best[0]):
                best = (score, entry)

        if best is None:
            return None
        return RuleMatch(best[1].id, "keyword match", best[0])

    def _score(self, entry: CatalogEntry, tokens: List[str]) -> float:
        keyword_terms = [k.lower() for k in entry.keywords if k.strip()]
        method = self._entry_method(entry)
        if method and method != "all":
            keyword_terms.append(method)
        keyword_terms.extend(p for p in self._entry_platforms(entry) if p != "all")

        text = " ".join([entry.id, entry.display_name, entry.description]).lower()

        score = 0.0
        for token in tokens:
            if any(token == term or token in term or term in token for term in keyword_terms):
                score += self.keyword_weight
            elif token in text:
                score += self.text_weight
        return score

    @staticmethod
    def _default_match(catalog: Catalog, default_id: Optional[str]) -> Optional[RuleMatch]:
        if not default_id:
            return None
        entry = catalog.find(default_id)
        if entry is None:
            logger.warning(f"Default id '{default_id}' is not in catalog '{catalog.namespace}'")
            return None
        return RuleMatch(entry.id, "default", 0.0)

