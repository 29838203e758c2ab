"""
Selection Models

Request/response contract between callers and the Selector, plus the
structured shape the LLM is asked to answer with.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SelectionMode(str, Enum):
    """Selection regimes supported by the prompt builder and Selector."""
    SINGLE_BEST = "single_best"  # Exactly one decisive pick, rule fallback on exhaustion
    BEST_OF_N = "best_of_n"      # 0..N ranked picks, empty is a legitimate answer


class ResponseShape(str, Enum):
    """Key the LLM is asked to put its picks under."""
    NAMES = "Names"
    URLS = "Urls"


class SelectionOutcome(str, Enum):
    ACCEPTED = "accepted"  # LLM answer validated
    FALLBACK = "fallback"  # Deterministic rule match after exhausted retries
    EMPTY = "empty"        # Nothing relevant / nothing usable


class SelectionRequest(BaseModel):
    """One selection call against one catalog."""

    query: str = Field(..., description="Literal user query")
    namespace: str = Field(..., description="Namespace the catalog belongs to")
    max_results: int = Field(1, ge=1, description="Upper bound on accepted identifiers")
    mode: SelectionMode = SelectionMode.SINGLE_BEST
    shape: ResponseShape = ResponseShape.NAMES
    hints: Dict[str, str] = Field(default_factory=dict, description="Structured routing fields, e.g. method/platform")
    default_id: Optional[str] = Field(None, description="Last-resort id for the single-best rule fallback")

    @model_validator(mode="after")
    def single_best_takes_one(self) -> "SelectionRequest":
        if self.mode == SelectionMode.SINGLE_BEST:
            self.max_results = 1
        return self


class SelectionResponse(BaseModel):
    """Validated selection, ordered most relevant first."""

    selected_ids: List[str] = Field(default_factory=list)
    rationale: str = ""
    outcome: SelectionOutcome = SelectionOutcome.EMPTY
    attempts: int = Field(0, ge=0, description="LLM attempts spent")

    @property
    def is_empty(self) -> bool:
        return not self.selected_ids

    @classmethod
    def empty(cls, rationale: str, attempts: int = 0) -> "SelectionResponse":
        return cls(selected_ids=[], rationale=rationale, outcome=SelectionOutcome.EMPTY, attempts=attempts)


class LLMSelectionOutput(BaseModel):
    """
    Raw structured answer from the LLM.

    Accepts ``Names`` / ``Urls`` lists and a single ``Title`` pick so that
    every prompt shape goes through one parser.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    names: Optional[List[str]] = Field(None, alias="Names")
    urls: Optional[List[str]] = Field(None, alias="Urls")
    title: Optional[str] = Field(None, alias="Title")
    reason: str = Field("", alias="Reason")

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Accept keys in any casing (``names``, ``URLS``...)."""
        if not isinstance(data, dict):
            raise ValueError("LLM selection output must be a JSON object")
        canonical = {"names": "Names", "urls": "Urls", "title": "Title", "reason": "Reason"}
        normalized = {}
        for key, value in data.items():
            normalized[canonical.get(str(key).lower(), key)] = value
        if normalized.get("Reason") is None:
            normalized["Reason"] = ""
        return normalized

    @model_validator(mode="after")
    def has_selection_field(self) -> "LLMSelectionOutput":
        if self.names is None and self.urls is None and self.title is None:
            raise ValueError("LLM selection output has no Names, Urls or Title field")
        return self

    @property
    def raw_ids(self) -> List[str]:
        """Identifiers in the order the LLM returned them."""
        picks: List[str] = []
        for group in (self.names, self.urls):
            if group:
                picks.extend(str(item) for item in group if item is not None)
        if self.title:
            picks.append(self.title)
        return picks


class StructuredPrompt(BaseModel):
    """Prompt pair plus the declared response schema."""

    system_prompt: str
    user_prompt: str
    response_schema: Dict[str, Any] = Field(default_factory=dict)
