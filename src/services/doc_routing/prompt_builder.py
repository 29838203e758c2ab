"""
Selection Prompt Builder

Turns a catalog and a query into a system prompt (selection rules), a user
prompt (serialized catalog + query) and the JSON schema of the expected answer.
"""

import json
import logging
from textwrap import dedent
from typing import Any, Dict, List, Optional, Sequence

from src.models.schemas.doc_routing import (
    Catalog,
    ResponseShape,
    SelectionMode,
    SelectionRequest,
    StructuredPrompt,
)

logger = logging.getLogger(__name__)


# ============================================================================
# PROMPT TEMPLATES
# ============================================================================

DEFAULT_PERSONA = "You are a documentation expert helping developers find the right documentation."

SYSTEM_PROMPT_TEMPLATE = dedent("""
    {persona}
    Your task is to analyze the user's question or topic and select {selection_phrase} from the catalog the user provides.

    ## RULES - YOU MUST FOLLOW THESE:

    1. **Use ONLY {id_label}s that appear in the provided catalog**
       - Copy the {id_label} exactly as written in the catalog
       - Do NOT invent, shorten or modify {id_label}s
    2. **Return at most {max_results} {id_label}(s)**

    ## SELECTION GUIDELINES:

    {guidelines}

    ## RESPONSE FORMAT:

    Return a JSON object with these properties:
    - "{shape}": {shape_description}
    - "Reason": A brief explanation (1-2 sentences) of why this selection was made

    Example:
    ```json
    {example}
    ```
""").strip()


USER_PROMPT_TEMPLATE = dedent("""
    Available {catalog_label} in "{namespace}":
    ```json
    {catalog_json}
    ```
    {hints_section}
    User's Question/Topic: {query}

    Select {selection_phrase} from the catalog above.
""").strip()


SINGLE_BEST_GUIDELINES = [
    "**Understand the Intent**: Analyze what the user is trying to learn or accomplish",
    "**Semantic Matching**: Use each description to understand the document's scope",
    "**Be Decisive**: You MUST select exactly one entry, even if the topic is broad",
]

BEST_OF_N_GUIDELINES = [
    "**Prioritize Relevance**: Choose entries that directly address the user's question",
    "**Order by Relevance**: List entries from most to least relevant",
    "**Consider Specificity**: Prefer specific guides over general overviews when the question is specific",
    "**Quality over Quantity**: It's better to return 1 perfect match than several mediocre ones",
    "**Nothing Relevant**: If no entry is relevant, return an empty array and explain why in \"Reason\"",
]

ID_LABELS = {
    ResponseShape.NAMES: "name",
    ResponseShape.URLS: "url",
}

CATALOG_LABELS = {
    ResponseShape.NAMES: "documents",
    ResponseShape.URLS: "documentation pages",
}


def build_response_schema(shape: ResponseShape, max_results: int) -> Dict[str, Any]:
    """JSON schema of the answer the LLM is asked for."""
    return {
        "type": "object",
        "properties": {
            shape.value: {
                "type": "array",
                "items": {"type": "string"},
                "maxItems": max_results,
            },
            "Reason": {"type": "string"},
        },
        "required": [shape.value, "Reason"],
    }


class SelectionPromptBuilder:
    """Builds selection prompts for one kind of catalog."""

    def __init__(
        self,
        persona: str = DEFAULT_PERSONA,
        extra_guidelines: Optional[Sequence[str]] = None,
        example_ids: Optional[Sequence[str]] = None,
        example_reason: str = "The selected entry directly covers the user's question.",
        metadata_keys: Optional[Sequence[str]] = None,
    ):
        self.persona = persona
        self.extra_guidelines = list(extra_guidelines or [])
        self.example_ids = list(example_ids or [])
        self.example_reason = example_reason
        self.metadata_keys = list(metadata_keys or [])

    def build(self, request: SelectionRequest, catalog: Catalog) -> StructuredPrompt:
        shape = request.shape
        id_label = ID_LABELS[shape]
        selection_phrase = self._selection_phrase(request, id_label)

        system_prompt = SYSTEM_PROMPT_TEMPLATE.format(
            persona=self.persona,
            selection_phrase=selection_phrase,
            id_label=id_label,
            max_results=request.max_results,
            guidelines=self._guidelines(request),
            shape=shape.value,
            shape_description=self._shape_description(request, id_label),
            example=self._example(request),
        )

        user_prompt = USER_PROMPT_TEMPLATE.format(
            catalog_label=CATALOG_LABELS[shape],
            namespace=catalog.namespace,
            catalog_json=self._serialize_catalog(catalog, id_label),
            hints_section=self._hints_section(request.hints),
            query=request.query,
            selection_phrase=selection_phrase,
        )

        logger.debug(
            f"Built selection prompt for '{catalog.namespace}': "
            f"{len(catalog)} entries, mode={request.mode.value}, max_results={request.max_results}"
        )

        return StructuredPrompt(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response_schema=build_response_schema(shape, request.max_results),
        )

    @staticmethod
    def _selection_phrase(request: SelectionRequest, id_label: str) -> str:
        if request.mode == SelectionMode.SINGLE_BEST:
            return f"EXACTLY ONE most relevant {id_label}"
        return f"up to {request.max_results} most relevant {id_label}s"

    def _guidelines(self, request: SelectionRequest) -> str:
        base = SINGLE_BEST_GUIDELINES if request.mode == SelectionMode.SINGLE_BEST else BEST_OF_N_GUIDELINES
        lines = base + self.extra_guidelines
        return "\n".join(f"{index}. {line}" for index, line in enumerate(lines, start=1))

    @staticmethod
    def _shape_description(request: SelectionRequest, id_label: str) -> str:
        if request.mode == SelectionMode.SINGLE_BEST:
            return f"An array containing exactly one {id_label} from the catalog"
        return (
            f"An array of 0-{request.max_results} {id_label}s from the catalog, "
            f"most relevant first"
        )

    def _example(self, request: SelectionRequest) -> str:
        ids: List[str] = self.example_ids or [f"<{ID_LABELS[request.shape]} from the catalog>"]
        if request.mode == SelectionMode.SINGLE_BEST:
            ids = ids[:1]
        else:
            ids = ids[:request.max_results]
        return json.dumps({request.shape.value: ids, "Reason": self.example_reason}, indent=2)

    def _serialize_catalog(self, catalog: Catalog, id_label: str) -> str:
        # Every entry is listed; the model must never pick something it was not shown
        items = []
        for entry in catalog.entries:
            item: Dict[str, Any] = {id_label: entry.id, "description": entry.description}
            for key in self.metadata_keys:
                if key in entry.metadata:
                    item[key] = entry.metadata[key]
            items.append(item)
        return json.dumps(items, indent=2, ensure_ascii=False)

    @staticmethod
    def _hints_section(hints: Dict[str, str]) -> str:
        if not hints:
            return ""
        lines = [f"{key.replace('_', ' ').title()}: {value}" for key, value in hints.items() if value]
        return "\n" + "\n".join(lines) + "\n" if lines else ""
