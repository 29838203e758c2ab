"""
Selector

Orchestrates the LLM round trip for one selection: build the prompt, request
a structured answer, validate every identifier against the catalog, retry on
transient or unusable answers, and fall back once attempts are exhausted.

States: Building -> Requesting -> Validating -> Accepted | Retrying | Exhausted

Selector instances hold no per-call state; concurrent calls are independent.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from src.models.schemas.doc_routing import (
    Catalog,
    LLMSelectionOutput,
    SelectionMode,
    SelectionOutcome,
    SelectionRequest,
    SelectionResponse,
    StructuredPrompt,
)
from src.services.llm.base_client import BaseLLMClient, LLMCompletion
from src.services.llm.cost_tracker import CostTracker

from .exceptions import (
    InvalidSelectionError,
    SelectionError,
    SelectionExhaustedError,
    TransientSelectionError,
)
from .prompt_builder import SelectionPromptBuilder
from .retry import Sleep, linear_backoff, with_retry
from .rule_based_selector import RuleBasedSelector

logger = logging.getLogger(__name__)

CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


@dataclass
class SelectorConfig:
    """Configuration for LLM-backed selection."""

    max_attempts: int = 3
    backoff_seconds: float = 0.5  # attempt * backoff_seconds between attempts
    attempt_timeout_seconds: Optional[float] = None  # None leaves timeouts to the client
    temperature: float = 0.0
    max_tokens: int = 500


def extract_json_object(content: str) -> Any:
    """
    Decode the JSON object in an LLM answer.

    Tries, in order: the whole text, the first fenced code block, and the
    outermost ``{...}`` span of text with prose around it.
    """
    text = (content or "").strip()
    if not text:
        raise ValueError("Empty LLM response")

    candidates = [text]
    block = CODE_BLOCK_PATTERN.search(text)
    if block:
        candidates.append(block.group(1).strip())
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    last_error: Optional[Exception] = None
    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as e:
            last_error = e
    raise ValueError(f"No JSON object found in LLM response: {last_error}")


def parse_selection_output(content: str) -> LLMSelectionOutput:
    """Parse raw LLM text into the selection shape, as a transient failure if impossible."""
    try:
        return LLMSelectionOutput.model_validate(extract_json_object(content))
    except (ValueError, ValidationError) as e:
        raise TransientSelectionError(f"Unparseable selection output: {e}", cause=e) from e


class Selector:
    """LLM-backed selection with validation, retry and deterministic fallback."""

    def __init__(
        self,
        llm_client: BaseLLMClient,
        prompt_builder: Optional[SelectionPromptBuilder] = None,
        config: Optional[SelectorConfig] = None,
        rule_selector: Optional[RuleBasedSelector] = None,
        cost_tracker: Optional[CostTracker] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder or SelectionPromptBuilder()
        self.config = config or SelectorConfig()
        self.rule_selector = rule_selector or RuleBasedSelector()
        self.cost_tracker = cost_tracker
        self._sleep = sleep

    async def select(
        self,
        request: SelectionRequest,
        catalog: Catalog,
        prompt_builder: Optional[SelectionPromptBuilder] = None,
    ) -> SelectionResponse:
        """
        Select identifiers from ``catalog`` for ``request``.

        Never raises for LLM trouble: exhausted attempts resolve to the rule
        fallback (single-best) or to an empty response with a rationale
        (best-of-N). Cancellation propagates.

        ``prompt_builder`` overrides the default builder for this call.
        """
        if catalog.is_empty:
            logger.warning(f"Catalog '{catalog.namespace}' is empty; skipping LLM selection")
            return SelectionResponse.empty(f"No documents available in '{catalog.namespace}'")

        prompt = (prompt_builder or self.prompt_builder).build(request, catalog)
        attempts_used = 0

        async def attempt(attempt_number: int) -> Tuple[List[str], str]:
            nonlocal attempts_used
            attempts_used = attempt_number
            completion = await self._request(prompt)
            output = parse_selection_output(completion.content)
            return self._validate(output, request, catalog)

        try:
            selected_ids, reason = await with_retry(
                attempt,
                max_attempts=self.config.max_attempts,
                backoff=linear_backoff(self.config.backoff_seconds),
                retry_on=(SelectionError,),
                sleep=self._sleep,
                name=f"Selection[{catalog.namespace}]",
            )
        except SelectionExhaustedError as e:
            return self._on_exhausted(request, catalog, e)

        logger.info(
            f"Selected {selected_ids or 'nothing'} from '{catalog.namespace}' "
            f"after {attempts_used} attempt(s): {reason}"
        )
        return SelectionResponse(
            selected_ids=selected_ids,
            rationale=reason,
            outcome=SelectionOutcome.ACCEPTED if selected_ids else SelectionOutcome.EMPTY,
            attempts=attempts_used,
        )

    async def _request(self, prompt: StructuredPrompt) -> LLMCompletion:
        """Requesting: one LLM call; every failure is transient from here."""
        try:
            call = self.llm_client.generate_completion(
                prompt.user_prompt,
                system_prompt=prompt.system_prompt,
                json_mode=True,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
            if self.config.attempt_timeout_seconds:
                completion = await asyncio.wait_for(call, timeout=self.config.attempt_timeout_seconds)
            else:
                completion = await call
        except Exception as e:
            raise TransientSelectionError(f"LLM request failed: {e}", cause=e) from e

        if self.cost_tracker is not None:
            self.cost_tracker.record(completion)
        return completion

    def _validate(
        self,
        output: LLMSelectionOutput,
        request: SelectionRequest,
        catalog: Catalog,
    ) -> Tuple[List[str], str]:
        """Validating: keep in-catalog ids (canonical spelling), drop the rest."""
        raw_ids = output.raw_ids
        selected: List[str] = []
        rejected: List[str] = []

        for raw_id in raw_ids:
            entry = catalog.find(raw_id)
            if entry is None:
                rejected.append(raw_id)
            elif entry.id not in selected:
                selected.append(entry.id)

        if rejected:
            logger.warning(f"Dropped ids not in catalog '{catalog.namespace}': {rejected}")

        if len(selected) > request.max_results:
            logger.info(f"Truncating {len(selected)} selections to {request.max_results}")
            selected = selected[:request.max_results]

        if selected:
            return selected, output.reason

        if request.mode == SelectionMode.BEST_OF_N and not raw_ids and output.reason.strip():
            # Deliberate "nothing relevant" answer
            return [], output.reason

        raise InvalidSelectionError(
            f"No usable identifier in LLM selection for '{catalog.namespace}'",
            rejected_ids=rejected,
        )

    def _on_exhausted(
        self,
        request: SelectionRequest,
        catalog: Catalog,
        error: SelectionExhaustedError,
    ) -> SelectionResponse:
        """Exhausted: mode-specific fallback."""
        if request.mode == SelectionMode.SINGLE_BEST:
            match = self.rule_selector.select(request, catalog)
            if match is not None:
                return SelectionResponse(
                    selected_ids=[match.entry_id],
                    rationale=f"Rule-based fallback ({match.rule}) after {error.attempts} failed attempts",
                    outcome=SelectionOutcome.FALLBACK,
                    attempts=error.attempts,
                )
            return SelectionResponse.empty(
                f"No rule matched in '{catalog.namespace}' after {error.attempts} failed attempts",
                attempts=error.attempts,
            )

        return SelectionResponse.empty(
            f"No relevant documents selected after {error.attempts} attempts: {error.last_error}",
            attempts=error.attempts,
        )
