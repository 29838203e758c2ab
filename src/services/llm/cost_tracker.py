"""Token and cost accounting for LLM selection calls."""
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict

from .base_client import LLMCompletion

logger = logging.getLogger(__name__)


# USD per token
LLM_PRICING = {
    "claude": {
        "claude-3-5-sonnet-20241022": {
            "input": 3.0 / 1_000_000,
            "output": 15.0 / 1_000_000
        },
        "claude-3-5-haiku-20241022": {
            "input": 0.8 / 1_000_000,
            "output": 4.0 / 1_000_000
        }
    },
    "openai": {
        "gpt-4o-mini": {
            "input": 0.15 / 1_000_000,
            "output": 0.60 / 1_000_000
        },
        "gpt-4o": {
            "input": 2.5 / 1_000_000,
            "output": 10.0 / 1_000_000
        }
    }
}


@dataclass
class CostTracker:
    """Accumulates token usage reported by LLMCompletion objects."""

    provider: str = "openai"
    model: str = "gpt-4o-mini"
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    total_requests: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, completion: LLMCompletion) -> None:
        """Record the usage of one completion."""
        with self._lock:
            self.total_input_tokens += completion.usage.input_tokens
            self.total_output_tokens += completion.usage.output_tokens
            self.total_requests += 1

    def get_total_cost(self) -> float:
        """Total cost in USD; unknown models are priced at zero."""
        pricing = LLM_PRICING.get(self.provider, {}).get(self.model)
        if not pricing:
            logger.debug(f"No pricing data for {self.provider}/{self.model}")
            return 0.0
        return (
            self.total_input_tokens * pricing["input"]
            + self.total_output_tokens * pricing["output"]
        )

    def get_stats(self) -> Dict:
        return {
            "provider": self.provider,
            "model": self.model,
            "total_requests": self.total_requests,
            "total_input_tokens": self.total_input_tokens,
            "total_output_tokens": self.total_output_tokens,
            "total_cost_usd": round(self.get_total_cost(), 6)
        }
