"""LLM service module for document selection."""

from .base_client import BaseLLMClient, LLMCompletion, TokenUsage
from .claude_client import ClaudeClient
from .openai_client import OpenAIClient
from .llm_factory import LLMFactory, LLMProvider, NullLLMClient, get_llm_client
from .cost_tracker import CostTracker, LLM_PRICING

__all__ = [
    "BaseLLMClient",
    "ClaudeClient",
    "CostTracker",
    "LLMCompletion",
    "LLMFactory",
    "LLMProvider",
    "LLM_PRICING",
    "NullLLMClient",
    "OpenAIClient",
    "TokenUsage",
    "get_llm_client",
]
