"""Base interface for LLM clients."""
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field


class TokenUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class LLMCompletion(BaseModel):
    """Typed completion returned by every provider."""

    content: str = ""
    model: str = ""
    stop_reason: Optional[str] = None
    usage: TokenUsage = Field(default_factory=TokenUsage)


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 1000,
        temperature: float = 0.0,
        timeout: int = 60
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    @abstractmethod
    async def generate_completion(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
        **kwargs
    ) -> LLMCompletion:
        """
        Generate completion from the LLM.

        Args:
            prompt: User prompt
            system_prompt: Optional system prompt
            json_mode: Ask the provider to constrain output to a JSON object
            **kwargs: Additional provider-specific parameters (max_tokens, temperature)

        Returns:
            LLMCompletion with the text content, model, stop reason and token usage
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'claude', 'openai')."""
        pass
