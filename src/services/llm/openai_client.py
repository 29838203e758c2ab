"""OpenAI chat-completions client for document selection."""
import logging
from typing import Optional

from openai import APITimeoutError, AsyncOpenAI

from src.services.doc_routing.exceptions import LLMTimeoutError

from .base_client import BaseLLMClient, LLMCompletion, TokenUsage

logger = logging.getLogger(__name__)


class OpenAIClient(BaseLLMClient):
    """Wrapper for the OpenAI (or OpenAI-compatible) chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_tokens: int = 1000,
        temperature: float = 0.0,
        timeout: int = 60,
        base_url: Optional[str] = None
    ):
        super().__init__(api_key, model, max_tokens, temperature, timeout)
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout, base_url=base_url or None)

    @property
    def provider_name(self) -> str:
        return "openai"

    async def generate_completion(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
        **kwargs
    ) -> LLMCompletion:
        """Generate completion with OpenAI, using JSON response format when asked."""
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        request = {
            "model": self.model,
            "messages": messages,
            "max_tokens": kwargs.get("max_tokens", self.max_tokens),
            "temperature": kwargs.get("temperature", self.temperature),
        }
        if json_mode:
            request["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**request)
        except APITimeoutError as e:
            logger.error(f"OpenAI API timeout after {self.timeout}s: {e}")
            raise LLMTimeoutError(f"OpenAI request timed out: {e}", timeout_seconds=self.timeout) from e
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise

        choice = response.choices[0]
        usage = response.usage
        return LLMCompletion(
            content=choice.message.content or "",
            model=response.model,
            stop_reason=choice.finish_reason,
            usage=TokenUsage(
                input_tokens=usage.prompt_tokens if usage else 0,
                output_tokens=usage.completion_tokens if usage else 0,
            ),
        )
