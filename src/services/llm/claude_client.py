"""Anthropic Claude API client for document selection."""
import logging
from typing import Optional

from anthropic import APITimeoutError, AsyncAnthropic

from src.services.doc_routing.exceptions import LLMTimeoutError

from .base_client import BaseLLMClient, LLMCompletion, TokenUsage

logger = logging.getLogger(__name__)

JSON_MODE_INSTRUCTION = "Respond with a single JSON object and nothing else."


class ClaudeClient(BaseLLMClient):
    """Wrapper for Anthropic Claude API with error handling."""

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 1000,
        temperature: float = 0.0,
        timeout: int = 60
    ):
        super().__init__(api_key, model, max_tokens, temperature, timeout)
        self.client = AsyncAnthropic(api_key=api_key, timeout=timeout)

    @property
    def provider_name(self) -> str:
        """Return provider name."""
        return "claude"

    async def generate_completion(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
        **kwargs
    ) -> LLMCompletion:
        """Generate completion with Claude."""
        system = system_prompt or ""
        if json_mode:
            # Anthropic has no response_format switch; the instruction plus the
            # Selector's JSON extraction covers it.
            system = f"{system}\n\n{JSON_MODE_INSTRUCTION}".strip()

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=kwargs.get("max_tokens", self.max_tokens),
                temperature=kwargs.get("temperature", self.temperature),
                system=system,
                messages=[{"role": "user", "content": prompt}]
            )
        except APITimeoutError as e:
            logger.error(f"Claude API timeout after {self.timeout}s: {e}")
            raise LLMTimeoutError(f"Claude request timed out: {e}", timeout_seconds=self.timeout) from e
        except Exception as e:
            logger.error(f"Claude API error: {e}")
            raise

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        return LLMCompletion(
            content=text,
            model=response.model,
            stop_reason=response.stop_reason,
            usage=TokenUsage(
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
            ),
        )
