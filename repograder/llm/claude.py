"""Anthropic Claude adapter."""

from __future__ import annotations

from anthropic import APIError, APIStatusError, AsyncAnthropic

from repograder.llm.base import LLMProvider
from repograder.llm.models import (
    EmptyResponseError,
    LLMConfig,
    LLMError,
    LLMResponse,
    TokenUsage,
)


class ClaudeProvider(LLMProvider):
    """Claude adapter using the Anthropic async SDK."""

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncAnthropic(
            api_key=config.api_key,  # falls back to ANTHROPIC_API_KEY env var
            timeout=config.timeout,
            max_retries=0,
        )

    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        try:
            message = await self._client.messages.create(
                model=self.config.model,
                max_tokens=self._max_tokens(max_tokens),
                temperature=self.config.temperature,
                system=system,
                messages=[{"role": "user", "content": user}],
            )
        except APIStatusError as e:
            raise LLMError("claude", "generate", e, status_code=e.status_code) from e
        except APIError as e:
            raise LLMError("claude", "generate", e) from e

        if not message.content or not hasattr(message.content[0], "text"):
            raise LLMError(
                "claude", "generate", EmptyResponseError("No text content in Claude response")
            )
        return LLMResponse(
            content=message.content[0].text,
            usage=TokenUsage(
                input_tokens=message.usage.input_tokens,
                output_tokens=message.usage.output_tokens,
            ),
            model=message.model,
        )
