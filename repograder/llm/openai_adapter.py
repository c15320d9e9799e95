"""OpenAI adapter."""

from __future__ import annotations

from openai import APIError, APIStatusError, AsyncOpenAI

from repograder.llm.base import LLMProvider
from repograder.llm.models import (
    EmptyResponseError,
    LLMConfig,
    LLMError,
    LLMResponse,
    TokenUsage,
)


class OpenAIProvider(LLMProvider):
    """OpenAI adapter using the async SDK."""

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncOpenAI(
            api_key=config.api_key,  # falls back to OPENAI_API_KEY env var
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
            response = await self._client.chat.completions.create(
                model=self.config.model,
                max_tokens=self._max_tokens(max_tokens),
                temperature=self.config.temperature,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except APIStatusError as e:
            raise LLMError("openai", "generate", e, status_code=e.status_code) from e
        except APIError as e:
            raise LLMError("openai", "generate", e) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LLMError(
                "openai", "generate", EmptyResponseError("No text content in OpenAI response")
            )
        usage = response.usage
        return LLMResponse(
            content=content,
            usage=TokenUsage(
                input_tokens=usage.prompt_tokens if usage else 0,
                output_tokens=usage.completion_tokens if usage else 0,
            ),
            model=response.model,
        )
