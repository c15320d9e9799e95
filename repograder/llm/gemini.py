"""Google Gemini adapter."""

from __future__ import annotations

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from repograder.llm.base import LLMProvider
from repograder.llm.models import (
    EmptyResponseError,
    LLMConfig,
    LLMError,
    LLMResponse,
    TokenUsage,
)


class GeminiProvider(LLMProvider):
    """Gemini adapter using the google-genai async client."""

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = genai.Client(
            api_key=config.api_key,
            # google-genai takes the timeout in milliseconds
            http_options=types.HttpOptions(timeout=int(config.timeout * 1000)),
        )

    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        try:
            response = await self._client.aio.models.generate_content(
                model=self.config.model,
                contents=user,
                config=types.GenerateContentConfig(
                    system_instruction=system,
                    temperature=self.config.temperature,
                    max_output_tokens=self._max_tokens(max_tokens),
                ),
            )
        except genai_errors.APIError as e:
            raise LLMError("gemini", "generate", e, status_code=e.code) from e
        except httpx.HTTPError as e:
            raise LLMError("gemini", "generate", e) from e

        if not response.text:
            raise LLMError(
                "gemini", "generate", EmptyResponseError("No text content in Gemini response")
            )
        usage = response.usage_metadata
        return LLMResponse(
            content=response.text,
            usage=TokenUsage(
                input_tokens=(usage.prompt_token_count or 0) if usage else 0,
                output_tokens=(usage.candidates_token_count or 0) if usage else 0,
            ),
            model=self.config.model,
        )
