"""Pydantic models for the LLM subsystem."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class LLMError(Exception):
    """Wraps provider-specific exceptions with context.

    ``status_code`` is set when the service answered with a non-success HTTP
    status; it is None for transport failures and unusable replies.
    """

    def __init__(
        self,
        provider: str,
        operation: str,
        cause: Exception,
        status_code: int | None = None,
    ) -> None:
        self.provider = provider
        self.operation = operation
        self.status_code = status_code
        super().__init__(f"{provider} {operation} failed: {cause}")
        self.__cause__ = cause


class EmptyResponseError(ValueError):
    """The service answered successfully but returned no text."""


class LLMConfig(BaseModel):
    """Configuration for an LLM provider."""

    provider: Literal["google", "anthropic", "openai"]
    model: str
    max_tokens: int = 1024
    temperature: float = 0.7
    timeout: float = 60.0
    api_key: str | None = None


class TokenUsage(BaseModel):
    """Token usage stats from a single LLM call."""

    input_tokens: int
    output_tokens: int


class LLMResponse(BaseModel):
    """Structured response from an LLM provider."""

    content: str
    usage: TokenUsage
    model: str
