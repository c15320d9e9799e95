"""LLM provider abstraction layer."""

import os

from repograder.config.models import LLMSettings
from repograder.llm.base import LLMProvider
from repograder.llm.claude import ClaudeProvider
from repograder.llm.gemini import GeminiProvider
from repograder.llm.models import (
    EmptyResponseError,
    LLMConfig,
    LLMError,
    LLMResponse,
    TokenUsage,
)
from repograder.llm.openai_adapter import OpenAIProvider

_PROVIDER_MAP: dict[str, type[LLMProvider]] = {
    "google": GeminiProvider,
    "anthropic": ClaudeProvider,
    "openai": OpenAIProvider,
}


def create_llm_provider(settings: LLMSettings, api_key: str | None = None) -> LLMProvider:
    """Create an LLM provider from app-level settings.

    An explicit ``api_key`` (the caller's credential) wins; otherwise the key
    is read from the env var named in settings.api_key_env.
    """
    cls = _PROVIDER_MAP.get(settings.provider)
    if cls is None:
        raise ValueError(
            f"Unsupported LLM provider: {settings.provider!r}. "
            f"Supported: {', '.join(_PROVIDER_MAP)}"
        )

    api_key = api_key or os.environ.get(settings.api_key_env)
    if not api_key:
        raise ValueError(
            f"Missing API key: pass one explicitly or set environment variable "
            f"{settings.api_key_env!r}"
        )
    llm_config = LLMConfig(
        provider=settings.provider,
        model=settings.model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
        timeout=settings.timeout,
        api_key=api_key,
    )
    return cls(llm_config)


__all__ = [
    "ClaudeProvider",
    "EmptyResponseError",
    "GeminiProvider",
    "LLMConfig",
    "LLMError",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "TokenUsage",
    "create_llm_provider",
]
