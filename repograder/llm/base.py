"""Abstract LLM interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from repograder.llm.models import LLMConfig, LLMResponse


class LLMProvider(ABC):
    """Provider-agnostic interface for one-shot text generation.

    Adapters send exactly one request per call: SDK-level retries are
    disabled and the request is bounded by ``config.timeout``. Failures are
    raised as LLMError.
    """

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Generate a complete response (one-shot).

        ``max_tokens`` overrides ``config.max_tokens`` when given.
        """
        ...

    def _max_tokens(self, max_tokens: int | None) -> int:
        return max_tokens if max_tokens is not None else self.config.max_tokens
