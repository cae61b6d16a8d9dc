"""Base types for in-process LLM providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CompletionRequest:
    """A normalized chat completion request."""

    provider: str
    model: str
    api_key: str
    messages: list[dict[str, str]]
    temperature: float = 0.7
    max_tokens: int = 1000
    api_base: str | None = None


@dataclass
class Completion:
    """A finished (non-streamed) completion."""

    content: str
    model: str
    finish_reason: str = "stop"
    usage: dict[str, int] = field(default_factory=dict)

    def to_data(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "model": self.model,
            "usage": dict(self.usage),
            "finishReason": self.finish_reason,
        }


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    Implementations raise ``ProviderError`` on any upstream failure.
    """

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> Completion:
        """Run one chat completion."""

    @abstractmethod
    def stream(self, request: CompletionRequest) -> AsyncIterator[str]:
        """Yield content chunks of a streamed chat completion."""
