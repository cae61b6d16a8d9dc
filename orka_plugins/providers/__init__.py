"""LLM provider abstraction module."""

from orka_plugins.providers.base import Completion, CompletionRequest, LLMProvider
from orka_plugins.providers.litellm_provider import LiteLLMProvider

__all__ = ["Completion", "CompletionRequest", "LLMProvider", "LiteLLMProvider"]
