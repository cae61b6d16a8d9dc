"""llm plugin: chat completions through an in-process provider."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from orka_plugins.config.schema import LLMConfig
from orka_plugins.plugins.args import optional_float, optional_int, optional_str, require_list, require_str
from orka_plugins.providers.base import CompletionRequest, LLMProvider
from orka_plugins.providers.litellm_provider import LiteLLMProvider
from orka_plugins.utils.exceptions import ProviderError, ValidationError

REQUIRED_MESSAGE = "provider, apiKey, and messages are required"
SUPPORTED_PROVIDERS = ("openai", "anthropic")


def convert_messages(messages: list[Any]) -> list[dict[str, str]]:
    """Every message must be a mapping with non-empty string role and content."""
    out: list[dict[str, str]] = []
    for msg in messages:
        if not isinstance(msg, dict):
            raise ValidationError("invalid messages format: invalid message format", field="messages")
        role = msg.get("role")
        content = msg.get("content")
        if not isinstance(role, str) or not role or not isinstance(content, str) or not content:
            raise ValidationError(
                "invalid messages format: role and content are required for each message",
                field="messages",
            )
        out.append({"role": role, "content": content})
    return out


class LLMPlugin:
    """ChatCompletion and StreamChatCompletion for openai and anthropic."""

    def __init__(
        self,
        config: LLMConfig | None = None,
        provider_factory: Callable[[], LLMProvider] | None = None,
    ):
        self.config = config or LLMConfig()
        self._provider_factory = provider_factory or (lambda: LiteLLMProvider(api_base=self.config.api_base))

    def register(self, api: Any) -> None:
        api.register_method("ChatCompletion", self.chat_completion)
        api.register_method("StreamChatCompletion", self.stream_chat_completion)

    def build_request(self, args: dict[str, Any]) -> CompletionRequest:
        provider = require_str(args, "provider", REQUIRED_MESSAGE).strip().lower()
        api_key = require_str(args, "apiKey", REQUIRED_MESSAGE)
        messages = require_list(args, "messages", REQUIRED_MESSAGE)
        if provider not in SUPPORTED_PROVIDERS:
            raise ValidationError(f"unsupported provider: {provider}", field="provider")
        model = optional_str(args, "model") or self.config.default_models.get(provider, "")
        if not model:
            raise ValidationError(f"unsupported provider: {provider}", field="provider")
        return CompletionRequest(
            provider=provider,
            model=model,
            api_key=api_key,
            messages=convert_messages(messages),
            temperature=optional_float(args, "temperature", self.config.temperature),
            max_tokens=optional_int(args, "maxTokens", self.config.max_tokens),
            api_base=optional_str(args, "baseURL") or None,
        )

    def chat_completion(self, args: dict[str, Any]) -> dict[str, Any]:
        request = self.build_request(args)
        provider = self._provider_factory()
        try:
            completion = asyncio.run(provider.complete(request))
        except ProviderError as exc:
            raise ProviderError(
                f"API call failed: {exc}",
                provider=request.provider,
                model=request.model,
                is_retryable=bool(exc.details.get("is_retryable")),
            ) from exc
        return completion.to_data()

    def stream_chat_completion(self, args: dict[str, Any]) -> dict[str, Any]:
        request = self.build_request(args)
        provider = self._provider_factory()

        async def _collect() -> list[str]:
            return [chunk async for chunk in provider.stream(request) if chunk]

        try:
            chunks = asyncio.run(_collect())
        except ProviderError as exc:
            raise ProviderError(
                f"streaming API call failed: {exc}",
                provider=request.provider,
                model=request.model,
                is_retryable=bool(exc.details.get("is_retryable")),
            ) from exc
        return {"content": "".join(chunks), "chunks": chunks, "model": request.model}
