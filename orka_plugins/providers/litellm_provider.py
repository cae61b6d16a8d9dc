"""LiteLLM provider implementation for multi-provider support."""

import os
import re
from collections.abc import AsyncIterator
from typing import Any

# Use the bundled model cost map; avoids a remote fetch on import.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

import litellm
from litellm import acompletion
from loguru import logger

from orka_plugins.providers.base import Completion, CompletionRequest, LLMProvider
from orka_plugins.utils.exceptions import ProviderError

_MAX_DETAIL_LEN = 600

# provider id -> LiteLLM routing prefix
LITELLM_PREFIXES: dict[str, str] = {
    "openai": "openai",
    "anthropic": "anthropic",
    "google": "gemini",
    "gemini": "gemini",
}


def mask_api_key(api_key: str | None) -> str:
    """Mask API key for display: 'not set' or first6...last4."""
    if not api_key or not api_key.strip():
        return "not set"
    key = api_key.strip()
    if len(key) <= 10:
        return "***"
    return f"{key[:6]}...{key[-4:]}"


def _sanitize_messages(messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Ensure no message has content: null."""
    out: list[dict[str, Any]] = []
    for m in messages:
        m = dict(m)
        if "content" in m and m["content"] is None:
            m["content"] = ""
        out.append(m)
    return out


def _short_error(exc: Exception) -> str:
    """First line of the upstream error, or the API's own message when present."""
    err_str = str(exc)
    match = re.search(r"'msg':\s*'([^']+)'", err_str)
    if match:
        return match.group(1).strip()
    first_line = err_str.split("\n")[0].strip() or exc.__class__.__name__
    if len(first_line) > _MAX_DETAIL_LEN:
        first_line = first_line[:_MAX_DETAIL_LEN] + "... (truncated)"
    return first_line


def _is_retryable(exc: Exception) -> bool:
    msg = str(exc).lower()
    if any(x in msg for x in ("rate limit", "too many requests", "429", "timeout", "timed out")):
        return True
    status = getattr(exc, "status_code", None)
    return isinstance(status, int) and (status >= 500 or status in {408, 409, 425, 429})


def _field(obj: Any, name: str) -> Any:
    return obj.get(name) if isinstance(obj, dict) else getattr(obj, name, None)


def _delta_text(chunk: Any) -> str:
    """Content delta of one streamed chunk; dicts and SDK objects both occur."""
    choices = _field(chunk, "choices") or []
    if not choices:
        return ""
    content = _field(_field(choices[0], "delta") or {}, "content")
    return content if isinstance(content, str) else ""


def resolve_model(provider: str, model: str) -> str:
    """Apply the LiteLLM routing prefix for the provider unless already present."""
    prefix = LITELLM_PREFIXES.get(provider.strip().lower())
    if not prefix or model.startswith(f"{prefix}/"):
        return model
    return f"{prefix}/{model}"


class LiteLLMProvider(LLMProvider):
    """
    LLM provider using LiteLLM for multi-provider support.

    Credentials travel with each request; nothing is written to the process
    environment.
    """

    def __init__(self, api_base: str | None = None):
        self.api_base = api_base
        # Disable LiteLLM logging noise
        litellm.suppress_debug_info = True
        # Drop unsupported parameters for providers
        litellm.drop_params = True

    def _build_kwargs(self, request: CompletionRequest, *, stream: bool = False) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": resolve_model(request.provider, request.model),
            "messages": _sanitize_messages(request.messages),
            # Clamp max_tokens to at least 1; LiteLLM rejects zero or negative values.
            "max_tokens": max(1, request.max_tokens),
            "temperature": request.temperature,
            "api_key": request.api_key,
        }
        api_base = request.api_base or self.api_base
        if api_base:
            kwargs["api_base"] = api_base
        if stream:
            kwargs["stream"] = True
        return kwargs

    def _error(self, exc: Exception, request: CompletionRequest) -> ProviderError:
        logger.warning(
            "LLM call failed provider={} model={} api_key={}: {}",
            request.provider,
            request.model,
            mask_api_key(request.api_key),
            _short_error(exc),
        )
        return ProviderError(
            _short_error(exc),
            provider=request.provider,
            model=request.model,
            is_retryable=_is_retryable(exc),
        )

    async def complete(self, request: CompletionRequest) -> Completion:
        """
        Send a chat completion request via LiteLLM.

        Args:
            request: Normalized completion request.

        Returns:
            Completion with content, model, finish reason and usage.
        """
        kwargs = self._build_kwargs(request)
        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            raise self._error(e, request) from e
        return self._parse_response(response, request)

    async def stream(self, request: CompletionRequest) -> AsyncIterator[str]:
        """Stream chat completion, yielding each non-empty content delta."""
        kwargs = self._build_kwargs(request, stream=True)
        try:
            stream = await acompletion(**kwargs)
            async for chunk in stream:
                text = _delta_text(chunk)
                if text:
                    yield text
        except Exception as e:
            raise self._error(e, request) from e

    def _parse_response(self, response: Any, request: CompletionRequest) -> Completion:
        """Parse LiteLLM response into our standard format."""
        choice = response.choices[0]
        usage = {}
        if getattr(response, "usage", None):
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }
        return Completion(
            content=choice.message.content or "",
            model=getattr(response, "model", None) or request.model,
            finish_reason=choice.finish_reason or "stop",
            usage=usage,
        )
