"""Reference chat-completion worker for the ai-worker plugin.

Reads one JSON payload from stdin, calls the provider through LiteLLM and
writes one JSON outcome to stdout. Diagnostics go to stderr. The exit status
is 0 whenever an outcome was written, including a reported failure.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any

os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

PROVIDER_PREFIXES = {
    "openai": "openai",
    "anthropic": "anthropic",
    "google": "gemini",
    "gemini": "gemini",
}


def normalize_messages(raw: Any) -> list[dict[str, str]]:
    if not isinstance(raw, list):
        return []
    out: list[dict[str, str]] = []
    for m in raw:
        if isinstance(m, dict):
            role = m.get("role") if isinstance(m.get("role"), str) else "user"
            content = m.get("content")
            out.append({"role": role, "content": content if isinstance(content, str) else str(content or "")})
        else:
            out.append({"role": "user", "content": str(m)})
    return out


def run(payload: dict[str, Any]) -> dict[str, Any]:
    provider = str(payload.get("provider") or "").strip().lower()
    model_id = payload.get("model")
    api_key = payload.get("apiKey")
    raw_messages = payload.get("messages")
    if not provider or not model_id or not api_key or not raw_messages:
        print("missing required inputs", file=sys.stderr)
        return {"success": False, "error": "missing required inputs"}

    prefix = PROVIDER_PREFIXES.get(provider)
    if prefix is None:
        return {"success": False, "error": f"unsupported provider: {provider}"}

    messages = normalize_messages(raw_messages)
    system = payload.get("system")
    if isinstance(system, str) and system:
        messages.insert(0, {"role": "system", "content": system})

    kwargs: dict[str, Any] = {
        "model": f"{prefix}/{model_id}",
        "messages": messages,
        "api_key": api_key,
    }
    if payload.get("baseURL"):
        kwargs["api_base"] = payload["baseURL"]
    for src, dst in (("temperature", "temperature"), ("maxTokens", "max_tokens")):
        value = payload.get(src)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            kwargs[dst] = value

    import litellm

    litellm.suppress_debug_info = True
    litellm.drop_params = True
    response = litellm.completion(**kwargs)
    choice = response.choices[0]
    usage = getattr(response, "usage", None)
    return {
        "success": True,
        "text": choice.message.content or "",
        "model": getattr(response, "model", None) or model_id,
        "finishReason": choice.finish_reason or "stop",
        "usage": {
            "promptTokens": usage.prompt_tokens,
            "completionTokens": usage.completion_tokens,
            "totalTokens": usage.total_tokens,
        }
        if usage
        else None,
    }


def main() -> int:
    try:
        payload = json.loads(sys.stdin.read() or "null")
        if not isinstance(payload, dict):
            raise ValueError("payload must be a JSON object")
        out = run(payload)
    except Exception as exc:  # every failure becomes a reported outcome
        print(f"worker error: {exc!r}", file=sys.stderr)
        out = {"success": False, "error": str(exc) or exc.__class__.__name__}
    sys.stdout.write(json.dumps({k: v for k, v in out.items() if v is not None}))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
