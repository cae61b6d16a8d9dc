"""Serialization helpers for call request/response frames."""

from __future__ import annotations

import json
from typing import Any

from .protocol import CallRequest, CallResponse


def safe_dict(value: Any) -> dict[str, Any]:
    """Return the value when dict-like, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def decode_call_request(payload: Any) -> CallRequest:
    """Decode a raw ``{"method": ..., "args": {...}}`` payload into a CallRequest."""
    row = safe_dict(payload)
    method = row.get("method")
    return CallRequest(
        method=method.strip() if isinstance(method, str) else "",
        args=dict(safe_dict(row.get("args"))),
    )


def encode_call_response(response: CallResponse) -> str:
    """Encode a response into one line of JSON."""
    return json.dumps(response.to_dict(), ensure_ascii=False)


def decode_call_response(payload: Any) -> CallResponse:
    """Decode raw dict payload into a normalized CallResponse."""
    row = safe_dict(payload)
    if bool(row.get("success")):
        return CallResponse.ok(safe_dict(row.get("data")))
    return CallResponse.fail(str(row.get("error") or ""))
