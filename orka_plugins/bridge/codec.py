"""Message codec for the worker's stdin/stdout contract.

The worker receives exactly one JSON object on stdin and answers with exactly
one JSON object on stdout. JSON is self-describing, so arbitrarily nested
argument values cross the process boundary without any type registration.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class CodecError(ValueError):
    """Raised when a payload cannot be encoded or an outcome cannot be decoded."""


class WorkerOutcome(BaseModel):
    """The single structured message a worker writes to stdout."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", protected_namespaces=())

    success: bool
    error: str | None = None
    text: str | None = None
    model: str | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")
    usage: dict[str, Any] | None = None
    extra: dict[str, Any] | None = None


def encode_payload(payload: dict[str, Any]) -> bytes:
    """Encode the worker payload as one newline-terminated JSON object."""
    try:
        text = json.dumps(payload, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise CodecError(f"payload is not JSON-serializable: {exc}") from exc
    return (text + "\n").encode("utf-8")


def decode_outcome(raw: bytes) -> WorkerOutcome:
    """Decode the first JSON value in ``raw`` into a WorkerOutcome.

    Content after the first value is ignored. Decoding is all-or-nothing.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CodecError(f"output is not valid UTF-8: {exc}") from exc
    stripped = text.lstrip()
    if not stripped:
        raise CodecError("EOF")
    try:
        value, _end = json.JSONDecoder().raw_decode(stripped)
    except json.JSONDecodeError as exc:
        raise CodecError(str(exc)) from exc
    if not isinstance(value, dict):
        raise CodecError(f"expected a JSON object, got {type(value).__name__}")
    try:
        return WorkerOutcome.model_validate(value)
    except ValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in exc.errors()
        )
        raise CodecError(f"invalid worker message: {errors}") from exc
