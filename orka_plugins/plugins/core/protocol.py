"""Call request/response models shared by the dispatcher and its transports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class CallRequest:
    """One named operation plus its argument mapping."""

    method: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class CallResponse:
    """Dispatcher result; ``data`` is meaningful only when ``success`` is true."""

    success: bool
    error: str = ""
    data: dict[str, Any] | None = None

    @classmethod
    def ok(cls, data: dict[str, Any]) -> CallResponse:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> CallResponse:
        return cls(success=False, error=error or "call failed")

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "error": self.error, "data": self.data}
