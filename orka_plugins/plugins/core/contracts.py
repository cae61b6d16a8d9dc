"""Runtime contracts for plugins and the collaborators they call."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .protocol import CallResponse


@runtime_checkable
class Plugin(Protocol):
    """Anything that can answer a named call."""

    def call_method(self, method: str, args: dict[str, Any]) -> CallResponse: ...


@runtime_checkable
class WorkerRunner(Protocol):
    """Runs one payload through an external worker and returns its decoded outcome."""

    def run(self, payload: dict[str, Any]) -> Any: ...

