"""ai-worker plugin: ChatCompletion delegated to an external worker process."""

from __future__ import annotations

from typing import Any

from orka_plugins.bridge.worker_bridge import WorkerBridge
from orka_plugins.config.schema import WorkerConfig
from orka_plugins.plugins.args import require_list, require_str
from orka_plugins.plugins.core.contracts import WorkerRunner
from orka_plugins.utils.exceptions import WorkerReportedError

REQUIRED_STRINGS = ("provider", "model", "apiKey")
REQUIRED_MESSAGE = "provider, model, apiKey and messages are required"


class AIWorkerPlugin:
    """Validates arguments in-process, then hands the whole argument map to the worker."""

    def __init__(self, bridge: WorkerRunner | None = None, config: WorkerConfig | None = None):
        self.bridge = bridge or WorkerBridge(config)

    def register(self, api: Any) -> None:
        api.register_method("ChatCompletion", self.chat_completion)

    def chat_completion(self, args: dict[str, Any]) -> dict[str, Any]:
        for name in REQUIRED_STRINGS:
            require_str(args, name, REQUIRED_MESSAGE)
        require_list(args, "messages", REQUIRED_MESSAGE)
        outcome = self.bridge.run(dict(args))
        if not outcome.success:
            raise WorkerReportedError(outcome.error or "worker reported failure without an error message")
        data: dict[str, Any] = {
            "text": outcome.text or "",
            "model": outcome.model or "",
            "finishReason": outcome.finish_reason or "",
        }
        if outcome.usage is not None:
            data["usage"] = outcome.usage
        if outcome.extra:
            data.update(outcome.extra)
        return data
