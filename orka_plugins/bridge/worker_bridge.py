"""Bridge facade: resolve the worker, sanitize its env, run one invocation."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from loguru import logger

from orka_plugins.bridge.codec import WorkerOutcome
from orka_plugins.bridge.environment import sanitize_env
from orka_plugins.bridge.process import invoke_worker
from orka_plugins.bridge.resolver import WorkerPathResolver
from orka_plugins.config.schema import WorkerConfig


class WorkerBridge:
    """Turns one in-process call into one short-lived worker process and back.

    Holds configuration only; every ``run`` owns its own process and pipes.
    """

    def __init__(
        self,
        config: WorkerConfig | None = None,
        *,
        resolver: WorkerPathResolver | None = None,
        parent_env: Mapping[str, str] | None = None,
    ):
        self.config = config or WorkerConfig()
        self.resolver = resolver or WorkerPathResolver(
            entry=self.config.entry,
            subdir=self.config.subdir,
            base_dir=self.config.base_dir,
        )
        self.parent_env = parent_env

    def command_for(self, worker_path: Path) -> list[str]:
        interpreter = self.config.interpreter
        if interpreter is None:
            interpreter = sys.executable
        interpreter = interpreter.strip()
        if not interpreter:
            return [str(worker_path)]
        return [interpreter, str(worker_path)]

    def run(self, payload: dict[str, Any]) -> WorkerOutcome:
        worker_path = self.resolver.resolve()
        env = sanitize_env(self.parent_env, self.config.deny_env_prefixes)
        command = self.command_for(worker_path)
        logger.debug("Invoking worker {} ({} payload fields)", worker_path, len(payload))
        return invoke_worker(command, env, dict(payload), timeout=self.config.timeout_seconds)
