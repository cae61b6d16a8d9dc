"""Pytest hooks and fixtures."""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from orka_plugins.bridge.worker_bridge import WorkerBridge
from orka_plugins.config.schema import WorkerConfig

# Fake workers are plain Python scripts run with the test interpreter.
ECHO_WORKER = """
import json, sys
payload = json.loads(sys.stdin.read())
sys.stdout.write(json.dumps({
    "success": True,
    "text": "hello",
    "model": payload.get("model"),
    "finishReason": "stop",
}))
"""


@pytest.fixture
def echo_source() -> str:
    return ECHO_WORKER


@pytest.fixture
def write_worker(tmp_path: Path) -> Callable[..., Path]:
    """Write ``<tmp>/worker/<name>`` and return its path."""

    def _write(source: str, name: str = "index.py") -> Path:
        worker_dir = tmp_path / "worker"
        worker_dir.mkdir(exist_ok=True)
        path = worker_dir / name
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_bridge(tmp_path: Path, write_worker) -> Callable[..., WorkerBridge]:
    """Bridge whose worker is the given script, resolved from ``tmp_path``."""

    def _make(source: str, **config) -> WorkerBridge:
        write_worker(source, config.get("entry", "index.py"))
        config.setdefault("base_dir", str(tmp_path))
        config.setdefault("timeout_seconds", 30.0)
        return WorkerBridge(WorkerConfig(**config))

    return _make
