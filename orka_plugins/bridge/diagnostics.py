"""Accumulates everything a worker writes to stderr."""

from __future__ import annotations

import threading
from typing import BinaryIO

_CHUNK_SIZE = 4096


class DiagnosticBuffer:
    """Grows while the worker runs, frozen once the stream reaches EOF."""

    def __init__(self) -> None:
        self._chunks: list[bytes] = []
        self._closed = threading.Event()

    def drain(self, stream: BinaryIO) -> None:
        """Read ``stream`` to EOF. Returns only when the stream closes."""
        try:
            while True:
                chunk = stream.read(_CHUNK_SIZE)
                if not chunk:
                    break
                self._chunks.append(chunk)
        finally:
            self._closed.set()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def text(self) -> str:
        """Trimmed diagnostic text; call after the drain finished."""
        if not self._closed.is_set():
            raise RuntimeError("diagnostic stream is still open")
        return b"".join(self._chunks).decode("utf-8", errors="replace").strip()
