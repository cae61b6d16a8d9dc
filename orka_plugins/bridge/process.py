"""Worker process lifecycle: spawn, pipe one request in, decode one outcome out.

Writing stdin and draining stderr run in a scoped two-thread executor while
the calling thread reads stdout. Writing stdin first and reading afterwards
would deadlock against a worker that fills its stdout pipe before consuming
all of its input. Leaving the executor scope is the single join point, and it
always happens after the process has been reaped, so the diagnostic text is
complete when the result is reconciled.
"""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import IO, Any

from loguru import logger

from orka_plugins.bridge.codec import CodecError, WorkerOutcome, decode_outcome, encode_payload
from orka_plugins.bridge.diagnostics import DiagnosticBuffer
from orka_plugins.utils.exceptions import (
    SpawnFailed,
    WorkerDecodeError,
    WorkerExecutionError,
    WorkerTimeout,
)

_NEW_SESSION = sys.platform != "win32"


def _write_payload(stdin: IO[bytes], payload: dict[str, Any]) -> None:
    # Encode/pipe failures are not surfaced to the caller: the worker sees a
    # short or empty input and reports that itself.
    try:
        stdin.write(encode_payload(payload))
        stdin.flush()
    except CodecError as exc:
        logger.warning("Worker payload encoding failed: {}", exc)
    except (BrokenPipeError, OSError) as exc:
        logger.debug("Worker stdin closed before payload was written: {}", exc)
    finally:
        try:
            stdin.close()
        except OSError:
            pass


def _kill_group(proc: subprocess.Popen[bytes]) -> None:
    """SIGKILL the worker and everything it spawned.

    The worker leads its own session on POSIX, so descendants holding the
    stdout/stderr write ends die with it and the pipes reach EOF.
    """
    if _NEW_SESSION:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        except PermissionError:
            proc.kill()
    elif proc.poll() is None:
        proc.kill()


def _expire(proc: subprocess.Popen[bytes], fired: threading.Event, timeout: float) -> None:
    # The direct child may already be gone while a descendant keeps the pipes
    # open, so the group is killed regardless of proc.poll().
    fired.set()
    logger.warning("Worker pid={} exceeded {}s, killing its process group", proc.pid, timeout)
    _kill_group(proc)


def _kill(proc: subprocess.Popen[bytes]) -> None:
    _kill_group(proc)
    proc.wait()


def _close_pipes(proc: subprocess.Popen[bytes]) -> None:
    for stream in (proc.stdin, proc.stdout, proc.stderr):
        if stream is None:
            continue
        try:
            stream.close()
        except OSError:
            pass


def _describe_exit(returncode: int) -> str:
    if returncode < 0:
        return f"terminated by signal {-returncode}"
    return f"exit status {returncode}"


def invoke_worker(
    command: list[str],
    env: dict[str, str],
    payload: dict[str, Any],
    *,
    timeout: float | None = None,
    cwd: str | None = None,
) -> WorkerOutcome:
    """Run one worker invocation and reconcile its outcome.

    Raises:
        SpawnFailed: the process could not be started.
        WorkerTimeout: the watchdog killed the worker.
        WorkerDecodeError: stdout did not hold one well-formed outcome.
        WorkerExecutionError: non-zero exit with an outcome that claims success.

    A decoded outcome with ``success=False`` is returned as-is even when the
    exit status is non-zero; the caller decides how to report it.
    """
    try:
        proc = subprocess.Popen(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            cwd=cwd,
            start_new_session=_NEW_SESSION,
        )
    except (OSError, ValueError) as exc:
        logger.warning("Worker spawn failed command={}: {}", command, exc)
        raise SpawnFailed(command, exc) from exc
    assert proc.stdin is not None and proc.stdout is not None and proc.stderr is not None
    logger.debug("Spawned worker pid={} command={}", proc.pid, command)

    diagnostics = DiagnosticBuffer()
    timed_out = threading.Event()
    watchdog: threading.Timer | None = None
    if timeout is not None:
        watchdog = threading.Timer(timeout, _expire, args=(proc, timed_out, timeout))
        watchdog.daemon = True
        watchdog.start()

    outcome: WorkerOutcome | None = None
    decode_failure: str | None = None
    try:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="orka-worker") as scope:
            try:
                scope.submit(_write_payload, proc.stdin, payload)
                drained = scope.submit(diagnostics.drain, proc.stderr)
                try:
                    outcome = decode_outcome(proc.stdout.read())
                except (CodecError, OSError) as exc:
                    decode_failure = str(exc)
                returncode = proc.wait()
            except BaseException:
                _kill(proc)
                raise
        if drained.exception() is not None:
            logger.warning("Worker stderr drain failed: {}", drained.exception())
    finally:
        if watchdog is not None:
            watchdog.cancel()
        _close_pipes(proc)

    diag = diagnostics.text
    logger.debug("Worker pid={} exited with {}", proc.pid, returncode)
    # An outcome from a worker that exited on its own stands even if the
    # watchdog fired afterwards; a kill shows up as a negative returncode.
    if timed_out.is_set() and (outcome is None or returncode < 0):
        raise WorkerTimeout(timeout or 0.0, diag)
    if decode_failure is not None:
        logger.warning("Worker pid={} produced no valid outcome: {}", proc.pid, decode_failure)
        if diag:
            logger.debug("Worker pid={} stderr: {}", proc.pid, diag)
        raise WorkerDecodeError(decode_failure, diag)
    assert outcome is not None
    if not outcome.success:
        return outcome
    if returncode != 0:
        logger.warning("Worker pid={} failed with {}", proc.pid, _describe_exit(returncode))
        raise WorkerExecutionError(_describe_exit(returncode), diag, returncode)
    return outcome
