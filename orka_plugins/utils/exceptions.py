"""
Exception hierarchy and error handling utilities for orka-plugins.

Provides:
- Custom exception classes with error codes
- Error categorization (retryable, fatal, validation, ...)
- Safe error message formatting (no credential leak)
"""

from __future__ import annotations

import json
import re
import subprocess
from enum import Enum
from typing import Any

import httpx


class ErrorCategory(Enum):
    """Error categories for classification."""
    RETRYABLE = "retryable"
    FATAL = "fatal"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERMISSION = "permission"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"


class OrkaPluginError(Exception):
    """Base exception for all orka-plugins errors.

    ``str(exc)`` is the bare human-readable message; it is what ends up in the
    ``error`` field of a call response.
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class ValidationError(OrkaPluginError):
    """Required argument missing, empty or of the wrong type."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", category=ErrorCategory.VALIDATION, details=details)


class UnknownMethodError(OrkaPluginError):
    """The plugin has no handler for the requested method."""

    def __init__(self, method: str):
        super().__init__(
            f"unknown method: {method}",
            code="UNKNOWN_METHOD",
            category=ErrorCategory.NOT_FOUND,
            details={"method": method},
        )


class UnknownPluginError(OrkaPluginError):
    """No plugin is registered under the requested id."""

    def __init__(self, plugin_id: str, available: list[str] | None = None):
        super().__init__(
            f"unknown plugin: {plugin_id}",
            code="UNKNOWN_PLUGIN",
            category=ErrorCategory.NOT_FOUND,
            details={"plugin_id": plugin_id, "available": list(available or [])},
        )


class WorkerNotFound(OrkaPluginError):
    """Neither worker candidate path exists."""

    def __init__(self, path: str, searched: list[str] | None = None):
        super().__init__(
            f"worker script not found: {path}",
            code="WORKER_NOT_FOUND",
            category=ErrorCategory.NOT_FOUND,
            details={"path": path, "searched": list(searched or [path])},
        )
        self.path = path


class SpawnFailed(OrkaPluginError):
    """The worker process could not be started."""

    def __init__(self, command: list[str], cause: BaseException):
        super().__init__(
            f"failed to start worker: {cause}",
            code="SPAWN_FAILED",
            details={"command": list(command), "cause": str(cause)},
        )


def _with_stderr(message: str, diagnostics: str) -> str:
    if diagnostics:
        return f"{message}; stderr: {diagnostics}"
    return message


class WorkerDecodeError(OrkaPluginError):
    """The worker's stdout did not yield one well-formed outcome message."""

    def __init__(self, cause: str, diagnostics: str = ""):
        super().__init__(
            _with_stderr(f"worker decode error: {cause}", diagnostics),
            code="WORKER_DECODE_ERROR",
            details={"cause": cause, "stderr": diagnostics},
        )
        self.diagnostics = diagnostics


class WorkerExecutionError(OrkaPluginError):
    """The worker exited with a non-zero status or could not be waited on."""

    def __init__(self, cause: str, diagnostics: str = "", returncode: int | None = None):
        super().__init__(
            _with_stderr(f"worker failed: {cause}", diagnostics),
            code="WORKER_EXECUTION_ERROR",
            details={"cause": cause, "stderr": diagnostics, "returncode": returncode},
        )
        self.diagnostics = diagnostics
        self.returncode = returncode


class WorkerTimeout(OrkaPluginError):
    """The worker did not finish within the configured timeout and was killed."""

    def __init__(self, timeout_seconds: float, diagnostics: str = ""):
        super().__init__(
            _with_stderr(f"worker timed out after {timeout_seconds}s", diagnostics),
            code="WORKER_TIMEOUT",
            category=ErrorCategory.TIMEOUT,
            details={"timeout_seconds": timeout_seconds, "stderr": diagnostics},
        )


class WorkerReportedError(OrkaPluginError):
    """The worker decoded cleanly but reported its own failure."""

    def __init__(self, message: str):
        super().__init__(message, code="WORKER_REPORTED_ERROR")


class ProviderError(OrkaPluginError):
    """LLM provider call failed."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        model: str | None = None,
        is_retryable: bool = False,
    ):
        category = ErrorCategory.RETRYABLE if is_retryable else ErrorCategory.FATAL
        super().__init__(
            message,
            code="PROVIDER_ERROR",
            category=category,
            details={"provider": provider, "model": model, "is_retryable": is_retryable},
        )


# Credential shapes that can show up in upstream error text.
_SENSITIVE_PATTERNS = (
    # key=value / key: value for credential-ish names
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    # OpenAI-style secret keys
    re.compile(r"sk-[a-zA-Z0-9_-]{20,}"),
    # Telegram bot tokens, e.g. inside /bot<token>/ URLs
    re.compile(r"\d{8,}:[a-zA-Z0-9_-]{30,}"),
    re.compile(r"[a-zA-Z0-9]{32,}"),
)


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    for pattern in _SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


# (exception types, code, category, retry); first match wins, so subclasses go first.
_TYPE_RULES: tuple[tuple[tuple[type[BaseException], ...], str, ErrorCategory, bool], ...] = (
    ((FileNotFoundError,), "FILE_NOT_FOUND", ErrorCategory.NOT_FOUND, False),
    ((PermissionError,), "PERMISSION_DENIED", ErrorCategory.PERMISSION, False),
    ((TimeoutError, subprocess.TimeoutExpired, httpx.TimeoutException), "TIMEOUT", ErrorCategory.TIMEOUT, True),
    ((ConnectionError, httpx.TransportError), "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True),
    ((json.JSONDecodeError,), "JSON_PARSE_ERROR", ErrorCategory.VALIDATION, False),
    ((ValueError, KeyError, TypeError), "INVALID_VALUE", ErrorCategory.VALIDATION, False),
)

# Fallback for foreign provider SDK errors that only say what happened in text.
_MESSAGE_RULES: tuple[tuple[tuple[str, ...], str, ErrorCategory, bool], ...] = (
    (("rate limit", "too many requests", "429"), "RATE_LIMIT", ErrorCategory.RATE_LIMIT, True),
    (("timed out", "timeout"), "TIMEOUT", ErrorCategory.TIMEOUT, True),
    (("unauthorized", "invalid api key", "401", "403"), "UNAUTHORIZED", ErrorCategory.PERMISSION, False),
    (("connection", "network"), "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True),
)


def classify_exception(exc: BaseException) -> tuple[str, ErrorCategory, bool]:
    """
    Classify an exception and return (error_code, category, should_retry).

    Only used for logging; nothing in this package retries.
    """
    if isinstance(exc, OrkaPluginError):
        return exc.code, exc.category, exc.category in (ErrorCategory.RETRYABLE, ErrorCategory.RATE_LIMIT)
    for types, code, category, retry in _TYPE_RULES:
        if isinstance(exc, types):
            return code, category, retry
    text = str(exc).lower()
    for needles, code, category, retry in _MESSAGE_RULES:
        if any(needle in text for needle in needles):
            return code, category, retry
    return "INTERNAL_ERROR", ErrorCategory.FATAL, False
