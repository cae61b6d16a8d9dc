"""Utility functions for orka-plugins."""

from orka_plugins.utils.exceptions import (
    OrkaPluginError,
    ValidationError,
    UnknownMethodError,
    UnknownPluginError,
    WorkerNotFound,
    SpawnFailed,
    WorkerDecodeError,
    WorkerExecutionError,
    WorkerTimeout,
    WorkerReportedError,
    ProviderError,
    ErrorCategory,
    classify_exception,
    sanitize_error_message,
)

__all__ = [
    "OrkaPluginError",
    "ValidationError",
    "UnknownMethodError",
    "UnknownPluginError",
    "WorkerNotFound",
    "SpawnFailed",
    "WorkerDecodeError",
    "WorkerExecutionError",
    "WorkerTimeout",
    "WorkerReportedError",
    "ProviderError",
    "ErrorCategory",
    "classify_exception",
    "sanitize_error_message",
]
