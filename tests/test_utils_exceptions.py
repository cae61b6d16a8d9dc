"""Tests for orka_plugins.utils.exceptions module."""

from __future__ import annotations

import json
import subprocess

from orka_plugins.utils.exceptions import (
    ErrorCategory,
    OrkaPluginError,
    ProviderError,
    SpawnFailed,
    UnknownMethodError,
    UnknownPluginError,
    ValidationError,
    WorkerDecodeError,
    WorkerExecutionError,
    WorkerNotFound,
    WorkerReportedError,
    WorkerTimeout,
    classify_exception,
    sanitize_error_message,
)


class TestExceptionClasses:
    """Test custom exception classes."""

    def test_base_error_to_dict(self) -> None:
        exc = OrkaPluginError("test message", code="TEST_CODE")
        assert str(exc) == "test message"
        assert exc.to_dict() == {
            "error": "TEST_CODE",
            "message": "test message",
            "category": ErrorCategory.FATAL.value,
            "details": {},
        }

    def test_validation_error_with_field(self) -> None:
        exc = ValidationError("Invalid input", field="apiKey")
        assert exc.code == "VALIDATION_ERROR"
        assert exc.category == ErrorCategory.VALIDATION
        assert exc.details == {"field": "apiKey"}

    def test_unknown_method_and_plugin(self) -> None:
        assert str(UnknownMethodError("Foo")) == "unknown method: Foo"
        exc = UnknownPluginError("x", available=["llm"])
        assert str(exc) == "unknown plugin: x"
        assert exc.category == ErrorCategory.NOT_FOUND

    def test_worker_not_found(self) -> None:
        exc = WorkerNotFound("/opt/worker/index.py")
        assert str(exc) == "worker script not found: /opt/worker/index.py"
        assert exc.details["searched"] == ["/opt/worker/index.py"]

    def test_spawn_failed(self) -> None:
        exc = SpawnFailed(["node", "index.mjs"], FileNotFoundError("node"))
        assert str(exc) == "failed to start worker: node"
        assert exc.details["command"] == ["node", "index.mjs"]

    def test_decode_error_with_and_without_stderr(self) -> None:
        assert str(WorkerDecodeError("EOF")) == "worker decode error: EOF"
        assert str(WorkerDecodeError("EOF", "trace")) == "worker decode error: EOF; stderr: trace"

    def test_execution_error(self) -> None:
        exc = WorkerExecutionError("exit status 1", "oops", returncode=1)
        assert str(exc) == "worker failed: exit status 1; stderr: oops"
        assert exc.returncode == 1

    def test_timeout(self) -> None:
        exc = WorkerTimeout(2.0)
        assert str(exc) == "worker timed out after 2.0s"
        assert exc.category == ErrorCategory.TIMEOUT

    def test_reported_error_is_verbatim(self) -> None:
        assert str(WorkerReportedError("boom")) == "boom"

    def test_provider_error_retryable(self) -> None:
        exc = ProviderError("slow down", provider="openai", is_retryable=True)
        assert exc.category == ErrorCategory.RETRYABLE
        assert exc.details["provider"] == "openai"


class TestSanitizeErrorMessage:
    """Test error message sanitization."""

    def test_no_sensitive_info(self) -> None:
        assert sanitize_error_message("worker failed") == "worker failed"

    def test_sanitize_api_key(self) -> None:
        result = sanitize_error_message("bad api_key=sk-abcdefghijklmnopqrstuvwxyz")
        assert "sk-abcdefghijklmnopqrstuvwxyz" not in result
        assert "[REDACTED]" in result

    def test_sanitize_bearer(self) -> None:
        result = sanitize_error_message("header Bearer abc.def.ghi rejected")
        assert "abc.def.ghi" not in result

    def test_sanitize_telegram_token(self) -> None:
        token = "123456789:" + "A" * 35
        assert token not in sanitize_error_message(f"url /bot{token}/sendMessage")

    def test_sanitize_with_custom_replacement(self) -> None:
        assert sanitize_error_message("password=hunter2", replacement="***") == "***"


class TestClassifyException:
    """Test exception classification."""

    def test_classify_plugin_error(self) -> None:
        assert classify_exception(WorkerTimeout(1.0)) == ("WORKER_TIMEOUT", ErrorCategory.TIMEOUT, False)
        assert classify_exception(ProviderError("x", is_retryable=True))[2] is True

    def test_classify_builtin_errors(self) -> None:
        assert classify_exception(FileNotFoundError())[0] == "FILE_NOT_FOUND"
        assert classify_exception(subprocess.TimeoutExpired("x", 1))[1] == ErrorCategory.TIMEOUT
        assert classify_exception(json.JSONDecodeError("bad", "x", 0))[0] == "JSON_PARSE_ERROR"
        assert classify_exception(KeyError("k"))[0] == "INVALID_VALUE"
        assert classify_exception(ConnectionResetError())[2] is True

    def test_classify_by_message(self) -> None:
        assert classify_exception(RuntimeError("HTTP 429"))[0] == "RATE_LIMIT"
        assert classify_exception(RuntimeError("401 unauthorized"))[0] == "UNAUTHORIZED"
        assert classify_exception(RuntimeError("kaput")) == ("INTERNAL_ERROR", ErrorCategory.FATAL, False)
