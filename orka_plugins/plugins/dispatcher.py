"""Method dispatch and the error boundary around it.

``Dispatcher.dispatch`` never raises: unknown methods, validation failures,
bridge failures and unexpected exceptions all become a CallResponse with
``success=False``.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from loguru import logger

from orka_plugins.plugins.core.protocol import CallRequest, CallResponse
from orka_plugins.utils.exceptions import (
    OrkaPluginError,
    UnknownMethodError,
    classify_exception,
    sanitize_error_message,
)

MethodHandler = Callable[[dict[str, Any]], dict[str, Any]]


class PluginApi:
    """Registration surface handed to a plugin's ``register(api)``."""

    def __init__(self, plugin_id: str, plugin_config: Any = None):
        self.plugin_id = plugin_id
        self.plugin_config = plugin_config
        self.methods: dict[str, MethodHandler] = {}

    def register_method(self, method: str, handler: MethodHandler) -> None:
        method_name = str(method).strip()
        if not method_name:
            raise ValueError("method name is required")
        if not callable(handler):
            raise ValueError("method handler must be callable")
        if method_name in self.methods:
            raise ValueError(f"method already registered: {method_name}")
        self.methods[method_name] = handler


def plugin_error_response(method: str, exc: OrkaPluginError) -> CallResponse:
    """Map a known plugin error to a failed response."""
    logger.warning("Plugin method {} failed with {}: {}", method, exc.code, exc.message)
    return CallResponse.fail(str(exc))


def unhandled_exception_response(method: str, exc: Exception) -> CallResponse:
    """Map an unexpected exception to a sanitized failed response."""
    code, _category, _ = classify_exception(exc)
    sanitized = sanitize_error_message(str(exc)) or exc.__class__.__name__
    logger.opt(exception=exc).error("Plugin method {} failed with [{}]: {}", method, code, sanitized)
    return CallResponse.fail(f"internal error: {sanitized}")


class Dispatcher:
    """Routes ``(method, args)`` to the handlers one plugin registered."""

    def __init__(self, plugin_id: str, methods: dict[str, MethodHandler] | None = None):
        self.plugin_id = plugin_id
        self._methods: dict[str, MethodHandler] = dict(methods or {})

    @classmethod
    def from_plugin(cls, plugin_id: str, plugin: Any, plugin_config: Any = None) -> Dispatcher:
        target = plugin() if inspect.isclass(plugin) else plugin
        api = PluginApi(plugin_id=plugin_id, plugin_config=plugin_config)
        if hasattr(target, "register") and callable(getattr(target, "register")):
            target.register(api)
        elif callable(target):
            target(api)
        else:
            raise TypeError("plugin must expose register(api) or be callable")
        return cls(plugin_id, api.methods)

    @property
    def methods(self) -> list[str]:
        return sorted(self._methods)

    def dispatch(self, method: str, args: dict[str, Any] | None = None) -> CallResponse:
        try:
            handler = self._methods.get(method) if isinstance(method, str) else None
            if handler is None:
                raise UnknownMethodError(method)
            data = handler(dict(args or {}))
        except OrkaPluginError as exc:
            return plugin_error_response(method, exc)
        except Exception as exc:
            return unhandled_exception_response(method, exc)
        if not isinstance(data, dict):
            return unhandled_exception_response(
                method, TypeError(f"handler returned {type(data).__name__}, expected a mapping")
            )
        logger.debug("Plugin {} method {} succeeded", self.plugin_id, method)
        return CallResponse.ok(data)

    def handle(self, request: CallRequest) -> CallResponse:
        return self.dispatch(request.method, request.args)

    def call_method(self, method: str, args: dict[str, Any]) -> CallResponse:
        return self.dispatch(method, args)
