"""Plugins package: dispatcher plus the built-in plugins."""

from .ai_worker import AIWorkerPlugin
from .core.protocol import CallRequest, CallResponse
from .dispatcher import Dispatcher, PluginApi
from .llm import LLMPlugin
from .registry import BUILTIN_PLUGINS, build_dispatcher, plugin_ids
from .telegram import TelegramPlugin

__all__ = [
    "AIWorkerPlugin",
    "BUILTIN_PLUGINS",
    "CallRequest",
    "CallResponse",
    "Dispatcher",
    "LLMPlugin",
    "PluginApi",
    "TelegramPlugin",
    "build_dispatcher",
    "plugin_ids",
]
