"""Built-in plugin registry: plugin id -> factory building its dispatcher."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from orka_plugins.config.schema import Config
from orka_plugins.plugins.ai_worker import AIWorkerPlugin
from orka_plugins.plugins.dispatcher import Dispatcher
from orka_plugins.plugins.llm import LLMPlugin
from orka_plugins.plugins.telegram import TelegramPlugin
from orka_plugins.utils.exceptions import UnknownPluginError

PluginFactory = Callable[[Config], Any]

BUILTIN_PLUGINS: dict[str, PluginFactory] = {
    "ai-worker": lambda cfg: AIWorkerPlugin(config=cfg.worker),
    "llm": lambda cfg: LLMPlugin(config=cfg.llm),
    "telegram": lambda cfg: TelegramPlugin(config=cfg.telegram),
}


def plugin_ids() -> list[str]:
    return sorted(BUILTIN_PLUGINS)


def build_dispatcher(plugin_id: str, config: Config | None = None) -> Dispatcher:
    """Instantiate a built-in plugin and collect its registered methods."""
    factory = BUILTIN_PLUGINS.get(plugin_id)
    if factory is None:
        raise UnknownPluginError(plugin_id, available=plugin_ids())
    cfg = config or Config()
    return Dispatcher.from_plugin(plugin_id, factory(cfg), plugin_config=cfg)
