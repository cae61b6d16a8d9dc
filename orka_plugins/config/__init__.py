"""Configuration module for orka-plugins."""

from orka_plugins.config.loader import get_config_path, load_config, save_config
from orka_plugins.config.schema import Config, LLMConfig, ServerConfig, TelegramConfig, WorkerConfig

__all__ = [
    "Config",
    "LLMConfig",
    "ServerConfig",
    "TelegramConfig",
    "WorkerConfig",
    "get_config_path",
    "load_config",
    "save_config",
]
