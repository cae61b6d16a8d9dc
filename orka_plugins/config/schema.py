"""Configuration schema using Pydantic.

Single data model and defaults, persisted to ~/.orka/config.json and
overridable through ORKA_* environment variables (ORKA_WORKER__TIMEOUT_SECONDS=30).
"""

from pydantic import BaseModel, Field, ConfigDict
from pydantic_settings import BaseSettings


class WorkerConfig(BaseModel):
    """External worker bridge configuration."""
    interpreter: str | None = None  # None = current Python; "" = run the entry directly
    entry: str = "index.py"
    subdir: str = "worker"
    base_dir: str | None = None  # None = installed package directory
    timeout_seconds: float | None = 120.0  # None disables the watchdog
    deny_env_prefixes: list[str] = Field(default_factory=list)  # Added to AWS_/GOOGLE_/ANTHROPIC_/OPENAI_


def _default_models() -> dict[str, str]:
    return {
        "openai": "gpt-3.5-turbo",
        "anthropic": "claude-3-sonnet-20240229",
    }


class LLMConfig(BaseModel):
    """Defaults for the in-process llm plugin."""
    default_models: dict[str, str] = Field(default_factory=_default_models)
    temperature: float = 0.7
    max_tokens: int = 1000
    api_base: str | None = None


class TelegramConfig(BaseModel):
    """Telegram Bot API settings for the telegram plugin."""
    api_base: str = "https://api.telegram.org"
    timeout_seconds: float = 15.0


class ServerConfig(BaseModel):
    """HTTP transport settings."""
    host: str = "127.0.0.1"
    port: int = 50052
    plugin: str = "ai-worker"


class Config(BaseSettings):
    """Root configuration for orka-plugins."""
    worker: WorkerConfig = Field(default_factory=WorkerConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    model_config = ConfigDict(
        env_prefix="ORKA_",
        env_nested_delimiter="__"
    )
