"""Config file I/O.

The file on disk uses camelCase keys; the pydantic models use snake_case.
Keys of ``llm.defaultModels`` are provider ids and are never converted.
"""

import json
import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from orka_plugins.config.schema import Config

CONFIG_PATH_ENV = "ORKA_CONFIG"

# Maps whose keys are data (provider ids), not field names.
_VERBATIM_KEYS = frozenset({"default_models", "defaultModels"})


def get_config_path() -> Path:
    """``$ORKA_CONFIG`` when set, else ``~/.orka/config.json``."""
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".orka" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """Read the config file, or return defaults (plus ORKA_* overrides) when it is absent.

    Raises:
        ValueError: the file exists but is not a valid config object.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return Config()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return Config.model_validate(convert_keys(data))
    except ValueError as e:
        raise ValueError(
            f"Failed to load config from {path}: {e}. "
            "Fix the file or remove it to regenerate defaults."
        ) from e


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Write ``config`` as camelCase JSON, replacing the file atomically."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(json.dumps(convert_to_camel(config.model_dump()), indent=2), encoding="utf-8")
    os.replace(tmp_path, path)


def _rekey(data: Any, key_fn: Callable[[str], str]) -> Any:
    if isinstance(data, list):
        return [_rekey(item, key_fn) for item in data]
    if not isinstance(data, dict):
        return data
    return {
        key_fn(k): dict(v) if k in _VERBATIM_KEYS and isinstance(v, dict) else _rekey(v, key_fn)
        for k, v in data.items()
    }


def convert_keys(data: Any) -> Any:
    """camelCase keys -> snake_case, recursively."""
    return _rekey(data, camel_to_snake)


def convert_to_camel(data: Any) -> Any:
    """snake_case keys -> camelCase, recursively."""
    return _rekey(data, snake_to_camel)


def camel_to_snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
