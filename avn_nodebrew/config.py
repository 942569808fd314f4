# avn_nodebrew/config.py
from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONFIG_PATH = "avn-nodebrew.toml"
DEFAULT_COMMAND = "nodebrew"
DEFAULT_LIST_ARGS = ["list"]
DEFAULT_USE_ARGS = ["use"]
DEFAULT_NULL_SINK = "/dev/null"
DEFAULT_TIMEOUT = 30.0


class ConfigError(Exception):
    """Config error in avn-nodebrew.toml"""


def _type_name(value: object) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def _field_type_error(path: Path, field_name: str, expected: str, value: object) -> ConfigError:
    return ConfigError(
        f"{path}: invalid {field_name} (expected {expected}, got {_type_name(value)})"
    )


@dataclass
class ManagerConfig:
    command: str = DEFAULT_COMMAND
    list_args: list[str] = field(default_factory=lambda: list(DEFAULT_LIST_ARGS))
    use_args: list[str] = field(default_factory=lambda: list(DEFAULT_USE_ARGS))
    null_sink: str = DEFAULT_NULL_SINK
    timeout: float | None = DEFAULT_TIMEOUT


def _read_string(path: Path, section: dict, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise _field_type_error(path, f"[manager].{key}", "non-empty string", value)
    return value


def _read_string_list(path: Path, section: dict, key: str, default: list[str]) -> list[str]:
    value = section.get(key)
    if value is None:
        return list(default)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise _field_type_error(path, f"[manager].{key}", "array of strings", value)
    return list(value)


def _read_timeout(path: Path, section: dict) -> float | None:
    if "timeout" not in section:
        return DEFAULT_TIMEOUT
    value = section["timeout"]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _field_type_error(path, "[manager].timeout", "number", value)
    if value < 0:
        raise ConfigError(f"{path}: invalid [manager].timeout (must be >= 0, got {value})")
    if value == 0:
        return None
    return float(value)


def load_config(path: Path) -> ManagerConfig:
    if not path.exists():
        raise FileNotFoundError(f"{path} does not exist")

    text = path.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    section = data.get("manager", {})
    if not isinstance(section, dict):
        raise _field_type_error(path, "[manager]", "table/object", section)

    return ManagerConfig(
        command=_read_string(path, section, "command", DEFAULT_COMMAND),
        list_args=_read_string_list(path, section, "list_args", DEFAULT_LIST_ARGS),
        use_args=_read_string_list(path, section, "use_args", DEFAULT_USE_ARGS),
        null_sink=_read_string(path, section, "null_sink", DEFAULT_NULL_SINK),
        timeout=_read_timeout(path, section),
    )
