"""Argument extraction with explicit per-field rules.

Absent or empty required fields are validation errors. Optional fields fall
back to a documented default only when absent or null; a value of the wrong
type is a validation error, never a silent zero value.
"""

from __future__ import annotations

from typing import Any

from orka_plugins.utils.exceptions import ValidationError


def require_str(args: dict[str, Any], name: str, message: str) -> str:
    value = args.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message, field=name)
    return value


def require_list(args: dict[str, Any], name: str, message: str) -> list[Any]:
    value = args.get(name)
    if not isinstance(value, list) or not value:
        raise ValidationError(message, field=name)
    return value


def optional_str(args: dict[str, Any], name: str, default: str = "") -> str:
    value = args.get(name)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string", field=name)
    return value.strip() or default


def optional_float(args: dict[str, Any], name: str, default: float) -> float:
    value = args.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number", field=name)
    return float(value)


def optional_int(args: dict[str, Any], name: str, default: int) -> int:
    value = args.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer", field=name)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer", field=name)
    return value
