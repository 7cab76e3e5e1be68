from __future__ import annotations

from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E")


def require_text(value, field_name: str) -> str:
    """Reject JSON numbers, lists and objects where a string is expected."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string", fields=[field_name])
    return value


def require_non_empty(value: Optional[str], field_name: str) -> str:
    v = require_text(value, field_name).strip()
    if not v:
        raise ValidationError(f"{field_name} is required", fields=[field_name])
    return v


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    v = require_text(value, field_name).strip()
    if len(v) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters", fields=[field_name])
    return v


def optional_text(value, field_name: str) -> Optional[str]:
    """``None`` passes through; anything else must be a string."""
    if value is None:
        return None
    return require_text(value, field_name)


def require_int_range(value, field_name: str, low: int, high: int) -> int:
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer", fields=[field_name])
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer", fields=[field_name])
    if isinstance(value, bool) or n < low or n > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}", fields=[field_name])
    return n


def require_float_range(value, field_name: str, low: float, high: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a number", fields=[field_name])
    if value < low or value > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}", fields=[field_name])
    return float(value)


def require_enum(value, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(require_text(value, field_name).strip().upper())  # type: ignore[call-arg]
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)  # type: ignore[attr-defined]
        raise ValidationError(f"{field_name} must be one of: {allowed}", fields=[field_name])
