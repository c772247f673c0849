"""Cheap local checks used by the parameter builders."""

from __future__ import annotations

from typing import Any

__all__ = ["require_amount", "require_positive", "require_text"]


def require_amount(value: Any, name: str) -> int:
    """Amounts are non-negative integers in minor currency units."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer in minor units, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def require_positive(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


def require_text(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return value
