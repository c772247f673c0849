"""
Field readers shared by the resource decoders.

The provider sends timestamps as Unix seconds and amounts as integers in
minor currency units; these helpers turn them into Python values and raise
``KeyError``/``TypeError``/``ValueError`` on anything else. A nested field
that should be an object but is not raises ``TypeError`` too. The dispatcher
reports all of these as a decoding error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

__all__ = [
    "Deleted",
    "amount",
    "mapping",
    "optional_amount",
    "optional_enum",
    "optional_str",
    "optional_timestamp",
    "str_list",
    "timestamp",
    "to_unix",
]

E = TypeVar("E")


def mapping(value: Any, name: str) -> Mapping[str, Any]:
    """Return ``value`` if it is a JSON object, else raise ``TypeError``."""
    if not isinstance(value, Mapping):
        raise TypeError(f"{name} must be an object, got {value!r}")
    return value


def timestamp(payload: Mapping[str, Any], key: str) -> datetime:
    value = mapping(payload, f"object holding {key}")[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be a Unix timestamp, got {value!r}")
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError) as exc:
        raise ValueError(f"{key} is out of range: {value!r}") from exc


def optional_timestamp(payload: Mapping[str, Any], key: str) -> Optional[datetime]:
    if mapping(payload, f"object holding {key}").get(key) is None:
        return None
    return timestamp(payload, key)


def to_unix(value: datetime | int) -> int:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return int(value)


def amount(payload: Mapping[str, Any], key: str, *, signed: bool = False) -> int:
    value = mapping(payload, f"object holding {key}")[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer amount, got {value!r}")
    if not signed and value < 0:
        raise ValueError(f"{key} must not be negative, got {value}")
    return value


def optional_amount(
    payload: Mapping[str, Any], key: str, *, signed: bool = False
) -> Optional[int]:
    if mapping(payload, f"object holding {key}").get(key) is None:
        return None
    return amount(payload, key, signed=signed)


def optional_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = mapping(payload, f"object holding {key}").get(key)
    return None if value is None else str(value)


def optional_enum(payload: Mapping[str, Any], key: str, enum_type: Type[E]) -> Optional[E]:
    value = mapping(payload, f"object holding {key}").get(key)
    return None if value is None else enum_type(value)  # type: ignore[call-arg]


def str_list(payload: Mapping[str, Any], key: str) -> Tuple[str, ...]:
    value = mapping(payload, f"object holding {key}").get(key) or ()
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"{key} must be a list, got {value!r}")
    return tuple(str(item) for item in value)


@dataclass(frozen=True)
class Deleted:
    """Confirmation returned by ``delete`` operations."""

    id: Optional[str]
    deleted: bool = True
    resource: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Deleted":
        payload = mapping(payload, cls.__name__)
        return cls(
            id=optional_str(payload, "id"),
            deleted=bool(payload.get("deleted", True)),
            resource=optional_str(payload, "resource"),
            raw=payload,
        )
