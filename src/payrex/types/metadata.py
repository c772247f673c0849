"""
Metadata: free-form string pairs attached to PayRex resources.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

__all__ = ["Metadata", "normalize_metadata", "read_metadata"]

Metadata = Mapping[str, str]


def normalize_metadata(metadata: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    """Copy ``metadata`` into a plain dict, rejecting non-string keys or values."""
    if metadata is None:
        return None
    normalized: Dict[str, str] = {}
    for key, value in metadata.items():
        if not isinstance(key, str) or not key:
            raise ValueError(f"Metadata keys must be non-empty strings, got {key!r}")
        if not isinstance(value, str):
            raise ValueError(f"Metadata value for '{key}' must be a string, got {value!r}")
        normalized[key] = value
    return normalized


def read_metadata(payload: Mapping[str, Any], key: str = "metadata") -> Optional[Dict[str, str]]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise TypeError(f"{key} must be an object, got {value!r}")
    return {str(k): "" if v is None else str(v) for k, v in value.items()}
