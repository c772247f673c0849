"""
Wire encoding for request bodies and response payloads.

PayRex accepts ``application/x-www-form-urlencoded`` bodies with bracket
notation for nested values (``metadata[order_id]=42``,
``payment_methods[]=card``) and answers with JSON.
"""

from __future__ import annotations

import enum
import json
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

__all__ = [
    "decode_json",
    "encode_form",
    "flatten_params",
]


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, nested in value.items():
            name = f"{prefix}[{key}]" if prefix else str(key)
            _flatten(name, nested, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            if isinstance(item, Mapping):
                _flatten(f"{prefix}[{index}]", item, pairs)
            else:
                _flatten(f"{prefix}[]", item, pairs)
    else:
        pairs.append((prefix, _scalar(value)))


def flatten_params(params: Optional[Mapping[str, Any]]) -> List[Tuple[str, str]]:
    """Flatten ``params`` into ordered ``(key, value)`` pairs, dropping ``None``."""
    pairs: List[Tuple[str, str]] = []
    if params:
        _flatten("", params, pairs)
    return pairs


def encode_form(params: Optional[Mapping[str, Any]]) -> bytes:
    return urlencode(flatten_params(params)).encode("ascii")


def decode_json(body: bytes) -> Dict[str, Any]:
    """Parse a JSON object; an empty body decodes to ``{}``.

    Raises ``ValueError`` when the body is not a JSON object.
    """
    if not body or not body.strip():
        return {}
    payload = json.loads(body)
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    return payload
