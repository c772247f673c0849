"""
Payment method identifiers and card options shared by several resources.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .common import mapping

__all__ = [
    "CaptureMethod",
    "CardOptions",
    "PaymentMethod",
    "PaymentMethodOptions",
    "parse_methods",
]


class PaymentMethod(str, enum.Enum):
    CARD = "card"
    GCASH = "gcash"
    MAYA = "maya"
    QRPH = "qrph"


class CaptureMethod(str, enum.Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"


def parse_methods(methods: Iterable["PaymentMethod | str"]) -> Tuple[PaymentMethod, ...]:
    """Coerce ``methods`` into a non-empty tuple of :class:`PaymentMethod`."""
    if isinstance(methods, (str, PaymentMethod)):
        raise TypeError("payment methods must be a sequence, not a single value")
    parsed = tuple(PaymentMethod(method) for method in methods)
    if not parsed:
        raise ValueError("At least one payment method is required")
    return parsed


@dataclass(frozen=True)
class CardOptions:
    capture_type: Optional[CaptureMethod] = None
    allowed_bins: Tuple[str, ...] = ()
    allowed_funding: Tuple[str, ...] = ()

    def to_params(self) -> Dict[str, Any]:
        return {
            "capture_type": self.capture_type.value if self.capture_type else None,
            "allowed_bins": list(self.allowed_bins) or None,
            "allowed_funding": list(self.allowed_funding) or None,
        }

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "CardOptions":
        payload = mapping(payload, cls.__name__)
        capture = payload.get("capture_type")
        return cls(
            capture_type=CaptureMethod(capture) if capture else None,
            allowed_bins=tuple(payload.get("allowed_bins") or ()),
            allowed_funding=tuple(payload.get("allowed_funding") or ()),
        )


@dataclass(frozen=True)
class PaymentMethodOptions:
    card: Optional[CardOptions] = None

    def to_params(self) -> Dict[str, Any]:
        return {"card": self.card.to_params() if self.card else None}

    @classmethod
    def from_response(cls, payload: Optional[Mapping[str, Any]]) -> Optional["PaymentMethodOptions"]:
        if not payload:
            return None
        payload = mapping(payload, cls.__name__)
        card = payload.get("card")
        return cls(card=CardOptions.from_response(card) if card else None)
