"""
Payments are the successful (or failed) charges created by a payment intent.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..core.dispatcher import Dispatcher
from ..core.facade import ResourceFacade
from ..core.outcome import Outcome
from ..types.common import amount, mapping, optional_amount, optional_str, optional_timestamp
from ..types.currency import Currency
from ..types.metadata import normalize_metadata, read_metadata
from ..types.payment_methods import PaymentMethod
from .customers import Customer

__all__ = [
    "Address",
    "Billing",
    "CardDetails",
    "Payment",
    "PaymentMethodDetails",
    "PaymentStatus",
    "Payments",
    "UpdatePayment",
]


class PaymentStatus(str, enum.Enum):
    PAID = "paid"
    FAILED = "failed"


@dataclass(frozen=True)
class Address:
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Address":
        payload = mapping(payload, cls.__name__)
        return cls(**{name: optional_str(payload, name) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Billing:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Billing":
        payload = mapping(payload, cls.__name__)
        address = payload.get("address")
        return cls(
            name=optional_str(payload, "name"),
            email=optional_str(payload, "email"),
            phone=optional_str(payload, "phone"),
            address=Address.from_response(address) if address else None,
        )


@dataclass(frozen=True)
class CardDetails:
    first6: Optional[str] = None
    last4: Optional[str] = None
    brand: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "CardDetails":
        payload = mapping(payload, cls.__name__)
        return cls(
            first6=optional_str(payload, "first6"),
            last4=optional_str(payload, "last4"),
            brand=optional_str(payload, "brand"),
        )


@dataclass(frozen=True)
class PaymentMethodDetails:
    type: PaymentMethod
    card: Optional[CardDetails] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentMethodDetails":
        payload = mapping(payload, cls.__name__)
        card = payload.get("card")
        return cls(
            type=PaymentMethod(payload["type"]),
            card=CardDetails.from_response(card) if card else None,
        )


@dataclass(frozen=True)
class Payment:
    id: str
    status: PaymentStatus
    amount: int
    currency: Currency
    amount_refunded: int = 0
    fee: Optional[int] = None
    net_amount: Optional[int] = None
    payment_intent_id: Optional[str] = None
    description: Optional[str] = None
    billing: Optional[Billing] = None
    customer: Optional[Customer] = None
    payment_method: Optional[PaymentMethodDetails] = None
    refunded: bool = False
    livemode: bool = False
    metadata: Optional[Dict[str, str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Payment":
        payload = mapping(payload, cls.__name__)
        billing = payload.get("billing")
        customer = payload.get("customer")
        method = payload.get("payment_method")
        return cls(
            id=str(payload["id"]),
            status=PaymentStatus(payload["status"]),
            amount=amount(payload, "amount"),
            currency=Currency(payload["currency"]),
            amount_refunded=optional_amount(payload, "amount_refunded") or 0,
            fee=optional_amount(payload, "fee", signed=True),
            net_amount=optional_amount(payload, "net_amount", signed=True),
            payment_intent_id=optional_str(payload, "payment_intent_id"),
            description=optional_str(payload, "description"),
            billing=Billing.from_response(billing) if billing else None,
            customer=Customer.from_response(customer) if isinstance(customer, dict) else None,
            payment_method=PaymentMethodDetails.from_response(method) if method else None,
            refunded=bool(payload.get("refunded", False)),
            livemode=bool(payload.get("livemode", False)),
            metadata=read_metadata(payload),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


@dataclass(frozen=True)
class UpdatePayment:
    description: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", normalize_metadata(self.metadata))

    def with_description(self, description: str) -> "UpdatePayment":
        return replace(self, description=description)

    def with_metadata(self, metadata: Mapping[str, str]) -> "UpdatePayment":
        return replace(self, metadata=dict(metadata))

    def to_params(self) -> Dict[str, Any]:
        return {"description": self.description, "metadata": self.metadata}


class Payments:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[Payment] = ResourceFacade(dispatcher, "/payments", Payment)

    async def retrieve(self, payment_id: str) -> Outcome[Payment]:
        return await self._resource.retrieve(payment_id)

    async def update(self, payment_id: str, params: UpdatePayment) -> Outcome[Payment]:
        return await self._resource.update(payment_id, params)
