"""
Checkout sessions are hosted payment pages built from a list of line items.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from ..core.dispatcher import Dispatcher
from ..core.facade import ResourceFacade
from ..core.outcome import Outcome
from ..types.common import (
    amount,
    mapping,
    optional_amount,
    optional_str,
    optional_timestamp,
    str_list,
    to_unix,
)
from ..types.currency import Currency
from ..types.metadata import normalize_metadata, read_metadata
from ..types.payment_methods import PaymentMethod, PaymentMethodOptions, parse_methods
from ._validation import require_amount, require_positive, require_text
from .payment_intents import PaymentIntent

__all__ = [
    "CheckoutLineItem",
    "CheckoutSession",
    "CheckoutSessionStatus",
    "CheckoutSessions",
    "CreateCheckoutSession",
]


class CheckoutSessionStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


@dataclass(frozen=True)
class CheckoutLineItem:
    name: str
    amount: int
    quantity: int
    description: Optional[str] = None
    image: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        require_text(self.name, "name")
        require_amount(self.amount, "amount")
        require_positive(self.quantity, "quantity")

    def to_params(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "amount": self.amount,
            "quantity": self.quantity,
            "description": self.description,
            "image": self.image,
        }

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "CheckoutLineItem":
        payload = mapping(payload, cls.__name__)
        return cls(
            id=optional_str(payload, "id"),
            name=str(payload["name"]),
            amount=amount(payload, "amount"),
            quantity=int(payload["quantity"]),
            description=optional_str(payload, "description"),
            image=optional_str(payload, "image"),
        )


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    status: CheckoutSessionStatus
    currency: Currency
    url: Optional[str] = None
    amount: Optional[int] = None
    line_items: Tuple[CheckoutLineItem, ...] = ()
    client_secret: Optional[str] = None
    customer_reference_id: Optional[str] = None
    payment_intent: Optional[PaymentIntent] = None
    payment_methods: Tuple[str, ...] = ()
    payment_method_options: Optional[PaymentMethodOptions] = None
    success_url: Optional[str] = None
    cancel_url: Optional[str] = None
    billing_details_collection: Optional[str] = None
    submit_type: Optional[str] = None
    description: Optional[str] = None
    statement_descriptor: Optional[str] = None
    livemode: bool = False
    metadata: Optional[Dict[str, str]] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "CheckoutSession":
        payload = mapping(payload, cls.__name__)
        intent = payload.get("payment_intent")
        return cls(
            id=str(payload["id"]),
            status=CheckoutSessionStatus(payload["status"]),
            currency=Currency(payload["currency"]),
            url=optional_str(payload, "url"),
            amount=optional_amount(payload, "amount"),
            line_items=tuple(
                CheckoutLineItem.from_response(item) for item in payload.get("line_items") or ()
            ),
            client_secret=optional_str(payload, "client_secret"),
            customer_reference_id=optional_str(payload, "customer_reference_id"),
            payment_intent=PaymentIntent.from_response(intent) if isinstance(intent, dict) else None,
            payment_methods=str_list(payload, "payment_methods"),
            payment_method_options=PaymentMethodOptions.from_response(
                payload.get("payment_method_options")
            ),
            success_url=optional_str(payload, "success_url"),
            cancel_url=optional_str(payload, "cancel_url"),
            billing_details_collection=optional_str(payload, "billing_details_collection"),
            submit_type=optional_str(payload, "submit_type"),
            description=optional_str(payload, "description"),
            statement_descriptor=optional_str(payload, "statement_descriptor"),
            livemode=bool(payload.get("livemode", False)),
            metadata=read_metadata(payload),
            expires_at=optional_timestamp(payload, "expires_at"),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


@dataclass(frozen=True)
class CreateCheckoutSession:
    currency: Currency
    line_items: Tuple[CheckoutLineItem, ...]
    payment_methods: Tuple[PaymentMethod, ...]
    success_url: str
    cancel_url: str
    customer_reference_id: Optional[str] = None
    payment_method_options: Optional[PaymentMethodOptions] = None
    expires_at: Optional[datetime] = None
    billing_details_collection: Optional[str] = None
    submit_type: Optional[str] = None
    description: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "currency", Currency(self.currency))
        items = tuple(self.line_items)
        if not items:
            raise ValueError("At least one line item is required")
        object.__setattr__(self, "line_items", items)
        object.__setattr__(self, "payment_methods", parse_methods(self.payment_methods))
        require_text(self.success_url, "success_url")
        require_text(self.cancel_url, "cancel_url")
        object.__setattr__(self, "metadata", normalize_metadata(self.metadata))

    @property
    def total_amount(self) -> int:
        return sum(item.amount * item.quantity for item in self.line_items)

    def with_customer_reference_id(self, reference: str) -> "CreateCheckoutSession":
        return replace(self, customer_reference_id=require_text(reference, "customer_reference_id"))

    def with_payment_method_options(self, options: PaymentMethodOptions) -> "CreateCheckoutSession":
        return replace(self, payment_method_options=options)

    def with_expires_at(self, expires_at: datetime) -> "CreateCheckoutSession":
        return replace(self, expires_at=expires_at)

    def with_billing_details_collection(self, mode: str) -> "CreateCheckoutSession":
        return replace(self, billing_details_collection=mode)

    def with_submit_type(self, submit_type: str) -> "CreateCheckoutSession":
        return replace(self, submit_type=submit_type)

    def with_description(self, description: str) -> "CreateCheckoutSession":
        return replace(self, description=description)

    def with_metadata(self, metadata: Mapping[str, str]) -> "CreateCheckoutSession":
        return replace(self, metadata=dict(metadata))

    def with_line_items(self, items: Iterable[CheckoutLineItem]) -> "CreateCheckoutSession":
        return replace(self, line_items=tuple(items))

    def to_params(self) -> Dict[str, Any]:
        return {
            "currency": self.currency.value,
            "line_items": [item.to_params() for item in self.line_items],
            "payment_methods": [method.value for method in self.payment_methods],
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
            "customer_reference_id": self.customer_reference_id,
            "payment_method_options": (
                self.payment_method_options.to_params() if self.payment_method_options else None
            ),
            "expires_at": to_unix(self.expires_at) if self.expires_at else None,
            "billing_details_collection": self.billing_details_collection,
            "submit_type": self.submit_type,
            "description": self.description,
            "metadata": self.metadata,
        }


class CheckoutSessions:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[CheckoutSession] = ResourceFacade(
            dispatcher, "/checkout_sessions", CheckoutSession
        )

    async def create(
        self, params: CreateCheckoutSession, *, idempotency_key: Optional[str] = None
    ) -> Outcome[CheckoutSession]:
        return await self._resource.create(params, idempotency_key=idempotency_key)

    async def retrieve(self, session_id: str) -> Outcome[CheckoutSession]:
        return await self._resource.retrieve(session_id)

    async def expire(self, session_id: str) -> Outcome[CheckoutSession]:
        return await self._resource.action(session_id, "expire")
