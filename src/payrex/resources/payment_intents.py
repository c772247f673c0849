"""
Payment intents track a customer's payment from checkout until it succeeds.

Endpoints: ``POST /payment_intents``, ``GET /payment_intents/:id``,
``POST /payment_intents/:id/cancel``, ``POST /payment_intents/:id/capture``.
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
)
from ..types.currency import Currency
from ..types.metadata import normalize_metadata, read_metadata
from ..types.payment_methods import (
    CaptureMethod,
    PaymentMethod,
    PaymentMethodOptions,
    parse_methods,
)
from ._validation import require_amount, require_text

__all__ = [
    "CapturePaymentIntent",
    "CreatePaymentIntent",
    "NextAction",
    "PaymentError",
    "PaymentIntent",
    "PaymentIntentStatus",
    "PaymentIntents",
]


class PaymentIntentStatus(str, enum.Enum):
    AWAITING_PAYMENT_METHOD = "awaiting_payment_method"
    AWAITING_NEXT_ACTION = "awaiting_next_action"
    AWAITING_CAPTURE = "awaiting_capture"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    CANCELED = "canceled"


@dataclass(frozen=True)
class NextAction:
    type: str
    redirect_url: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "NextAction":
        payload = mapping(payload, cls.__name__)
        return cls(type=str(payload["type"]), redirect_url=optional_str(payload, "redirect_url"))


@dataclass(frozen=True)
class PaymentError:
    """Why the last payment attempt failed."""

    code: Optional[str] = None
    message: Optional[str] = None
    parameter: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentError":
        payload = mapping(payload, cls.__name__)
        return cls(
            code=optional_str(payload, "code"),
            message=optional_str(payload, "message") or optional_str(payload, "detail"),
            parameter=optional_str(payload, "parameter") or optional_str(payload, "param"),
        )


@dataclass(frozen=True)
class PaymentIntent:
    id: str
    status: PaymentIntentStatus
    amount: int
    currency: Currency
    amount_received: int = 0
    amount_capturable: int = 0
    client_secret: Optional[str] = None
    description: Optional[str] = None
    livemode: bool = False
    metadata: Optional[Dict[str, str]] = None
    latest_payment: Optional[str] = None
    last_payment_error: Optional[PaymentError] = None
    payment_method_id: Optional[str] = None
    payment_methods: Tuple[str, ...] = ()
    payment_method_options: Optional[PaymentMethodOptions] = None
    statement_descriptor: Optional[str] = None
    next_action: Optional[NextAction] = None
    return_url: Optional[str] = None
    capture_before_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "PaymentIntent":
        payload = mapping(payload, cls.__name__)
        last_error = payload.get("last_payment_error")
        next_action = payload.get("next_action")
        return cls(
            id=str(payload["id"]),
            status=PaymentIntentStatus(payload["status"]),
            amount=amount(payload, "amount"),
            currency=Currency(payload["currency"]),
            amount_received=optional_amount(payload, "amount_received") or 0,
            amount_capturable=optional_amount(payload, "amount_capturable") or 0,
            client_secret=optional_str(payload, "client_secret"),
            description=optional_str(payload, "description"),
            livemode=bool(payload.get("livemode", False)),
            metadata=read_metadata(payload),
            latest_payment=optional_str(payload, "latest_payment"),
            last_payment_error=PaymentError.from_response(last_error) if last_error else None,
            payment_method_id=optional_str(payload, "payment_method_id"),
            payment_methods=str_list(payload, "payment_methods"),
            payment_method_options=PaymentMethodOptions.from_response(
                payload.get("payment_method_options")
            ),
            statement_descriptor=optional_str(payload, "statement_descriptor"),
            next_action=NextAction.from_response(next_action) if next_action else None,
            return_url=optional_str(payload, "return_url"),
            capture_before_at=optional_timestamp(payload, "capture_before_at"),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


@dataclass(frozen=True)
class CreatePaymentIntent:
    """
    Parameters for creating a payment intent.

    ``amount`` is in minor units (``12050`` for ₱120.50). Optional fields are
    set with the ``with_*`` methods, each returning a new value::

        params = (
            CreatePaymentIntent(10000, Currency.PHP, [PaymentMethod.CARD, "gcash"])
            .with_description("Order #12345")
            .with_capture_method(CaptureMethod.MANUAL)
        )
    """

    amount: int
    currency: Currency
    payment_methods: Tuple[PaymentMethod, ...]
    description: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None
    capture_method: Optional[CaptureMethod] = None
    payment_method_options: Optional[PaymentMethodOptions] = None
    statement_descriptor: Optional[str] = None
    return_url: Optional[str] = None

    def __post_init__(self) -> None:
        require_amount(self.amount, "amount")
        object.__setattr__(self, "currency", Currency(self.currency))
        object.__setattr__(self, "payment_methods", parse_methods(self.payment_methods))
        if self.capture_method is not None:
            object.__setattr__(self, "capture_method", CaptureMethod(self.capture_method))
        object.__setattr__(self, "metadata", normalize_metadata(self.metadata))

    def with_description(self, description: str) -> "CreatePaymentIntent":
        return replace(self, description=description)

    def with_metadata(self, metadata: Mapping[str, str]) -> "CreatePaymentIntent":
        return replace(self, metadata=dict(metadata))

    def with_capture_method(self, method: "CaptureMethod | str") -> "CreatePaymentIntent":
        return replace(self, capture_method=CaptureMethod(method))

    def with_payment_method_options(self, options: PaymentMethodOptions) -> "CreatePaymentIntent":
        return replace(self, payment_method_options=options)

    def with_statement_descriptor(self, descriptor: str) -> "CreatePaymentIntent":
        require_text(descriptor, "statement_descriptor")
        return replace(self, statement_descriptor=descriptor)

    def with_return_url(self, url: str) -> "CreatePaymentIntent":
        require_text(url, "return_url")
        return replace(self, return_url=url)

    def with_payment_methods(self, methods: Iterable["PaymentMethod | str"]) -> "CreatePaymentIntent":
        return replace(self, payment_methods=tuple(methods))

    def to_params(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "currency": self.currency.value,
            "payment_methods": [method.value for method in self.payment_methods],
            "description": self.description,
            "metadata": self.metadata,
            "capture_method": self.capture_method.value if self.capture_method else None,
            "payment_method_options": (
                self.payment_method_options.to_params() if self.payment_method_options else None
            ),
            "statement_descriptor": self.statement_descriptor,
            "return_url": self.return_url,
        }


@dataclass(frozen=True)
class CapturePaymentIntent:
    amount: int

    def __post_init__(self) -> None:
        require_amount(self.amount, "amount")

    def to_params(self) -> Dict[str, Any]:
        return {"amount": self.amount}


class PaymentIntents:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[PaymentIntent] = ResourceFacade(
            dispatcher, "/payment_intents", PaymentIntent
        )

    async def create(
        self, params: CreatePaymentIntent, *, idempotency_key: Optional[str] = None
    ) -> Outcome[PaymentIntent]:
        return await self._resource.create(params, idempotency_key=idempotency_key)

    async def retrieve(self, payment_intent_id: str) -> Outcome[PaymentIntent]:
        return await self._resource.retrieve(payment_intent_id)

    async def cancel(self, payment_intent_id: str) -> Outcome[PaymentIntent]:
        """Cancel the intent so the customer can no longer pay it."""
        return await self._resource.action(payment_intent_id, "cancel")

    async def capture(
        self,
        payment_intent_id: str,
        params: CapturePaymentIntent,
        *,
        idempotency_key: Optional[str] = None,
    ) -> Outcome[PaymentIntent]:
        """Capture a held card payment (``capture_method=manual``)."""
        return await self._resource.action(
            payment_intent_id, "capture", params, idempotency_key=idempotency_key
        )
