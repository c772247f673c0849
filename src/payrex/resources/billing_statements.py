"""
Billing statements invoice a customer for one or more line items.

Besides CRUD the provider exposes lifecycle verbs (finalize, send, void,
mark_uncollectible); the client only triggers them and reports the status the
provider returns.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from ..core.dispatcher import Dispatcher
from ..core.facade import ResourceFacade
from ..core.outcome import Outcome
from ..types.common import Deleted, amount, mapping, optional_str, optional_timestamp, to_unix
from ..types.currency import Currency
from ..types.metadata import normalize_metadata, read_metadata
from ..types.pagination import ListParams, Page
from ..types.payment_methods import PaymentMethod, parse_methods
from ._validation import require_text
from .billing_statement_line_items import BillingStatementLineItem

__all__ = [
    "BillingStatement",
    "BillingStatementStatus",
    "BillingStatements",
    "CreateBillingStatement",
    "PaymentSettings",
    "UpdateBillingStatement",
]


class BillingStatementStatus(str, enum.Enum):
    DRAFT = "draft"
    OPEN = "open"
    PAID = "paid"
    VOID = "void"
    UNCOLLECTIBLE = "uncollectible"


@dataclass(frozen=True)
class PaymentSettings:
    payment_methods: Tuple[PaymentMethod, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "payment_methods", parse_methods(self.payment_methods))

    def to_params(self) -> Dict[str, Any]:
        return {"payment_methods": [method.value for method in self.payment_methods]}

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentSettings":
        payload = mapping(payload, cls.__name__)
        return cls(payment_methods=tuple(payload["payment_methods"]))


@dataclass(frozen=True)
class BillingStatement:
    id: str
    status: BillingStatementStatus
    amount: int
    currency: Currency
    customer_id: Optional[str] = None
    description: Optional[str] = None
    billing_details_collection: Optional[str] = None
    billing_statement_number: Optional[str] = None
    billing_statement_url: Optional[str] = None
    billing_statement_merchant_name: Optional[str] = None
    statement_descriptor: Optional[str] = None
    setup_future_usage: Optional[str] = None
    payment_intent_id: Optional[str] = None
    payment_settings: Optional[PaymentSettings] = None
    line_items: Tuple[BillingStatementLineItem, ...] = ()
    livemode: bool = False
    metadata: Optional[Dict[str, str]] = None
    due_at: Optional[datetime] = None
    finalized_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "BillingStatement":
        payload = mapping(payload, cls.__name__)
        intent = payload.get("payment_intent")
        settings = payload.get("payment_settings")
        return cls(
            id=str(payload["id"]),
            status=BillingStatementStatus(payload["status"]),
            amount=amount(payload, "amount"),
            currency=Currency(payload["currency"]),
            customer_id=optional_str(payload, "customer_id"),
            description=optional_str(payload, "description"),
            billing_details_collection=optional_str(payload, "billing_details_collection"),
            billing_statement_number=optional_str(payload, "billing_statement_number"),
            billing_statement_url=optional_str(payload, "billing_statement_url"),
            billing_statement_merchant_name=optional_str(
                payload, "billing_statement_merchant_name"
            ),
            statement_descriptor=optional_str(payload, "statement_descriptor"),
            setup_future_usage=optional_str(payload, "setup_future_usage"),
            payment_intent_id=(
                optional_str(intent, "id") if isinstance(intent, dict) else optional_str(payload, "payment_intent")
            ),
            payment_settings=PaymentSettings.from_response(settings) if settings else None,
            line_items=tuple(
                BillingStatementLineItem.from_response(item)
                for item in payload.get("line_items") or ()
            ),
            livemode=bool(payload.get("livemode", False)),
            metadata=read_metadata(payload),
            due_at=optional_timestamp(payload, "due_at"),
            finalized_at=optional_timestamp(payload, "finalized_at"),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


@dataclass(frozen=True)
class CreateBillingStatement:
    customer_id: str
    currency: Currency
    payment_settings: PaymentSettings
    billing_details_collection: Optional[str] = None
    description: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None

    def __post_init__(self) -> None:
        require_text(self.customer_id, "customer_id")
        object.__setattr__(self, "currency", Currency(self.currency))
        object.__setattr__(self, "metadata", normalize_metadata(self.metadata))

    @classmethod
    def for_methods(
        cls,
        customer_id: str,
        currency: "Currency | str",
        payment_methods: Iterable["PaymentMethod | str"],
    ) -> "CreateBillingStatement":
        return cls(customer_id, Currency(currency), PaymentSettings(tuple(payment_methods)))

    def with_billing_details_collection(self, mode: str) -> "CreateBillingStatement":
        return replace(self, billing_details_collection=mode)

    def with_description(self, description: str) -> "CreateBillingStatement":
        return replace(self, description=description)

    def with_metadata(self, metadata: Mapping[str, str]) -> "CreateBillingStatement":
        return replace(self, metadata=dict(metadata))

    def to_params(self) -> Dict[str, Any]:
        return {
            "customer_id": self.customer_id,
            "currency": self.currency.value,
            "payment_settings": self.payment_settings.to_params(),
            "billing_details_collection": self.billing_details_collection,
            "description": self.description,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class UpdateBillingStatement:
    customer_id: Optional[str] = None
    payment_settings: Optional[PaymentSettings] = None
    billing_details_collection: Optional[str] = None
    description: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None
    due_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", normalize_metadata(self.metadata))

    def with_customer_id(self, customer_id: str) -> "UpdateBillingStatement":
        return replace(self, customer_id=require_text(customer_id, "customer_id"))

    def with_payment_settings(self, settings: PaymentSettings) -> "UpdateBillingStatement":
        return replace(self, payment_settings=settings)

    def with_billing_details_collection(self, mode: str) -> "UpdateBillingStatement":
        return replace(self, billing_details_collection=mode)

    def with_description(self, description: str) -> "UpdateBillingStatement":
        return replace(self, description=description)

    def with_metadata(self, metadata: Mapping[str, str]) -> "UpdateBillingStatement":
        return replace(self, metadata=dict(metadata))

    def with_due_at(self, due_at: datetime) -> "UpdateBillingStatement":
        return replace(self, due_at=due_at)

    def to_params(self) -> Dict[str, Any]:
        return {
            "customer_id": self.customer_id,
            "payment_settings": self.payment_settings.to_params() if self.payment_settings else None,
            "billing_details_collection": self.billing_details_collection,
            "description": self.description,
            "metadata": self.metadata,
            "due_at": to_unix(self.due_at) if self.due_at else None,
        }


class BillingStatements:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[BillingStatement] = ResourceFacade(
            dispatcher, "/billing_statements", BillingStatement
        )

    async def create(
        self, params: CreateBillingStatement, *, idempotency_key: Optional[str] = None
    ) -> Outcome[BillingStatement]:
        return await self._resource.create(params, idempotency_key=idempotency_key)

    async def retrieve(self, statement_id: str) -> Outcome[BillingStatement]:
        return await self._resource.retrieve(statement_id)

    async def update(
        self, statement_id: str, params: UpdateBillingStatement
    ) -> Outcome[BillingStatement]:
        return await self._resource.update(statement_id, params)

    async def delete(self, statement_id: str) -> Outcome[Deleted]:
        return await self._resource.delete(statement_id)

    async def list(self, params: Optional[ListParams] = None) -> Outcome[Page[BillingStatement]]:
        return await self._resource.list(params)

    async def finalize(self, statement_id: str) -> Outcome[BillingStatement]:
        return await self._resource.action(statement_id, "finalize")

    async def send(self, statement_id: str) -> Outcome[BillingStatement]:
        return await self._resource.action(statement_id, "send")

    async def void(self, statement_id: str) -> Outcome[BillingStatement]:
        return await self._resource.action(statement_id, "void")

    async def mark_uncollectible(self, statement_id: str) -> Outcome[BillingStatement]:
        return await self._resource.action(statement_id, "mark_uncollectible")
