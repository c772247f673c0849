"""
Customers group payments and billing statements under one payer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..core.dispatcher import Dispatcher
from ..core.facade import ResourceFacade
from ..core.outcome import Outcome
from ..types.common import Deleted, mapping, optional_enum, optional_str, optional_timestamp
from ..types.currency import Currency
from ..types.metadata import normalize_metadata, read_metadata
from ..types.pagination import ListParams, Page
from ._validation import require_text

__all__ = ["CreateCustomer", "Customer", "Customers", "UpdateCustomer"]


@dataclass(frozen=True)
class Customer:
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    currency: Optional[Currency] = None
    billing_statement_prefix: Optional[str] = None
    next_billing_statement_sequence_number: Optional[int] = None
    livemode: bool = False
    metadata: Optional[Dict[str, str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Customer":
        payload = mapping(payload, cls.__name__)
        sequence = payload.get("next_billing_statement_sequence_number")
        return cls(
            id=str(payload["id"]),
            name=optional_str(payload, "name"),
            email=optional_str(payload, "email"),
            currency=optional_enum(payload, "currency", Currency),
            billing_statement_prefix=optional_str(payload, "billing_statement_prefix"),
            next_billing_statement_sequence_number=int(sequence) if sequence is not None else None,
            livemode=bool(payload.get("livemode", False)),
            metadata=read_metadata(payload),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


@dataclass(frozen=True)
class CreateCustomer:
    name: str
    email: str
    currency: Currency = Currency.PHP
    billing_statement_prefix: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None

    def __post_init__(self) -> None:
        require_text(self.name, "name")
        require_text(self.email, "email")
        object.__setattr__(self, "currency", Currency(self.currency))
        object.__setattr__(self, "metadata", normalize_metadata(self.metadata))

    def with_billing_statement_prefix(self, prefix: str) -> "CreateCustomer":
        return replace(self, billing_statement_prefix=require_text(prefix, "billing_statement_prefix"))

    def with_metadata(self, metadata: Mapping[str, str]) -> "CreateCustomer":
        return replace(self, metadata=dict(metadata))

    def to_params(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "currency": self.currency.value,
            "billing_statement_prefix": self.billing_statement_prefix,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class UpdateCustomer:
    name: Optional[str] = None
    email: Optional[str] = None
    currency: Optional[Currency] = None
    billing_statement_prefix: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None

    def __post_init__(self) -> None:
        if self.currency is not None:
            object.__setattr__(self, "currency", Currency(self.currency))
        object.__setattr__(self, "metadata", normalize_metadata(self.metadata))

    def with_name(self, name: str) -> "UpdateCustomer":
        return replace(self, name=require_text(name, "name"))

    def with_email(self, email: str) -> "UpdateCustomer":
        return replace(self, email=require_text(email, "email"))

    def with_currency(self, currency: "Currency | str") -> "UpdateCustomer":
        return replace(self, currency=Currency(currency))

    def with_billing_statement_prefix(self, prefix: str) -> "UpdateCustomer":
        return replace(self, billing_statement_prefix=require_text(prefix, "billing_statement_prefix"))

    def with_metadata(self, metadata: Mapping[str, str]) -> "UpdateCustomer":
        return replace(self, metadata=dict(metadata))

    def to_params(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "currency": self.currency.value if self.currency else None,
            "billing_statement_prefix": self.billing_statement_prefix,
            "metadata": self.metadata,
        }


class Customers:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[Customer] = ResourceFacade(
            dispatcher, "/customers", Customer
        )

    async def create(
        self, params: CreateCustomer, *, idempotency_key: Optional[str] = None
    ) -> Outcome[Customer]:
        return await self._resource.create(params, idempotency_key=idempotency_key)

    async def retrieve(self, customer_id: str) -> Outcome[Customer]:
        return await self._resource.retrieve(customer_id)

    async def update(self, customer_id: str, params: UpdateCustomer) -> Outcome[Customer]:
        return await self._resource.update(customer_id, params)

    async def delete(self, customer_id: str) -> Outcome[Deleted]:
        return await self._resource.delete(customer_id)

    async def list(self, params: Optional[ListParams] = None) -> Outcome[Page[Customer]]:
        return await self._resource.list(params)
