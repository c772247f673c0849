"""
Line items of a draft billing statement.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional

from ..core.dispatcher import Dispatcher
from ..core.facade import ResourceFacade
from ..core.outcome import Outcome
from ..types.common import Deleted, amount, mapping, optional_str, optional_timestamp
from ._validation import require_amount, require_positive, require_text

__all__ = [
    "BillingStatementLineItem",
    "BillingStatementLineItems",
    "CreateBillingStatementLineItem",
    "UpdateBillingStatementLineItem",
]


@dataclass(frozen=True)
class BillingStatementLineItem:
    id: str
    unit_price: int
    quantity: int
    billing_statement_id: Optional[str] = None
    description: Optional[str] = None
    livemode: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def total(self) -> int:
        return self.unit_price * self.quantity

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "BillingStatementLineItem":
        payload = mapping(payload, cls.__name__)
        return cls(
            id=str(payload["id"]),
            unit_price=amount(payload, "unit_price"),
            quantity=amount(payload, "quantity"),
            billing_statement_id=optional_str(payload, "billing_statement_id"),
            description=optional_str(payload, "description"),
            livemode=bool(payload.get("livemode", False)),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


@dataclass(frozen=True)
class CreateBillingStatementLineItem:
    billing_statement_id: str
    description: str
    unit_price: int
    quantity: int

    def __post_init__(self) -> None:
        require_text(self.billing_statement_id, "billing_statement_id")
        require_text(self.description, "description")
        require_amount(self.unit_price, "unit_price")
        require_positive(self.quantity, "quantity")

    def to_params(self) -> Dict[str, Any]:
        return {
            "billing_statement_id": self.billing_statement_id,
            "description": self.description,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class UpdateBillingStatementLineItem:
    description: Optional[str] = None
    unit_price: Optional[int] = None
    quantity: Optional[int] = None

    def __post_init__(self) -> None:
        if self.unit_price is not None:
            require_amount(self.unit_price, "unit_price")
        if self.quantity is not None:
            require_positive(self.quantity, "quantity")

    def with_description(self, description: str) -> "UpdateBillingStatementLineItem":
        return replace(self, description=require_text(description, "description"))

    def with_unit_price(self, unit_price: int) -> "UpdateBillingStatementLineItem":
        return replace(self, unit_price=unit_price)

    def with_quantity(self, quantity: int) -> "UpdateBillingStatementLineItem":
        return replace(self, quantity=quantity)

    def to_params(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
        }


class BillingStatementLineItems:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[BillingStatementLineItem] = ResourceFacade(
            dispatcher, "/billing_statement_line_items", BillingStatementLineItem
        )

    async def create(
        self, params: CreateBillingStatementLineItem, *, idempotency_key: Optional[str] = None
    ) -> Outcome[BillingStatementLineItem]:
        return await self._resource.create(params, idempotency_key=idempotency_key)

    async def update(
        self, line_item_id: str, params: UpdateBillingStatementLineItem
    ) -> Outcome[BillingStatementLineItem]:
        return await self._resource.update(line_item_id, params)

    async def delete(self, line_item_id: str) -> Outcome[Deleted]:
        return await self._resource.delete(line_item_id)
