"""
Payouts settle collected funds to the merchant's bank account.

Payouts are created by the provider; the client can only page through the
transactions that make one up.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..core.dispatcher import Dispatcher
from ..core.facade import ResourceFacade
from ..core.outcome import Outcome
from ..types.common import amount, mapping, optional_amount, optional_str, optional_timestamp
from ..types.pagination import ListParams, Page

__all__ = [
    "Payout",
    "PayoutDestination",
    "PayoutStatus",
    "PayoutTransaction",
    "PayoutTransactionType",
    "Payouts",
]


class PayoutStatus(str, enum.Enum):
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    FAILED = "failed"
    CANCELLED = "cancelled"


class PayoutTransactionType(str, enum.Enum):
    PAYMENT = "payment"
    REFUND = "refund"
    ADJUSTMENT = "adjustment"


@dataclass(frozen=True)
class PayoutDestination:
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    bank_name: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PayoutDestination":
        payload = mapping(payload, cls.__name__)
        return cls(
            account_name=optional_str(payload, "account_name"),
            account_number=optional_str(payload, "account_number"),
            bank_name=optional_str(payload, "bank_name"),
        )


@dataclass(frozen=True)
class Payout:
    id: str
    status: PayoutStatus
    amount: int
    net_amount: Optional[int] = None
    destination: Optional[PayoutDestination] = None
    livemode: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Payout":
        payload = mapping(payload, cls.__name__)
        destination = payload.get("destination")
        return cls(
            id=str(payload["id"]),
            status=PayoutStatus(payload["status"]),
            amount=amount(payload, "amount"),
            net_amount=optional_amount(payload, "net_amount", signed=True),
            destination=PayoutDestination.from_response(destination) if destination else None,
            livemode=bool(payload.get("livemode", False)),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


@dataclass(frozen=True)
class PayoutTransaction:
    id: str
    amount: int
    transaction_type: PayoutTransactionType
    net_amount: Optional[int] = None
    transaction_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "PayoutTransaction":
        payload = mapping(payload, cls.__name__)
        # Refunds and adjustments carry negative amounts.
        return cls(
            id=str(payload["id"]),
            amount=amount(payload, "amount", signed=True),
            transaction_type=PayoutTransactionType(payload["transaction_type"]),
            net_amount=optional_amount(payload, "net_amount", signed=True),
            transaction_id=optional_str(payload, "transaction_id"),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


class Payouts:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[Payout] = ResourceFacade(dispatcher, "/payouts", Payout)

    async def list_transactions(
        self, payout_id: str, params: Optional[ListParams] = None
    ) -> Outcome[Page[PayoutTransaction]]:
        path = self._resource.item_path(payout_id, "transactions")
        return await self._resource.list_at(path, PayoutTransaction, params)
