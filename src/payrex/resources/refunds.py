"""
Refunds return all or part of a payment to the customer.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..core.dispatcher import Dispatcher
from ..core.facade import ResourceFacade
from ..core.outcome import Outcome
from ..types.common import amount, mapping, optional_enum, optional_str, optional_timestamp
from ..types.currency import Currency
from ..types.metadata import normalize_metadata, read_metadata
from ._validation import require_amount, require_text

__all__ = [
    "CreateRefund",
    "Refund",
    "RefundReason",
    "RefundStatus",
    "Refunds",
    "UpdateRefund",
]


class RefundStatus(str, enum.Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RefundReason(str, enum.Enum):
    FRAUDULENT = "fraudulent"
    REQUESTED_BY_CUSTOMER = "requested_by_customer"
    PRODUCT_OUT_OF_STOCK = "product_out_of_stock"
    PRODUCT_WAS_DAMAGED = "product_was_damaged"
    SERVICE_NOT_PROVIDED = "service_not_provided"
    SERVICE_MISALIGNED = "service_misaligned"
    WRONG_PRODUCT_RECEIVED = "wrong_product_received"
    OTHERS = "others"


@dataclass(frozen=True)
class Refund:
    id: str
    status: RefundStatus
    amount: int
    currency: Currency
    payment_id: Optional[str] = None
    reason: Optional[RefundReason] = None
    description: Optional[str] = None
    remarks: Optional[str] = None
    livemode: bool = False
    metadata: Optional[Dict[str, str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Refund":
        payload = mapping(payload, cls.__name__)
        return cls(
            id=str(payload["id"]),
            status=RefundStatus(payload["status"]),
            amount=amount(payload, "amount"),
            currency=Currency(payload["currency"]),
            payment_id=optional_str(payload, "payment_id"),
            reason=optional_enum(payload, "reason", RefundReason),
            description=optional_str(payload, "description"),
            remarks=optional_str(payload, "remarks"),
            livemode=bool(payload.get("livemode", False)),
            metadata=read_metadata(payload),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


@dataclass(frozen=True)
class CreateRefund:
    payment_id: str
    amount: int
    currency: Currency
    reason: RefundReason
    description: Optional[str] = None
    remarks: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None

    def __post_init__(self) -> None:
        require_text(self.payment_id, "payment_id")
        require_amount(self.amount, "amount")
        object.__setattr__(self, "currency", Currency(self.currency))
        object.__setattr__(self, "reason", RefundReason(self.reason))
        object.__setattr__(self, "metadata", normalize_metadata(self.metadata))

    def with_description(self, description: str) -> "CreateRefund":
        return replace(self, description=description)

    def with_remarks(self, remarks: str) -> "CreateRefund":
        return replace(self, remarks=remarks)

    def with_metadata(self, metadata: Mapping[str, str]) -> "CreateRefund":
        return replace(self, metadata=dict(metadata))

    def to_params(self) -> Dict[str, Any]:
        return {
            "payment_id": self.payment_id,
            "amount": self.amount,
            "currency": self.currency.value,
            "reason": self.reason.value,
            "description": self.description,
            "remarks": self.remarks,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class UpdateRefund:
    metadata: Optional[Dict[str, str]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", normalize_metadata(self.metadata))

    def to_params(self) -> Dict[str, Any]:
        return {"metadata": self.metadata}


class Refunds:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[Refund] = ResourceFacade(dispatcher, "/refunds", Refund)

    async def create(
        self, params: CreateRefund, *, idempotency_key: Optional[str] = None
    ) -> Outcome[Refund]:
        return await self._resource.create(params, idempotency_key=idempotency_key)

    async def update(self, refund_id: str, params: UpdateRefund) -> Outcome[Refund]:
        return await self._resource.update(refund_id, params)
