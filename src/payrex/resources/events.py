"""
Events record state changes on other resources; they are read-only.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

from ..core.dispatcher import Dispatcher
from ..core.facade import ResourceFacade
from ..core.outcome import Outcome
from ..types.common import mapping, optional_timestamp
from ..types.pagination import ListParams, Page

__all__ = ["Event", "EventType", "Events"]


class EventType(str, enum.Enum):
    BILLING_STATEMENT_CREATED = "billing_statement.created"
    BILLING_STATEMENT_UPDATED = "billing_statement.updated"
    BILLING_STATEMENT_DELETED = "billing_statement.deleted"
    BILLING_STATEMENT_FINALIZED = "billing_statement.finalized"
    BILLING_STATEMENT_SENT = "billing_statement.sent"
    BILLING_STATEMENT_MARKED_UNCOLLECTIBLE = "billing_statement.marked_uncollectible"
    BILLING_STATEMENT_VOIDED = "billing_statement.voided"
    BILLING_STATEMENT_PAID = "billing_statement.paid"
    BILLING_STATEMENT_WILL_BE_DUE = "billing_statement.will_be_due"
    BILLING_STATEMENT_OVERDUE = "billing_statement.overdue"
    BILLING_STATEMENT_LINE_ITEM_CREATED = "billing_statement_line_item.created"
    BILLING_STATEMENT_LINE_ITEM_UPDATED = "billing_statement_line_item.updated"
    BILLING_STATEMENT_LINE_ITEM_DELETED = "billing_statement_line_item.deleted"
    CHECKOUT_SESSION_EXPIRED = "checkout_session.expired"
    PAYMENT_INTENT_AWAITING_CAPTURE = "payment_intent.awaiting_capture"
    PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
    PAYOUT_DEPOSITED = "payout.deposited"
    REFUND_CREATED = "refund.created"
    REFUND_UPDATED = "refund.updated"

    @property
    def resource(self) -> str:
        return self.value.split(".", 1)[0]


def _event_type(value: Any) -> Union[EventType, str]:
    # New event names appear before the client learns about them.
    name = str(value)
    try:
        return EventType(name)
    except ValueError:
        return name


@dataclass(frozen=True)
class Event:
    id: str
    type: Union[EventType, str]
    data: Dict[str, Any] = field(default_factory=dict)
    previous_attributes: Optional[Dict[str, Any]] = None
    pending_webhooks: int = 0
    livemode: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def resource_type(self) -> str:
        return str(self.type.value if isinstance(self.type, EventType) else self.type).split(".", 1)[0]

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Event":
        payload = mapping(payload, cls.__name__)
        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise TypeError(f"data must be an object, got {data!r}")
        previous = payload.get("previous_attributes")
        return cls(
            id=str(payload["id"]),
            type=_event_type(payload["type"]),
            data=data,
            previous_attributes=previous if isinstance(previous, dict) else None,
            pending_webhooks=int(payload.get("pending_webhooks") or 0),
            livemode=bool(payload.get("livemode", False)),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


class Events:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[Event] = ResourceFacade(dispatcher, "/events", Event)

    async def retrieve(self, event_id: str) -> Outcome[Event]:
        return await self._resource.retrieve(event_id)

    async def list(self, params: Optional[ListParams] = None) -> Outcome[Page[Event]]:
        return await self._resource.list(params)
