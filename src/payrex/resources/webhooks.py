"""
Webhook endpoint management.

Only the endpoint registry lives here; verifying delivered payloads is left
to the receiving application.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from ..core.dispatcher import Dispatcher
from ..core.facade import ResourceFacade
from ..core.outcome import Outcome
from ..types.common import Deleted, mapping, optional_str, optional_timestamp, str_list
from ..types.pagination import ListParams, Page
from ._validation import require_text

__all__ = [
    "CreateWebhook",
    "UpdateWebhook",
    "Webhook",
    "WebhookListParams",
    "WebhookStatus",
    "Webhooks",
]


class WebhookStatus(str, enum.Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


def _require_events(events: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(events, str):
        raise TypeError("events must be a list of event type names")
    parsed = tuple(require_text(event, "events") for event in events)
    if not parsed:
        raise ValueError("At least one event type is required")
    return parsed


@dataclass(frozen=True)
class Webhook:
    id: str
    status: WebhookStatus
    url: str
    events: Tuple[str, ...] = ()
    description: Optional[str] = None
    secret_key: Optional[str] = field(default=None, repr=False)
    livemode: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_enabled(self) -> bool:
        return self.status is WebhookStatus.ENABLED

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Webhook":
        payload = mapping(payload, cls.__name__)
        return cls(
            id=str(payload["id"]),
            status=WebhookStatus(payload["status"]),
            url=str(payload["url"]),
            events=str_list(payload, "events"),
            description=optional_str(payload, "description"),
            secret_key=optional_str(payload, "secret_key"),
            livemode=bool(payload.get("livemode", False)),
            created_at=optional_timestamp(payload, "created_at"),
            updated_at=optional_timestamp(payload, "updated_at"),
            raw=payload,
        )


@dataclass(frozen=True)
class CreateWebhook:
    url: str
    events: Tuple[str, ...]
    description: Optional[str] = None

    def __post_init__(self) -> None:
        require_text(self.url, "url")
        object.__setattr__(self, "events", _require_events(self.events))

    def with_description(self, description: str) -> "CreateWebhook":
        return replace(self, description=description)

    def to_params(self) -> Dict[str, Any]:
        return {"url": self.url, "events": list(self.events), "description": self.description}


@dataclass(frozen=True)
class UpdateWebhook:
    url: Optional[str] = None
    events: Optional[Tuple[str, ...]] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.events is not None:
            object.__setattr__(self, "events", _require_events(self.events))

    def with_url(self, url: str) -> "UpdateWebhook":
        return replace(self, url=require_text(url, "url"))

    def with_events(self, events: Iterable[str]) -> "UpdateWebhook":
        return replace(self, events=tuple(events))

    def with_description(self, description: str) -> "UpdateWebhook":
        return replace(self, description=description)

    def to_params(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "events": list(self.events) if self.events is not None else None,
            "description": self.description,
        }


@dataclass(frozen=True)
class WebhookListParams(ListParams):
    """List filter that can also match on endpoint url or description."""

    url: Optional[str] = None
    description: Optional[str] = None

    def with_url(self, url: str) -> "WebhookListParams":
        return replace(self, url=url)

    def with_description(self, description: str) -> "WebhookListParams":
        return replace(self, description=description)

    def to_params(self) -> Dict[str, Any]:
        params = super().to_params()
        params.update(url=self.url, description=self.description)
        return params


class Webhooks:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._resource: ResourceFacade[Webhook] = ResourceFacade(dispatcher, "/webhooks", Webhook)

    async def create(
        self, params: CreateWebhook, *, idempotency_key: Optional[str] = None
    ) -> Outcome[Webhook]:
        return await self._resource.create(params, idempotency_key=idempotency_key)

    async def retrieve(self, webhook_id: str) -> Outcome[Webhook]:
        return await self._resource.retrieve(webhook_id)

    async def update(self, webhook_id: str, params: UpdateWebhook) -> Outcome[Webhook]:
        return await self._resource.update(webhook_id, params)

    async def delete(self, webhook_id: str) -> Outcome[Deleted]:
        return await self._resource.delete(webhook_id)

    async def list(self, params: Optional[ListParams] = None) -> Outcome[Page[Webhook]]:
        return await self._resource.list(params)

    async def enable(self, webhook_id: str) -> Outcome[Webhook]:
        return await self._resource.action(webhook_id, "enable")

    async def disable(self, webhook_id: str) -> Outcome[Webhook]:
        return await self._resource.action(webhook_id, "disable")
