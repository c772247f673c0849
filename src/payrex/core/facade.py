"""
Generic resource access shared by every resource module.

A :class:`ResourceFacade` binds a base path and a response type to the
dispatcher; each method is exactly one dispatcher call. Resource modules
instantiate it instead of subclassing a base client.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import quote

from ..types.common import Deleted
from ..types.pagination import ListParams, Page, page_of
from .dispatcher import Dispatcher, RequestDescriptor
from .outcome import Outcome

__all__ = ["ResourceFacade", "as_params"]

T = TypeVar("T")

Params = Union[Mapping[str, Any], Any]


def as_params(params: Optional[Params]) -> Optional[Dict[str, Any]]:
    """Accept a builder exposing ``to_params()`` or a plain mapping."""
    if params is None:
        return None
    if hasattr(params, "to_params"):
        return dict(params.to_params())
    if isinstance(params, Mapping):
        return dict(params)
    raise TypeError(f"Expected request parameters, got {type(params).__name__}")


def _segment(resource_id: str) -> str:
    if not isinstance(resource_id, str) or not resource_id.strip():
        raise ValueError("Resource id must be a non-empty string")
    return quote(resource_id.strip(), safe="")


class ResourceFacade(Generic[T]):
    def __init__(self, dispatcher: Dispatcher, path: str, response_type: Type[T]) -> None:
        self._dispatcher = dispatcher
        self.path = "/" + path.strip("/")
        self.response_type = response_type

    def item_path(self, resource_id: str, *actions: str) -> str:
        return "/".join((self.path, _segment(resource_id)) + actions)

    async def create(
        self, params: Params, *, idempotency_key: Optional[str] = None
    ) -> Outcome[T]:
        descriptor = RequestDescriptor(
            "POST", self.path, body=as_params(params) or {}, idempotency_key=idempotency_key
        )
        return await self._dispatcher.execute(descriptor, self.response_type)

    async def retrieve(self, resource_id: str) -> Outcome[T]:
        descriptor = RequestDescriptor("GET", self.item_path(resource_id))
        return await self._dispatcher.execute(descriptor, self.response_type)

    async def update(
        self, resource_id: str, params: Params, *, idempotency_key: Optional[str] = None
    ) -> Outcome[T]:
        descriptor = RequestDescriptor(
            "PUT",
            self.item_path(resource_id),
            body=as_params(params) or {},
            idempotency_key=idempotency_key,
        )
        return await self._dispatcher.execute(descriptor, self.response_type)

    async def list(self, params: Optional[Params] = None) -> Outcome[Page[T]]:
        descriptor = RequestDescriptor(
            "GET", self.path, query=as_params(params or ListParams())
        )
        return await self._dispatcher.execute(descriptor, page_of(self.response_type))

    async def delete(self, resource_id: str) -> Outcome[Deleted]:
        descriptor = RequestDescriptor("DELETE", self.item_path(resource_id))
        return await self._dispatcher.execute(descriptor, Deleted)

    async def action(
        self,
        resource_id: str,
        name: str,
        params: Optional[Params] = None,
        *,
        idempotency_key: Optional[str] = None,
    ) -> Outcome[T]:
        """POST to a sub-resource verb such as ``/payment_intents/{id}/cancel``."""
        descriptor = RequestDescriptor(
            "POST",
            self.item_path(resource_id, name),
            body=as_params(params) or {},
            idempotency_key=idempotency_key,
        )
        return await self._dispatcher.execute(descriptor, self.response_type)

    async def list_at(
        self, path: str, item_type: Type[Any], params: Optional[Params] = None
    ) -> Outcome[Page[Any]]:
        """List a nested collection such as ``/payouts/{id}/transactions``."""
        descriptor = RequestDescriptor("GET", path, query=as_params(params or ListParams()))
        return await self._dispatcher.execute(descriptor, page_of(item_type))
