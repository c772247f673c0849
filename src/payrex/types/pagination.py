"""
Cursor pagination for list endpoints.

A :class:`Page` is one finite snapshot. To read the next page issue a new
``list`` call with ``ListParams().starting_after(page.next_cursor)``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Generic, Iterator, Mapping, Optional, Tuple, TypeVar

from .common import mapping

__all__ = ["ListParams", "Page", "page_of"]

T = TypeVar("T")

MIN_LIMIT = 1
MAX_LIMIT = 100


@dataclass(frozen=True)
class Page(Generic[T]):
    data: Tuple[T, ...]
    has_more: bool = False
    total_count: Optional[int] = None

    @property
    def next_cursor(self) -> Optional[str]:
        """Id of the last item when more pages exist."""
        if not self.has_more or not self.data:
            return None
        return getattr(self.data[-1], "id", None)

    def __iter__(self) -> Iterator[T]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    @classmethod
    def decode(
        cls, payload: Mapping[str, Any], item_decoder: Callable[[Dict[str, Any]], T]
    ) -> "Page[T]":
        payload = mapping(payload, "list response")
        items = payload["data"]
        if not isinstance(items, list):
            raise TypeError(f"data must be a list, got {items!r}")
        total = payload.get("total_count")
        return cls(
            data=tuple(item_decoder(item) for item in items),
            has_more=bool(payload.get("has_more", False)),
            total_count=int(total) if total is not None else None,
        )


def page_of(item_type: Any) -> Any:
    """Return a decoder type whose ``from_response`` yields ``Page[item_type]``."""

    class _PageDecoder:
        @classmethod
        def from_response(cls, payload: Dict[str, Any]) -> Page[Any]:
            return Page.decode(payload, item_type.from_response)

    _PageDecoder.__name__ = f"Page[{item_type.__name__}]"
    return _PageDecoder


@dataclass(frozen=True)
class ListParams:
    """Cursor and page-size filter for list calls."""

    limit: Optional[int] = None
    after: Optional[str] = None
    before: Optional[str] = None

    def __post_init__(self) -> None:
        if self.limit is not None:
            object.__setattr__(self, "limit", max(MIN_LIMIT, min(MAX_LIMIT, int(self.limit))))

    def with_limit(self, limit: int) -> "ListParams":
        """Set the page size; values outside 1-100 are clamped."""
        return replace(self, limit=limit)

    def starting_after(self, cursor: str) -> "ListParams":
        return replace(self, after=cursor)

    def ending_before(self, cursor: str) -> "ListParams":
        return replace(self, before=cursor)

    def to_params(self) -> Dict[str, Any]:
        return {
            "limit": self.limit,
            "after": self.after,
            "before": self.before,
        }
