"""
Success/failure outcome returned by every client operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import PayrexError

__all__ = ["Failure", "Outcome", "Success"]

T = TypeVar("T")
D = TypeVar("D")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value

    def value_or(self, default: D) -> Union[T, D]:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: PayrexError

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def unwrap(self):
        """Raise the carried error."""
        raise self.error

    def value_or(self, default: D) -> D:
        return default


Outcome = Union[Success[T], Failure]
