"""
Currency codes supported by PayRex. Only the Philippine peso for now.
"""

from __future__ import annotations

import enum

__all__ = ["Currency"]

_SYMBOLS = {"PHP": "₱"}
_DECIMAL_PLACES = {"PHP": 2}


class Currency(str, enum.Enum):
    PHP = "PHP"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self.value]

    @property
    def decimal_places(self) -> int:
        return _DECIMAL_PLACES[self.value]

    def format_amount(self, amount: int) -> str:
        """Render an amount in minor units, e.g. ``10050`` -> ``"₱100.50"``."""
        divisor = 10 ** self.decimal_places
        sign = "-" if amount < 0 else ""
        major, minor = divmod(abs(amount), divisor)
        return f"{self.symbol}{sign}{major}.{minor:0{self.decimal_places}d}"

    def __str__(self) -> str:
        return self.value
