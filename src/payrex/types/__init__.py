"""
Value types shared across PayRex resources.
"""

from .common import Deleted
from .currency import Currency
from .metadata import Metadata
from .pagination import ListParams, Page
from .payment_methods import CaptureMethod, CardOptions, PaymentMethod, PaymentMethodOptions

__all__ = [
    "CaptureMethod",
    "CardOptions",
    "Currency",
    "Deleted",
    "ListParams",
    "Metadata",
    "Page",
    "PaymentMethod",
    "PaymentMethodOptions",
]
