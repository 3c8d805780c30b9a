"""
Domain records and lookups for the four ticker systems.

STDLIB ONLY - NO PYDANTIC.
"""

from tickerspine.domain.categories import CategoryLists, WatchCategories
from tickerspine.domain.models import Alert, Order, OrderType, PairInfo
from tickerspine.domain.symbols import SymbolResolver

__all__ = [
    "PairInfo",
    "Alert",
    "Order",
    "OrderType",
    "CategoryLists",
    "WatchCategories",
    "SymbolResolver",
]
