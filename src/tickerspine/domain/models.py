"""
Instrument records shared by repositories, checks and the ranker.

STDLIB ONLY - NO PYDANTIC.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class PairInfo:
    """One instrument as known to the data vendor.

    ``pair_id`` is the vendor's stable identifier and the join key across
    every ticker alias of the instrument.
    """

    name: str
    pair_id: str
    exchange: str
    investing_ticker: str


@dataclass(frozen=True)
class Alert:
    """A price trigger scoped to a vendor pairId, not to a ticker alias."""

    id: str
    pair_id: str
    price: float
    name: str | None = None


class OrderType(str, Enum):
    """Conditional order shape."""

    SINGLE = "single"  # prices[0] is the entry trigger
    TWO_LEG = "two-leg"  # prices[0] is the stop, prices[1] the target


@dataclass(frozen=True)
class Order:
    """One conditional broker order leg."""

    symbol: str
    quantity: int
    type: OrderType
    id: str
    prices: tuple[float, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence of prices; store an immutable copy.
        object.__setattr__(self, "prices", tuple(self.prices))
        object.__setattr__(self, "type", OrderType(self.type))

    @property
    def is_entry(self) -> bool:
        return self.type is OrderType.SINGLE and len(self.prices) >= 1

    @property
    def is_stop_target(self) -> bool:
        return self.type is OrderType.TWO_LEG and len(self.prices) >= 2
