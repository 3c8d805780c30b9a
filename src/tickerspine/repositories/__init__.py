"""In-memory repository implementations."""

from tickerspine.repositories.memory import (
    InMemoryAlertRepository,
    InMemoryCategoryRepository,
    InMemoryExchangeRepository,
    InMemoryMapRepository,
    InMemoryOrderRepository,
    InMemoryPairRepository,
    InMemoryRecentRepository,
    InMemorySequenceRepository,
    InMemoryTickerRepository,
)

__all__ = [
    "InMemoryMapRepository",
    "InMemoryPairRepository",
    "InMemoryTickerRepository",
    "InMemoryAlertRepository",
    "InMemoryExchangeRepository",
    "InMemorySequenceRepository",
    "InMemoryRecentRepository",
    "InMemoryCategoryRepository",
    "InMemoryOrderRepository",
]
