"""Repository implementations (adapters for domain.repositories ports)."""

from .in_memory import InMemoryBatchLedgerRepository, InMemoryManufacturerRepository

__all__ = [
    "InMemoryManufacturerRepository",
    "InMemoryBatchLedgerRepository",
]
