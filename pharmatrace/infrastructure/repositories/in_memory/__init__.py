"""
In-Memory Repository Implementations.

Thread-safe stores for tests and single-process deployments.
Data is lost on process restart.
"""

from .batch_ledger import InMemoryBatchLedgerRepository
from .manufacturer import InMemoryManufacturerRepository

__all__ = [
    "InMemoryManufacturerRepository",
    "InMemoryBatchLedgerRepository",
]
