"""
Name: Batch Custody Queries

Responsibilities:
  - get_batch(id): batch or None
  - get_custody_event(id, event_id): event or None (out of range / unknown batch)
  - get_event_count(id): counter value, 0 for unknown batches
  - list_custody_events(id): full ordered history

Collaborators:
  - domain.repositories.BatchLedgerRepository

Notes:
  - Read-only; no entity lock is taken. The ledger store already guarantees
    that a reader never sees a batch without its latest event.
"""

from __future__ import annotations

from typing import List

from ....domain.entities import Batch, CustodyEvent
from ....domain.repositories import BatchLedgerRepository
from ....domain.value_objects import EventKey


class BatchQueries:
    def __init__(self, ledger: BatchLedgerRepository) -> None:
        self._ledger = ledger

    def get_batch(self, batch_id: str) -> Batch | None:
        return self._ledger.get_batch(batch_id)

    def get_custody_event(self, batch_id: str, event_id: int) -> CustodyEvent | None:
        if event_id < 0:
            return None
        return self._ledger.get_custody_event(
            EventKey(batch_id=batch_id, event_id=event_id)
        )

    def get_event_count(self, batch_id: str) -> int:
        return self._ledger.get_event_count(batch_id)

    def list_custody_events(self, batch_id: str) -> List[CustodyEvent]:
        return self._ledger.list_custody_events(batch_id)
