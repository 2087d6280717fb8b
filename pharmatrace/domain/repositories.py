"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for manufacturers and the batch custody ledger (ports).
- Keep application/domain independent from the storage engine.
- Make the "mutate batch + append event + bump counter" step a single store operation.

Collaborators
- domain.entities: Manufacturer, Batch, CustodyEvent
- domain.value_objects: EventKey, CustodyEventDraft
- infrastructure.repositories.in_memory: thread-safe implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports.
- Implementations MUST match method signatures exactly.
- Writes that would break append-only semantics raise StorageError
  (crosscutting.exceptions); they are never reported as domain results.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Boolean / Optional returns signal "key already present" or "key absent";
  the use cases translate them into ALREADY_EXISTS / NOT_FOUND.
"""

from typing import List, Optional, Protocol

from .entities import Batch, CustodyEvent, Manufacturer
from .value_objects import CustodyEventDraft, EventKey


class ManufacturerRepository(Protocol):
    """R: Interface for manufacturer record persistence (manufacturers[id])."""

    def get_manufacturer(self, manufacturer_id: str) -> Optional[Manufacturer]:
        """R: Fetch a manufacturer by id (None if absent)."""
        ...

    def create_manufacturer(self, manufacturer: Manufacturer) -> bool:
        """
        R: Insert a new manufacturer.

        Returns:
            False if the id is already taken (nothing is written).
        """
        ...

    def save_manufacturer(self, manufacturer: Manufacturer) -> bool:
        """
        R: Overwrite an existing manufacturer record.

        Returns:
            False if the id does not exist (nothing is written).
        """
        ...


class BatchLedgerRepository(Protocol):
    """
    R: Interface for batches[id], events[(batch_id, event_id)] and
    event_counters[batch_id].

    Implementations must guarantee that create_batch() and append_event()
    are observed atomically by every reader.
    """

    def get_batch(self, batch_id: str) -> Optional[Batch]:
        """R: Fetch a batch by id (None if absent)."""
        ...

    def create_batch(
        self, batch: Batch, genesis: CustodyEventDraft
    ) -> Optional[CustodyEvent]:
        """
        R: Insert a batch, its counter and event 0 in one step.

        Returns:
            The stored event 0, or None if the batch id is already taken.
        """
        ...

    def append_event(
        self, batch: Batch, draft: CustodyEventDraft
    ) -> Optional[CustodyEvent]:
        """
        R: Replace the batch record and append the next numbered event.

        Steps (atomic): save batch, read counter n, write event n, counter = n + 1.

        Returns:
            The stored event, or None if the batch does not exist.
        """
        ...

    def get_custody_event(self, key: EventKey) -> Optional[CustodyEvent]:
        """R: Fetch a single event (None if out of range or batch unknown)."""
        ...

    def get_event_count(self, batch_id: str) -> int:
        """R: Current counter value (0 if the batch is unknown)."""
        ...

    def list_custody_events(self, batch_id: str) -> List[CustodyEvent]:
        """R: Full history ordered by event_id ascending ([] if unknown)."""
        ...
