"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/batch_ledger.py
============================================================
Class: InMemoryBatchLedgerRepository

Responsibilities:
  - Almacenar batches, eventos de custodia y contadores por batch en memoria.
  - Ejecutar create_batch() y append_event() como un único paso atómico:
      guardar batch -> leer contador n -> escribir evento n -> contador n + 1
  - Custodiar la semántica append-only (nunca sobrescribir un EventKey).

Collaborators:
  - domain.entities: Batch, CustodyEvent
  - domain.value_objects: EventKey, CustodyEventDraft
  - domain.repositories.BatchLedgerRepository (contrato a implementar)
  - crosscutting.exceptions.StorageError

Constraints / Notes:
  - Thread-safe: un único Lock cubre las tres "tablas", así ningún lector ve
    un batch actualizado sin su evento (o viceversa).
  - Repo puro: NO valida custodio ni transiciones (eso es del use case).
  - Una violación de integridad es un error interno (StorageError), no un
    resultado de dominio.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, List, Optional

from ....crosscutting.exceptions import StorageError
from ....domain.entities import Batch, CustodyEvent
from ....domain.repositories import BatchLedgerRepository
from ....domain.value_objects import CustodyEventDraft, EventKey


class InMemoryBatchLedgerRepository(BatchLedgerRepository):
    """
    Repositorio in-memory, thread-safe, para el ledger de custodia.

    Modelo mental:
    - _batches:  batch_id -> Batch
    - _events:   EventKey -> CustodyEvent
    - _counters: batch_id -> próximo event_id (== cantidad de eventos)
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._batches: Dict[str, Batch] = {}
        self._events: Dict[EventKey, CustodyEvent] = {}
        self._counters: Dict[str, int] = {}

    # =========================================================
    # Helpers internos (deben llamarse con _lock tomado)
    # =========================================================
    def _write_event_locked(
        self, batch_id: str, draft: CustodyEventDraft
    ) -> CustodyEvent:
        counter = self._counters.get(batch_id)
        if counter is None:
            raise StorageError(f"Event counter missing for batch {batch_id!r}.")

        event = draft.materialize(batch_id, counter)
        if event.key in self._events:
            raise StorageError(
                f"Append-only violation: event {counter} already exists "
                f"for batch {batch_id!r}."
            )

        self._events[event.key] = event
        self._counters[batch_id] = counter + 1
        return event

    # =========================================================
    # Escrituras
    # =========================================================
    def create_batch(
        self, batch: Batch, genesis: CustodyEventDraft
    ) -> Optional[CustodyEvent]:
        with self._lock:
            if batch.id in self._batches:
                return None
            self._batches[batch.id] = batch
            self._counters[batch.id] = 0
            try:
                return self._write_event_locked(batch.id, genesis)
            except StorageError:
                del self._batches[batch.id]
                del self._counters[batch.id]
                raise

    def append_event(
        self, batch: Batch, draft: CustodyEventDraft
    ) -> Optional[CustodyEvent]:
        with self._lock:
            if batch.id not in self._batches:
                return None
            # Si la escritura del evento falla se restaura el batch anterior.
            previous = self._batches[batch.id]
            self._batches[batch.id] = batch
            try:
                return self._write_event_locked(batch.id, draft)
            except StorageError:
                self._batches[batch.id] = previous
                raise

    # =========================================================
    # Lecturas
    # =========================================================
    def get_batch(self, batch_id: str) -> Optional[Batch]:
        with self._lock:
            return self._batches.get(batch_id)

    def get_custody_event(self, key: EventKey) -> Optional[CustodyEvent]:
        with self._lock:
            return self._events.get(key)

    def get_event_count(self, batch_id: str) -> int:
        with self._lock:
            return self._counters.get(batch_id, 0)

    def list_custody_events(self, batch_id: str) -> List[CustodyEvent]:
        with self._lock:
            count = self._counters.get(batch_id, 0)
            events = [
                self._events.get(EventKey(batch_id=batch_id, event_id=i))
                for i in range(count)
            ]

        if any(event is None for event in events):
            raise StorageError(f"Event log for batch {batch_id!r} has gaps.")
        return [event for event in events if event is not None]
