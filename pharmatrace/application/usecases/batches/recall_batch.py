"""
===============================================================================
USE CASE: Recall Batch
===============================================================================

Business Goal:
    Retirar un batch de la cadena. RECALLED es terminal: ningún comando de
    custodia posterior tiene éxito.

Business Rules:
    R1) Por defecto solo el custodio actual puede iniciar el recall.
    R2) Con allow_admin_recall=True, el administrador también puede.
    R3) Cualquier estado no terminal -> RECALLED.
    R4) Evento: recall (from = caller, to = custodio actual). Si no se indica
        location, se repite la del último evento registrado.
===============================================================================
"""

from __future__ import annotations

from ....domain.custody_policy import can_recall_batch
from ....domain.entities import Batch, BatchStatus, CustodyEventType
from ....domain.repositories import BatchLedgerRepository
from ....domain.services import Clock, EntityLocks
from ....domain.value_objects import EventKey, Identity
from .batch_results import CustodyResult
from .custody_transition import CustodyTransitionUseCase


class RecallBatchUseCase(CustodyTransitionUseCase):
    operation = "recall_batch"
    target_status = BatchStatus.RECALLED
    event_type = CustodyEventType.RECALL

    def __init__(
        self,
        ledger: BatchLedgerRepository,
        clock: Clock,
        locks: EntityLocks,
        *,
        administrator: Identity | None = None,
        allow_admin_recall: bool = False,
    ) -> None:
        super().__init__(ledger, clock, locks)
        self._administrator = administrator
        self._allow_admin_recall = allow_admin_recall

    def _authorize(self, batch: Batch, actor: Identity | None) -> bool:
        return can_recall_batch(
            batch,
            actor,
            administrator=self._administrator,
            allow_admin=self._allow_admin_recall,
        )

    def _event_location(self, batch: Batch, location: str | None) -> str:
        if location is not None:
            return location
        count = self._ledger.get_event_count(batch.id)
        if count == 0:
            return ""
        last = self._ledger.get_custody_event(
            EventKey(batch_id=batch.id, event_id=count - 1)
        )
        return last.location if last is not None else ""

    def execute(
        self,
        batch_id: str,
        actor: Identity | None,
        *,
        notes: str,
        location: str | None = None,
    ) -> CustodyResult:
        return self._transition(batch_id, actor, location=location, notes=notes)
