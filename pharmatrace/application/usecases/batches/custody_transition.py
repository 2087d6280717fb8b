"""
===============================================================================
USE CASE BASE: Custody Transition (guarded state change + event append)
===============================================================================

Name:
    Custody Transition

Business Goal:
    Un único pipeline para todo comando que cambia el estado (o el custodio)
    de un batch, de modo que transfer / deliver / dispense / recall compartan
    guardas, orden de chequeos y append del evento.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CustodyTransitionUseCase

Responsibilities:
    - Tomar el lock del batch durante todo el read-validate-write.
    - Validar, en orden: existencia, autorización, no-recalled, transición.
    - Construir el batch actualizado y el draft del evento.
    - Delegar en BatchLedgerRepository.append_event() el paso atómico
      (batch + evento n + contador n + 1).

Collaborators:
    - BatchLedgerRepository, Clock, EntityLocks
    - domain.custody_policy: can_move_batch, can_transition

-------------------------------------------------------------------------------
BUSINESS RULES
-------------------------------------------------------------------------------
R1) El batch debe existir (NOT_FOUND).
R2) Solo el custodio actual opera (UNAUTHORIZED). Recall puede ampliar esto.
R3) Un batch RECALLED no admite más cambios (ALREADY_RECALLED).
R4) La tabla de transiciones debe admitir el destino (INVALID_TRANSITION).
R5) Si falla cualquier regla, no hay mutación ni evento.
===============================================================================
"""

from __future__ import annotations

import logging

from ....context import operation_context
from ....crosscutting.metrics import record_custody_event, record_operation
from ....domain.custody_policy import can_move_batch, can_transition
from ....domain.entities import Batch, BatchStatus, CustodyEventType
from ....domain.repositories import BatchLedgerRepository
from ....domain.services import Clock, EntityLocks
from ....domain.value_objects import CustodyEventDraft, Identity
from ..results import CustodyErrorCode
from .batch_results import CustodyResult, custody_failure
from .register_batch import BATCH_LOCK

logger = logging.getLogger(__name__)


class CustodyTransitionUseCase:
    """
    Base de los comandos de custodia.

    Subclases definen operation / target_status / event_type y exponen un
    execute() con su propia firma que termina llamando a _transition().
    """

    operation: str
    target_status: BatchStatus
    event_type: CustodyEventType

    def __init__(
        self,
        ledger: BatchLedgerRepository,
        clock: Clock,
        locks: EntityLocks,
    ) -> None:
        self._ledger = ledger
        self._clock = clock
        self._locks = locks

    # =========================================================================
    # Hooks
    # =========================================================================

    def _authorize(self, batch: Batch, actor: Identity | None) -> bool:
        return can_move_batch(batch, actor)

    def _event_location(self, batch: Batch, location: str | None) -> str:
        return location or ""

    # =========================================================================
    # Pipeline
    # =========================================================================

    def _transition(
        self,
        batch_id: str,
        actor: Identity | None,
        *,
        location: str | None,
        notes: str,
        new_custodian: Identity | None = None,
    ) -> CustodyResult:
        with operation_context(
            operation=self.operation, actor=actor, entity_id=batch_id
        ), self._locks.hold(BATCH_LOCK, batch_id):
            # -----------------------------------------------------------------
            # 1) Existencia.
            # -----------------------------------------------------------------
            batch = self._ledger.get_batch(batch_id)
            if batch is None:
                return self._fail(CustodyErrorCode.NOT_FOUND, "Batch not found.")

            # -----------------------------------------------------------------
            # 2) Autorización.
            # -----------------------------------------------------------------
            if actor is None or not self._authorize(batch, actor):
                return self._fail(
                    CustodyErrorCode.UNAUTHORIZED,
                    "Caller is not the current custodian.",
                )

            # -----------------------------------------------------------------
            # 3) Estado terminal.
            # -----------------------------------------------------------------
            if batch.is_recalled:
                return self._fail(
                    CustodyErrorCode.ALREADY_RECALLED, "Batch has been recalled."
                )

            # -----------------------------------------------------------------
            # 4) Máquina de estados.
            # -----------------------------------------------------------------
            if not can_transition(batch.status, self.target_status):
                return self._fail(
                    CustodyErrorCode.INVALID_TRANSITION,
                    f"Cannot move batch from {batch.status.value} "
                    f"to {self.target_status.value}.",
                )

            # -----------------------------------------------------------------
            # 5) Mutación + append atómico.
            # -----------------------------------------------------------------
            updated = batch.moved_to(self.target_status, custodian=new_custodian)
            draft = CustodyEventDraft(
                from_identity=actor,
                to_identity=new_custodian or batch.current_custodian,
                timestamp=self._clock.now(),
                location=self._event_location(batch, location),
                event_type=self.event_type,
                notes=notes,
            )

            event = self._ledger.append_event(updated, draft)
            if event is None:
                return self._fail(CustodyErrorCode.NOT_FOUND, "Batch not found.")

            record_operation(self.operation)
            record_custody_event(event.event_type.value)
            logger.info(
                "Custody transition recorded",
                extra={
                    "previous_status": batch.status.value,
                    "status": updated.status.value,
                    "event_id": event.event_id,
                    "event_type": event.event_type.value,
                },
            )
            return CustodyResult(batch=updated, event=event)

    def _fail(self, code: CustodyErrorCode, message: str) -> CustodyResult:
        record_operation(self.operation, code.value)
        logger.info("Custody transition rejected", extra={"error_code": code.value})
        return custody_failure(code, message)
