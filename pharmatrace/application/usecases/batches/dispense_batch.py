"""
===============================================================================
USE CASE: Dispense Batch
===============================================================================

Business Goal:
    Registrar la dispensación del batch al paciente / punto final.

Business Rules:
    R1) Mismas guardas que transfer / deliver (custodio, no recalled).
    R2) Solo DELIVERED -> DISPENSED; desde otro estado: INVALID_TRANSITION.
    R3) Evento: dispensing (from = to = caller).
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import BatchStatus, CustodyEventType
from ....domain.value_objects import Identity
from .batch_results import CustodyResult
from .custody_transition import CustodyTransitionUseCase


class DispenseBatchUseCase(CustodyTransitionUseCase):
    operation = "dispense_batch"
    target_status = BatchStatus.DISPENSED
    event_type = CustodyEventType.DISPENSING

    def execute(
        self,
        batch_id: str,
        actor: Identity | None,
        *,
        location: str,
        notes: str = "",
    ) -> CustodyResult:
        return self._transition(batch_id, actor, location=location, notes=notes)
