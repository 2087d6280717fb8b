"""
===============================================================================
USE CASE: Deliver Batch
===============================================================================

Business Goal:
    Confirmar la recepción física del batch por parte del custodio actual.

Business Rules:
    R1) Solo el custodio actual confirma la entrega.
    R2) Cualquier estado no terminal -> DELIVERED (el custodio no cambia).
    R3) Evento: delivery (from = to = caller).
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import BatchStatus, CustodyEventType
from ....domain.value_objects import Identity
from .batch_results import CustodyResult
from .custody_transition import CustodyTransitionUseCase


class DeliverBatchUseCase(CustodyTransitionUseCase):
    operation = "deliver_batch"
    target_status = BatchStatus.DELIVERED
    event_type = CustodyEventType.DELIVERY

    def execute(
        self,
        batch_id: str,
        actor: Identity | None,
        *,
        location: str,
        notes: str = "",
    ) -> CustodyResult:
        return self._transition(batch_id, actor, location=location, notes=notes)
