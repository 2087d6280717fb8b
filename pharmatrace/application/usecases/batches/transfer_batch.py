"""
===============================================================================
USE CASE: Transfer Batch
===============================================================================

Business Goal:
    Entregar la custodia de un batch a otra identidad. El batch pasa a TRANSIT
    y el receptor queda como custodio actual.

Business Rules:
    R1) Solo el custodio actual transfiere.
    R2) Cualquier estado no terminal -> TRANSIT.
    R3) Evento: transfer (from = caller, to = receptor).
    R4) Un receptor None es un error de programación del caller (ValueError).
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import BatchStatus, CustodyEventType
from ....domain.value_objects import Identity
from .batch_results import CustodyResult
from .custody_transition import CustodyTransitionUseCase


class TransferBatchUseCase(CustodyTransitionUseCase):
    operation = "transfer_batch"
    target_status = BatchStatus.TRANSIT
    event_type = CustodyEventType.TRANSFER

    def execute(
        self,
        batch_id: str,
        actor: Identity | None,
        *,
        to: Identity,
        location: str,
        notes: str = "",
    ) -> CustodyResult:
        if to is None:
            raise ValueError("transfer requires a receiving identity")
        return self._transition(
            batch_id, actor, location=location, notes=notes, new_custodian=to
        )
