"""
===============================================================================
USE CASE: Register Batch
===============================================================================

Name:
    Register Batch Use Case

Business Goal:
    Dar de alta un lote producido, dejando al caller como custodio inicial y
    registrando el evento 0 (production) del log de custodia.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RegisterBatchUseCase

Responsibilities:
    - Verificar unicidad del batch_id.
    - Verificar expiry_date > production_date (una única vez, al crear).
    - (Opcional) Verificar que el fabricante esté aprobado en el registro.
    - Persistir batch + contador + evento 0 en un único paso del ledger.

Collaborators:
    - BatchLedgerRepository: create_batch(batch, genesis)
    - ManufacturerRepository (opcional): get_manufacturer(id)
    - Clock, EntityLocks

-------------------------------------------------------------------------------
INPUTS / OUTPUTS
-------------------------------------------------------------------------------
Inputs:
    - RegisterBatchInput
    - actor: Identity | None

Outputs:
    - CustodyResult (batch en PRODUCED + evento 0)

Error Mapping:
    - ALREADY_EXISTS: batch_id ya registrado
    - INVALID_DATES: expiry_date <= production_date
    - UNAUTHORIZED: sin actor, o fabricante no aprobado (si el cross-check
      está habilitado)

Postconditions (si falla):
    - Ningún batch, evento ni contador nuevo.
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ....context import operation_context
from ....crosscutting.metrics import record_custody_event, record_operation
from ....domain.entities import Batch, BatchStatus, CustodyEventType
from ....domain.repositories import BatchLedgerRepository, ManufacturerRepository
from ....domain.services import Clock, EntityLocks
from ....domain.value_objects import CustodyEventDraft, Identity
from ..results import CustodyErrorCode
from .batch_results import CustodyResult, custody_failure

logger = logging.getLogger(__name__)

BATCH_LOCK = "batch"

DEFAULT_PRODUCTION_LOCATION = "Production Facility"
DEFAULT_PRODUCTION_NOTES = "Batch produced"


@dataclass(frozen=True)
class RegisterBatchInput:
    """
    DTO de entrada del caso de uso.

    Notas:
      - production_date / expiry_date: epoch seconds provistos por el caller.
      - quantity negativa es un error de programación del caller (ValueError).
    """

    batch_id: str
    manufacturer_id: str
    medication_name: str
    dosage: str
    form: str
    quantity: int
    production_date: int
    expiry_date: int

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError("quantity must be >= 0")


class RegisterBatchUseCase:
    """
    Use Case (Command):
        Alta de batch + evento de producción.
    """

    operation = "register_batch"

    def __init__(
        self,
        ledger: BatchLedgerRepository,
        clock: Clock,
        locks: EntityLocks,
        *,
        manufacturers: ManufacturerRepository | None = None,
        require_approved_manufacturer: bool = False,
        production_location: str = DEFAULT_PRODUCTION_LOCATION,
        production_notes: str = DEFAULT_PRODUCTION_NOTES,
    ) -> None:
        if require_approved_manufacturer and manufacturers is None:
            raise ValueError(
                "require_approved_manufacturer needs a manufacturer repository"
            )
        self._ledger = ledger
        self._clock = clock
        self._locks = locks
        self._manufacturers = manufacturers
        self._require_approved = require_approved_manufacturer
        self._production_location = production_location
        self._production_notes = production_notes

    def execute(
        self, input_data: RegisterBatchInput, actor: Identity | None
    ) -> CustodyResult:
        batch_id = input_data.batch_id

        with operation_context(
            operation=self.operation, actor=actor, entity_id=batch_id
        ), self._locks.hold(BATCH_LOCK, batch_id):
            # -----------------------------------------------------------------
            # 1) Unicidad.
            # -----------------------------------------------------------------
            if self._ledger.get_batch(batch_id) is not None:
                return self._fail(
                    CustodyErrorCode.ALREADY_EXISTS, "Batch already exists."
                )

            # -----------------------------------------------------------------
            # 2) Invariante de fechas.
            # -----------------------------------------------------------------
            if input_data.expiry_date <= input_data.production_date:
                return self._fail(
                    CustodyErrorCode.INVALID_DATES,
                    "Expiry date must be after production date.",
                )

            # -----------------------------------------------------------------
            # 3) Identidad del custodio inicial.
            # -----------------------------------------------------------------
            if actor is None:
                return self._fail(
                    CustodyErrorCode.UNAUTHORIZED,
                    "A caller identity is required to register a batch.",
                )

            # -----------------------------------------------------------------
            # 4) Cross-check opcional contra el registro de fabricantes.
            # -----------------------------------------------------------------
            if self._require_approved and not self._manufacturer_approved(
                input_data.manufacturer_id
            ):
                return self._fail(
                    CustodyErrorCode.UNAUTHORIZED,
                    "Manufacturer is not approved.",
                )

            # -----------------------------------------------------------------
            # 5) Persistir batch + evento 0.
            # -----------------------------------------------------------------
            batch = Batch(
                id=batch_id,
                manufacturer_id=input_data.manufacturer_id,
                medication_name=input_data.medication_name,
                dosage=input_data.dosage,
                form=input_data.form,
                quantity=input_data.quantity,
                production_date=input_data.production_date,
                expiry_date=input_data.expiry_date,
                current_custodian=actor,
                status=BatchStatus.PRODUCED,
            )
            genesis = CustodyEventDraft(
                from_identity=actor,
                to_identity=actor,
                timestamp=self._clock.now(),
                location=self._production_location,
                event_type=CustodyEventType.PRODUCTION,
                notes=self._production_notes,
            )

            event = self._ledger.create_batch(batch, genesis)
            if event is None:
                return self._fail(
                    CustodyErrorCode.ALREADY_EXISTS, "Batch already exists."
                )

            record_operation(self.operation)
            record_custody_event(event.event_type.value)
            logger.info(
                "Batch registered",
                extra={
                    "manufacturer_id": batch.manufacturer_id,
                    "status": batch.status.value,
                    "event_id": event.event_id,
                },
            )
            return CustodyResult(batch=batch, event=event)

    def _manufacturer_approved(self, manufacturer_id: str) -> bool:
        if self._manufacturers is None:
            return False
        manufacturer = self._manufacturers.get_manufacturer(manufacturer_id)
        return manufacturer is not None and manufacturer.is_approved

    def _fail(self, code: CustodyErrorCode, message: str) -> CustodyResult:
        record_operation(self.operation, code.value)
        logger.info("Batch registration rejected", extra={"error_code": code.value})
        return custody_failure(code, message)
