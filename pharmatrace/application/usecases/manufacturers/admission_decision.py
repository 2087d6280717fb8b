"""
===============================================================================
USE CASES: Approve / Revoke Manufacturer (admission workflow)
===============================================================================

Business Goal:
    Aplicar decisiones de admisión sobre fabricantes registrados. Solo el
    administrador configurado puede decidir.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    AdmissionDecisionUseCase (base), ApproveManufacturerUseCase,
    RevokeManufacturerUseCase

Responsibilities:
    - Validar existencia (NOT_FOUND) y luego autorización (UNAUTHORIZED),
      en ese orden.
    - Approve: rechazar fabricantes revocados salvo reinstatement habilitado.
    - Setear status y refrescar last_verified_date.

Collaborators:
    - ManufacturerRepository, Clock, EntityLocks
    - domain.custody_policy: can_admit_manufacturer, can_reapprove

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) Cargar fabricante. Si no existe -> NOT_FOUND.
2) Si actor != administrador -> UNAUTHORIZED.
3) Regla específica del comando (approve sobre revocado).
4) Persistir nuevo status + last_verified_date.
===============================================================================
"""

from __future__ import annotations

import logging

from ....context import operation_context
from ....crosscutting.metrics import record_operation
from ....domain.custody_policy import can_admit_manufacturer, can_reapprove
from ....domain.entities import Manufacturer, ManufacturerStatus
from ....domain.repositories import ManufacturerRepository
from ....domain.services import Clock, EntityLocks
from ....domain.value_objects import Identity
from ..results import CustodyErrorCode
from .manufacturer_results import ManufacturerResult, manufacturer_failure
from .register_manufacturer import MANUFACTURER_LOCK

logger = logging.getLogger(__name__)


class AdmissionDecisionUseCase:
    """Base de los comandos admin-only del registro."""

    operation = "admission_decision"
    target_status: ManufacturerStatus

    def __init__(
        self,
        repository: ManufacturerRepository,
        clock: Clock,
        locks: EntityLocks,
        administrator: Identity,
    ) -> None:
        self._manufacturers = repository
        self._clock = clock
        self._locks = locks
        self._administrator = administrator

    def execute(
        self, manufacturer_id: str, actor: Identity | None
    ) -> ManufacturerResult:
        with operation_context(
            operation=self.operation, actor=actor, entity_id=manufacturer_id
        ), self._locks.hold(MANUFACTURER_LOCK, manufacturer_id):
            current = self._manufacturers.get_manufacturer(manufacturer_id)
            if current is None:
                return self._fail(
                    CustodyErrorCode.NOT_FOUND, "Manufacturer not found."
                )

            if not can_admit_manufacturer(actor, self._administrator):
                return self._fail(
                    CustodyErrorCode.UNAUTHORIZED,
                    "Only the administrator can change admission status.",
                )

            rejection = self._check(current)
            if rejection is not None:
                return rejection

            updated = current.with_status(
                self.target_status, verified_at=self._clock.now()
            )
            if not self._manufacturers.save_manufacturer(updated):
                return self._fail(
                    CustodyErrorCode.NOT_FOUND, "Manufacturer not found."
                )

            record_operation(self.operation)
            logger.info(
                "Manufacturer status changed",
                extra={
                    "previous_status": current.status.value,
                    "status": updated.status.value,
                },
            )
            return ManufacturerResult(manufacturer=updated)

    def _check(self, current: Manufacturer) -> ManufacturerResult | None:
        """Hook para reglas propias del comando (None = continuar)."""
        return None

    def _fail(self, code: CustodyErrorCode, message: str) -> ManufacturerResult:
        record_operation(self.operation, code.value)
        logger.info(
            "Manufacturer admission decision rejected", extra={"error_code": code.value}
        )
        return manufacturer_failure(code, message)


class ApproveManufacturerUseCase(AdmissionDecisionUseCase):
    operation = "approve_manufacturer"
    target_status = ManufacturerStatus.APPROVED

    def __init__(
        self,
        repository: ManufacturerRepository,
        clock: Clock,
        locks: EntityLocks,
        administrator: Identity,
        *,
        allow_reinstatement: bool = False,
    ) -> None:
        super().__init__(repository, clock, locks, administrator)
        self._allow_reinstatement = allow_reinstatement

    def _check(self, current: Manufacturer) -> ManufacturerResult | None:
        if can_reapprove(current, allow_reinstatement=self._allow_reinstatement):
            return None
        return self._fail(
            CustodyErrorCode.UNAUTHORIZED,
            "Revoked manufacturers cannot be approved again.",
        )


class RevokeManufacturerUseCase(AdmissionDecisionUseCase):
    operation = "revoke_manufacturer"
    target_status = ManufacturerStatus.REVOKED
