"""
===============================================================================
USE CASE: Update Manufacturer Info
===============================================================================

Business Goal:
    Reemplazar los datos informativos de un fabricante (name, license_number,
    location, contact_info) y refrescar last_verified_date.

Business Rules:
    R1) El fabricante debe existir (NOT_FOUND).
    R2) El status NUNCA cambia por esta vía.
    R3) Sin chequeo de autorización: cualquier caller puede actualizar.
===============================================================================
"""

from __future__ import annotations

import logging

from ....context import operation_context
from ....crosscutting.metrics import record_operation
from ....domain.repositories import ManufacturerRepository
from ....domain.services import Clock, EntityLocks
from ....domain.value_objects import Identity
from ..results import CustodyErrorCode
from .manufacturer_results import ManufacturerResult, manufacturer_failure
from .register_manufacturer import MANUFACTURER_LOCK, ManufacturerInfoInput

logger = logging.getLogger(__name__)


class UpdateManufacturerInfoUseCase:
    operation = "update_manufacturer_info"

    def __init__(
        self,
        repository: ManufacturerRepository,
        clock: Clock,
        locks: EntityLocks,
    ) -> None:
        self._manufacturers = repository
        self._clock = clock
        self._locks = locks

    def execute(
        self, input_data: ManufacturerInfoInput, actor: Identity | None = None
    ) -> ManufacturerResult:
        manufacturer_id = input_data.manufacturer_id

        with operation_context(
            operation=self.operation, actor=actor, entity_id=manufacturer_id
        ), self._locks.hold(MANUFACTURER_LOCK, manufacturer_id):
            current = self._manufacturers.get_manufacturer(manufacturer_id)
            if current is None:
                return self._not_found()

            updated = current.with_info(
                name=input_data.name,
                license_number=input_data.license_number,
                location=input_data.location,
                contact_info=input_data.contact_info,
                verified_at=self._clock.now(),
            )
            if not self._manufacturers.save_manufacturer(updated):
                return self._not_found()

            record_operation(self.operation)
            logger.info("Manufacturer info updated")
            return ManufacturerResult(manufacturer=updated)

    def _not_found(self) -> ManufacturerResult:
        record_operation(self.operation, CustodyErrorCode.NOT_FOUND.value)
        return manufacturer_failure(
            CustodyErrorCode.NOT_FOUND, "Manufacturer not found."
        )
