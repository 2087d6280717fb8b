"""
===============================================================================
USE CASE: Register Manufacturer
===============================================================================

Name:
    Register Manufacturer Use Case

Business Goal:
    Dar de alta un fabricante en estado PENDING, a la espera de aprobación del
    administrador.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RegisterManufacturerUseCase

Responsibilities:
    - Verificar unicidad del id.
    - Sellar registration_date y last_verified_date con el reloj confiable.
    - Persistir el fabricante en estado PENDING.

Collaborators:
    - ManufacturerRepository: create_manufacturer(manufacturer) -> bool
    - Clock: now()
    - EntityLocks: hold("manufacturer", id)

-------------------------------------------------------------------------------
INPUTS / OUTPUTS
-------------------------------------------------------------------------------
Inputs:
    - ManufacturerInfoInput (id + name, license_number, location, contact_info)
    - actor: Identity | None (solo para trazabilidad; cualquiera puede registrarse)

Outputs:
    - ManufacturerResult

Error Mapping:
    - ALREADY_EXISTS: el id ya está registrado (el registro existente no cambia)
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ....context import operation_context
from ....crosscutting.metrics import record_operation
from ....domain.entities import Manufacturer, ManufacturerStatus
from ....domain.repositories import ManufacturerRepository
from ....domain.services import Clock, EntityLocks
from ....domain.value_objects import Identity
from ..results import CustodyErrorCode
from .manufacturer_results import ManufacturerResult, manufacturer_failure

logger = logging.getLogger(__name__)

MANUFACTURER_LOCK = "manufacturer"


@dataclass(frozen=True)
class ManufacturerInfoInput:
    """
    DTO de entrada compartido por register / update_info.
    """

    manufacturer_id: str
    name: str
    license_number: str
    location: str
    contact_info: str


class RegisterManufacturerUseCase:
    """
    Use Case (Command):
        Alta de fabricante en estado PENDING.
    """

    operation = "register_manufacturer"

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
            # -----------------------------------------------------------------
            # 1) Unicidad.
            # -----------------------------------------------------------------
            if self._manufacturers.get_manufacturer(manufacturer_id) is not None:
                return self._already_exists()

            # -----------------------------------------------------------------
            # 2) Construir entidad (PENDING) y persistir.
            # -----------------------------------------------------------------
            now = self._clock.now()
            manufacturer = Manufacturer(
                id=manufacturer_id,
                name=input_data.name,
                license_number=input_data.license_number,
                location=input_data.location,
                contact_info=input_data.contact_info,
                status=ManufacturerStatus.PENDING,
                registration_date=now,
                last_verified_date=now,
            )

            if not self._manufacturers.create_manufacturer(manufacturer):
                return self._already_exists()

            record_operation(self.operation)
            logger.info(
                "Manufacturer registered",
                extra={"status": manufacturer.status.value},
            )
            return ManufacturerResult(manufacturer=manufacturer)

    def _already_exists(self) -> ManufacturerResult:
        record_operation(self.operation, CustodyErrorCode.ALREADY_EXISTS.value)
        logger.info("Manufacturer registration rejected: duplicate id")
        return manufacturer_failure(
            CustodyErrorCode.ALREADY_EXISTS, "Manufacturer already exists."
        )
