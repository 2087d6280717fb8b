"""
===============================================================================
TARJETA CRC — pharmatrace/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (stores, reloj, locks, use cases) siguiendo DIP.
  - Mantener singletons con caching (lru_cache).
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - pharmatrace.crosscutting.config.get_settings
  - pharmatrace.crosscutting.logger.setup_logger
  - pharmatrace.domain.* (puertos)
  - pharmatrace.infrastructure.* (implementaciones)
  - pharmatrace.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Registro y ledger comparten el mismo InProcessEntityLocks: las claves
    llevan el tipo de entidad, así que no colisionan.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import ValidationError

from .application.usecases import (
    ApproveManufacturerUseCase,
    BatchQueries,
    DeliverBatchUseCase,
    DispenseBatchUseCase,
    ManufacturerQueries,
    RecallBatchUseCase,
    RegisterBatchUseCase,
    RegisterManufacturerUseCase,
    RevokeManufacturerUseCase,
    TransferBatchUseCase,
    UpdateManufacturerInfoUseCase,
)
from .crosscutting.config import Settings, get_settings
from .crosscutting.exceptions import ConfigurationError
from .crosscutting.logger import setup_logger
from .domain.repositories import BatchLedgerRepository, ManufacturerRepository
from .domain.services import Clock, EntityLocks
from .domain.value_objects import Identity
from .infrastructure.clock import SystemClock
from .infrastructure.locks import InProcessEntityLocks
from .infrastructure.repositories import (
    InMemoryBatchLedgerRepository,
    InMemoryManufacturerRepository,
)

# =============================================================================
# Settings / identidad del administrador
# =============================================================================


@lru_cache(maxsize=1)
def get_custody_settings() -> Settings:
    """
    Devuelve Settings validados y configura el logger del paquete.

    Raises:
        ConfigurationError: si el entorno no define una configuración válida.
    """
    try:
        settings = get_settings()
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid PharmaTrace configuration.", original_error=exc
        ) from exc
    setup_logger()
    return settings


@lru_cache(maxsize=1)
def get_administrator() -> Identity:
    return Identity(get_custody_settings().admin_identity)


# =============================================================================
# Infraestructura (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_clock() -> Clock:
    return SystemClock()


@lru_cache(maxsize=1)
def get_entity_locks() -> EntityLocks:
    return InProcessEntityLocks()


@lru_cache(maxsize=1)
def get_manufacturer_repository() -> ManufacturerRepository:
    return InMemoryManufacturerRepository()


@lru_cache(maxsize=1)
def get_batch_ledger_repository() -> BatchLedgerRepository:
    return InMemoryBatchLedgerRepository()


# =============================================================================
# Use cases: registro de fabricantes
# =============================================================================


def get_register_manufacturer_use_case() -> RegisterManufacturerUseCase:
    return RegisterManufacturerUseCase(
        get_manufacturer_repository(), get_clock(), get_entity_locks()
    )


def get_update_manufacturer_info_use_case() -> UpdateManufacturerInfoUseCase:
    return UpdateManufacturerInfoUseCase(
        get_manufacturer_repository(), get_clock(), get_entity_locks()
    )


def get_approve_manufacturer_use_case() -> ApproveManufacturerUseCase:
    return ApproveManufacturerUseCase(
        get_manufacturer_repository(),
        get_clock(),
        get_entity_locks(),
        get_administrator(),
        allow_reinstatement=get_custody_settings().allow_manufacturer_reinstatement,
    )


def get_revoke_manufacturer_use_case() -> RevokeManufacturerUseCase:
    return RevokeManufacturerUseCase(
        get_manufacturer_repository(),
        get_clock(),
        get_entity_locks(),
        get_administrator(),
    )


def get_manufacturer_queries() -> ManufacturerQueries:
    return ManufacturerQueries(get_manufacturer_repository())


# =============================================================================
# Use cases: ledger de custodia
# =============================================================================


def get_register_batch_use_case() -> RegisterBatchUseCase:
    settings = get_custody_settings()
    return RegisterBatchUseCase(
        get_batch_ledger_repository(),
        get_clock(),
        get_entity_locks(),
        manufacturers=get_manufacturer_repository(),
        require_approved_manufacturer=settings.require_approved_manufacturer,
        production_location=settings.production_location,
        production_notes=settings.production_notes,
    )


def get_transfer_batch_use_case() -> TransferBatchUseCase:
    return TransferBatchUseCase(
        get_batch_ledger_repository(), get_clock(), get_entity_locks()
    )


def get_deliver_batch_use_case() -> DeliverBatchUseCase:
    return DeliverBatchUseCase(
        get_batch_ledger_repository(), get_clock(), get_entity_locks()
    )


def get_dispense_batch_use_case() -> DispenseBatchUseCase:
    return DispenseBatchUseCase(
        get_batch_ledger_repository(), get_clock(), get_entity_locks()
    )


def get_recall_batch_use_case() -> RecallBatchUseCase:
    return RecallBatchUseCase(
        get_batch_ledger_repository(),
        get_clock(),
        get_entity_locks(),
        administrator=get_administrator(),
        allow_admin_recall=get_custody_settings().allow_admin_recall,
    )


def get_batch_queries() -> BatchQueries:
    return BatchQueries(get_batch_ledger_repository())


# =============================================================================
# Tests
# =============================================================================


def reset_container() -> None:
    """Limpia todos los singletons (settings incluidos)."""
    for factory in (
        get_custody_settings,
        get_administrator,
        get_clock,
        get_entity_locks,
        get_manufacturer_repository,
        get_batch_ledger_repository,
    ):
        factory.cache_clear()
    get_settings.cache_clear()
