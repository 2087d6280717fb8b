"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/infrastructure.
    - Mantener estable el "surface area" del dominio.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    Batch,
    BatchStatus,
    CustodyEvent,
    CustodyEventType,
    Manufacturer,
    ManufacturerStatus,
)
from .repositories import BatchLedgerRepository, ManufacturerRepository
from .services import Clock, EntityLocks
from .value_objects import CustodyEventDraft, EventKey, Identity

__all__ = [
    # Entities
    "Manufacturer",
    "ManufacturerStatus",
    "Batch",
    "BatchStatus",
    "CustodyEvent",
    "CustodyEventType",
    # Value Objects
    "Identity",
    "EventKey",
    "CustodyEventDraft",
    # Repository Interfaces (Ports)
    "ManufacturerRepository",
    "BatchLedgerRepository",
    # Service Interfaces (Ports)
    "Clock",
    "EntityLocks",
]
