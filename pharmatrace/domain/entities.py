"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Manufacturer, Batch, CustodyEvent)

Responsabilidades:
    - Definir las estructuras centrales del negocio (sin infraestructura).
    - Definir los catálogos de estados y tipos de evento.
    - Brindar helpers mínimos que devuelven copias actualizadas (inmutabilidad).

Colaboradores:
    - domain.value_objects: Identity, EventKey.
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a storage ni a configuración.
    - Entidades frozen: toda mutación pasa por dataclasses.replace() y por el
      repositorio, nunca por aliasing de objetos compartidos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .value_objects import EventKey, Identity

# ---------------------------------------------------------------------------
# Manufacturer
# ---------------------------------------------------------------------------


class ManufacturerStatus(str, Enum):
    """Estado de admisión de un fabricante."""

    PENDING = "pending"
    APPROVED = "approved"
    REVOKED = "revoked"


@dataclass(frozen=True, slots=True)
class Manufacturer:
    """Fabricante registrado y su estado en el flujo de admisión."""

    id: str
    name: str
    license_number: str
    location: str
    contact_info: str
    status: ManufacturerStatus
    registration_date: int
    last_verified_date: int

    @property
    def is_approved(self) -> bool:
        return self.status == ManufacturerStatus.APPROVED

    @property
    def is_revoked(self) -> bool:
        return self.status == ManufacturerStatus.REVOKED

    def with_info(
        self,
        *,
        name: str,
        license_number: str,
        location: str,
        contact_info: str,
        verified_at: int,
    ) -> Manufacturer:
        """Reemplaza los cuatro campos informativos. No toca status."""
        return replace(
            self,
            name=name,
            license_number=license_number,
            location=location,
            contact_info=contact_info,
            last_verified_date=verified_at,
        )

    def with_status(self, status: ManufacturerStatus, *, verified_at: int) -> Manufacturer:
        return replace(self, status=status, last_verified_date=verified_at)


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------


class BatchStatus(str, Enum):
    """Estados de la máquina de custodia. RECALLED es terminal."""

    PRODUCED = "produced"
    TRANSIT = "transit"
    DELIVERED = "delivered"
    DISPENSED = "dispensed"
    RECALLED = "recalled"

    @property
    def is_terminal(self) -> bool:
        return self is BatchStatus.RECALLED


@dataclass(frozen=True, slots=True)
class Batch:
    """Lote de medicamento bajo custodia."""

    id: str
    manufacturer_id: str
    medication_name: str
    dosage: str
    form: str
    quantity: int
    production_date: int
    expiry_date: int
    current_custodian: Identity
    status: BatchStatus = BatchStatus.PRODUCED

    @property
    def is_recalled(self) -> bool:
        return self.status.is_terminal

    def moved_to(
        self, status: BatchStatus, *, custodian: Identity | None = None
    ) -> Batch:
        """
        Devuelve una copia con el nuevo estado (y custodio, si cambia).

        Nota:
          - No valida la transición: eso vive en domain.custody_policy.
        """
        return replace(
            self,
            status=status,
            current_custodian=custodian or self.current_custodian,
        )


# ---------------------------------------------------------------------------
# CustodyEvent
# ---------------------------------------------------------------------------


class CustodyEventType(str, Enum):
    """Tipo de evento registrado en el log de custodia."""

    PRODUCTION = "production"
    TRANSFER = "transfer"
    DELIVERY = "delivery"
    DISPENSING = "dispensing"
    RECALL = "recall"


@dataclass(frozen=True, slots=True)
class CustodyEvent:
    """Registro inmutable (append-only) de un cambio de custodia o estado."""

    batch_id: str
    event_id: int
    from_identity: Identity
    to_identity: Identity
    timestamp: int
    location: str
    event_type: CustodyEventType
    notes: str

    @property
    def key(self) -> EventKey:
        return EventKey(batch_id=self.batch_id, event_id=self.event_id)
