"""
===============================================================================
TARJETA CRC — domain/value_objects.py
===============================================================================

Módulo:
    Objetos de Valor (Identity, EventKey, CustodyEventDraft)

Responsabilidades:
    - Representar identidades de caller comparables SOLO por igualdad.
    - Representar la clave compuesta (batch_id, event_id) de eventos de custodia
      como un registro tipado (no concatenación de strings).
    - Representar un evento "en borrador" (sin event_id) que el ledger numera
      al momento de persistirlo.

Colaboradores:
    - domain.entities: CustodyEvent se construye a partir de un draft.
    - domain.repositories: BatchLedgerRepository indexa eventos por EventKey.
    - domain.custody_policy: compara identidades (custodio / administrador).

Reglas:
    - Inmutables (frozen) y con slots.
    - Identity no define orden: solo __eq__ / __hash__.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entities import CustodyEvent, CustodyEventType


@dataclass(frozen=True, slots=True)
class Identity:
    """Identidad autenticada de un caller (principal opaco)."""

    principal: str

    def __str__(self) -> str:
        return self.principal


@dataclass(frozen=True, slots=True)
class EventKey:
    """Clave compuesta de un evento de custodia."""

    batch_id: str
    event_id: int


@dataclass(frozen=True, slots=True)
class CustodyEventDraft:
    """
    Evento de custodia todavía no numerado.

    Nota:
      - El event_id lo asigna el ledger a partir del contador del batch,
        dentro de la misma operación atómica que persiste el evento.
    """

    from_identity: Identity
    to_identity: Identity
    timestamp: int
    location: str
    event_type: "CustodyEventType"
    notes: str

    def materialize(self, batch_id: str, event_id: int) -> "CustodyEvent":
        """R: Construye el CustodyEvent definitivo con su clave asignada."""
        from .entities import CustodyEvent

        return CustodyEvent(
            batch_id=batch_id,
            event_id=event_id,
            from_identity=self.from_identity,
            to_identity=self.to_identity,
            timestamp=self.timestamp,
            location=self.location,
            event_type=self.event_type,
            notes=self.notes,
        )
