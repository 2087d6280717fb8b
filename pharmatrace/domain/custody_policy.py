"""
===============================================================================
TARJETA CRC — domain/custody_policy.py
===============================================================================

Módulo:
    Política de Custodia y Admisión (autorización + máquina de estados)

Responsabilidades:
    - Definir reglas puras de autorización (sin storage, sin config global).
    - Definir la tabla de transiciones permitidas del batch.
    - Ser 100% testeable: funciones puras, inputs explícitos.

Colaboradores:
    - domain.entities: Batch, BatchStatus, Manufacturer
    - domain.value_objects: Identity
    - application/usecases: consultan esta policy antes de mutar.

Reglas (intención):
    - Solo el administrador aprueba/revoca fabricantes.
    - Solo el custodio actual mueve un batch (transfer/deliver/dispense).
    - Recall: custodio actual; el administrador solo si allow_admin=True.
    - RECALLED no tiene transiciones salientes.
    - DISPENSED solo se alcanza desde DELIVERED.
===============================================================================
"""

from __future__ import annotations

from typing import Mapping

from .entities import Batch, BatchStatus, Manufacturer
from .value_objects import Identity

_NON_TERMINAL: frozenset[BatchStatus] = frozenset(
    status for status in BatchStatus if not status.is_terminal
)

# Estado destino -> estados origen permitidos.
ALLOWED_SOURCES: Mapping[BatchStatus, frozenset[BatchStatus]] = {
    BatchStatus.TRANSIT: _NON_TERMINAL,
    BatchStatus.DELIVERED: _NON_TERMINAL,
    BatchStatus.DISPENSED: frozenset({BatchStatus.DELIVERED}),
    BatchStatus.RECALLED: _NON_TERMINAL,
}


def is_administrator(actor: Identity | None, administrator: Identity) -> bool:
    """Evalúa si el actor es el administrador configurado."""
    return actor is not None and actor == administrator


def can_admit_manufacturer(actor: Identity | None, administrator: Identity) -> bool:
    """Evalúa permiso de approve/revoke."""
    return is_administrator(actor, administrator)


def can_reapprove(manufacturer: Manufacturer, *, allow_reinstatement: bool) -> bool:
    """Un fabricante revocado solo vuelve a approved si está habilitado."""
    return allow_reinstatement or not manufacturer.is_revoked


def is_custodian(batch: Batch, actor: Identity | None) -> bool:
    return actor is not None and actor == batch.current_custodian


def can_move_batch(batch: Batch, actor: Identity | None) -> bool:
    """Evalúa permiso de transfer/deliver/dispense."""
    return is_custodian(batch, actor)


def can_recall_batch(
    batch: Batch,
    actor: Identity | None,
    *,
    administrator: Identity | None = None,
    allow_admin: bool = False,
) -> bool:
    """Evalúa permiso de recall."""
    if is_custodian(batch, actor):
        return True
    if allow_admin and administrator is not None:
        return is_administrator(actor, administrator)
    return False


def can_transition(current: BatchStatus, target: BatchStatus) -> bool:
    """Evalúa si la máquina de estados admite current -> target."""
    return current in ALLOWED_SOURCES.get(target, frozenset())
