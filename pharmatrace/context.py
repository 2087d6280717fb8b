"""
===============================================================================
TARJETA CRC — pharmatrace/context.py (Contexto por operación)
===============================================================================

Responsabilidades:
  - Mantener contexto "operation-scoped" usando ContextVars (thread/async-safe).
  - Permitir correlación de logs sin pasar parámetros por todo el stack.
  - Proveer helpers mínimos: operation_context(), get_context_dict(), clear_context().

Colaboradores:
  - application.usecases: abren un operation_context por comando/consulta.
  - crosscutting.logger: enriquece logs leyendo get_context_dict().

Restricciones:
  - Solo tipos primitivos (str) para serialización segura.
  - Defaults vacíos ("") para evitar None y simplificar JSON.
===============================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Final, Iterator
from uuid import uuid4

# Identificador único de la operación en curso.
operation_id_var: ContextVar[str] = ContextVar("operation_id", default="")

# Nombre de la operación (register_batch, approve_manufacturer, ...).
operation_var: ContextVar[str] = ContextVar("operation", default="")

# Caller que ejecuta la operación.
actor_var: ContextVar[str] = ContextVar("actor", default="")

# Entidad afectada (batch_id / manufacturer_id).
entity_id_var: ContextVar[str] = ContextVar("entity_id", default="")

_CTX_OPERATION_ID: Final[str] = "operation_id"
_CTX_OPERATION: Final[str] = "operation"
_CTX_ACTOR: Final[str] = "actor"
_CTX_ENTITY_ID: Final[str] = "entity_id"


@contextmanager
def operation_context(
    *, operation: str, actor: object | None = None, entity_id: str = ""
) -> Iterator[str]:
    """
    Setea el contexto de la operación y lo restaura al salir.

    Yields:
      - operation_id generado para la operación.
    """
    operation_id = str(uuid4())
    tokens = (
        operation_id_var.set(operation_id),
        operation_var.set(operation),
        actor_var.set(str(actor) if actor is not None else ""),
        entity_id_var.set(entity_id or ""),
    )
    try:
        yield operation_id
    finally:
        entity_id_var.reset(tokens[3])
        actor_var.reset(tokens[2])
        operation_var.reset(tokens[1])
        operation_id_var.reset(tokens[0])


def get_context_dict() -> dict[str, str]:
    """
    Devuelve el contexto actual sin claves vacías.
    """
    ctx = {
        _CTX_OPERATION_ID: operation_id_var.get(),
        _CTX_OPERATION: operation_var.get(),
        _CTX_ACTOR: actor_var.get(),
        _CTX_ENTITY_ID: entity_id_var.get(),
    }
    return {k: v for k, v in ctx.items() if v}


def clear_context() -> None:
    """Limpia el contexto (útil en tests)."""
    operation_id_var.set("")
    operation_var.set("")
    actor_var.set("")
    entity_id_var.set("")
