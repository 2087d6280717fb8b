"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) — Observabilidad de bajo acoplamiento

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar operaciones.
    - Cuidar cardinalidad (NO batch_id, NO manufacturer_id, NO identidades).
    - Exponer helpers para generar la respuesta de exposición.

Colaboradores:
    - application/usecases: registran outcome por operación.
    - application/usecases/batches: registran eventos de custodia por tipo.
===============================================================================
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    generate_latest,
)

OUTCOME_OK = "ok"

_registry = CollectorRegistry()

_operations_total = Counter(
    "pharmatrace_operations_total",
    "Total de operaciones por resultado",
    ["operation", "outcome"],
    registry=_registry,
)

_custody_events_total = Counter(
    "pharmatrace_custody_events_total",
    "Eventos de custodia agregados al ledger",
    ["event_type"],
    registry=_registry,
)


def get_registry() -> CollectorRegistry:
    return _registry


def record_operation(operation: str, outcome: str = OUTCOME_OK) -> None:
    """
    Registra el resultado de una operación.

    outcome:
      - "ok" en éxito
      - el código de error (ALREADY_EXISTS, NOT_FOUND, ...) en fallo
    """
    _operations_total.labels(operation=operation, outcome=outcome).inc()


def record_custody_event(event_type: str) -> None:
    """Registra un evento de custodia persistido."""
    _custody_events_total.labels(event_type=event_type).inc()


def render_metrics() -> tuple[bytes, str]:
    """Devuelve (payload, content_type) en formato de exposición Prometheus."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
