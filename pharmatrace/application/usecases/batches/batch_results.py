"""
===============================================================================
BATCH USE CASE RESULTS
===============================================================================

Name:
    Custody Command Result

Business Goal:
    Resultado tipado para los comandos del ledger de custodia: el batch tal
    como quedó y el evento que se agregó al log.

Collaborators:
    - domain.entities: Batch, CustodyEvent
    - usecases.results: CustodyError / CustodyErrorCode
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.entities import Batch, CustodyEvent
from ..results import CustodyError, CustodyErrorCode, custody_error


@dataclass
class CustodyResult:
    """
    Resultado de un comando sobre un batch.

    Contrato:
      - Éxito: error is None, batch y event presentes.
      - Fallo: error presente, batch/event None (sin mutación parcial).
    """

    batch: Batch | None = None
    event: CustodyEvent | None = None
    error: CustodyError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def custody_failure(code: CustodyErrorCode, message: str) -> CustodyResult:
    """Construye un CustodyResult de fallo consistente."""
    return CustodyResult(error=custody_error(code, message))
