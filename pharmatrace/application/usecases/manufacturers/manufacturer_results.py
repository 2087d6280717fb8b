"""
===============================================================================
MANUFACTURER USE CASE RESULTS
===============================================================================

Name:
    Manufacturer Use Case Results

Business Goal:
    Resultado tipado para los comandos del registro de fabricantes.

Collaborators:
    - domain.entities.Manufacturer
    - usecases.results: CustodyError / CustodyErrorCode
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.entities import Manufacturer
from ..results import CustodyError, CustodyErrorCode, custody_error


@dataclass
class ManufacturerResult:
    """
    Resultado para comandos que devuelven un Manufacturer.

    Contrato:
      - Si error is None => manufacturer presente (éxito)
      - Si error != None => manufacturer es None (fallo)
    """

    manufacturer: Manufacturer | None = None
    error: CustodyError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def manufacturer_failure(code: CustodyErrorCode, message: str) -> ManufacturerResult:
    """Construye un ManufacturerResult de fallo consistente."""
    return ManufacturerResult(error=custody_error(code, message))
