"""
===============================================================================
CUSTODY USE CASE RESULTS (Shared Error Taxonomy)
===============================================================================

Name:
    Custody Error Taxonomy

Business Goal:
    Proveer un contrato de error único para el registro de fabricantes y el
    ledger de custodia:
      - duplicados
      - recursos no encontrados
      - autorización
      - fechas inválidas
      - batches retirados (recall)
      - transiciones de estado no admitidas

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones.
    - Los códigos numéricos replican el contrato de referencia (1001..1005)
      para integraciones que ya los consumen.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    results (module)

Responsibilities:
    - Definir CustodyErrorCode (set cerrado) y su código numérico.
    - Representar CustodyError (code + message).
    - Proveer el helper error_result() usado por todos los use cases.

Collaborators:
    - manufacturers.manufacturer_results / batches.batch_results
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CustodyErrorCode(str, Enum):
    """
    Códigos de error de dominio.

    Códigos:
      - ALREADY_EXISTS: id duplicado (batch o fabricante).
      - NOT_FOUND: batch / fabricante / evento inexistente.
      - UNAUTHORIZED: caller no es custodio / administrador.
      - INVALID_DATES: expiry_date <= production_date.
      - ALREADY_RECALLED: mutación sobre un batch terminal.
      - INVALID_TRANSITION: la máquina de estados no admite el destino.
    """

    ALREADY_EXISTS = "ALREADY_EXISTS"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_DATES = "INVALID_DATES"
    ALREADY_RECALLED = "ALREADY_RECALLED"
    INVALID_TRANSITION = "INVALID_TRANSITION"

    @property
    def numeric_code(self) -> int:
        return _NUMERIC_CODES[self]


_NUMERIC_CODES: dict[CustodyErrorCode, int] = {
    CustodyErrorCode.ALREADY_EXISTS: 1001,
    CustodyErrorCode.NOT_FOUND: 1002,
    CustodyErrorCode.UNAUTHORIZED: 1003,
    CustodyErrorCode.INVALID_DATES: 1004,
    CustodyErrorCode.ALREADY_RECALLED: 1005,
    CustodyErrorCode.INVALID_TRANSITION: 1006,
}


@dataclass(frozen=True)
class CustodyError:
    """
    Error de caso de uso.

    Campos:
      - code: categoría estable (CustodyErrorCode)
      - message: descripción humana, útil para logs
    """

    code: CustodyErrorCode
    message: str

    @property
    def numeric_code(self) -> int:
        return self.code.numeric_code


def custody_error(code: CustodyErrorCode, message: str) -> CustodyError:
    return CustodyError(code=code, message=message)
