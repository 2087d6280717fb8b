"""
===============================================================================
MANUFACTURER USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-exportar los casos de uso del registro de fabricantes, sus DTOs y
      resultados.
    - Definir __all__ como contrato de API pública del paquete.
===============================================================================
"""

from .admission_decision import (
    AdmissionDecisionUseCase,
    ApproveManufacturerUseCase,
    RevokeManufacturerUseCase,
)
from .manufacturer_queries import ManufacturerQueries
from .manufacturer_results import ManufacturerResult
from .register_manufacturer import ManufacturerInfoInput, RegisterManufacturerUseCase
from .update_manufacturer_info import UpdateManufacturerInfoUseCase

__all__ = [
    # Commands
    "RegisterManufacturerUseCase",
    "UpdateManufacturerInfoUseCase",
    "AdmissionDecisionUseCase",
    "ApproveManufacturerUseCase",
    "RevokeManufacturerUseCase",
    # Queries
    "ManufacturerQueries",
    # DTOs / Results
    "ManufacturerInfoInput",
    "ManufacturerResult",
]
