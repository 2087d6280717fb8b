"""
===============================================================================
USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Exponer un punto único de importación para los casos de uso del
      registro de fabricantes y del ledger de custodia.
===============================================================================
"""

from .batches import (
    BatchQueries,
    CustodyResult,
    DeliverBatchUseCase,
    DispenseBatchUseCase,
    RecallBatchUseCase,
    RegisterBatchInput,
    RegisterBatchUseCase,
    TransferBatchUseCase,
)
from .manufacturers import (
    ApproveManufacturerUseCase,
    ManufacturerInfoInput,
    ManufacturerQueries,
    ManufacturerResult,
    RegisterManufacturerUseCase,
    RevokeManufacturerUseCase,
    UpdateManufacturerInfoUseCase,
)
from .results import CustodyError, CustodyErrorCode

__all__ = [
    # Shared
    "CustodyError",
    "CustodyErrorCode",
    # Manufacturer registry
    "RegisterManufacturerUseCase",
    "UpdateManufacturerInfoUseCase",
    "ApproveManufacturerUseCase",
    "RevokeManufacturerUseCase",
    "ManufacturerQueries",
    "ManufacturerInfoInput",
    "ManufacturerResult",
    # Batch custody ledger
    "RegisterBatchUseCase",
    "TransferBatchUseCase",
    "DeliverBatchUseCase",
    "DispenseBatchUseCase",
    "RecallBatchUseCase",
    "BatchQueries",
    "RegisterBatchInput",
    "CustodyResult",
]
