"""
===============================================================================
BATCH CUSTODY USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-exportar los comandos del ledger de custodia, las consultas y sus
      DTOs / resultados.
    - Definir __all__ como contrato de API pública del paquete.
===============================================================================
"""

from .batch_queries import BatchQueries
from .batch_results import CustodyResult
from .custody_transition import CustodyTransitionUseCase
from .deliver_batch import DeliverBatchUseCase
from .dispense_batch import DispenseBatchUseCase
from .recall_batch import RecallBatchUseCase
from .register_batch import RegisterBatchInput, RegisterBatchUseCase
from .transfer_batch import TransferBatchUseCase

__all__ = [
    # Commands
    "RegisterBatchUseCase",
    "CustodyTransitionUseCase",
    "TransferBatchUseCase",
    "DeliverBatchUseCase",
    "DispenseBatchUseCase",
    "RecallBatchUseCase",
    # Queries
    "BatchQueries",
    # DTOs / Results
    "RegisterBatchInput",
    "CustodyResult",
]
