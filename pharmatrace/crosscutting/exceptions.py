# pharmatrace/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas (errores internos, fuera de la taxonomía de dominio)
===============================================================================

Objetivo
--------
Separar los fallos "inesperados" (store inconsistente, violación append-only)
de los errores de negocio, que se devuelven como resultados tipados.
Cada excepción expone:
- error_code estable
- error_id para correlación con logs
- message "humana"

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  PharmaTraceError + subclases

Responsabilidades:
  - Estandarizar errores internos
  - Generar error_id para rastreo

Colaboradores:
  - infrastructure/repositories (levantan StorageError)
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class PharmaTraceError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      PharmaTraceError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message
    ----------------------------------------------------------------------------
    """

    error_code: str = "PHARMATRACE_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class StorageError(PharmaTraceError):
    """Errores del store (integridad append-only, contadores inconsistentes)."""

    error_code: str = "STORAGE_ERROR"


class ConfigurationError(PharmaTraceError):
    """Configuración inválida detectada al componer dependencias."""

    error_code: str = "CONFIGURATION_ERROR"
