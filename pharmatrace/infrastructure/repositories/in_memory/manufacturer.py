"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/manufacturer.py
============================================================
Class: InMemoryManufacturerRepository

Responsibilities:
  - Almacenar fabricantes en memoria (tests / local dev).
  - Implementar create (sin sobrescribir) y save (solo si existe).

Collaborators:
  - domain.entities.Manufacturer
  - domain.repositories.ManufacturerRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Repo puro: NO aplica autorización ni reglas del flujo de admisión.
  - Las entidades son frozen: se pueden devolver sin copia defensiva.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import Manufacturer
from ....domain.repositories import ManufacturerRepository


class InMemoryManufacturerRepository(ManufacturerRepository):
    """
    Repositorio in-memory, thread-safe, para fabricantes.

    Modelo mental:
    - _manufacturers es la "tabla" en memoria (id -> Manufacturer).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._manufacturers: Dict[str, Manufacturer] = {}

    def get_manufacturer(self, manufacturer_id: str) -> Optional[Manufacturer]:
        with self._lock:
            return self._manufacturers.get(manufacturer_id)

    def create_manufacturer(self, manufacturer: Manufacturer) -> bool:
        with self._lock:
            if manufacturer.id in self._manufacturers:
                return False
            self._manufacturers[manufacturer.id] = manufacturer
            return True

    def save_manufacturer(self, manufacturer: Manufacturer) -> bool:
        with self._lock:
            if manufacturer.id not in self._manufacturers:
                return False
            self._manufacturers[manufacturer.id] = manufacturer
            return True

    # -------------------------------------------------------------------------
    # Testing helpers
    # -------------------------------------------------------------------------
    def list_manufacturers(self) -> List[Manufacturer]:
        """Todos los fabricantes ordenados por id (para tests)."""
        with self._lock:
            return sorted(self._manufacturers.values(), key=lambda m: m.id)
