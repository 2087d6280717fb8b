"""
============================================================
TARJETA CRC — infrastructure/locks.py
============================================================
Class: InProcessEntityLocks

Responsibilities:
  - Proveer un Lock por (kind, entity_id) creado bajo demanda.
  - Serializar comandos sobre la misma entidad sin bloquear entidades distintas.
  - Liberar la entrada cuando no queda ningún holder ni waiter.

Collaborators:
  - domain.services.EntityLocks (contrato a implementar)
  - application.usecases (abren hold() alrededor del read-validate-write)

Constraints / Notes:
  - _registry_lock solo protege el diccionario de entradas, nunca se mantiene
    mientras corre un comando.
  - El contador de holders incluye a quien espera el lock: la entrada no se
    elimina mientras alguien pueda adquirirla.
============================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import Dict, Iterator, Tuple

from ..domain.services import EntityLocks


class _LockEntry:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = Lock()
        self.holders = 0


class InProcessEntityLocks(EntityLocks):
    """Locks por entidad dentro del proceso, con conteo de referencias."""

    def __init__(self) -> None:
        self._registry_lock = Lock()
        self._entries: Dict[Tuple[str, str], _LockEntry] = {}

    def _acquire_entry(self, key: Tuple[str, str]) -> _LockEntry:
        with self._registry_lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = _LockEntry()
                self._entries[key] = entry
            entry.holders += 1
            return entry

    def _release_entry(self, key: Tuple[str, str], entry: _LockEntry) -> None:
        with self._registry_lock:
            entry.holders -= 1
            if entry.holders == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, kind: str, entity_id: str) -> Iterator[None]:
        key = (kind, entity_id)
        entry = self._acquire_entry(key)
        try:
            with entry.lock:
                yield
        finally:
            self._release_entry(key, entry)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._entries)
