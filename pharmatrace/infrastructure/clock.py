"""
============================================================
TARJETA CRC — infrastructure/clock.py
============================================================
Classes: SystemClock, FixedClock

Responsibilities:
  - SystemClock: timestamps (epoch seconds) desde el reloj del sistema,
    garantizando monotonía no decreciente durante la vida del proceso.
  - FixedClock: reloj determinístico para tests / dev local.

Collaborators:
  - domain.services.Clock (contrato a implementar)

Constraints / Notes:
  - Thread-safe: ambos protegen su último valor con Lock.
  - Si el reloj del sistema retrocede, SystemClock repite el último valor.
============================================================
"""

from __future__ import annotations

import time
from threading import Lock
from typing import Callable

from ..domain.services import Clock


class SystemClock(Clock):
    """Reloj de sistema con clamp monotónico."""

    def __init__(self, source: Callable[[], float] = time.time) -> None:
        self._lock = Lock()
        self._source = source
        self._last = 0

    def now(self) -> int:
        with self._lock:
            current = int(self._source())
            if current < self._last:
                return self._last
            self._last = current
            return current


class FixedClock(Clock):
    """
    Reloj fijo y controlable.

    Solo avanza: set() con un valor menor al actual es un error del caller.
    """

    def __init__(self, start: int) -> None:
        self._lock = Lock()
        self._value = int(start)

    def now(self) -> int:
        with self._lock:
            return self._value

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("FixedClock cannot move backwards")
        with self._lock:
            self._value += int(seconds)
            return self._value

    def set(self, value: int) -> None:
        with self._lock:
            if value < self._value:
                raise ValueError("FixedClock cannot move backwards")
            self._value = int(value)
