"""Infrastructure adapters: clocks, entity locks and stores."""

from .clock import FixedClock, SystemClock
from .locks import InProcessEntityLocks

__all__ = ["SystemClock", "FixedClock", "InProcessEntityLocks"]
