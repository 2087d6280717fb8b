"""
Name: Domain Service Interfaces (Ports)

Responsibilities:
  - Define the trusted clock contract used for every recorded date
  - Define per-entity mutual exclusion used by mutating use cases

Collaborators:
  - infrastructure.clock: SystemClock / FixedClock
  - infrastructure.locks: InProcessEntityLocks
  - application.usecases: depend on these protocols only

Notes:
  - Clock.now() returns integer epoch seconds and never goes backwards.
  - EntityLocks.hold() serializes callers of the same (kind, entity_id) only;
    distinct ids never block each other.
"""

from typing import ContextManager, Protocol


class Clock(Protocol):
    """R: Trusted clock (monotonic non-decreasing, epoch seconds)."""

    def now(self) -> int:
        """R: Current timestamp."""
        ...


class EntityLocks(Protocol):
    """R: Per-entity lock provider."""

    def hold(self, kind: str, entity_id: str) -> ContextManager[None]:
        """
        R: Context manager holding the lock for (kind, entity_id).

        The read-validate-write sequence of a command runs inside it.
        """
        ...
