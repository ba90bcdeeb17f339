from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


@runtime_checkable
class IClock(Protocol):
    """
    Port for the logical clock.

    Production code uses :class:`~deferred_tasks_core.clock.SystemClock`;
    tests inject :class:`~deferred_tasks_core.clock.FakeClock`.
    """

    def now(self) -> datetime:
        """Return the current instant as a timezone-aware UTC datetime."""
        ...
