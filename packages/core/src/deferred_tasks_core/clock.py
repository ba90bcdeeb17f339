"""Clock implementations: wall clock for production, settable clock for tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .ports.clock import IClock
from .utils import ensure_utc


class SystemClock(IClock):
    """Reads the system wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock(IClock):
    """
    Manually driven clock for unit / integration tests.

    Time only moves when :meth:`set_to` or :meth:`advance_by` is called.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._now = (
            ensure_utc(start) if start else datetime(2000, 1, 1, tzinfo=timezone.utc)
        )

    def now(self) -> datetime:
        return self._now

    def set_to(self, instant: datetime) -> None:
        self._now = ensure_utc(instant)

    def advance_by(self, delta: timedelta) -> datetime:
        """Move the clock forward and return the new instant."""
        self._now = self._now + delta
        return self._now
