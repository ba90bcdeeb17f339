"""Instant helpers shared by the request models and queue adapters."""

from __future__ import annotations

from datetime import datetime, timezone


def ensure_utc(instant: datetime) -> datetime:
    """Return *instant* in UTC; naive datetimes are assumed to already be UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def format_instant(instant: datetime) -> str:
    """Render an instant as ``2000-01-01T00:00:00.000Z`` (UTC, millisecond precision)."""
    text = ensure_utc(instant).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_instant(text: str) -> datetime:
    """Inverse of :func:`format_instant`. Accepts any ISO-8601 offset form."""
    return ensure_utc(datetime.fromisoformat(text.strip().replace("Z", "+00:00")))
