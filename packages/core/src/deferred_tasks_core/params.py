"""Task parameter vocabulary and queue names shared with task handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .utils import format_instant, parse_instant

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

# ── Parameter names ─────────────────────────────────────────────────
PARAM_RESOURCE_KEY = "resourceKey"
PARAM_REQUESTING_CLIENT_ID = "requestingClientId"
PARAM_CLIENT_TRANSACTION_ID = "clientTransactionId"
PARAM_SERVER_TRANSACTION_ID = "serverTransactionId"
PARAM_IS_SUPERUSER = "isSuperuser"
PARAM_HOST_KEY = "hostKey"
PARAM_REQUESTED_TIME = "requestedTime"
PARAM_RESAVE_TIMES = "resaveTimes"

# ── Queue names ─────────────────────────────────────────────────────
QUEUE_ASYNC_ACTIONS = "async-actions"
QUEUE_ASYNC_DELETE = "async-delete-pull"
QUEUE_ASYNC_HOST_RENAME = "async-host-rename-pull"

# ── Push target for resave continuations ───────────────────────────
RESAVE_ENTITY_PATH = "/_dr/task/resaveEntity"
BACKEND_SERVICE = "backend"


def format_resave_times(instants: Iterable[datetime]) -> str:
    """Comma-join instants in the order given."""
    return ",".join(format_instant(i) for i in instants)


def parse_resave_times(value: str | None) -> tuple[datetime, ...]:
    """Decode a ``resaveTimes`` parameter into ascending instants.

    Handlers call this after performing a resave and pass the result back
    to ``enqueue_async_resave`` to schedule the next link of the chain.
    Absent or blank values decode to an empty tuple.
    """
    if not value or not value.strip():
        return ()
    return tuple(sorted({parse_instant(part) for part in value.split(",")}))
