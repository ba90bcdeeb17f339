"""deferred-tasks-core: enqueue deferred work against persisted entities.

Zero infrastructure dependencies; queue transports live in separate packages.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import InMemoryTaskQueue
from .clock import FakeClock, SystemClock

# ── Domain ───────────────────────────────────────────────────────
from .domain import Keyed, Trid, VKey, reference_for, vkey_for

# ── Ports ────────────────────────────────────────────────────────
from .ports import IClock, ITaskQueue

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    DeferredTasksError,
    IIDGenerator,
    InfrastructureError,
    InvalidScheduleError,
    PermanentQueueError,
    TaskQueueError,
    TaskSerializationError,
    TransientQueueError,
    UUID4Generator,
)
from .retry import Retrier, RetryPolicy
from .settings import MAX_ASYNC_ETA, TaskQueueSettings

# ── Tasks ────────────────────────────────────────────────────────
from .tasks import (
    AsyncTaskEnqueuer,
    DeleteRequest,
    DeliveryMethod,
    DnsRefreshRequest,
    QueueTask,
    ResaveRequest,
    TaskTarget,
    build_async_task_enqueuer,
    parse_resave_times,
)

__all__ = [
    "MAX_ASYNC_ETA",
    "AsyncTaskEnqueuer",
    "DeferredTasksError",
    "DeleteRequest",
    "DeliveryMethod",
    "DnsRefreshRequest",
    "FakeClock",
    "IClock",
    "IIDGenerator",
    "ITaskQueue",
    "InMemoryTaskQueue",
    "InfrastructureError",
    "InvalidScheduleError",
    "Keyed",
    "PermanentQueueError",
    "QueueTask",
    "ResaveRequest",
    "Retrier",
    "RetryPolicy",
    "SystemClock",
    "TaskQueueError",
    "TaskQueueSettings",
    "TaskSerializationError",
    "TaskTarget",
    "TransientQueueError",
    "Trid",
    "UUID4Generator",
    "VKey",
    "build_async_task_enqueuer",
    "parse_resave_times",
    "reference_for",
    "vkey_for",
]
