"""SQS transport for deferred tasks (optional extra: deferred-tasks[sqs])."""

from __future__ import annotations

from .connection import SQSConnectionManager
from .consumer import MAX_VISIBILITY_TIMEOUT, SQSTaskConsumer
from .errors import TRANSIENT_ERROR_CODES, classify
from .task_queue import SQSTaskQueue
from .serialization import TaskSerializer

__all__ = [
    "MAX_VISIBILITY_TIMEOUT",
    "TRANSIENT_ERROR_CODES",
    "SQSConnectionManager",
    "SQSTaskConsumer",
    "SQSTaskQueue",
    "TaskSerializer",
    "classify",
]
