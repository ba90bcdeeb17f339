"""Caller-contract and infrastructure exceptions for deferred-tasks-core."""

from __future__ import annotations


class DeferredTasksError(Exception):
    """Root exception for the entire deferred-tasks toolkit."""


class InvalidScheduleError(DeferredTasksError, ValueError):
    """Raised when a caller asks for work to be scheduled in the past.

    Usage: This is a caller bug. It is never retried and never corrected;
    the enqueue call is rejected before anything reaches the queue.
    """


class InfrastructureError(DeferredTasksError):
    """Base class for all infrastructure-related errors."""


class TaskQueueError(InfrastructureError):
    """Base class for failures while handing a task to the queue service."""


class TransientQueueError(TaskQueueError):
    """Raised when the queue is temporarily unavailable.

    Usage: Queue clients raise this for throttling, timeouts and 5xx-style
    failures. The enqueuer retries it a bounded number of times.
    """


class PermanentQueueError(TaskQueueError):
    """Raised when the queue rejected the task and retrying cannot help."""


class TaskSerializationError(PermanentQueueError):
    """Raised when a task cannot be encoded into the queue's wire format."""
