from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..tasks.requests import QueueTask


@runtime_checkable
class ITaskQueue(Protocol):
    """
    Port for handing tasks to a durable task-delivery service.

    The service owns durability and at-least-once delivery. Adapters must
    be safe for concurrent use by independent callers.
    """

    async def submit(self, task: QueueTask) -> None:
        """
        Durably hand *task* to the queue named by ``task.queue_name``.

        Raises:
            TransientQueueError: The queue is temporarily unavailable;
                the same submission may be retried.
            PermanentQueueError: The queue rejected the task.
        """
        ...
