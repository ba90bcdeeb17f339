"""SQSTaskQueue: ITaskQueue on Amazon SQS."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from deferred_tasks_core.clock import SystemClock
from deferred_tasks_core.ports.task_queue import ITaskQueue
from deferred_tasks_core.utils import format_instant

from .errors import classify
from .serialization import TaskSerializer

if TYPE_CHECKING:
    from deferred_tasks_core.ports.clock import IClock
    from deferred_tasks_core.tasks.requests import QueueTask

    from .connection import SQSConnectionManager

logger = logging.getLogger(__name__)

# SQS refuses DelaySeconds above 15 minutes.
MAX_DELAY = timedelta(seconds=900)

ATTR_METHOD = "method"
ATTR_ETA = "eta"
ATTR_TARGET_PATH = "targetPath"
ATTR_TARGET_SERVICE = "targetService"


def _string_attr(value: str) -> dict[str, str]:
    return {"DataType": "String", "StringValue": value}


class SQSTaskQueue(ITaskQueue):
    """SQS adapter implementing ITaskQueue.

    The task's queue name resolves to a queue URL. Parameters travel as a
    JSON object body. The absolute ``eta`` is always sent as a message
    attribute; ``DelaySeconds`` is clamped to the SQS maximum, so
    :class:`~deferred_tasks_sqs.consumer.SQSTaskConsumer` holds back
    messages whose ``eta`` has not yet passed.
    """

    def __init__(
        self,
        connection: SQSConnectionManager,
        *,
        serializer: TaskSerializer | None = None,
        clock: IClock | None = None,
    ) -> None:
        """Configure the queue client.

        Args:
            connection: Shared connection manager.
            serializer: Used to encode parameters; default TaskSerializer().
            clock: Source of the submission instant used to compute ``eta``.
        """
        self._connection = connection
        self._serializer = serializer or TaskSerializer()
        self._clock = clock or SystemClock()

    def build_message(self, queue_url: str, task: QueueTask) -> dict[str, Any]:
        """Return the ``send_message`` kwargs for *task*."""
        attributes = {
            ATTR_METHOD: _string_attr(task.method.value),
            ATTR_ETA: _string_attr(format_instant(self._clock.now() + task.delay)),
        }
        if task.target is not None:
            attributes[ATTR_TARGET_PATH] = _string_attr(task.target.path)
            attributes[ATTR_TARGET_SERVICE] = _string_attr(task.target.service)
        return {
            "QueueUrl": queue_url,
            "MessageBody": self._serializer.serialize(task.params),
            "DelaySeconds": int(min(task.delay, MAX_DELAY).total_seconds()),
            "MessageAttributes": attributes,
        }

    async def submit(self, task: QueueTask) -> None:
        """Send *task* to its queue.

        Raises:
            TransientQueueError: Throttling, 5xx or connectivity failures.
            PermanentQueueError: Anything else, including bad parameters.
        """
        queue_url = await self._connection.get_queue_url(task.queue_name)
        message = self.build_message(queue_url, task)
        client = await self._connection.get_client()
        try:
            out = await client.send_message(**message)
        except Exception as e:
            raise classify(e) from e
        logger.debug(
            "Sent task to %s (message id %s, delay %ss)",
            task.queue_name,
            out.get("MessageId") if isinstance(out, dict) else None,
            message["DelaySeconds"],
        )

    async def health_check(self) -> bool:
        """Return True if SQS is reachable."""
        return await self._connection.health_check()
