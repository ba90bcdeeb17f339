"""SQSTaskConsumer: long-polling worker side of SQSTaskQueue."""

from __future__ import annotations

import asyncio
import logging
import math
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from deferred_tasks_core.clock import SystemClock
from deferred_tasks_core.primitives.exceptions import TaskSerializationError
from deferred_tasks_core.utils import parse_instant

from .serialization import TaskSerializer
from .task_queue import ATTR_ETA

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from deferred_tasks_core.ports.clock import IClock

    from .connection import SQSConnectionManager

    TaskHandler = Callable[[dict[str, str]], Coroutine[Any, Any, None]]

logger = logging.getLogger(__name__)

# SQS refuses visibility timeouts above 12 hours.
MAX_VISIBILITY_TIMEOUT = 43200


class SQSTaskConsumer:
    """Receives deferred tasks and dispatches them once their ``eta`` passes.

    ``DelaySeconds`` cannot exceed 15 minutes, so a task scheduled further
    out is delivered early. Such a message is hidden again with
    ``change_message_visibility`` for the remaining time (at most 12 hours
    per receive) and is not handed to the handler. Every hold-back counts
    as a receive, so a redrive policy's ``maxReceiveCount`` must leave room
    for ``max_async_eta / 12h`` of them.
    """

    def __init__(
        self,
        connection: SQSConnectionManager,
        *,
        serializer: TaskSerializer | None = None,
        clock: IClock | None = None,
        wait_time_seconds: int = 20,
        visibility_timeout: int = 30,
    ) -> None:
        """Configure consumer.

        Args:
            connection: Shared connection manager.
            serializer: For decoding message bodies; default TaskSerializer().
            clock: Decides whether a message's ``eta`` has passed.
            wait_time_seconds: Long-poll wait.
            visibility_timeout: Visibility timeout for received messages.
        """
        self._connection = connection
        self._serializer = serializer or TaskSerializer()
        self._clock = clock or SystemClock()
        self._wait_time_seconds = wait_time_seconds
        self._visibility_timeout = visibility_timeout
        self._handlers: dict[str, TaskHandler] = {}
        self._running = False

    async def subscribe(self, queue_name: str, handler: TaskHandler) -> None:
        """Register *handler* for the tasks of *queue_name*."""
        self._handlers[queue_name] = handler

    def remaining_delay(self, msg: dict[str, Any]) -> timedelta:
        """Time left until the message's ``eta``; zero when due or unset."""
        attr = msg.get("MessageAttributes", {}).get(ATTR_ETA)
        if attr is None:
            return timedelta(0)
        try:
            eta = parse_instant(attr["StringValue"])
        except (KeyError, ValueError) as e:
            raise TaskSerializationError(f"Bad eta attribute: {attr!r}") from e
        return max(eta - self._clock.now(), timedelta(0))

    async def _hide(
        self, client: Any, queue_url: str, receipt: str, seconds: int
    ) -> None:
        await client.change_message_visibility(
            QueueUrl=queue_url,
            ReceiptHandle=receipt,
            VisibilityTimeout=seconds,
        )

    async def _process_message(
        self,
        client: Any,
        queue_url: str,
        msg: dict[str, Any],
        handler: TaskHandler,
    ) -> bool:
        """Handle one message. Returns True if the handler ran successfully."""
        receipt = msg["ReceiptHandle"]
        try:
            remaining = self.remaining_delay(msg)
            if remaining > timedelta(0):
                hold = min(
                    math.ceil(remaining.total_seconds()), MAX_VISIBILITY_TIMEOUT
                )
                logger.debug(
                    "Holding back message %s for %ss until its eta",
                    msg.get("MessageId"),
                    hold,
                )
                await self._hide(client, queue_url, receipt, hold)
                return False
            params = self._serializer.deserialize(msg.get("Body", ""))
            await handler(params)
        except Exception:
            logger.exception(
                "Task message %s failed; releasing it for redelivery",
                msg.get("MessageId"),
            )
            await self._hide(client, queue_url, receipt, 0)
            return False
        await client.delete_message(QueueUrl=queue_url, ReceiptHandle=receipt)
        return True

    async def poll_once(self, queue_name: str) -> int:
        """Receive one batch from *queue_name*; return how many tasks ran."""
        handler = self._handlers[queue_name]
        client = await self._connection.get_client()
        queue_url = await self._connection.get_queue_url(queue_name)
        out = await client.receive_message(
            QueueUrl=queue_url,
            MaxNumberOfMessages=10,
            WaitTimeSeconds=self._wait_time_seconds,
            VisibilityTimeout=self._visibility_timeout,
            MessageAttributeNames=["All"],
        )
        ran = 0
        for msg in out.get("Messages", []):
            if await self._process_message(client, queue_url, msg, handler):
                ran += 1
        return ran

    async def run(self) -> None:
        """Poll every subscribed queue until :meth:`stop` is called."""
        self._running = True
        while self._running:
            for queue_name in list(self._handlers):
                if not self._running:
                    break
                try:
                    await self.poll_once(queue_name)
                except Exception:
                    logger.exception("Receive from %s failed", queue_name)
                    await asyncio.sleep(1)

    async def stop(self) -> None:
        """Stop the consumer loop."""
        self._running = False

    async def health_check(self) -> bool:
        """Return True if SQS is reachable."""
        return await self._connection.health_check()
