"""AsyncTaskEnqueuer: schedules deferred work against persisted entities."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..clock import SystemClock
from ..domain.keys import reference_for
from ..params import (
    BACKEND_SERVICE,
    QUEUE_ASYNC_ACTIONS,
    QUEUE_ASYNC_DELETE,
    QUEUE_ASYNC_HOST_RENAME,
    RESAVE_ENTITY_PATH,
)
from ..primitives.exceptions import InvalidScheduleError, TransientQueueError
from ..retry import Retrier
from ..settings import DEFAULT_ASYNC_DELETE_DELAY, MAX_ASYNC_ETA
from ..utils import ensure_utc, format_instant
from .requests import (
    DeleteRequest,
    DeliveryMethod,
    DnsRefreshRequest,
    QueueTask,
    ResaveRequest,
    TaskTarget,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import timedelta

    from ..domain.keys import Keyed, VKey
    from ..domain.trid import Trid
    from ..ports.clock import IClock
    from ..ports.task_queue import ITaskQueue

logger = logging.getLogger(__name__)


class AsyncTaskEnqueuer:
    """
    Enqueues tasks for asynchronous operations triggered by flows.

    Three kinds of work are scheduled, each with its own timing style:

    * **resave**: push task delivered *at* a future instant. Requests more
      than ``max_async_eta`` out are dropped with a log line, not an error.
      Further instants are chained: only the first is scheduled and the
      rest travel in the ``resaveTimes`` parameter.
    * **delete**: pull task released a fixed ``async_delete_delay`` after
      submission. Never dropped.
    * **DNS refresh**: pull task available immediately.

    Every submission goes through the :class:`Retrier`, which retries
    :class:`TransientQueueError` only. The enqueuer holds no state
    between calls.
    """

    def __init__(
        self,
        queue: ITaskQueue,
        retrier: Retrier | None = None,
        *,
        clock: IClock | None = None,
        async_delete_delay: timedelta = DEFAULT_ASYNC_DELETE_DELAY,
        max_async_eta: timedelta = MAX_ASYNC_ETA,
        async_actions_queue: str = QUEUE_ASYNC_ACTIONS,
        async_delete_queue: str = QUEUE_ASYNC_DELETE,
        async_host_rename_queue: str = QUEUE_ASYNC_HOST_RENAME,
        resave_target: TaskTarget | None = None,
    ) -> None:
        self._queue = queue
        self._retrier = retrier or Retrier()
        self._clock = clock or SystemClock()
        self._async_delete_delay = async_delete_delay
        self._max_async_eta = max_async_eta
        self._async_actions_queue = async_actions_queue
        self._async_delete_queue = async_delete_queue
        self._async_host_rename_queue = async_host_rename_queue
        self._resave_target = resave_target or TaskTarget(
            path=RESAVE_ENTITY_PATH, service=BACKEND_SERVICE
        )

    @property
    def max_async_eta(self) -> timedelta:
        return self._max_async_eta

    def _now(self, now: datetime | None) -> datetime:
        return ensure_utc(now) if now is not None else self._clock.now()

    async def enqueue_async_resave(
        self,
        entity_key: VKey[Any] | Keyed | str,
        now: datetime | None,
        when_to_resave: datetime | Iterable[datetime],
    ) -> None:
        """Enqueue a re-save of an entity at one or more future instants.

        Multiple instants are chained one after the other: each run
        re-enqueues itself for the next instant if any remain.

        Raises:
            InvalidScheduleError: If no instant is given, or the earliest
                one is before *now*.
        """
        times = (
            (when_to_resave,)
            if isinstance(when_to_resave, datetime)
            else tuple(when_to_resave)
        )
        if not times:
            raise InvalidScheduleError("At least one resave time is required")
        request = ResaveRequest(
            resource_key=reference_for(entity_key),
            requested_time=self._now(now),
            resave_times=times,
        )
        if request.first_resave < request.requested_time:
            raise InvalidScheduleError("Can't enqueue a resave to run in the past")
        eta_delay = request.eta_delay
        if eta_delay > self._max_async_eta:
            logger.info(
                "Ignoring async re-save of %s; %s is past the ETA threshold of %s.",
                request.resource_key,
                request.first_resave,
                self._max_async_eta,
            )
            return
        logger.info(
            "Enqueuing async re-save of %s to run at %s.",
            request.resource_key,
            ", ".join(format_instant(t) for t in request.resave_times),
        )
        await self._submit_with_retry(
            QueueTask(
                queue_name=self._async_actions_queue,
                params=request.to_params(),
                delay=eta_delay,
                method=DeliveryMethod.POST,
                target=self._resave_target,
            )
        )

    async def enqueue_async_delete(
        self,
        resource_to_delete: VKey[Any] | Keyed | str,
        now: datetime | None,
        requesting_client_id: str,
        trid: Trid,
        is_superuser: bool,
    ) -> None:
        """Enqueue an asynchronous delete of a contact or host."""
        reference = reference_for(resource_to_delete)
        logger.info(
            "Enqueuing async deletion of %s on behalf of registrar %s.",
            getattr(resource_to_delete, "repo_id", reference),
            requesting_client_id,
        )
        request = DeleteRequest(
            resource_key=reference,
            requested_time=self._now(now),
            requesting_client_id=requesting_client_id,
            trid=trid,
            is_superuser=is_superuser,
        )
        await self._submit_with_retry(
            QueueTask(
                queue_name=self._async_delete_queue,
                params=request.to_params(),
                delay=self._async_delete_delay,
                method=DeliveryMethod.PULL,
            )
        )

    async def enqueue_async_dns_refresh(
        self,
        host: VKey[Any] | Keyed | str,
        now: datetime | None,
    ) -> None:
        """Enqueue a DNS refresh for a renamed host."""
        host_key = reference_for(host)
        logger.info("Enqueuing async DNS refresh for renamed host %s.", host_key)
        request = DnsRefreshRequest(
            resource_key=host_key,
            requested_time=self._now(now),
        )
        await self._submit_with_retry(
            QueueTask(
                queue_name=self._async_host_rename_queue,
                params=request.to_params(),
                method=DeliveryMethod.PULL,
            )
        )

    async def _submit_with_retry(self, task: QueueTask) -> None:
        # Each attempt gets its own copy so an adapter that mutates params
        # cannot change what a retry sends.
        await self._retrier.call_with_retry(
            lambda: self._queue.submit(task.model_copy(deep=True)),
            TransientQueueError,
        )
