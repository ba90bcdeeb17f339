"""build_async_task_enqueuer: one-call wiring from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..retry import Retrier
from ..settings import TaskQueueSettings
from .enqueuer import AsyncTaskEnqueuer
from .requests import TaskTarget

if TYPE_CHECKING:
    from ..ports.clock import IClock
    from ..ports.task_queue import ITaskQueue


def build_async_task_enqueuer(
    queue: ITaskQueue,
    settings: TaskQueueSettings | None = None,
    *,
    clock: IClock | None = None,
    retrier: Retrier | None = None,
) -> AsyncTaskEnqueuer:
    """Wire an :class:`AsyncTaskEnqueuer` from :class:`TaskQueueSettings`.

    Call once at startup and share the result; the enqueuer and its
    collaborators are safe for concurrent use.
    """
    settings = settings or TaskQueueSettings()
    return AsyncTaskEnqueuer(
        queue,
        retrier or Retrier(settings.retry_policy()),
        clock=clock,
        async_delete_delay=settings.async_delete_delay,
        max_async_eta=settings.max_async_eta,
        async_actions_queue=settings.async_actions_queue,
        async_delete_queue=settings.async_delete_queue,
        async_host_rename_queue=settings.async_host_rename_queue,
        resave_target=TaskTarget(
            path=settings.resave_path, service=settings.resave_service
        ),
    )
