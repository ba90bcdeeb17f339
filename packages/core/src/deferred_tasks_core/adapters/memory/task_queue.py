"""InMemoryTaskQueue: ITaskQueue with fault injection and assertion helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...ports.task_queue import ITaskQueue

if TYPE_CHECKING:
    from ...tasks.requests import QueueTask


class InMemoryTaskQueue(ITaskQueue):
    """
    List-backed :class:`ITaskQueue` for unit / integration tests.

    Every call to :meth:`submit` is recorded in :attr:`attempts`; only
    calls that did not fail are recorded in :attr:`tasks`. Use
    :meth:`fail_next` to make the next *k* submissions raise.
    """

    def __init__(self) -> None:
        self._attempts: list[QueueTask] = []
        self._tasks: list[QueueTask] = []
        self._failures: list[BaseException] = []

    async def submit(self, task: QueueTask) -> None:
        self._attempts.append(task)
        if self._failures:
            raise self._failures.pop(0)
        self._tasks.append(task)

    # --- Fault injection ---

    def fail_next(self, exc: BaseException, times: int = 1) -> None:
        """Queue *exc* to be raised by the next *times* submissions."""
        self._failures.extend([exc] * times)

    # --- Test helpers ---

    @property
    def attempts(self) -> list[QueueTask]:
        return list(self._attempts)

    @property
    def tasks(self) -> list[QueueTask]:
        return list(self._tasks)

    def tasks_for(self, queue_name: str) -> list[QueueTask]:
        return [t for t in self._tasks if t.queue_name == queue_name]

    def assert_enqueued(self, queue_name: str, count: int = 1) -> None:
        """Assert that exactly *count* tasks reached *queue_name*."""
        matching = self.tasks_for(queue_name)
        assert len(matching) == count, (
            f"Expected {count} task(s) on {queue_name!r}, got {len(matching)}. "
            f"Enqueued: {[t.queue_name for t in self._tasks]}"
        )

    def assert_no_tasks(self) -> None:
        assert not self._tasks, (
            f"Expected no tasks, got {[t.queue_name for t in self._tasks]}"
        )

    def clear(self) -> None:
        self._attempts.clear()
        self._tasks.clear()
        self._failures.clear()
