"""Tests for TaskQueueSettings and build_async_task_enqueuer."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from deferred_tasks_core.adapters.memory import InMemoryTaskQueue
from deferred_tasks_core.domain.trid import Trid
from deferred_tasks_core.settings import TaskQueueSettings
from deferred_tasks_core.tasks.bootstrap import build_async_task_enqueuer

T = datetime(2000, 1, 1, tzinfo=timezone.utc)


def test_defaults() -> None:
    settings = TaskQueueSettings(_env_file=None)
    assert settings.async_delete_delay == timedelta(seconds=90)
    assert settings.max_async_eta == timedelta(days=30)
    assert settings.async_actions_queue == "async-actions"
    assert settings.async_delete_queue == "async-delete-pull"
    assert settings.async_host_rename_queue == "async-host-rename-pull"
    assert settings.retry_max_attempts == 3


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFERRED_TASKS_ASYNC_DELETE_DELAY", "PT30S")
    monkeypatch.setenv("DEFERRED_TASKS_MAX_ASYNC_ETA", "P7D")
    monkeypatch.setenv("DEFERRED_TASKS_RETRY_MAX_ATTEMPTS", "5")
    settings = TaskQueueSettings(_env_file=None)
    assert settings.async_delete_delay == timedelta(seconds=30)
    assert settings.max_async_eta == timedelta(days=7)
    assert settings.retry_policy().max_attempts == 5


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValueError):
        TaskQueueSettings(_env_file=None, retry_max_attempts=0)
    with pytest.raises(ValueError, match="max_async_eta"):
        TaskQueueSettings(_env_file=None, max_async_eta=timedelta(0))
    with pytest.raises(ValueError, match="retry_base_delay"):
        TaskQueueSettings(_env_file=None, retry_base_delay=10.0, retry_max_delay=1.0)


def test_retry_policy_from_settings() -> None:
    policy = TaskQueueSettings(
        _env_file=None, retry_base_delay=0.5, retry_max_delay=2.0, retry_jitter=False
    ).retry_policy()
    assert policy.delay_for_attempt(1) == 0.5
    assert policy.delay_for_attempt(5) == 2.0


@pytest.mark.asyncio
async def test_bootstrap_wires_settings(clock, contact, host) -> None:
    queue = InMemoryTaskQueue()
    settings = TaskQueueSettings(
        _env_file=None,
        async_delete_delay=timedelta(minutes=5),
        async_delete_queue="deletes",
        resave_path="/tasks/resave",
        max_async_eta=timedelta(days=1),
    )
    enqueuer = build_async_task_enqueuer(queue, settings, clock=clock)

    await enqueuer.enqueue_async_delete(contact, None, "reg", Trid.create(), False)
    await enqueuer.enqueue_async_resave(host, None, T + timedelta(hours=1))
    await enqueuer.enqueue_async_resave(host, None, T + timedelta(days=2))

    queue.assert_enqueued("deletes", 1)
    assert queue.tasks_for("deletes")[0].delay == timedelta(minutes=5)
    resaves = queue.tasks_for("async-actions")
    assert len(resaves) == 1
    assert resaves[0].target is not None
    assert resaves[0].target.path == "/tasks/resave"
    assert enqueuer.max_async_eta == timedelta(days=1)
