"""Pytest fixtures for deferred-tasks-core tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest
from pydantic import BaseModel

# Ensure the core package is importable when running pytest from repo root
# (e.g. without pip install -e .)
_core_src = Path(__file__).resolve().parent.parent / "src"
if _core_src.is_dir() and str(_core_src) not in sys.path:
    sys.path.insert(0, str(_core_src))

from deferred_tasks_core.adapters.memory import InMemoryTaskQueue  # noqa: E402
from deferred_tasks_core.clock import FakeClock  # noqa: E402
from deferred_tasks_core.domain.keys import VKey  # noqa: E402
from deferred_tasks_core.retry import Retrier, RetryPolicy  # noqa: E402
from deferred_tasks_core.tasks.enqueuer import AsyncTaskEnqueuer  # noqa: E402

START = datetime(2000, 1, 1, tzinfo=timezone.utc)


class Host(BaseModel):
    """Minimal persisted host used as an enqueue target."""

    repo_id: str
    host_name: str = "ns1.example.tld"

    def create_vkey(self) -> VKey[Any]:
        return VKey.create(Host, self.repo_id)


class Contact(BaseModel):
    repo_id: str

    def create_vkey(self) -> VKey[Any]:
        return VKey.create(Contact, self.repo_id)


class RecordingSleeper:
    """Async sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture
def queue() -> InMemoryTaskQueue:
    return InMemoryTaskQueue()


@pytest.fixture
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()


@pytest.fixture
def retrier(sleeper: RecordingSleeper) -> Retrier:
    return Retrier(
        RetryPolicy(max_attempts=3, base_delay=0.1, max_delay=1.0, jitter=False),
        sleep=sleeper,
    )


@pytest.fixture
def enqueuer(
    queue: InMemoryTaskQueue, retrier: Retrier, clock: FakeClock
) -> AsyncTaskEnqueuer:
    return AsyncTaskEnqueuer(queue, retrier, clock=clock)


@pytest.fixture
def host() -> Host:
    return Host(repo_id="5-ROID")


@pytest.fixture
def contact() -> Contact:
    return Contact(repo_id="9-ROID")
