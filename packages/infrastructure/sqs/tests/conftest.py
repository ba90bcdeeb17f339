"""Pytest fixtures for the SQS transport tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Ensure both packages are importable when running pytest from repo root
# (e.g. without pip install -e .)
_here = Path(__file__).resolve().parent
for _src in (_here.parent / "src", _here.parents[2] / "core" / "src"):
    if _src.is_dir() and str(_src) not in sys.path:
        sys.path.insert(0, str(_src))

from deferred_tasks_core.clock import FakeClock  # noqa: E402

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123/async-delete-pull"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2000, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock()
    client.send_message = AsyncMock(return_value={"MessageId": "m-1"})
    client.get_queue_url = AsyncMock(return_value={"QueueUrl": QUEUE_URL})
    client.create_queue = AsyncMock(return_value={"QueueUrl": QUEUE_URL})
    client.list_queues = AsyncMock(return_value={"QueueUrls": []})
    return client


@pytest.fixture
def mock_connection(mock_client: MagicMock) -> MagicMock:
    conn = MagicMock()
    conn.get_client = AsyncMock(return_value=mock_client)
    conn.get_queue_url = AsyncMock(return_value=QUEUE_URL)
    conn.health_check = AsyncMock(return_value=True)
    return conn


@pytest.fixture
def mock_session(mock_client: MagicMock) -> MagicMock:
    session = MagicMock()
    mock_cm = MagicMock()
    mock_cm.__aenter__ = AsyncMock(return_value=mock_client)
    mock_cm.__aexit__ = AsyncMock(return_value=None)
    session.create_client = MagicMock(return_value=mock_cm)
    return session
