"""Unit tests for SQSConnectionManager with mocked aiobotocore (no real AWS)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError

from deferred_tasks_core.primitives.exceptions import (
    PermanentQueueError,
    TransientQueueError,
)
from deferred_tasks_sqs.connection import SQSConnectionManager

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123/async-delete-pull"


def _missing_queue() -> ClientError:
    return ClientError(
        {"Error": {"Code": "AWS.SimpleQueueService.NonExistentQueue"}},
        "GetQueueUrl",
    )


@pytest.mark.asyncio
async def test_get_client_creates_and_caches(mock_session: MagicMock) -> None:
    conn = SQSConnectionManager(region_name="eu-west-1", session=mock_session)
    client1 = await conn.get_client()
    client2 = await conn.get_client()
    assert client1 is client2
    mock_session.create_client.assert_called_once()
    assert mock_session.create_client.call_args.args[0] == "sqs"
    assert mock_session.create_client.call_args.kwargs["region_name"] == "eu-west-1"


@pytest.mark.asyncio
async def test_get_queue_url_is_cached(
    mock_session: MagicMock, mock_client: MagicMock
) -> None:
    conn = SQSConnectionManager(session=mock_session)
    assert await conn.get_queue_url("async-delete-pull") == QUEUE_URL
    assert await conn.get_queue_url("async-delete-pull") == QUEUE_URL
    mock_client.get_queue_url.assert_called_once_with(QueueName="async-delete-pull")


@pytest.mark.asyncio
async def test_missing_queue_is_permanent_by_default(
    mock_session: MagicMock, mock_client: MagicMock
) -> None:
    mock_client.get_queue_url = AsyncMock(side_effect=_missing_queue())
    conn = SQSConnectionManager(session=mock_session)
    with pytest.raises(PermanentQueueError):
        await conn.get_queue_url("nope")
    mock_client.create_queue.assert_not_called()


@pytest.mark.asyncio
async def test_missing_queue_created_when_enabled(
    mock_session: MagicMock, mock_client: MagicMock
) -> None:
    mock_client.get_queue_url = AsyncMock(side_effect=_missing_queue())
    conn = SQSConnectionManager(session=mock_session, create_missing_queues=True)
    assert await conn.get_queue_url("new-queue") == QUEUE_URL
    mock_client.create_queue.assert_called_once_with(QueueName="new-queue")


@pytest.mark.asyncio
async def test_throttled_lookup_is_transient(
    mock_session: MagicMock, mock_client: MagicMock
) -> None:
    mock_client.get_queue_url = AsyncMock(
        side_effect=ClientError({"Error": {"Code": "Throttling"}}, "GetQueueUrl")
    )
    conn = SQSConnectionManager(session=mock_session)
    with pytest.raises(TransientQueueError) as exc_info:
        await conn.get_queue_url("q")
    assert exc_info.value.__cause__ is not None


@pytest.mark.asyncio
async def test_close_cleans_up_client(mock_session: MagicMock) -> None:
    mock_cm = mock_session.create_client.return_value
    conn = SQSConnectionManager(session=mock_session)
    await conn.get_client()
    await conn.close()
    mock_cm.__aexit__.assert_called_once()
    assert conn._client is None
    assert conn._client_cm is None


@pytest.mark.asyncio
async def test_close_idempotent_when_never_opened(mock_session: MagicMock) -> None:
    conn = SQSConnectionManager(session=mock_session)
    await conn.close()
    mock_session.create_client.return_value.__aexit__.assert_not_called()


@pytest.mark.asyncio
async def test_health_check(mock_session: MagicMock, mock_client: MagicMock) -> None:
    conn = SQSConnectionManager(session=mock_session)
    assert await conn.health_check() is True
    mock_client.list_queues.assert_called_once_with(MaxResults=1)

    mock_client.list_queues = AsyncMock(side_effect=RuntimeError("timeout"))
    assert await conn.health_check() is False
