"""SQS client management and queue URL resolution."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from aiobotocore.session import AioSession
from botocore.exceptions import ClientError

from .errors import classify

logger = logging.getLogger(__name__)

_NON_EXISTENT_QUEUE = "AWS.SimpleQueueService.NonExistentQueue"


class SQSConnectionManager:
    """Manages a shared aiobotocore SQS client and cached queue URL lookups."""

    def __init__(
        self,
        region_name: str = "us-east-1",
        *,
        session: AioSession | None = None,
        create_missing_queues: bool = False,
        **client_kwargs: Any,
    ) -> None:
        """Configure region and optional session/client kwargs."""
        self._region = region_name
        self._session = session or AioSession()
        self._create_missing = create_missing_queues
        self._client_kwargs = client_kwargs
        self._client: Any = None
        self._client_cm: Any = None
        self._queue_urls: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def get_client(self) -> Any:
        """Return shared SQS client; create if needed."""
        async with self._lock:
            if self._client is None:
                self._client_cm = self._session.create_client(
                    "sqs",
                    region_name=self._region,
                    **self._client_kwargs,
                )
                self._client = await self._client_cm.__aenter__()
        return self._client

    async def get_queue_url(self, queue_name: str) -> str:
        """Resolve queue name to queue URL.

        Raises:
            TransientQueueError: SQS could not be reached.
            PermanentQueueError: The queue does not exist (and creating
                missing queues is disabled) or access was denied.
        """
        cached = self._queue_urls.get(queue_name)
        if cached is not None:
            return cached
        client = await self.get_client()
        try:
            out = await client.get_queue_url(QueueName=queue_name)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code != _NON_EXISTENT_QUEUE or not self._create_missing:
                raise classify(e) from e
            logger.info("Creating missing SQS queue %s", queue_name)
            try:
                out = await client.create_queue(QueueName=queue_name)
            except Exception as create_err:
                raise classify(create_err) from create_err
        except Exception as e:
            raise classify(e) from e
        url = str(out["QueueUrl"])
        self._queue_urls[queue_name] = url
        return url

    async def close(self) -> None:
        """Close the client if open."""
        if self._client_cm is not None:
            await self._client_cm.__aexit__(None, None, None)
            self._client_cm = None
            self._client = None
        self._queue_urls.clear()

    async def health_check(self) -> bool:
        """Return True if we can list queues (lightweight check)."""
        try:
            client = await self.get_client()
            await client.list_queues(MaxResults=1)
            return True
        except Exception:  # noqa: BLE001
            return False
