"""Classify botocore failures as transient or permanent queue errors."""

from __future__ import annotations

from botocore.exceptions import ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotoConnectionError

from deferred_tasks_core.primitives.exceptions import (
    PermanentQueueError,
    TaskQueueError,
    TransientQueueError,
)

TRANSIENT_ERROR_CODES = frozenset(
    {
        "InternalError",
        "InternalFailure",
        "RequestThrottled",
        "RequestTimeout",
        "ServiceUnavailable",
        "Throttling",
        "ThrottlingException",
        "AWS.SimpleQueueService.RequestThrottled",
    }
)


def classify(exc: Exception) -> TaskQueueError:
    """Map an SQS client failure onto the core queue error taxonomy."""
    if isinstance(exc, TaskQueueError):
        return exc
    if isinstance(exc, (BotoConnectionError, HTTPClientError)):
        return TransientQueueError(str(exc))
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
        if error.get("Code") in TRANSIENT_ERROR_CODES or status >= 500:
            return TransientQueueError(str(exc))
    return PermanentQueueError(str(exc))
