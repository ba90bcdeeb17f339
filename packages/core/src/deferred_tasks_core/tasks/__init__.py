from .bootstrap import build_async_task_enqueuer
from .enqueuer import AsyncTaskEnqueuer
from ..params import (
    BACKEND_SERVICE,
    PARAM_CLIENT_TRANSACTION_ID,
    PARAM_HOST_KEY,
    PARAM_IS_SUPERUSER,
    PARAM_REQUESTED_TIME,
    PARAM_REQUESTING_CLIENT_ID,
    PARAM_RESAVE_TIMES,
    PARAM_RESOURCE_KEY,
    PARAM_SERVER_TRANSACTION_ID,
    QUEUE_ASYNC_ACTIONS,
    QUEUE_ASYNC_DELETE,
    QUEUE_ASYNC_HOST_RENAME,
    RESAVE_ENTITY_PATH,
    parse_resave_times,
)
from .requests import (
    DeleteRequest,
    DeliveryMethod,
    DnsRefreshRequest,
    QueueTask,
    ResaveRequest,
    TaskTarget,
)

__all__ = [
    "BACKEND_SERVICE",
    "PARAM_CLIENT_TRANSACTION_ID",
    "PARAM_HOST_KEY",
    "PARAM_IS_SUPERUSER",
    "PARAM_REQUESTED_TIME",
    "PARAM_REQUESTING_CLIENT_ID",
    "PARAM_RESAVE_TIMES",
    "PARAM_RESOURCE_KEY",
    "PARAM_SERVER_TRANSACTION_ID",
    "QUEUE_ASYNC_ACTIONS",
    "QUEUE_ASYNC_DELETE",
    "QUEUE_ASYNC_HOST_RENAME",
    "RESAVE_ENTITY_PATH",
    "AsyncTaskEnqueuer",
    "DeleteRequest",
    "DeliveryMethod",
    "DnsRefreshRequest",
    "QueueTask",
    "ResaveRequest",
    "TaskTarget",
    "build_async_task_enqueuer",
    "parse_resave_times",
]
