from .exceptions import (
    DeferredTasksError,
    InfrastructureError,
    InvalidScheduleError,
    PermanentQueueError,
    TaskQueueError,
    TaskSerializationError,
    TransientQueueError,
)
from .id_generator import IIDGenerator, UUID4Generator

__all__ = [
    "DeferredTasksError",
    "IIDGenerator",
    "InfrastructureError",
    "InvalidScheduleError",
    "PermanentQueueError",
    "TaskQueueError",
    "TaskSerializationError",
    "TransientQueueError",
    "UUID4Generator",
]
