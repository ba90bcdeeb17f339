from .clock import IClock
from .task_queue import ITaskQueue

__all__ = [
    "IClock",
    "ITaskQueue",
]
