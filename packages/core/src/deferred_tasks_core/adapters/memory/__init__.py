from .task_queue import InMemoryTaskQueue

__all__ = ["InMemoryTaskQueue"]
