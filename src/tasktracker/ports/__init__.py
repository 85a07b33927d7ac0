"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskRepository
from .task_store import TaskStore

__all__ = [
    "TaskRepository",
    "TaskStore",
]
