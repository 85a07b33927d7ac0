"""Task repository interface."""

from typing import Protocol

from tasktracker.core.changes import TaskCreate, TaskUpdate
from tasktracker.core.tasks import Priority, Status, Task, TaskFilters


class TaskRepository(Protocol):
    """Interface for querying and mutating tasks on any backend."""

    def find_all(self) -> list[Task]:
        """Fetch all tasks in storage order."""
        ...

    def find_by_id(self, task_id: int) -> Task | None:
        """Fetch one task, or None if absent."""
        ...

    def find_by_status(self, status: Status) -> list[Task]:
        ...

    def find_by_priority(self, priority: Priority) -> list[Task]:
        ...

    def find_by_tag(self, tag: str) -> list[Task]:
        ...

    def find_overdue(self) -> list[Task]:
        ...

    def find_due_today(self) -> list[Task]:
        ...

    def find_by_filters(self, filters: TaskFilters) -> list[Task]:
        """Fetch tasks matching every set filter."""
        ...

    def create(self, data: TaskCreate) -> Task:
        """Create and persist a task with the next id."""
        ...

    def update(self, task_id: int, patch: TaskUpdate) -> Task:
        """Apply a partial update. Raises NotFoundError if absent."""
        ...

    def delete(self, task_id: int) -> bool:
        """Delete a task. Returns False if it did not exist."""
        ...

    def get_next_id(self) -> int:
        ...
