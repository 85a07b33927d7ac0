"""JSON-backed task repository adapter."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from tasktracker.core.changes import UNSET, TaskCreate, TaskUpdate
from tasktracker.core.errors import NotFoundError, StoreIOError, ValidationError
from tasktracker.core.tasks import (
    Priority,
    Status,
    Task,
    TaskFilters,
    apply_filters,
    filter_by_priority,
    filter_by_status,
    filter_by_tag,
    filter_due_today,
    filter_overdue,
    next_id,
    normalize_tags,
)
from tasktracker.ports.task_store import TaskStore

from .json_store import JsonFileStore

logger = logging.getLogger(__name__)


class JsonTaskRepository:
    """
    Task repository over a whole-document store.

    Implements TaskRepository protocol. Every call reloads the collection,
    and every mutation writes the full collection back.
    """

    def __init__(
        self,
        store: TaskStore | Path | str,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if isinstance(store, (Path, str)):
            store = JsonFileStore(store)
        self.store = store
        self.clock = clock

    def _load(self) -> list[Task]:
        """Decode every stored record into a Task."""
        tasks = []
        for record in self.store.read():
            try:
                tasks.append(Task.from_record(record))
            except ValidationError as e:
                raise StoreIOError(f"Corrupt task record: {e}") from e
        return tasks

    def _save(self, tasks: list[Task]) -> None:
        self.store.write([t.to_record() for t in tasks])

    def find_all(self) -> list[Task]:
        return self._load()

    def find_by_id(self, task_id: int) -> Task | None:
        return next((t for t in self._load() if t.id == task_id), None)

    def find_by_status(self, status: Status) -> list[Task]:
        return filter_by_status(self._load(), status)

    def find_by_priority(self, priority: Priority) -> list[Task]:
        return filter_by_priority(self._load(), priority)

    def find_by_tag(self, tag: str) -> list[Task]:
        return filter_by_tag(self._load(), tag)

    def find_overdue(self) -> list[Task]:
        return filter_overdue(self._load(), self.clock())

    def find_due_today(self) -> list[Task]:
        return filter_due_today(self._load(), self.clock().date())

    def find_by_filters(self, filters: TaskFilters) -> list[Task]:
        return apply_filters(self._load(), filters, self.clock())

    def get_next_id(self) -> int:
        return next_id(self._load())

    def create(self, data: TaskCreate) -> Task:
        """Create a task with the next id and persist the collection."""
        description = (data.description or "").strip()
        if not description:
            raise ValidationError("Task description cannot be empty")

        tasks = self._load()
        now = self.clock()
        task = Task(
            id=next_id(tasks),
            description=description,
            status=Status.TODO,
            created_at=now,
            updated_at=now,
            deadline=data.deadline,
            priority=data.priority or Priority.MEDIUM,
            tags=normalize_tags(data.tags),
        )
        tasks.append(task)
        self._save(tasks)

        logger.info(f"Created task {task.id}")
        return task

    def update(self, task_id: int, patch: TaskUpdate) -> Task:
        """
        Apply the fields set in patch and persist the collection.

        updated_at is stamped once, and only if some field changed value.
        An empty patch writes nothing.
        """
        tasks = self._load()
        task = next((t for t in tasks if t.id == task_id), None)
        if task is None:
            raise NotFoundError(task_id)
        if patch.is_empty():
            return task

        now = self.clock()
        if patch.description is not None:
            description = patch.description.strip()
            if not description:
                raise ValidationError("Task description cannot be empty")
            if description != task.description:
                task.update_description(description, now)

        if patch.status is not None and patch.status is not task.status:
            task.update_status(patch.status, now)

        if patch.priority is not None and patch.priority is not task.priority:
            task.update_priority(patch.priority, now)

        if patch.deadline is not UNSET and patch.deadline != task.deadline:
            task.set_deadline(patch.deadline, now)

        if patch.tags is not None:
            tags = normalize_tags(patch.tags)
            if tags != task.tags:
                task.replace_tags(tags, now)

        self._save(tasks)
        return task

    def delete(self, task_id: int) -> bool:
        """Remove a task. Returns False (without writing) if it did not exist."""
        tasks = self._load()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return False

        self._save(remaining)
        logger.info(f"Deleted task {task_id}")
        return True
