"""Shared use-case layer between the CLI and any other front end.

Each function validates its input, calls the repository and returns domain
objects. Errors propagate as TaskError subclasses; rendering them is the
caller's job.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .adapters import exporters
from .adapters.exporters import ExportFormat
from .adapters.importers import ImportFormat, load_import_file
from .adapters.json_repository import JsonTaskRepository
from .adapters.json_store import JsonFileStore
from .config import Config
from .core.changes import UNSET, TaskCreate, TaskUpdate
from .core.errors import NotFoundError, StoreIOError, TaskError, ValidationError
from .core.report import ReportKind, generate_report as render_report
from .core.search import SearchCriteria, search_tasks as run_search
from .core.stats import TaskStats, compute_stats
from .core.tasks import Priority, Status, Task, TaskFilters, normalize_tags, parse_deadline
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)


def get_repository(config: Config) -> JsonTaskRepository:
    """Build the repository for the configured task file."""
    store = JsonFileStore(config.tasks_file, backup_on_write=config.backup_on_write)
    return JsonTaskRepository(store)


def validate_id(task_id: object) -> int:
    """Task ids are positive integers."""
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id <= 0:
        raise ValidationError("Invalid task ID")
    return task_id


def _validate_description(description: str | None) -> str:
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("Task description cannot be empty")
    return description.strip()


def _parse_choice(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Unsupported {label}: {value}. Must be: {choices}") from None


def _parse_optional_deadline(deadline: str | datetime | None) -> datetime | None:
    if deadline is None or deadline == "":
        return None
    return parse_deadline(deadline)


# ============== Create / Update / Delete ==============


def create_task(
    repo: TaskRepository,
    description: str,
    deadline: str | datetime | None = None,
    priority: str | Priority | None = None,
    tags: list[str] | str | None = None,
) -> Task:
    """Validate all fields and create a task."""
    data = TaskCreate(
        description=_validate_description(description),
        deadline=_parse_optional_deadline(deadline),
        priority=Priority.parse(priority) if priority else None,
        tags=normalize_tags(tags),
    )
    return repo.create(data)


def add_task(repo: TaskRepository, description: str) -> Task:
    """Create a task from a description alone."""
    return create_task(repo, description)


def update_task(
    repo: TaskRepository,
    task_id: int,
    description: str | None = None,
    status: str | Status | None = None,
    priority: str | Priority | None = None,
    deadline: str | datetime | None | object = UNSET,
    tags: list[str] | str | None = None,
) -> Task:
    """
    Partial update. Arguments left at their defaults are not touched; pass
    deadline=None to remove a deadline.
    """
    validate_id(task_id)
    if deadline == "":
        raise ValidationError("Deadline cannot be empty")
    patch = TaskUpdate(
        description=_validate_description(description) if description is not None else None,
        status=Status.parse(status) if status is not None else None,
        priority=Priority.parse(priority) if priority is not None else None,
        deadline=UNSET if deadline is UNSET else _parse_optional_deadline(deadline),
        tags=normalize_tags(tags) if tags is not None else None,
    )
    return repo.update(task_id, patch)


def update_description(repo: TaskRepository, task_id: int, description: str) -> Task:
    return update_task(repo, task_id, description=description)


def delete_task(repo: TaskRepository, task_id: int) -> bool:
    """Delete a task. Raises NotFoundError if there was nothing to delete."""
    validate_id(task_id)
    if not repo.delete(task_id):
        raise NotFoundError(task_id)
    return True


def mark_task(repo: TaskRepository, task_id: int, status: str | Status) -> Task:
    return update_task(repo, task_id, status=status)


def set_priority(repo: TaskRepository, task_id: int, priority: str | Priority) -> Task:
    return update_task(repo, task_id, priority=priority)


def set_deadline(repo: TaskRepository, task_id: int, deadline: str | datetime) -> Task:
    if deadline is None or deadline == "":
        raise ValidationError("Deadline cannot be empty")
    return update_task(repo, task_id, deadline=deadline)


def clear_deadline(repo: TaskRepository, task_id: int) -> Task:
    return update_task(repo, task_id, deadline=None)


def _get_task(repo: TaskRepository, task_id: int) -> Task:
    validate_id(task_id)
    task = repo.find_by_id(task_id)
    if task is None:
        raise NotFoundError(task_id)
    return task


def add_tag(repo: TaskRepository, task_id: int, tag: str) -> Task:
    """Add a tag. Adding an existing tag leaves the task unchanged."""
    tag = (tag or "").strip()
    if not tag:
        raise ValidationError("Tag cannot be empty")
    task = _get_task(repo, task_id)
    if tag in task.tags:
        return task
    return update_task(repo, task_id, tags=[*task.tags, tag])


def remove_tag(repo: TaskRepository, task_id: int, tag: str) -> Task:
    task = _get_task(repo, task_id)
    return update_task(repo, task_id, tags=[t for t in task.tags if t != tag.strip()])


# ============== Queries ==============


def list_tasks(repo: TaskRepository, status: str | Status | None = None) -> list[Task]:
    """All tasks, or those with one status."""
    if status:
        return repo.find_by_status(Status.parse(status))
    return repo.find_all()


def filter_tasks(
    repo: TaskRepository,
    status: str | Status | None = None,
    priority: str | Priority | None = None,
    tag: str | None = None,
    overdue: bool = False,
    due_today: bool = False,
) -> list[Task]:
    """Tasks matching every given criterion."""
    filters = TaskFilters(
        status=Status.parse(status) if status else None,
        priority=Priority.parse(priority) if priority else None,
        tag=tag.strip() if tag and tag.strip() else None,
        overdue=overdue,
        due_today=due_today,
    )
    return repo.find_by_filters(filters)


def search_tasks(
    repo: TaskRepository,
    keyword: str | None = None,
    status: str | Status | None = None,
    limit: int | None = None,
) -> list[Task]:
    """Keyword search, most recently updated first."""
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
        raise ValidationError("Limit must be a non-negative integer")
    criteria = SearchCriteria(
        keyword=keyword,
        status=Status.parse(status) if status else None,
        limit=limit,
    )
    return run_search(repo.find_all(), criteria)


def get_stats(repo: TaskRepository, now: datetime | None = None) -> TaskStats:
    return compute_stats(repo.find_all(), now or datetime.now())


# ============== Import / Export / Reports ==============


@dataclass
class ImportResult:
    """Tally of a bulk import."""

    succeeded: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    created: list[Task] = field(default_factory=list)


def import_tasks(
    repo: TaskRepository,
    path: Path | str,
    fmt: str | ImportFormat = ImportFormat.JSON,
) -> ImportResult:
    """
    Create a task per imported item.

    Unlike every other operation, a failing item does not abort the import;
    it is counted and reported. Store failures still abort.
    """
    fmt = _parse_choice(ImportFormat, fmt, "import format")
    items = load_import_file(path, fmt)

    result = ImportResult()
    for item in items:
        try:
            task = create_task(repo, **item)
        except StoreIOError:
            raise
        except TaskError as e:
            label = item.get("description") or "(no description)"
            logger.warning(f"Failed to import {label!r}: {e}")
            result.failed += 1
            result.errors.append(f"{label}: {e}")
        else:
            result.succeeded += 1
            result.created.append(task)

    logger.info(f"Imported {result.succeeded} tasks ({result.failed} failed)")
    return result


def export_tasks(
    repo: TaskRepository,
    fmt: str | ExportFormat = ExportFormat.JSON,
    status: str | Status | None = None,
    output: Path | str | None = None,
    include_header: bool = True,
) -> str:
    """Render tasks in an export format, writing to output if given."""
    fmt = _parse_choice(ExportFormat, fmt, "export format")
    tasks = list_tasks(repo, status)
    text = exporters.export_tasks(tasks, fmt, include_header=include_header)

    if output:
        path = _write_output(output, text)
        logger.info(f"Exported {len(tasks)} tasks to {path}")
    return text


def _write_output(output: Path | str, text: str) -> Path:
    path = Path(output).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise StoreIOError(f"Cannot write {path}: {e}") from e
    return path


def generate_report(
    repo: TaskRepository,
    kind: str | ReportKind = ReportKind.WEEKLY,
    now: datetime | None = None,
    output: Path | str | None = None,
) -> str:
    """Render a report, writing it to output if given."""
    kind = _parse_choice(ReportKind, kind, "report type")
    text = render_report(kind, repo.find_all(), now or datetime.now())
    if output:
        path = _write_output(output, text)
        logger.info(f"Saved {kind.value} report to {path}")
    return text
