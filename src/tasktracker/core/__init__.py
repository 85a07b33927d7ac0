"""Functional core - pure business logic with no I/O."""

from .errors import NotFoundError, StoreIOError, TaskError, ValidationError
from .tasks import (
    Priority,
    Status,
    Task,
    TaskFilters,
    apply_filters,
    filter_due_today,
    filter_overdue,
    next_id,
    normalize_tags,
    parse_deadline,
)
from .changes import UNSET, TaskCreate, TaskUpdate
from .search import SearchCriteria, search_tasks, sort_by_recent
from .stats import TaskStats, compute_stats
from .report import ReportKind, generate_report

__all__ = [
    # Errors
    "TaskError",
    "ValidationError",
    "NotFoundError",
    "StoreIOError",
    # Tasks
    "Task",
    "Status",
    "Priority",
    "TaskFilters",
    "apply_filters",
    "filter_overdue",
    "filter_due_today",
    "next_id",
    "normalize_tags",
    "parse_deadline",
    # Payloads
    "TaskCreate",
    "TaskUpdate",
    "UNSET",
    # Search
    "SearchCriteria",
    "search_tasks",
    "sort_by_recent",
    # Stats
    "TaskStats",
    "compute_stats",
    # Reports
    "ReportKind",
    "generate_report",
]
