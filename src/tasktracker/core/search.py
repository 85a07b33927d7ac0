"""Keyword search over tasks - pure, no I/O."""

from dataclasses import dataclass

from .tasks import Status, Task


@dataclass
class SearchCriteria:
    """Search input. Every field is optional."""

    keyword: str | None = None
    status: Status | None = None
    limit: int | None = None


def sort_by_recent(tasks: list[Task]) -> list[Task]:
    """Most recently updated first; equal timestamps fall back to id ascending."""
    by_id = sorted(tasks, key=lambda t: t.id)
    return sorted(by_id, key=lambda t: t.updated_at, reverse=True)


def search_tasks(tasks: list[Task], criteria: SearchCriteria) -> list[Task]:
    """
    Case-insensitive substring search on description.

    A missing or blank keyword matches everything. Results are filtered by
    status (if given), sorted by sort_by_recent, then truncated to limit.
    """
    keyword = (criteria.keyword or "").strip().lower()

    results = [
        t
        for t in tasks
        if (not keyword or keyword in t.description.lower())
        and (criteria.status is None or t.status is criteria.status)
    ]
    results = sort_by_recent(results)

    if criteria.limit and criteria.limit > 0:
        results = results[: criteria.limit]
    return results
