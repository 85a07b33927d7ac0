"""Task statistics - pure aggregation over a task list."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from .tasks import Status, Task

RECENT_WINDOW = timedelta(days=7)
STALE_WINDOW = timedelta(days=30)


@dataclass
class TaskStats:
    """Counts and rates for a task collection."""

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0
    completion_rate: int = 0
    recent_tasks: int = 0
    old_tasks: int = 0


def percentage(count: int, total: int) -> int:
    """Whole-number percentage rounded half up; 0 when total is 0."""
    if total == 0:
        return 0
    return math.floor(count / total * 100 + 0.5)


def compute_stats(tasks: list[Task], now: datetime | None = None) -> TaskStats:
    """
    Aggregate status counts, completion rate and activity windows.

    recent_tasks: created within the last 7 days.
    old_tasks: not done and untouched for 30 days or more.
    """
    if not tasks:
        return TaskStats()

    now = now or datetime.now()
    recent_cutoff = now - RECENT_WINDOW
    stale_cutoff = now - STALE_WINDOW

    done = sum(1 for t in tasks if t.status is Status.DONE)
    return TaskStats(
        total=len(tasks),
        todo=sum(1 for t in tasks if t.status is Status.TODO),
        in_progress=sum(1 for t in tasks if t.status is Status.IN_PROGRESS),
        done=done,
        completion_rate=percentage(done, len(tasks)),
        recent_tasks=sum(1 for t in tasks if t.created_at >= recent_cutoff),
        old_tasks=sum(
            1 for t in tasks if t.updated_at <= stale_cutoff and t.status is not Status.DONE
        ),
    )
