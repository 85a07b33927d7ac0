"""Report text generation - pure functions, no I/O."""

from collections import Counter
from datetime import datetime, timedelta
from enum import Enum

from .stats import percentage
from .tasks import Priority, Status, Task, filter_overdue


class ReportKind(Enum):
    """Available report types."""

    WEEKLY = "weekly"
    PRODUCTIVITY = "productivity"
    BURN_DOWN = "burn-down"


def progress_bar(percent: int, length: int = 20, fill: str = "█", empty: str = "░") -> str:
    """Fixed-width bar for a 0-100 percentage."""
    filled = round(percent / 100 * length)
    return "[" + fill * filled + empty * (length - filled) + "]"


def format_priority_distribution(tasks: list[Task]) -> str:
    """One line per priority, highest first, with count, share and bar."""
    counts = Counter(t.priority for t in tasks)
    lines = []
    for priority in (Priority.HIGH, Priority.MEDIUM, Priority.LOW):
        count = counts.get(priority, 0)
        share = percentage(count, len(tasks))
        lines.append(
            f"- {priority.value.upper()}: {count} tasks ({share}%) {progress_bar(share)}"
        )
    return "\n".join(lines)


def overdue_days(task: Task, now: datetime) -> int:
    """Whole days past the deadline (0 when none)."""
    if task.deadline is None:
        return 0
    return (now - task.deadline).days


def generate_weekly_report(tasks: list[Task], now: datetime | None = None) -> str:
    """
    Weekly summary: activity in the last 7 days, priorities, overdue work
    and the open high-priority tasks to pick up next.
    """
    now = now or datetime.now()
    week_ago = now - timedelta(days=7)

    new_this_week = [t for t in tasks if t.created_at >= week_ago]
    completed_this_week = [
        t for t in tasks if t.status is Status.DONE and t.updated_at >= week_ago
    ]
    in_progress = [t for t in tasks if t.status is Status.IN_PROGRESS]
    done = sum(1 for t in tasks if t.status is Status.DONE)

    lines = [
        "# Weekly Report",
        "",
        f"Period: {week_ago.date().isoformat()} to {now.date().isoformat()}",
        f"Generated: {now.strftime('%Y-%m-%d %H:%M')}",
        "",
        "## Summary",
        "",
        f"- Total Tasks: {len(tasks)}",
        f"- New This Week: {len(new_this_week)}",
        f"- Completed This Week: {len(completed_this_week)}",
        f"- In Progress: {len(in_progress)}",
        f"- Completion Rate: {percentage(done, len(tasks))}%",
        "",
        "## Tasks by Priority",
        "",
        format_priority_distribution(tasks),
        "",
        "## Overdue Tasks",
        "",
    ]

    overdue = filter_overdue(tasks, now)
    if overdue:
        for t in overdue:
            lines.append(
                f"- **{t.description}** (ID: {t.id}) - Overdue by {overdue_days(t, now)} days"
            )
    else:
        lines.append("No overdue tasks")

    lines += ["", "## Top Priorities for Next Week", ""]
    top = [t for t in tasks if t.priority is Priority.HIGH and t.status is not Status.DONE][:5]
    if top:
        lines += [f"- **{t.description}** (ID: {t.id})" for t in top]
    else:
        lines.append("No high priority tasks remaining")

    return "\n".join(lines) + "\n"


def generate_productivity_report(tasks: list[Task], now: datetime | None = None) -> str:
    """Completion metrics, busiest weekday and priority mix."""
    now = now or datetime.now()
    completed = [t for t in tasks if t.status is Status.DONE]

    durations = [(t.updated_at - t.created_at).total_seconds() / 86400 for t in completed]
    avg_days = sum(durations) / len(durations) if durations else 0.0

    lines = [
        "# Productivity Report",
        "",
        f"Generated: {now.strftime('%Y-%m-%d %H:%M')}",
        "",
        "## Performance Metrics",
        "",
        f"- Total Tasks: {len(tasks)}",
        f"- Completed Tasks: {len(completed)}",
        f"- Completion Rate: {percentage(len(completed), len(tasks))}%",
        f"- Avg. Completion Time: {avg_days:.1f} days",
        "",
        "## Most Productive Period",
        "",
    ]

    if completed:
        by_day = Counter(t.updated_at.strftime("%A") for t in completed)
        day, count = by_day.most_common(1)[0]
        lines.append(f"- Most productive day: **{day}** ({count} tasks)")
        lines.append(f"- Average tasks per day: {len(completed) / 7:.1f}")
    else:
        lines.append("No completed tasks to analyze")

    lines += ["", "## Priority Distribution", "", format_priority_distribution(tasks)]
    return "\n".join(lines) + "\n"


def generate_burn_down(tasks: list[Task], now: datetime | None = None) -> str:
    """Overall progress bar plus completion for each of the last four weeks."""
    now = now or datetime.now()
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status is Status.DONE)
    progress = percentage(completed, total)

    lines = [
        "Burn Down Chart",
        "=" * 60,
        f"Total Tasks: {total}",
        f"Completed: {completed}",
        f"Remaining: {total - completed}",
        f"Progress: {progress}%",
        "",
        progress_bar(progress, length=40),
        "",
        "Last 4 Weeks:",
    ]

    for i in range(3, -1, -1):
        week_end = now - timedelta(days=7 * i)
        week_start = week_end - timedelta(days=7)
        week_tasks = [t for t in tasks if week_start < t.created_at <= week_end]
        week_done = sum(1 for t in week_tasks if t.status is Status.DONE)
        lines.append(
            f"  Week {4 - i}: {len(week_tasks)} tasks, {week_done} completed "
            f"({percentage(week_done, len(week_tasks))}%)"
        )

    return "\n".join(lines) + "\n"


def generate_report(kind: ReportKind, tasks: list[Task], now: datetime | None = None) -> str:
    """Dispatch to the generator for a report kind."""
    generators = {
        ReportKind.WEEKLY: generate_weekly_report,
        ReportKind.PRODUCTIVITY: generate_productivity_report,
        ReportKind.BURN_DOWN: generate_burn_down,
    }
    return generators[kind](tasks, now)
