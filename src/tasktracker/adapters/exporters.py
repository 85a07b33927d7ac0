"""Task export formats: JSON, CSV, Markdown and plain table text."""

import csv
import io
import json
from datetime import datetime
from enum import Enum

from tasktracker.core.tasks import Status, Task

CSV_HEADERS = ["ID", "Description", "Status", "Priority", "Deadline", "Tags", "Created", "Updated"]


class ExportFormat(Enum):
    JSON = "json"
    CSV = "csv"
    MARKDOWN = "markdown"
    TABLE = "table"


def export_json(tasks: list[Task]) -> str:
    """Same record shape as the task store."""
    return json.dumps([t.to_record() for t in tasks], indent=2, ensure_ascii=False)


def export_csv(tasks: list[Task], include_header: bool = True) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    if include_header:
        writer.writerow(CSV_HEADERS)
    for t in tasks:
        writer.writerow(
            [
                t.id,
                t.description,
                t.status.value,
                t.priority.value,
                t.deadline.date().isoformat() if t.deadline else "",
                ";".join(t.tags),
                t.created_at.isoformat(),
                t.updated_at.isoformat(),
            ]
        )
    return buf.getvalue()


def _md_cell(text: str) -> str:
    return text.replace("|", "\\|")


def export_markdown(tasks: list[Task], now: datetime | None = None) -> str:
    """Markdown report with one table per status."""
    now = now or datetime.now()
    lines = [
        "# Task Report",
        "",
        f"Generated: {now.strftime('%Y-%m-%d %H:%M')}",
        f"Total Tasks: {len(tasks)}",
        "",
    ]

    for status in Status:
        group = [t for t in tasks if t.status is status]
        lines.append(f"## {status.value.upper()} ({len(group)})")
        lines.append("")
        if not group:
            lines.append("No tasks")
            lines.append("")
            continue

        lines.append("| ID | Description | Priority | Deadline | Tags |")
        lines.append("|----|-------------|----------|----------|------|")
        for t in group:
            deadline = t.deadline.date().isoformat() if t.deadline else "-"
            tags = ", ".join(t.tags) or "-"
            lines.append(
                f"| {t.id} | {_md_cell(t.description)} | {t.priority.value} | {deadline} | {_md_cell(tags)} |"
            )
        lines.append("")

    return "\n".join(lines)


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def format_table(tasks: list[Task]) -> str:
    """Fixed-width text table."""
    widths = (4, 32, 12, 8, 12)
    headers = ("ID", "Description", "Status", "Priority", "Deadline")
    rule = "-" * (sum(widths) + 3 * (len(widths) - 1))

    def row(cells) -> str:
        return " | ".join(f"{c:<{w}}" for c, w in zip(cells, widths))

    lines = [rule, row(headers), rule]
    for t in tasks:
        deadline = t.deadline.date().isoformat() if t.deadline else "-"
        lines.append(
            row(
                (
                    str(t.id),
                    truncate(t.description, widths[1]),
                    t.status.value,
                    t.priority.value,
                    deadline,
                )
            )
        )
    lines.append(rule)
    lines.append(f"Total: {len(tasks)} tasks")
    return "\n".join(lines)


def export_tasks(
    tasks: list[Task],
    fmt: ExportFormat,
    include_header: bool = True,
    now: datetime | None = None,
) -> str:
    """Render tasks in the requested format."""
    match fmt:
        case ExportFormat.JSON:
            return export_json(tasks)
        case ExportFormat.CSV:
            return export_csv(tasks, include_header)
        case ExportFormat.MARKDOWN:
            return export_markdown(tasks, now)
        case ExportFormat.TABLE:
            return format_table(tasks)
