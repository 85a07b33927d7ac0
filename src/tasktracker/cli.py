"""Tasktracker CLI - personal task tracking."""

import json
import logging
import sys
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path

import click

from . import workflows
from .adapters.exporters import ExportFormat
from .adapters.importers import ImportFormat
from .config import load_config
from .core.changes import UNSET
from .core.errors import TaskError
from .core.report import ReportKind
from .core.tasks import Priority, Status, Task

STATUS_CHOICE = click.Choice([s.value for s in Status], case_sensitive=False)
PRIORITY_CHOICE = click.Choice([p.value for p in Priority], case_sensitive=False)
CLEAR_WORDS = ("clear", "null", "none")


def _fail(error: object) -> None:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def _repo(ctx: click.Context):
    return ctx.obj["repo"]


def format_task_line(task: Task, today: date | None = None) -> str:
    """One-line summary: id, status, priority, description, deadline, tags."""
    today = today or date.today()
    parts = [f"[{task.id:>3}] {task.status.value:<11} {task.priority.value:<6} {task.description}"]
    if task.deadline:
        days = (task.deadline.date() - today).days
        if task.is_overdue():
            urgency = f"OVERDUE by {-days}d" if days < 0 else "OVERDUE"
        elif days == 0:
            urgency = "due TODAY"
        else:
            urgency = f"due in {days}d"
        parts.append(f"({task.deadline.date().isoformat()}, {urgency})")
    if task.tags:
        parts.append(" ".join(f"#{t}" for t in task.tags))
    return " ".join(parts)


def _show_tasks(tasks: list[Task], as_json: bool, empty_msg: str = "No tasks found.") -> None:
    """Shared task display logic."""
    if as_json:
        click.echo(json.dumps([t.to_record() for t in tasks], indent=2))
        return

    if not tasks:
        click.echo(empty_msg)
        return

    for task in tasks:
        click.echo(format_task_line(task))


@click.group()
@click.version_option(package_name="tasktracker")
@click.option("--file", "tasks_file", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Task file (overrides TASKS_FILE in config)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, tasks_file: Path | None, debug: bool):
    """Tasktracker - track personal tasks from the command line."""
    config = load_config()
    if tasks_file:
        config.tasks_file = tasks_file

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING),
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["repo"] = workflows.get_repository(config)


@main.command()
@click.argument("description")
@click.option("--deadline", "-d", default=None, help="Deadline (YYYY-MM-DD or ISO format)")
@click.option("--priority", "-p", type=PRIORITY_CHOICE, default="medium", show_default=True)
@click.option("--tags", "-t", default=None, help="Comma-separated tags")
@click.pass_context
def add(ctx, description: str, deadline: str | None, priority: str, tags: str | None):
    """Add a new task."""
    try:
        task = workflows.create_task(_repo(ctx), description, deadline, priority, tags)
    except TaskError as e:
        _fail(e)

    click.echo(f"✓ Task added successfully (ID: {task.id})")


@main.command("list")
@click.argument("status", type=STATUS_CHOICE, required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_cmd(ctx, status: str | None, as_json: bool):
    """List tasks, optionally by status."""
    try:
        tasks = workflows.list_tasks(_repo(ctx), status)
    except TaskError as e:
        _fail(e)

    _show_tasks(tasks, as_json)


@main.command("print")
@click.argument("status", type=STATUS_CHOICE, required=False)
@click.pass_context
def print_cmd(ctx, status: str | None):
    """Print tasks as a table."""
    try:
        text = workflows.export_tasks(_repo(ctx), ExportFormat.TABLE, status=status)
    except TaskError as e:
        _fail(e)

    click.echo(text)


@main.command()
@click.argument("task_id", type=int)
@click.argument("description", required=False)
@click.option("--status", "-s", type=STATUS_CHOICE, default=None, help="New status")
@click.option("--deadline", "-d", default=None, help='New deadline ("clear" to remove)')
@click.option("--priority", "-p", type=PRIORITY_CHOICE, default=None, help="New priority")
@click.option("--tags", "-t", default=None, help="Replace tags (comma-separated)")
@click.pass_context
def update(ctx, task_id: int, description: str | None, status: str | None,
           deadline: str | None, priority: str | None, tags: str | None):
    """Update a task's fields."""
    if deadline is None:
        deadline_arg = UNSET
    elif deadline.lower() in CLEAR_WORDS:
        deadline_arg = None
    else:
        deadline_arg = deadline

    if description is None and status is None and priority is None \
            and tags is None and deadline_arg is UNSET:
        _fail("Nothing to update. Give a description or an option.")

    try:
        task = workflows.update_task(
            _repo(ctx),
            task_id,
            description=description,
            status=status,
            priority=priority,
            deadline=deadline_arg,
            tags=tags,
        )
    except TaskError as e:
        _fail(e)

    click.echo(f"✓ Task updated successfully (ID: {task.id})")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def delete(ctx, task_id: int):
    """Delete a task."""
    try:
        workflows.delete_task(_repo(ctx), task_id)
    except TaskError as e:
        _fail(e)

    click.echo(f"✓ Task deleted successfully (ID: {task_id})")


@main.command("mark-in-progress")
@click.argument("task_id", type=int)
@click.pass_context
def mark_in_progress(ctx, task_id: int):
    """Mark a task as in progress."""
    try:
        task = workflows.mark_task(_repo(ctx), task_id, Status.IN_PROGRESS)
    except TaskError as e:
        _fail(e)

    click.echo(f"✓ Task marked as in-progress (ID: {task.id})")


@main.command("mark-done")
@click.argument("task_id", type=int)
@click.pass_context
def mark_done(ctx, task_id: int):
    """Mark a task as done."""
    try:
        task = workflows.mark_task(_repo(ctx), task_id, Status.DONE)
    except TaskError as e:
        _fail(e)

    click.echo(f"✓ Task marked as done (ID: {task.id})")


@main.command("set-priority")
@click.argument("task_id", type=int)
@click.argument("priority", type=PRIORITY_CHOICE)
@click.pass_context
def set_priority(ctx, task_id: int, priority: str):
    """Set task priority."""
    try:
        task = workflows.set_priority(_repo(ctx), task_id, priority)
    except TaskError as e:
        _fail(e)

    click.echo(f"✓ Priority set to {task.priority.value} (ID: {task.id})")


@main.group()
def tag():
    """Manage task tags."""
    pass


@tag.command("add")
@click.argument("task_id", type=int)
@click.argument("name")
@click.pass_context
def tag_add(ctx, task_id: int, name: str):
    """Add a tag to a task."""
    try:
        task = workflows.add_tag(_repo(ctx), task_id, name)
    except TaskError as e:
        _fail(e)

    click.echo(f'✓ Tag "{name.strip()}" added to task (ID: {task.id})')
    click.echo(f"  Current tags: {', '.join(task.tags) or 'none'}")


@tag.command("remove")
@click.argument("task_id", type=int)
@click.argument("name")
@click.pass_context
def tag_remove(ctx, task_id: int, name: str):
    """Remove a tag from a task."""
    try:
        task = workflows.remove_tag(_repo(ctx), task_id, name)
    except TaskError as e:
        _fail(e)

    click.echo(f'✓ Tag "{name.strip()}" removed from task (ID: {task.id})')
    click.echo(f"  Current tags: {', '.join(task.tags) or 'none'}")


@main.command()
@click.argument("task_id", type=int)
@click.argument("when")
@click.pass_context
def deadline(ctx, task_id: int, when: str):
    """Set a deadline (YYYY-MM-DD or ISO), or "clear" it."""
    repo = _repo(ctx)
    try:
        if when.lower() in CLEAR_WORDS:
            task = workflows.clear_deadline(repo, task_id)
        else:
            task = workflows.set_deadline(repo, task_id, when)
    except TaskError as e:
        _fail(e)

    if task.deadline is None:
        click.echo(f"✓ Deadline cleared for task (ID: {task.id})")
        return

    days = (task.deadline.date() - date.today()).days
    click.echo(f"✓ Deadline set for task (ID: {task.id})")
    click.echo(f"  Date: {task.deadline.date().isoformat()}")
    if days < 0:
        click.echo(f"  This task is overdue by {-days} days!")
    elif days == 0:
        click.echo("  This task is due today!")
    elif days <= 3:
        click.echo(f"  This task is due in {days} days")


@main.command("filter")
@click.option("--status", "-s", type=STATUS_CHOICE, default=None)
@click.option("--priority", "-p", type=PRIORITY_CHOICE, default=None)
@click.option("--tag", "-t", default=None)
@click.option("--overdue", "-o", is_flag=True, help="Only overdue tasks")
@click.option("--due-today", "-d", is_flag=True, help="Only tasks due today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def filter_cmd(ctx, status, priority, tag, overdue: bool, due_today: bool, as_json: bool):
    """Filter tasks by several criteria at once."""
    try:
        tasks = workflows.filter_tasks(_repo(ctx), status, priority, tag, overdue, due_today)
    except TaskError as e:
        _fail(e)

    _show_tasks(tasks, as_json, "No tasks match the filters.")


@main.command()
@click.argument("keyword")
@click.option("--status", "-s", type=STATUS_CHOICE, default=None)
@click.option("--limit", "-l", type=click.IntRange(min=0), default=None,
              help="Maximum results (default: SEARCH_LIMIT from config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def search(ctx, keyword: str, status: str | None, limit: int | None, as_json: bool):
    """Search task descriptions by keyword."""
    if limit is None:
        limit = ctx.obj["config"].search_limit
    try:
        tasks = workflows.search_tasks(_repo(ctx), keyword, status, limit)
    except TaskError as e:
        _fail(e)

    _show_tasks(tasks, as_json, f'No tasks matching "{keyword}".')


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def stats(ctx, as_json: bool):
    """Show task statistics."""
    try:
        result = workflows.get_stats(_repo(ctx))
    except TaskError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(asdict(result), indent=2))
        return

    click.echo("Task Statistics")
    click.echo("=" * 40)
    click.echo(f"Total:        {result.total}")
    if result.total == 0:
        click.echo("\nNo tasks found. Add some tasks to see statistics!")
        return
    click.echo(f"Done:         {result.done}")
    click.echo(f"In progress:  {result.in_progress}")
    click.echo(f"Todo:         {result.todo}")
    click.echo(f"Completion:   {result.completion_rate}%")
    click.echo(f"Recent (7d):  {result.recent_tasks}")
    click.echo(f"Stale (>30d): {result.old_tasks}")


@main.command()
@click.argument("status", type=STATUS_CHOICE, required=False)
@click.option("--format", "-f", "fmt", type=click.Choice([f.value for f in ExportFormat]),
              default="json", show_default=True)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write to a file instead of stdout")
@click.option("--header/--no-header", default=True, help="Include the CSV header row")
@click.pass_context
def export(ctx, status: str | None, fmt: str, output: Path | None, header: bool):
    """Export tasks as JSON, CSV, Markdown or a table."""
    try:
        text = workflows.export_tasks(_repo(ctx), fmt, status, output, header)
    except TaskError as e:
        _fail(e)

    if output:
        click.echo(f"✓ Exported tasks to {output} ({fmt})")
    else:
        click.echo(text)


@main.command("import")
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--format", "-f", "fmt", type=click.Choice([f.value for f in ImportFormat]),
              default="json", show_default=True)
@click.pass_context
def import_cmd(ctx, file: Path, fmt: str):
    """Import tasks from a JSON or CSV file."""
    try:
        result = workflows.import_tasks(_repo(ctx), file, fmt)
    except TaskError as e:
        _fail(e)

    if result.succeeded == 0 and result.failed == 0:
        click.echo("No tasks found in import file.")
        return

    for error in result.errors:
        click.echo(f"  ✗ Failed to import: {error}", err=True)
    click.echo("✓ Import completed:")
    click.echo(f"  Success: {result.succeeded} tasks")
    if result.failed:
        click.echo(f"  Failed: {result.failed} tasks")


@main.command()
@click.option("--type", "-t", "kind", type=click.Choice([k.value for k in ReportKind]),
              default="weekly", show_default=True)
@click.option("--output", "-o", type=click.Choice(["console", "file"]), default="console",
              show_default=True)
@click.pass_context
def report(ctx, kind: str, output: str):
    """Generate a weekly, productivity or burn-down report."""
    repo = _repo(ctx)
    path = None
    if output == "file":
        path = Path.cwd() / f"task-report-{kind}-{datetime.now().date().isoformat()}.md"
    try:
        if not repo.find_all():
            click.echo("No tasks available for reporting.")
            return
        text = workflows.generate_report(repo, kind, output=path)
    except TaskError as e:
        _fail(e)

    if path:
        click.echo(f"✓ Report saved to {path}")
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
