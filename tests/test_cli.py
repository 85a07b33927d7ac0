"""Tests for the click command line."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from tasktracker.cli import main
from tasktracker.config import Config


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    config = Config(tasks_file=tmp_path / "tasks.json")

    def invoke(*args):
        with patch("tasktracker.cli.load_config", return_value=config):
            return runner.invoke(main, list(args))

    return invoke


def add(run, *args):
    result = run("add", *args)
    assert result.exit_code == 0, result.output
    return result


class TestAdd:
    def test_prints_id(self, run, tmp_path):
        result = add(run, "Buy milk")
        assert "Task added successfully (ID: 1)" in result.output
        records = json.loads((tmp_path / "tasks.json").read_text())
        assert records[0]["description"] == "Buy milk"

    def test_options(self, run):
        add(run, "Report", "-d", "2099-01-01", "-p", "high", "-t", "work,q1")
        data = json.loads(run("list", "--json").output)
        assert data[0]["priority"] == "high"
        assert data[0]["tags"] == ["work", "q1"]
        assert data[0]["deadline"].startswith("2099-01-01")

    def test_empty_description_fails(self, run):
        result = run("add", "   ")
        assert result.exit_code == 1
        assert "Error: Task description cannot be empty" in result.output

    def test_bad_deadline_fails(self, run):
        result = run("add", "A", "-d", "tomorrowish")
        assert result.exit_code == 1
        assert "Invalid deadline" in result.output


class TestList:
    def test_empty(self, run):
        assert "No tasks found." in run("list").output

    def test_by_status(self, run):
        add(run, "A")
        add(run, "B")
        run("mark-done", "2")
        output = run("list", "done").output
        assert "B" in output
        assert "[  1]" not in output

    def test_print_table(self, run):
        add(run, "A")
        assert "Total: 1 tasks" in run("print").output


class TestUpdate:
    def test_description_and_priority(self, run):
        add(run, "A")
        result = run("update", "1", "Renamed", "-p", "low")
        assert result.exit_code == 0
        task = json.loads(run("list", "--json").output)[0]
        assert (task["description"], task["priority"]) == ("Renamed", "low")

    def test_clear_deadline(self, run):
        add(run, "A", "-d", "2099-01-01")
        run("update", "1", "-d", "clear")
        assert json.loads(run("list", "--json").output)[0]["deadline"] is None

    def test_empty_deadline_rejected(self, run):
        add(run, "A", "-d", "2099-01-01")
        result = run("update", "1", "-d", "")
        assert result.exit_code == 1
        assert "Deadline cannot be empty" in result.output
        assert json.loads(run("list", "--json").output)[0]["deadline"].startswith("2099-01-01")

    def test_nothing_to_update(self, run):
        add(run, "A")
        result = run("update", "1")
        assert result.exit_code == 1
        assert "Nothing to update" in result.output

    def test_missing_task(self, run):
        result = run("update", "7", "x")
        assert result.exit_code == 1
        assert "Task with ID 7 not found" in result.output


class TestDelete:
    def test_delete(self, run):
        add(run, "A")
        assert run("delete", "1").exit_code == 0
        assert "No tasks found." in run("list").output

    def test_delete_missing(self, run):
        result = run("delete", "999")
        assert result.exit_code == 1
        assert "Error: Task with ID 999 not found" in result.output


class TestMark:
    def test_in_progress_then_done(self, run):
        add(run, "A")
        assert "in-progress" in run("mark-in-progress", "1").output
        run("mark-done", "1")
        assert json.loads(run("list", "--json").output)[0]["status"] == "done"

    def test_invalid_id(self, run):
        result = run("mark-done", "0")
        assert result.exit_code == 1
        assert "Invalid task ID" in result.output


class TestTagsAndDeadline:
    def test_tag_add_remove(self, run):
        add(run, "A")
        run("tag", "add", "1", "work")
        result = run("tag", "add", "1", "work")
        assert "Current tags: work" in result.output
        result = run("tag", "remove", "1", "work")
        assert "Current tags: none" in result.output

    def test_deadline_set_and_clear(self, run):
        add(run, "A")
        assert "Date: 2099-01-01" in run("deadline", "1", "2099-01-01").output
        assert "Deadline cleared" in run("deadline", "1", "clear").output

    def test_set_priority(self, run):
        add(run, "A")
        assert "Priority set to high" in run("set-priority", "1", "HIGH").output


class TestQueries:
    def test_filter(self, run):
        add(run, "A", "-t", "work")
        add(run, "B", "-t", "home", "-p", "high")
        data = json.loads(run("filter", "-p", "high", "--json").output)
        assert [t["id"] for t in data] == [2]
        assert "No tasks match" in run("filter", "-t", "gym").output

    def test_search(self, run):
        add(run, "Weekly report")
        add(run, "Groceries")
        data = json.loads(run("search", "REPORT", "--json").output)
        assert [t["description"] for t in data] == ["Weekly report"]

    def test_search_ignores_negative_configured_limit(self, tmp_path):
        conf = tmp_path / "tasktracker.conf"
        conf.write_text("SEARCH_LIMIT = -1\n")
        tasks = str(tmp_path / "tasks.json")
        runner = CliRunner()
        with patch("tasktracker.config.CONFIG_FILE", conf):
            runner.invoke(main, ["--file", tasks, "add", "Weekly report"])
            result = runner.invoke(main, ["--file", tasks, "search", "report"])
        assert result.exit_code == 0, result.output
        assert "Weekly report" in result.output

    def test_search_negative_limit_rejected(self, run):
        assert run("search", "x", "-l", "-1").exit_code == 2

    def test_stats(self, run):
        for d in ("A", "B", "C"):
            add(run, d)
        run("mark-done", "2")
        data = json.loads(run("stats", "--json").output)
        assert data["total"] == 3
        assert data["completion_rate"] == 33

    def test_stats_empty(self, run):
        assert "No tasks found" in run("stats").output


class TestImportExport:
    def test_export_csv(self, run):
        add(run, "A")
        output = run("export", "-f", "csv").output
        assert output.startswith("ID,Description")

    def test_export_to_file(self, run, tmp_path):
        add(run, "A")
        target = tmp_path / "out.md"
        result = run("export", "-f", "markdown", "-o", str(target))
        assert "Exported tasks" in result.output
        assert target.read_text().startswith("# Task Report")

    def test_import(self, run, tmp_path):
        source = tmp_path / "in.json"
        source.write_text(json.dumps([{"description": "A"}, {"description": ""}]))
        result = run("import", str(source))
        assert result.exit_code == 0
        assert "Success: 1 tasks" in result.output
        assert "Failed: 1 tasks" in result.output

    def test_import_missing_file(self, run, tmp_path):
        result = run("import", str(tmp_path / "nope.json"))
        assert result.exit_code == 1
        assert "File not found" in result.output


class TestReport:
    def test_no_tasks(self, run):
        assert "No tasks available for reporting." in run("report").output

    def test_file_write_failure(self, run):
        add(run, "A")
        with patch("pathlib.Path.write_text", side_effect=OSError("read-only")):
            result = run("report", "-o", "file")
        assert result.exit_code == 1
        assert "Error: Cannot write" in result.output

    def test_burn_down(self, run):
        add(run, "A")
        assert run("report", "-t", "burn-down").output.startswith("Burn Down Chart")


def test_corrupt_store_reports_error(run, tmp_path):
    (tmp_path / "tasks.json").write_text("{broken")
    result = run("list")
    assert result.exit_code == 1
    assert "Error:" in result.output
