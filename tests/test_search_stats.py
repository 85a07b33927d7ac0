"""Tests for keyword search and statistics."""

from datetime import timedelta

import pytest

from tasktracker.core.search import SearchCriteria, search_tasks, sort_by_recent
from tasktracker.core.stats import TaskStats, compute_stats, percentage
from tasktracker.core.tasks import Status, Task


def make_task(task_id, description, now, status=Status.TODO, created_days_ago=0, updated_days_ago=0):
    return Task(
        id=task_id,
        description=description,
        status=status,
        created_at=now - timedelta(days=created_days_ago),
        updated_at=now - timedelta(days=updated_days_ago),
    )


class TestSearch:
    @pytest.fixture
    def tasks(self, now):
        return [
            make_task(1, "Weekly report", now, created_days_ago=5, updated_days_ago=2),
            make_task(2, "Old REPORT draft", now, status=Status.DONE, created_days_ago=5, updated_days_ago=1),
            make_task(3, "Groceries", now, created_days_ago=5, updated_days_ago=0),
        ]

    def test_case_insensitive_substring(self, tasks):
        results = search_tasks(tasks, SearchCriteria(keyword="report"))
        assert [t.id for t in results] == [2, 1]

    def test_keyword_is_trimmed(self, tasks):
        results = search_tasks(tasks, SearchCriteria(keyword="  groceries "))
        assert [t.id for t in results] == [3]

    def test_status_filter(self, tasks):
        results = search_tasks(tasks, SearchCriteria(keyword="report", status=Status.TODO))
        assert [t.id for t in results] == [1]

    def test_no_keyword_sorts_everything(self, tasks):
        results = search_tasks(tasks, SearchCriteria())
        assert [t.id for t in results] == [3, 2, 1]

    def test_blank_keyword_means_no_keyword(self, tasks):
        results = search_tasks(tasks, SearchCriteria(keyword="   ", status=Status.DONE))
        assert [t.id for t in results] == [2]

    def test_limit(self, tasks):
        results = search_tasks(tasks, SearchCriteria(keyword="report", limit=1))
        assert [t.id for t in results] == [2]

    def test_zero_limit_means_unlimited(self, tasks):
        assert len(search_tasks(tasks, SearchCriteria(limit=0))) == 3

    def test_tie_breaks_by_id(self, now):
        tasks = [
            make_task(5, "Old report", now),
            make_task(2, "Weekly report", now),
            make_task(9, "Groceries", now),
        ]
        results = search_tasks(tasks, SearchCriteria(keyword="report", limit=1))
        assert [t.id for t in results] == [2]

    def test_sort_by_recent_does_not_mutate(self, tasks):
        original = list(tasks)
        sort_by_recent(tasks)
        assert tasks == original


class TestPercentage:
    def test_zero_total(self):
        assert percentage(0, 0) == 0

    def test_rounds_half_up(self):
        assert percentage(1, 8) == 13  # 12.5
        assert percentage(1, 3) == 33


class TestStats:
    def test_empty_collection(self, now):
        stats = compute_stats([], now)
        assert stats == TaskStats()
        assert stats.completion_rate == 0

    def test_counts_and_rate(self, now):
        tasks = [
            make_task(1, "A", now),
            make_task(2, "B", now, status=Status.DONE),
            make_task(3, "C", now),
        ]
        stats = compute_stats(tasks, now)
        assert (stats.total, stats.todo, stats.in_progress, stats.done) == (3, 2, 0, 1)
        assert stats.completion_rate == 33

    def test_recent_window_is_inclusive(self, now):
        tasks = [
            make_task(1, "edge", now, created_days_ago=7),
            make_task(2, "older", now, created_days_ago=8),
        ]
        assert compute_stats(tasks, now).recent_tasks == 1

    def test_old_tasks_excludes_done(self, now):
        tasks = [
            make_task(1, "stale", now, created_days_ago=40, updated_days_ago=30),
            make_task(2, "stale done", now, status=Status.DONE, created_days_ago=40, updated_days_ago=35),
            make_task(3, "fresh", now, created_days_ago=40, updated_days_ago=29),
        ]
        assert compute_stats(tasks, now).old_tasks == 1
