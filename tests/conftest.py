"""Shared fixtures."""

from datetime import datetime, timedelta

import pytest

from tasktracker.adapters.json_repository import JsonTaskRepository
from tasktracker.adapters.json_store import JsonFileStore


class FakeClock:
    """Settable clock for repositories."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0, 0)


@pytest.fixture
def clock(now):
    return FakeClock(now)


@pytest.fixture
def tasks_file(tmp_path):
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def store(tasks_file):
    return JsonFileStore(tasks_file)


@pytest.fixture
def repo(store, clock):
    return JsonTaskRepository(store, clock=clock)
