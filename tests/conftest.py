"""Pytest fixtures for the task tracker tests."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from tasktracker.store import TaskStore

from .fakes import InMemoryStorage


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """A clock that advances one second on every call."""
    current = datetime(2025, 11, 4, 9, 0, tzinfo=UTC)

    def tick() -> datetime:
        nonlocal current
        current += timedelta(seconds=1)
        return current

    return tick


@pytest.fixture
def storage() -> InMemoryStorage:
    """Create an empty in-memory storage."""
    return InMemoryStorage()


@pytest.fixture
def store(storage: InMemoryStorage, clock: Callable[[], datetime]) -> TaskStore:
    """Create a task store backed by the in-memory storage."""
    return TaskStore(storage, clock=clock)
