"""Tests for inline task input parsing and date helpers."""

from datetime import date, timedelta

import pytest

from tasktracker.constants import Priority
from tasktracker.errors import ValidationError
from tasktracker.parser import current_date, is_overdue, parse_task_input


def test_parse_plain_description() -> None:
    """Test that text without flags becomes the description."""
    data = parse_task_input("  Buy groceries  ")

    assert data.description == "Buy groceries"
    assert data.priority == Priority.MEDIUM
    assert data.due_date is None
    assert data.tag is None


def test_parse_all_flags() -> None:
    """Test extracting priority, due date and tag."""
    data = parse_task_input("Fix bug --priority HIGH --due 2025-11-10 --tag Work")

    assert data.description == "Fix bug"
    assert data.priority == Priority.HIGH
    assert data.due_date == date(2025, 11, 10)
    assert data.tag == "work"


def test_parse_flags_in_the_middle() -> None:
    """Test that flags can appear anywhere in the text."""
    data = parse_task_input("Call --tag family mom tonight")

    assert data.description == "Call mom tonight"
    assert data.tag == "family"


def test_parse_invalid_date_value() -> None:
    """Test that a well-formed but impossible date is rejected."""
    with pytest.raises(ValidationError, match="Invalid date value"):
        parse_task_input("Pay rent --due 2025-02-30")


def test_parse_only_flags() -> None:
    """Test that a description is still required."""
    with pytest.raises(ValidationError, match="cannot be empty"):
        parse_task_input("--priority low")


def test_current_date_format() -> None:
    """Test that the current date is an ISO date string."""
    assert current_date() == date.today().isoformat()


def test_is_overdue() -> None:
    """Test overdue detection for pending and completed tasks."""
    yesterday = date.today() - timedelta(days=1)
    tomorrow = date.today() + timedelta(days=1)

    assert is_overdue(yesterday, completed=False) is True
    assert is_overdue(yesterday.isoformat(), completed=False) is True
    assert is_overdue(yesterday, completed=True) is False
    assert is_overdue(tomorrow, completed=False) is False
    assert is_overdue(date.today(), completed=False) is False
    assert is_overdue(None, completed=False) is False
