"""Tests for input validation."""

from datetime import date

import pytest

from tasktracker.constants import Priority
from tasktracker.errors import ValidationError
from tasktracker.models import TaskCreate, TaskUpdate
from tasktracker.validator import (
    validate_date,
    validate_description,
    validate_filename,
    validate_id,
    validate_keyword,
    validate_priority,
    validate_tag,
)


def test_validate_id() -> None:
    """Test parsing numeric ids."""
    assert validate_id("1730710800000") == 1730710800000
    assert validate_id(" 42 ") == 42
    assert validate_id(7) == 7


@pytest.mark.parametrize("value", [None, "", "  "])
def test_validate_id_required(value: object) -> None:
    """Test that a missing id is rejected."""
    with pytest.raises(ValidationError, match="required"):
        validate_id(value)


def test_validate_id_not_a_number() -> None:
    """Test that a non-numeric id is rejected."""
    with pytest.raises(ValidationError, match="must be a number"):
        validate_id("abc")


def test_validate_description_trims() -> None:
    """Test that descriptions are trimmed."""
    assert validate_description("  Buy milk  ") == "Buy milk"


@pytest.mark.parametrize("value", ["", "   ", None])
def test_validate_description_empty(value: object) -> None:
    """Test that empty descriptions are rejected."""
    with pytest.raises(ValidationError, match="cannot be empty"):
        validate_description(value)


def test_validate_description_length_limit() -> None:
    """Test the 500 character limit."""
    assert len(validate_description("x" * 500)) == 500
    with pytest.raises(ValidationError, match="too long"):
        validate_description("x" * 501)


def test_validate_priority() -> None:
    """Test priority normalization."""
    assert validate_priority("HIGH") == Priority.HIGH
    assert validate_priority("low") == Priority.LOW
    assert validate_priority(None) == Priority.MEDIUM
    assert validate_priority("") == Priority.MEDIUM


def test_validate_priority_invalid() -> None:
    """Test that unknown priorities are rejected."""
    with pytest.raises(ValidationError, match="high, medium, low"):
        validate_priority("urgent")


def test_validate_date() -> None:
    """Test due date parsing."""
    assert validate_date("2025-11-10") == date(2025, 11, 10)
    assert validate_date(None) is None
    assert validate_date("") is None


@pytest.mark.parametrize("value", ["10-11-2025", "2025/11/10", "2025-1-1", "tomorrow"])
def test_validate_date_bad_format(value: str) -> None:
    """Test that non YYYY-MM-DD strings are rejected."""
    with pytest.raises(ValidationError, match="format"):
        validate_date(value)


@pytest.mark.parametrize("value", ["2025-02-30", "2025-13-01"])
def test_validate_date_not_a_calendar_date(value: str) -> None:
    """Test that impossible dates are rejected."""
    with pytest.raises(ValidationError, match="Invalid date value"):
        validate_date(value)


def test_validate_tag() -> None:
    """Test tag normalization."""
    assert validate_tag(" Work ") == "work"
    assert validate_tag("side_project-2") == "side_project-2"
    assert validate_tag(None) is None


@pytest.mark.parametrize("value", ["two words", "tag!", "ta.g"])
def test_validate_tag_invalid(value: str) -> None:
    """Test that tags with other characters are rejected."""
    with pytest.raises(ValidationError, match="letters, numbers"):
        validate_tag(value)


def test_validate_keyword_and_filename() -> None:
    """Test keyword and filename trimming and emptiness checks."""
    assert validate_keyword("  bug ") == "bug"
    assert validate_filename(" todos.json ") == "todos.json"

    with pytest.raises(ValidationError):
        validate_keyword("   ")
    with pytest.raises(ValidationError):
        validate_filename("")


def test_task_create_parse() -> None:
    """Test building a validated create payload."""
    data = TaskCreate.parse(
        description=" Fix bug ",
        priority="High",
        due_date="2025-11-10",
        tag="WORK",
    )

    assert data.description == "Fix bug"
    assert data.priority == Priority.HIGH
    assert data.due_date == date(2025, 11, 10)
    assert data.tag == "work"


def test_task_create_defaults() -> None:
    """Test that omitted create fields get their defaults."""
    data = TaskCreate.parse(description="Buy milk", priority=None, due_date=None, tag=None)

    assert data.priority == Priority.MEDIUM
    assert data.due_date is None
    assert data.tag is None


def test_task_create_reports_first_error() -> None:
    """Test that model failures surface as the tracker's ValidationError."""
    with pytest.raises(ValidationError, match="Invalid date format"):
        TaskCreate.parse(description="Buy milk", due_date="soon")


def test_task_update_changes_only_set_fields() -> None:
    """Test that only explicitly given fields are merged."""
    assert TaskUpdate.parse(description="New").changes() == {"description": "New"}


def test_task_update_keeps_clearable_nulls() -> None:
    """Test that due date and tag can be cleared but priority cannot."""
    changes = TaskUpdate(due_date=None, tag=None, priority=None).changes()
    assert changes == {"due_date": None, "tag": None}


def test_task_update_rejects_bad_description() -> None:
    """Test that update payloads are validated too."""
    with pytest.raises(ValidationError, match="cannot be empty"):
        TaskUpdate.parse(description="   ")
