"""Input validation for values coming from the command line.

Each ``validate_*`` function returns the normalized value or raises
``ValidationError``. The store trusts its callers, so everything user
supplied passes through here first.
"""

import re
from datetime import date
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from tasktracker.constants import (
    DATE_PATTERN,
    MAX_DESCRIPTION_LENGTH,
    MIN_DESCRIPTION_LENGTH,
    TAG_PATTERN,
    Priority,
)
from tasktracker.errors import ValidationError

_DATE_RE = re.compile(DATE_PATTERN)
_TAG_RE = re.compile(TAG_PATTERN)


def validate_id(value: Any) -> int:
    """Parse a task id."""
    if value is None or str(value).strip() == "":
        raise ValidationError("Task ID is required")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError("Invalid task ID! ID must be a number") from None


def validate_description(value: Any) -> str:
    """Trim a description and check its length."""
    if not isinstance(value, str) or value.strip() == "":
        raise ValidationError("Task description cannot be empty")

    trimmed = value.strip()
    if len(trimmed) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError("Task description is too short")
    if len(trimmed) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Task description is too long (max: {MAX_DESCRIPTION_LENGTH} characters)"
        )
    return trimmed


def validate_priority(value: Any) -> Priority:
    """Normalize a priority name, defaulting to medium when empty."""
    if not value:
        return Priority.MEDIUM
    if isinstance(value, Priority):
        return value

    try:
        return Priority(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in Priority)
        raise ValidationError(f"Invalid priority! Must be one of: {allowed}") from None


def validate_date(value: Any) -> date | None:
    """Parse a ``YYYY-MM-DD`` due date; empty means no due date."""
    if not value:
        return None
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not _DATE_RE.match(text):
        raise ValidationError("Invalid date format! Use YYYY-MM-DD")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError("Invalid date value") from None


def validate_tag(value: Any) -> str | None:
    """Lowercase a tag and check its characters; empty means no tag."""
    if not value:
        return None

    normalized = str(value).strip().lower()
    if not _TAG_RE.match(normalized):
        raise ValidationError(
            "Tag must contain only letters, numbers, hyphens, or underscores"
        )
    return normalized


def validate_keyword(value: Any) -> str:
    """Trim a search keyword, rejecting an empty one."""
    if not isinstance(value, str) or value.strip() == "":
        raise ValidationError("Search keyword cannot be empty")
    return value.strip()


def validate_filename(value: Any) -> str:
    """Trim an import or export filename, rejecting an empty one."""
    if not isinstance(value, str) or value.strip() == "":
        raise ValidationError("Filename cannot be empty")
    return value.strip()


def describe_error(exc: PydanticValidationError) -> ValidationError:
    """Turn a pydantic failure into a single readable ``ValidationError``."""
    error = exc.errors()[0]
    cause = error.get("ctx", {}).get("error")
    if isinstance(cause, ValidationError):
        return ValidationError(str(cause))

    field = ".".join(str(part) for part in error["loc"])
    return ValidationError(f"{field}: {error['msg']}")
