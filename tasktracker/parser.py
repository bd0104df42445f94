"""Parsing helpers for free-text task input and dates."""

import re
from datetime import date

from tasktracker.models import TaskCreate

_PRIORITY_FLAG = re.compile(r"--priority\s+(high|medium|low)", re.IGNORECASE)
_DUE_FLAG = re.compile(r"--due\s+(\d{4}-\d{2}-\d{2})")
_TAG_FLAG = re.compile(r"--tag\s+(\w+)", re.IGNORECASE)


def parse_task_input(text: str) -> TaskCreate:
    """Extract inline ``--priority``, ``--due`` and ``--tag`` flags from ``text``.

    The flags are removed from the description; whatever is left becomes the
    task description. All values are validated.
    """
    description = text.strip()
    fields: dict[str, str | None] = {"priority": None, "due_date": None, "tag": None}

    for key, pattern in (("priority", _PRIORITY_FLAG), ("due_date", _DUE_FLAG), ("tag", _TAG_FLAG)):
        match = pattern.search(description)
        if match:
            fields[key] = match.group(1)
            description = (description[: match.start()] + description[match.end() :]).strip()

    description = re.sub(r"\s{2,}", " ", description)
    return TaskCreate.parse(description=description, **fields)


def current_date() -> str:
    """Today's date as ``YYYY-MM-DD``."""
    return date.today().isoformat()


def is_overdue(due_date: date | str | None, completed: bool) -> bool:
    """True when a pending task's due date lies before today."""
    if not due_date or completed:
        return False
    if isinstance(due_date, str):
        return due_date < current_date()
    return due_date < date.today()
