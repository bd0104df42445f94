"""Error types raised by the task tracker.

Every failure the store or the validator can report is a subclass of
``TaskTrackerError`` so callers can catch the whole family at once and
discriminate by class.
"""

from typing import Any


class TaskTrackerError(Exception):
    """Base class for all task tracker errors."""


class ValidationError(TaskTrackerError, ValueError):
    """User input was malformed.

    Also a ``ValueError`` so pydantic field validators report it per field.
    """


class NotFoundError(TaskTrackerError):
    """No task with the given id exists."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class AlreadyCompletedError(TaskTrackerError):
    """The task is already completed."""

    def __init__(self, task: Any) -> None:
        super().__init__("Task is already completed")
        self.task = task


class NotCompletedError(TaskTrackerError):
    """The task is still pending."""

    def __init__(self, task: Any) -> None:
        super().__init__("Task is not completed yet")
        self.task = task


class InvalidImportError(TaskTrackerError):
    """The import payload is not a list of tasks."""


class StorageError(TaskTrackerError):
    """Reading, parsing or writing a task file failed."""
