"""Task store: business rules over the persisted task collection.

Every operation loads the full collection from storage, works on it in
memory and, when it mutates anything, writes the collection back once.
Records the operation did not touch are written back exactly as they
were read. Nothing is cached between calls.
"""

import time
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, date, datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from tasktracker.constants import MOTIVATIONAL_MESSAGES, MotivationTier, Priority
from tasktracker.errors import (
    AlreadyCompletedError,
    InvalidImportError,
    NotCompletedError,
    NotFoundError,
    StorageError,
)
from tasktracker.models import (
    ClearResult,
    ImportResult,
    Stats,
    Task,
    TaskUpdate,
    UpdateResult,
)
from tasktracker.storage import Record, Storage
from tasktracker.validator import describe_error


def _utc_now() -> datetime:
    return datetime.now(UTC)


def completion_percentage(completed: int, total: int) -> int:
    """Share of completed tasks as a whole percent, rounded half up."""
    if total == 0:
        return 0
    return (completed * 200 + total) // (2 * total)


def motivation_tier(percentage: int) -> MotivationTier:
    """Map a completion percentage onto its progress tier."""
    if percentage == 100:
        return MotivationTier.PERFECT
    if percentage >= 75:
        return MotivationTier.GREAT
    if percentage >= 50:
        return MotivationTier.HALFWAY
    if percentage >= 25:
        return MotivationTier.GOOD_START
    if percentage > 0:
        return MotivationTier.JUST_STARTED
    return MotivationTier.BEGIN


class TaskStore:
    """Owns the task collection for one command invocation."""

    def __init__(self, storage: Storage, clock: Callable[[], datetime] = _utc_now) -> None:
        """Initialize the store on top of ``storage``."""
        self._storage = storage
        self._clock = clock

    # ---- persistence helpers ----

    def _read(self) -> tuple[list[Record], list[Task]]:
        # Raw records and their parsed tasks, index-aligned.
        records = self._storage.read()
        try:
            tasks = [Task.model_validate(record) for record in records]
        except PydanticValidationError as exc:
            raise StorageError(f"Failed to read data: malformed task record ({exc})") from exc
        return records, tasks

    def _load(self) -> list[Task]:
        return self._read()[1]

    def _save(self, records: list[Record]) -> None:
        self._storage.write(records)

    def _next_id(self, tasks: list[Task]) -> int:
        # Millisecond timestamp, bumped past existing ids so it never collides.
        now_ms = time.time_ns() // 1_000_000
        return max([now_ms, *(task.id + 1 for task in tasks)])

    @staticmethod
    def _index_of(tasks: list[Task], task_id: int) -> int:
        for index, task in enumerate(tasks):
            if task.id == task_id:
                return index
        raise NotFoundError(task_id)

    # ---- queries ----

    def get_all(self) -> list[Task]:
        """Return all tasks in storage order."""
        return self._load()

    def get_by_id(self, task_id: int) -> Task:
        """Return the task with ``task_id`` or raise ``NotFoundError``."""
        tasks = self._load()
        return tasks[self._index_of(tasks, task_id)]

    def filter(
        self,
        *,
        completed: bool | None = None,
        pending: bool | None = None,
        priority: Priority | str | None = None,
        tag: str | None = None,
    ) -> list[Task]:
        """Return tasks matching every given criterion.

        ``completed`` wins over ``pending`` when both are set. ``priority``
        and ``tag`` are exact matches against the stored values.
        """
        tasks = self._load()

        if completed:
            tasks = [t for t in tasks if t.completed]
        elif pending:
            tasks = [t for t in tasks if not t.completed]

        if priority:
            tasks = [t for t in tasks if t.priority == priority]

        if tag:
            tasks = [t for t in tasks if t.tag == tag]

        return tasks

    def search(self, keyword: str) -> list[Task]:
        """Case-insensitive substring search over description and tag."""
        term = keyword.lower()
        return [
            t
            for t in self._load()
            if term in t.description.lower() or (t.tag is not None and term in t.tag.lower())
        ]

    def get_stats(self) -> Stats:
        """Summarize completion progress across the collection."""
        tasks = self._load()
        total = len(tasks)
        completed = sum(1 for t in tasks if t.completed)
        percentage = completion_percentage(completed, total)
        tier = motivation_tier(percentage)
        return Stats(
            total=total,
            completed=completed,
            pending=total - completed,
            percentage=percentage,
            tier=tier,
            motivational_message=MOTIVATIONAL_MESSAGES[tier],
        )

    def export(self) -> list[Task]:
        """Return the collection for writing to an export file."""
        return self.get_all()

    # ---- mutations ----

    def create(
        self,
        description: str,
        priority: Priority | str | None = None,
        due_date: date | None = None,
        tag: str | None = None,
    ) -> Task:
        """Create a new task and return it.

        Inputs are expected to be validated already; only the priority
        default is applied here.
        """
        records, tasks = self._read()
        task = Task(
            id=self._next_id(tasks),
            description=description,
            completed=False,
            priority=priority or Priority.MEDIUM,
            due_date=due_date,
            tag=tag,
            created_at=self._clock(),
        )
        records.append(task.to_record())
        self._save(records)
        return task

    def update(self, task_id: int, changes: TaskUpdate) -> UpdateResult:
        """Merge ``changes`` onto a task and refresh its ``updated_at``.

        Only the updated task's record is re-serialized.
        """
        records, tasks = self._read()
        index = self._index_of(tasks, task_id)

        old = tasks[index]
        update_data = changes.changes()
        update_data["updated_at"] = self._clock()
        updated = old.model_copy(update=update_data)

        records[index] = updated.to_record()
        self._save(records)
        return UpdateResult(old=old, updated=updated)

    def delete(self, task_id: int) -> Task:
        """Remove a task and return it."""
        records, tasks = self._read()
        index = self._index_of(tasks, task_id)
        del records[index]
        self._save(records)
        return tasks[index]

    def complete(self, task_id: int) -> UpdateResult:
        """Mark a pending task as completed."""
        task = self.get_by_id(task_id)
        if task.completed:
            raise AlreadyCompletedError(task)
        return self.update(task_id, TaskUpdate(completed=True, completed_at=self._clock()))

    def uncomplete(self, task_id: int) -> UpdateResult:
        """Move a completed task back to pending, dropping ``completed_at``."""
        task = self.get_by_id(task_id)
        if not task.completed:
            raise NotCompletedError(task)
        return self.update(task_id, TaskUpdate(completed=False, completed_at=None))

    def clear_completed(self) -> ClearResult:
        """Delete every completed task."""
        records, tasks = self._read()
        remaining = [record for record, task in zip(records, tasks) if not task.completed]
        self._save(remaining)
        return ClearResult(cleared=len(records) - len(remaining), remaining=len(remaining))

    def import_tasks(self, tasks: Any) -> ImportResult:
        """Append ``tasks`` to the collection as given.

        The payload must be a list of task objects. Every item must parse
        as a task, otherwise nothing is written. Accepted records are
        stored verbatim, unknown keys included, and are not de-duplicated
        against existing ids.
        """
        if isinstance(tasks, (str, bytes, Mapping)) or not isinstance(tasks, Sequence):
            raise InvalidImportError("Import data must be an array of tasks")

        incoming: list[Record] = []
        for position, item in enumerate(tasks):
            if isinstance(item, Task):
                incoming.append(item.to_record())
            elif isinstance(item, Mapping):
                try:
                    Task.model_validate(item)
                except PydanticValidationError as exc:
                    raise InvalidImportError(
                        f"Import data contains an invalid task at position {position}: "
                        f"{describe_error(exc)}"
                    ) from exc
                incoming.append(dict(item))
            else:
                raise InvalidImportError("Import data must contain only task objects")

        records, _ = self._read()
        records.extend(incoming)
        self._save(records)
        return ImportResult(imported=len(incoming), total=len(records))
