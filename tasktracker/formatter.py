"""Plain-text rendering of tasks and statistics."""

from tasktracker.constants import BAR_EMPTY, BAR_FILLED, PROGRESS_BAR_WIDTH
from tasktracker.models import Stats, Task
from tasktracker.parser import is_overdue

STATUS_COMPLETED = "x"
STATUS_PENDING = " "


def format_priority(task: Task) -> str:
    """Upper-case priority label, e.g. ``HIGH``."""
    return task.priority.value.upper()


def format_task(task: Task, index: int | None = None) -> str:
    """One-line summary of a task, optionally numbered from 1."""
    parts: list[str] = []
    if index is not None:
        parts.append(f"{index + 1}.")

    status = STATUS_COMPLETED if task.completed else STATUS_PENDING
    parts.append(f"[{status}] ({format_priority(task)}) {task.description}")

    if task.due_date:
        overdue = " OVERDUE" if is_overdue(task.due_date, task.completed) else ""
        parts.append(f"due {task.due_date.isoformat()}{overdue}")

    if task.tag:
        parts.append(f"#{task.tag}")

    parts.append(f"(ID: {task.id})")
    return " ".join(parts)


def format_task_detail(task: Task) -> str:
    """Multi-line view of every field of a task."""
    lines = [
        f"ID:          {task.id}",
        f"Description: {task.description}",
        f"Status:      {'Completed' if task.completed else 'Pending'}",
        f"Priority:    {format_priority(task)}",
    ]
    if task.due_date:
        overdue = " (OVERDUE)" if is_overdue(task.due_date, task.completed) else ""
        lines.append(f"Due Date:    {task.due_date.isoformat()}{overdue}")
    if task.tag:
        lines.append(f"Tag:         {task.tag}")
    if task.created_at:
        lines.append(f"Created:     {task.created_at:%Y-%m-%d %H:%M}")
    if task.completed_at:
        lines.append(f"Completed:   {task.completed_at:%Y-%m-%d %H:%M}")
    return "\n".join(lines)


def format_progress_bar(percentage: int, width: int = PROGRESS_BAR_WIDTH) -> str:
    """Text progress bar such as ``[##########----------] 50%``."""
    filled = min(width, max(0, (percentage * width + 50) // 100))
    return f"[{BAR_FILLED * filled}{BAR_EMPTY * (width - filled)}] {percentage}%"


def format_stats(stats: Stats) -> str:
    """Render the statistics panel with its progress bar."""
    return "\n".join(
        [
            "Task Statistics",
            f"  Total Tasks: {stats.total}",
            f"  Completed:   {stats.completed}",
            f"  Pending:     {stats.pending}",
            f"  Progress:    {stats.percentage}%",
            "",
            format_progress_bar(stats.percentage),
            "",
            stats.motivational_message,
        ]
    )
