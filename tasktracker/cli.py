"""Command-line entry point for the task tracker (``todo``).

Each subcommand validates its arguments, calls one store operation and
prints the result. Every tracker error ends the process with status 1.
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from tasktracker.config import Settings, get_settings
from tasktracker.constants import EXPORT_FILENAME
from tasktracker.errors import (
    AlreadyCompletedError,
    NotCompletedError,
    StorageError,
    TaskTrackerError,
    ValidationError,
)
from tasktracker.formatter import format_stats, format_task, format_task_detail
from tasktracker.logging_setup import setup_logging
from tasktracker.models import TaskCreate, TaskUpdate
from tasktracker.parser import current_date, parse_task_input
from tasktracker.storage import JsonFileStorage
from tasktracker.store import TaskStore
from tasktracker.validator import (
    validate_filename,
    validate_id,
    validate_keyword,
    validate_priority,
    validate_tag,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandContext:
    settings: Settings
    storage: JsonFileStorage
    store: TaskStore


def _cmd_add(ctx: CommandContext, args: argparse.Namespace) -> int:
    description = " ".join(args.description)
    if args.priority or args.due or args.tag:
        data = TaskCreate.parse(
            description=description,
            priority=args.priority,
            due_date=args.due,
            tag=args.tag,
        )
    else:
        data = parse_task_input(description)

    task = ctx.store.create(data.description, data.priority, data.due_date, data.tag)
    print("Task added successfully!")
    print(format_task_detail(task))
    return 0


def _filter_label(args: argparse.Namespace, priority: str | None, tag: str | None) -> str:
    if args.completed:
        return "completed"
    if args.pending:
        return "pending"
    if priority:
        return f"priority {priority.upper()}"
    if tag:
        return f"tag {tag}"
    return ""


def _cmd_list(ctx: CommandContext, args: argparse.Namespace) -> int:
    priority = validate_priority(args.priority) if args.priority else None
    tag = validate_tag(args.tag)

    if not ctx.store.get_all():
        print('No tasks yet! Add one with: todo add "Your task"')
        return 0

    tasks = ctx.store.filter(
        completed=args.completed,
        pending=args.pending,
        priority=priority,
        tag=tag,
    )
    label = _filter_label(args, priority, tag)
    if not tasks:
        print(f"No {label + ' ' if label else ''}tasks found!")
        return 0

    suffix = f" ({label})" if label else ""
    print(f"You have {len(tasks)} task(s){suffix}")
    for index, task in enumerate(tasks):
        print(format_task(task, index))
    return 0


def _cmd_search(ctx: CommandContext, args: argparse.Namespace) -> int:
    keyword = validate_keyword(" ".join(args.keyword))
    results = ctx.store.search(keyword)
    if not results:
        print(f'No tasks found matching "{keyword}"')
        return 0

    print(f'Found {len(results)} task(s) matching "{keyword}"')
    for index, task in enumerate(results):
        print(format_task(task, index))
    return 0


def _cmd_done(ctx: CommandContext, args: argparse.Namespace) -> int:
    result = ctx.store.complete(validate_id(args.id))
    print("Task marked as complete!")
    print(result.updated.description)
    return 0


def _cmd_undone(ctx: CommandContext, args: argparse.Namespace) -> int:
    result = ctx.store.uncomplete(validate_id(args.id))
    print("Task marked as incomplete!")
    print(result.updated.description)
    return 0


def _cmd_update(ctx: CommandContext, args: argparse.Namespace) -> int:
    task_id = validate_id(args.id)
    changes = TaskUpdate.parse(description=" ".join(args.description))
    result = ctx.store.update(task_id, changes)
    print("Task updated successfully!")
    print(f"Old: {result.old.description}")
    print(f"New: {result.updated.description}")
    return 0


def _cmd_delete(ctx: CommandContext, args: argparse.Namespace) -> int:
    deleted = ctx.store.delete(validate_id(args.id))
    print("Task deleted successfully!")
    print(f"Deleted: {deleted.description}")
    return 0


def _cmd_clear(ctx: CommandContext, args: argparse.Namespace) -> int:
    result = ctx.store.clear_completed()
    if result.cleared == 0:
        print("No completed tasks to clear!")
        return 0

    print(f"Cleared {result.cleared} completed task(s)")
    print(f"Remaining tasks: {result.remaining}")
    return 0


def _cmd_stats(ctx: CommandContext, args: argparse.Namespace) -> int:
    print(format_stats(ctx.store.get_stats()))
    return 0


def _cmd_export(ctx: CommandContext, args: argparse.Namespace) -> int:
    tasks = ctx.store.export()
    if not tasks:
        print("No tasks to export!")
        return 0

    filename = EXPORT_FILENAME.format(date=current_date())
    export_path = Path(args.output_dir or ctx.settings.export_dir) / filename
    ctx.storage.write_file(export_path, [task.to_record() for task in tasks])

    print("Tasks exported successfully")
    print(f"File: {filename}")
    print(f"Location: {export_path.resolve()}")
    print(f"Total tasks: {len(tasks)}")
    return 0


def _cmd_import(ctx: CommandContext, args: argparse.Namespace) -> int:
    filename = validate_filename(args.filename)
    import_path = Path(filename)
    if not ctx.storage.file_exists(import_path):
        raise StorageError(f'File "{filename}" not found!')

    result = ctx.store.import_tasks(ctx.storage.read_file(import_path))
    print("Tasks imported successfully!")
    print(f"Imported: {result.imported} tasks")
    print(f"Total now: {result.total} tasks")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the ``todo`` argument parser with one subcommand per action."""
    parser = argparse.ArgumentParser(prog="todo", description="Simple command-line task tracker")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Task file to use (default: TODO_DATA_FILE or ~/.tasktracker/todos.json)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Add a new task")
    add.add_argument("description", nargs="+")
    add.add_argument("--priority", help="high, medium or low")
    add.add_argument("--due", help="Due date as YYYY-MM-DD")
    add.add_argument("--tag", help="Label (letters, digits, - and _)")
    add.set_defaults(handler=_cmd_add)

    list_cmd = sub.add_parser("list", help="Show tasks")
    list_cmd.add_argument("-c", "--completed", action="store_true", help="Only completed tasks")
    list_cmd.add_argument("-p", "--pending", action="store_true", help="Only pending tasks")
    list_cmd.add_argument("--priority", help="Filter by priority")
    list_cmd.add_argument("--tag", help="Filter by tag")
    list_cmd.set_defaults(handler=_cmd_list)

    search = sub.add_parser("search", help="Search descriptions and tags")
    search.add_argument("keyword", nargs="+")
    search.set_defaults(handler=_cmd_search)

    done = sub.add_parser("done", help="Mark a task as complete")
    done.add_argument("id")
    done.set_defaults(handler=_cmd_done)

    undone = sub.add_parser("undone", help="Mark a task as incomplete")
    undone.add_argument("id")
    undone.set_defaults(handler=_cmd_undone)

    update = sub.add_parser("update", help="Change a task description")
    update.add_argument("id")
    update.add_argument("description", nargs="+")
    update.set_defaults(handler=_cmd_update)

    delete = sub.add_parser("delete", help="Delete a task")
    delete.add_argument("id")
    delete.set_defaults(handler=_cmd_delete)

    sub.add_parser("clear", help="Delete all completed tasks").set_defaults(handler=_cmd_clear)
    sub.add_parser("stats", help="Show completion statistics").set_defaults(handler=_cmd_stats)

    export = sub.add_parser("export", help="Export tasks to a dated JSON file")
    export.add_argument("--output-dir", type=Path, default=None)
    export.set_defaults(handler=_cmd_export)

    import_cmd = sub.add_parser("import", help="Merge tasks from a JSON file")
    import_cmd.add_argument("filename")
    import_cmd.set_defaults(handler=_cmd_import)

    for subparser in sub.choices.values():
        subparser.set_defaults(usage=subparser.format_usage().strip())

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        storage = JsonFileStorage(args.data_file or settings.data_file)
        ctx = CommandContext(settings=settings, storage=storage, store=TaskStore(storage))
        return args.handler(ctx, args)
    except ValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(args.usage, file=sys.stderr)
        return 1
    except (AlreadyCompletedError, NotCompletedError) as exc:
        print(f"Info: {exc}", file=sys.stderr)
        print(f"Task: {exc.task.description}", file=sys.stderr)
        return 1
    except TaskTrackerError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
