# src/ticklist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import cast

from ..connectors.file_channels import FileImportSource
from ..tasks.task_api import TaskListApp
from ..tasks.task_models import Category, SortOrder, StatusFilter, Task

CommandEmitter = Callable[[str], None]
CommandReply = str | Awaitable[str]
CommandHandler2 = Callable[[TaskListApp, list[str]], CommandReply]
CommandHandler3 = Callable[[TaskListApp, list[str], CommandEmitter | None], CommandReply]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console front-end (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        app: TaskListApp,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> CommandReply | None:
        """
        Handle a string like "/command args".
        Returns a reply (string or awaitable string) or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(app, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(app, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_created(ts_ms: int) -> str:
    return datetime.fromtimestamp(ts_ms / 1000).astimezone().strftime("%Y-%m-%d %H:%M")


def format_task(position: int, task: Task, *, removing: bool = False) -> str:
    mark = "x" if task.completed else " "
    tail = " (deleting...)" if removing else ""
    return f"{position:>2}. [{mark}] {task.text}  #{task.category.value}  {_fmt_created(task.created_at)}{tail}"


def _parse_category(raw: str) -> Category | None:
    if not raw.startswith("@"):
        return None
    wanted = raw[1:].lower()
    for c in Category:
        if c.value.lower() == wanted:
            return c
    return None


def _resolve(app: TaskListApp, args: list[str]) -> Task | None:
    if not args:
        return None
    try:
        position = int(args[0])
    except ValueError:
        return None
    return app.task_at(position)


def cmd_help(app: TaskListApp, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(app: TaskListApp, args: list[str]) -> str:
    """
    /add Buy milk            -> default category
    /add @Kerja Send report  -> explicit category
    """
    category = _parse_category(args[0]) if args else None
    words = args[1:] if category is not None else args
    result = app.add_task(" ".join(words), category or Category.KULIAH)
    if not result.ok:
        return f"⚠️ {app.add_error_message()}"
    return f"Added: {result.text}"


def cmd_list(app: TaskListApp, args: list[str]) -> str:
    items = app.visible_tasks()
    if not items:
        return "No tasks yet. Start with one small thing ✨"
    s = app.state
    header = f"Tasks (filter={s.status_filter.value}, sort={s.sort_order.value}"
    header += f", search={s.search!r})" if s.search else ")"
    lines = [header]
    for i, t in enumerate(items, start=1):
        lines.append(format_task(i, t, removing=app.is_removing(t.id)))
    return "\n".join(lines)


def cmd_done(app: TaskListApp, args: list[str]) -> str:
    task = _resolve(app, args)
    if task is None:
        return "Usage: /done <number from /list>"
    app.toggle_task(task.id)
    return f"{'Done' if task.completed else 'Not done'}: {task.text}"


def cmd_edit(app: TaskListApp, args: list[str]) -> str:
    task = _resolve(app, args)
    if task is None:
        return "Usage: /edit <number> <new text>"
    app.begin_edit(task.id)
    app.set_edit_text(" ".join(args[1:]))
    result = app.save_edit()
    if result is None or not result.ok:
        app.cancel_edit()
        note = app.notifier.current
        return note.message if note is not None else "Edit failed."
    return f"Updated: {result.text}"


def cmd_rm(app: TaskListApp, args: list[str]) -> str:
    task = _resolve(app, args)
    if task is None:
        return "Usage: /rm <number from /list>"
    if app.delete_task(task.id) is None:
        return "Cancelled."
    return f"Deleting: {task.text} (use /undo to restore)"


def cmd_clear(app: TaskListApp, args: list[str]) -> str:
    """
    /clear done -> delete completed tasks
    /clear all  -> delete every task
    """
    sub = args[0].lower() if args else ""
    if sub == "done":
        if not any(t.completed for t in app.state.tasks):
            return "No completed tasks."
        return "Deleting completed tasks (use /undo to restore)" if app.clear_completed() else "Cancelled."
    if sub == "all":
        if not app.state.tasks:
            return "Nothing to delete."
        return "Deleting all tasks (use /undo to restore)" if app.clear_all() else "Cancelled."
    return "Usage: /clear done | /clear all"


def cmd_undo(app: TaskListApp, args: list[str]) -> str:
    return "Restored." if app.undo() else "Nothing to undo."


def cmd_search(app: TaskListApp, args: list[str]) -> str:
    query = " ".join(args)
    app.set_search(query, debounce=False)
    return f"Search: {query!r}" if query else "Search cleared."


def cmd_filter(app: TaskListApp, args: list[str]) -> str:
    try:
        app.set_filter(args[0].lower() if args else "")
    except ValueError:
        return "Usage: /filter all | todo | done"
    return f"Filter: {app.state.status_filter.value}"


def cmd_sort(app: TaskListApp, args: list[str]) -> str:
    try:
        app.set_sort(args[0].lower() if args else "")
    except ValueError:
        return "Usage: /sort newest | oldest"
    return f"Sort: {app.state.sort_order.value}"


def cmd_stats(app: TaskListApp, args: list[str]) -> str:
    total = len(app.state.tasks)
    lines = [f"Done: {app.completed_count()} / {total} ({app.progress()}%)"]
    counts = app.category_stats()
    lines.append("  ".join(f"{c.value}: {counts[c]}" for c in Category))
    return "\n".join(lines)


def cmd_theme(app: TaskListApp, args: list[str]) -> str:
    return "Theme: dark" if app.toggle_theme() else "Theme: light"


def cmd_export(app: TaskListApp, args: list[str]) -> str:
    blob = app.export_tasks()
    note = app.notifier.current
    return f"{note.message if note else 'Exported'} ({len(blob)} bytes)"


async def _import(app: TaskListApp, path: str) -> str:
    ok = await app.import_from(FileImportSource(path))
    return f"Imported {len(app.state.tasks)} tasks." if ok else "Import failed; nothing changed."


def cmd_import(app: TaskListApp, args: list[str], emit: CommandEmitter | None = None) -> CommandReply:
    if not args:
        return "Usage: /import <path to tasks.json>"
    if emit:
        emit(f"Reading {args[0]} ...")
    return _import(app, " ".join(args))


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add [@Category] text.", aliases=["a"])
registry.register("list", cmd_list, help_text="Show visible tasks.", aliases=["ls"])
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["x"])
registry.register("edit", cmd_edit, help_text="Edit text: /edit <n> <text>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del"])
registry.register("clear", cmd_clear, help_text="Bulk delete: /clear done | /clear all.")
registry.register("undo", cmd_undo, help_text="Undo the last delete while its notice is shown.", aliases=["u"])
registry.register("search", cmd_search, help_text="Search text/category: /search [query].", aliases=["s"])
registry.register("filter", cmd_filter, help_text="Status filter: /filter all | todo | done.")
registry.register("sort", cmd_sort, help_text="Sort: /sort newest | oldest.")
registry.register("stats", cmd_stats, help_text="Progress and per-category counts.")
registry.register("theme", cmd_theme, help_text="Toggle dark/light theme.")
registry.register("export", cmd_export, help_text="Export tasks to tasks.json.")
registry.register("import", cmd_import, help_text="Replace all tasks from a JSON file: /import <path>.")
