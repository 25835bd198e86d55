# src/ticklist/connectors/console_connector.py

from __future__ import annotations

import asyncio
import inspect
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..tasks.notifications import Notification
from ..tasks.task_api import TaskListApp

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _on_notification(note: Notification | None) -> None:
    if note is None:
        return
    hint = f"  (/{note.action.kind.value} to {note.action.label.lower()})" if note.action else ""
    _print_ts(f"» {note.message}{hint}")


async def run_console_loop(app: TaskListApp) -> None:
    """
    Line-oriented front-end.

    input() runs in a worker thread so soft-delete commits, debounced
    flushes and notification expiry keep firing while the prompt waits.
    """
    logger.info("Console connector started (tasks=%d).", len(app.state.tasks))
    app.notifier.subscribe(_on_notification)
    _print_ts("Type /help for commands, plain text to add a task, /exit to quit.\n")

    def emit(text: str) -> None:
        _print_ts(text)

    while True:
        try:
            user_input = (await asyncio.to_thread(input, "> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        # Plain text is a shortcut for /add.
        line = user_input if user_input.startswith("/") else f"/add {user_input}"

        try:
            reply = command_registry.handle(app, line, emit=emit)
            if inspect.isawaitable(reply):
                reply = await reply
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            _print_ts(str(reply))

    logger.info("Console connector finished.")
