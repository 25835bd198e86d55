# src/ticklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete collaborators into TaskListApp,
- hydrates the app from the durable store.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.file_channels import ConsoleConfirm, ConsoleErrorReporter, FileExportChannel
from ..core.ports import ConfirmPrompt, ErrorReporter, ExportChannel, KeyValueStore, Timers
from ..core.timers import AsyncioTimers
from ..tasks.task_api import TaskListApp, Timings
from ..tasks.task_store import SqliteKeyValueStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.export_dir.mkdir(parents=True, exist_ok=True)


def create_app(
    *,
    settings=None,
    store: KeyValueStore | None = None,
    timers: Timers | None = None,
    confirm: ConfirmPrompt | None = None,
    exporter: ExportChannel | None = None,
    reporter: ErrorReporter | None = None,
) -> TaskListApp:
    """
    Create a loaded TaskListApp from the provided settings.

    Keeping settings and collaborators injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    app = TaskListApp(
        store=store or SqliteKeyValueStore(settings.store_db_path),
        timers=timers or AsyncioTimers(),
        confirm=confirm or ConsoleConfirm(),
        exporter=exporter or FileExportChannel(settings.export_dir),
        reporter=reporter or ConsoleErrorReporter(),
        timings=Timings.from_settings(settings),
    )
    app.load()
    return app
