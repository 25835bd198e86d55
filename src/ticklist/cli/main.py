# src/ticklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskListApp inside the event loop (timers
need a running loop), runs the console front-end and flushes pending
writes on the way out.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_app
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(app) -> None:
    """Best-effort shutdown: write what is pending, never raise."""
    try:
        app.shutdown()
    except Exception:
        logger.exception("Failed to flush pending changes.")


async def _run(settings) -> None:
    app = create_app(settings=settings)
    try:
        await run_console_loop(app)
    finally:
        _shutdown(app)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
