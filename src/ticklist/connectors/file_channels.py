# src/ticklist/connectors/file_channels.py

"""
Concrete collaborators for a local, single-user setup:
- FileExportChannel: writes the export blob into a directory
- FileImportSource: one selected file, read off the event loop thread
- ConsoleConfirm / ConsoleErrorReporter: terminal prompt and alert
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

_YES = {"y", "yes", "1", "true", "on"}


class FileExportChannel:
    def __init__(self, export_dir: str | Path) -> None:
        self._dir = Path(export_dir)
        self.last_path: Path | None = None

    def save(self, blob: bytes, filename: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._dir / Path(filename).name
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_bytes(blob)
        os.replace(tmp, path)
        self.last_path = path
        logger.info("Exported %d bytes to %s", len(blob), path)


class FileImportSource:
    """A single file selection; cleared after the import is handled."""

    def __init__(self, path: str | Path) -> None:
        self._path: Path | None = Path(path).expanduser()

    @property
    def path(self) -> Path | None:
        return self._path

    async def read_bytes(self) -> bytes:
        path = self._path
        if path is None:
            raise FileNotFoundError("no file selected")
        return await asyncio.to_thread(path.read_bytes)

    def clear(self) -> None:
        self._path = None


class ConsoleConfirm:
    def __init__(self, read: Callable[[str], str] = input) -> None:
        self._read = read

    def confirm(self, message: str) -> bool:
        try:
            answer = self._read(f"{message} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            return False
        return answer.strip().lower() in _YES


class ConsoleErrorReporter:
    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write

    def alert(self, message: str) -> None:
        logger.debug("Alert shown: %s", message)
        with contextlib.suppress(OSError):
            self._write(f"[!] {message}")
