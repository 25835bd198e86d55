# src/ticklist/core/timers.py

from __future__ import annotations

"""
Cancellable timers.

One mechanism for every delayed effect in the app:
- debounced persistence flush,
- soft-delete commit,
- notification expiry,
- search input debounce.

AsyncioTimers runs callbacks on the event loop thread; tests use a manual
clock implementation of the same Timers port.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from .ports import TimerHandleLike, Timers

logger = logging.getLogger(__name__)


class TimerHandle:
    """A scheduled one-shot callback. Cancelling after it fired is a no-op."""

    __slots__ = ("name", "cancelled", "fired", "_inner")

    def __init__(self, name: str) -> None:
        self.name = name
        self.cancelled = False
        self.fired = False
        self._inner: Any = None

    def bind(self, inner: Any) -> None:
        self._inner = inner

    def cancel(self) -> None:
        if self.cancelled or self.fired:
            return
        self.cancelled = True
        if self._inner is not None:
            self._inner.cancel()

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        state = "fired" if self.fired else "cancelled" if self.cancelled else "pending"
        return f"TimerHandle({self.name!r}, {state})"


def run_timer_callback(handle: TimerHandle, callback: Callable[[], Any]) -> None:
    """Fire `callback` once unless the handle was cancelled; errors are logged, not raised."""
    if not handle.pending:
        return
    handle.fired = True
    try:
        callback()
    except Exception:
        logger.exception("Timer callback failed name=%s", handle.name)


class AsyncioTimers:
    """Timers backed by loop.call_later (loop resolved lazily, at schedule time)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, delay: float, callback: Callable[[], Any], *, name: str) -> TimerHandle:
        handle = TimerHandle(name)
        loop = self._get_loop()
        handle.bind(loop.call_later(max(0.0, float(delay)), run_timer_callback, handle, callback))
        logger.debug("Timer scheduled name=%s delay=%.3f", name, delay)
        return handle

    def cancel(self, handle: TimerHandleLike | None) -> None:
        if handle is not None:
            handle.cancel()

    def now(self) -> float:
        return self._get_loop().time()


class TimerSlot:
    """
    A single cancel-and-replace timer.

    restart() always cancels the handle it replaced, so two generations of
    the same slot can never both fire.
    """

    def __init__(self, timers: Timers, name: str) -> None:
        self._timers = timers
        self._name = name
        self._handle: TimerHandleLike | None = None

    @property
    def pending(self) -> bool:
        h = self._handle
        return h is not None and not (h.cancelled or h.fired)

    def restart(self, delay: float, callback: Callable[[], Any]) -> TimerHandleLike:
        self.cancel()
        handle: TimerHandleLike | None = None

        def _fire() -> None:
            if self._handle is handle:
                self._handle = None
            callback()

        handle = self._timers.schedule(delay, _fire, name=self._name)
        self._handle = handle
        return handle

    def cancel(self) -> None:
        if self._handle is not None:
            self._timers.cancel(self._handle)
            self._handle = None
