"""Debounced re-scanning of a page snapshot that keeps changing on disk."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable

from .constants import DEBOUNCE_SECONDS, POLL_INTERVAL_SECONDS
from .logging import get_logger

log = get_logger(__name__)


class Debouncer:
    """Coalesce bursts of trigger() calls into one callback run.

    The callback runs ``delay`` seconds after the last trigger. A run that
    already started is never cancelled, and one that fails is logged so the
    next burst still runs.
    """

    def __init__(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None:
        self.delay = delay
        self.callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    def trigger(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def _fire(self) -> None:
        self._handle = None
        task = asyncio.ensure_future(self.callback())
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.warning("debounced_run_failed", error=repr(task.exception()))

    async def drain(self) -> None:
        """Wait for callback runs that have already started."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


def _mtime(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except FileNotFoundError:
        return None


async def watch_file(
    path: Path,
    on_change: Callable[[], None],
    interval: float = POLL_INTERVAL_SECONDS,
    stop: asyncio.Event | None = None,
) -> None:
    """Poll ``path`` and call ``on_change`` whenever its mtime changes."""
    stop = stop or asyncio.Event()
    last = _mtime(path)
    while not stop.is_set():
        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass
        else:
            break
        current = _mtime(path)
        if current != last:
            last = current
            log.debug("source_changed", path=str(path))
            on_change()


async def watch_and_rescan(
    path: Path,
    rescan: Callable[[], Awaitable[None]],
    delay: float = DEBOUNCE_SECONDS,
    interval: float = POLL_INTERVAL_SECONDS,
    stop: asyncio.Event | None = None,
) -> None:
    """Run ``rescan`` once per burst of changes to ``path``."""
    debouncer = Debouncer(delay, rescan)
    try:
        await watch_file(path, debouncer.trigger, interval=interval, stop=stop)
    finally:
        debouncer.cancel()
        await debouncer.drain()
