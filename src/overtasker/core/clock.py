# src/overtasker/core/clock.py

from __future__ import annotations

"""
Clock source.

- AsyncioScheduler: Scheduler port backed by an asyncio event loop.
- RecurringTick: a cancellable fixed-interval callback built on any Scheduler.

RecurringTick never delivers a tick after cancel(): every scheduled fire carries
the generation it was armed with, and cancel() bumps the generation, so a fire
that was already queued by the loop is dropped on arrival.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from .ports import ScheduledHandle, Scheduler

logger = logging.getLogger(__name__)


def today_label() -> date:
    """Local calendar day (day granularity, no time of day)."""
    return date.today()


class AsyncioScheduler:
    """Scheduler port over loop.call_later / loop.time."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def time(self) -> float:
        return self._loop.time()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle:
        return self._loop.call_later(max(0.0, float(delay)), callback)


class RecurringTick:
    def __init__(
        self,
        scheduler: Scheduler,
        interval: float,
        callback: Callable[[], None],
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._scheduler = scheduler
        self._interval = float(interval)
        self._callback = callback
        self._handle: ScheduledHandle | None = None
        self._generation = 0

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def arm(self) -> None:
        """Start ticking. No-op if already armed (no double tick rate)."""
        if self._handle is not None:
            return
        self._schedule_next()

    def cancel(self) -> None:
        self._generation += 1
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def _schedule_next(self) -> None:
        generation = self._generation
        self._handle = self._scheduler.call_later(self._interval, lambda: self._fire(generation))

    def _fire(self, generation: int) -> None:
        if generation != self._generation or self._handle is None:
            logger.debug("Dropped stale tick (gen=%s current=%s)", generation, self._generation)
            return

        # Re-arm first: the callback may cancel us (e.g. session completed).
        self._schedule_next()
        self._callback()
