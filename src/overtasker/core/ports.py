# src/overtasker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the event loop and the calendar swappable and makes testing easier
(tests drive time with a fake scheduler instead of sleeping).
"""

from collections.abc import Callable
from datetime import date
from typing import Protocol

DayProvider = Callable[[], date]
# Returns today's calendar-day label.


class ScheduledHandle(Protocol):
    """A pending delayed callback. asyncio.TimerHandle satisfies this."""
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """
    Cooperative single-threaded scheduler.

    Callbacks run one at a time on the scheduler's thread; each runs to
    completion before the next one starts.
    """

    def time(self) -> float: ...
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle: ...


class AchievementSink(Protocol):
    """Anything that accepts achievement messages (the notifier, or a fake)."""
    def post(self, message: str) -> object: ...
