# src/overtasker/timer/focus_timer.py

from __future__ import annotations

"""
Focus (pomodoro) timer.

A tiny state machine on top of RecurringTick:
- Idle    (armed=False, any remaining time)
- Running (armed=True)

Transitions to Idle on pause(), reset() and automatically when a session
completes. A completed session always leaves the timer at 25:00, disarmed.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from ..core.clock import RecurringTick
from ..core.ports import AchievementSink, Scheduler

logger = logging.getLogger(__name__)

SESSION_MINUTES = 25

MSG_SESSION_COMPLETED = "🍅 Fantastic! Pomodoro session completed!"


class TimerEvent(StrEnum):
    STARTED = "started"
    PAUSED = "paused"
    RESET = "reset"
    TICK = "tick"
    SESSION_COMPLETED = "session_completed"


@dataclass(slots=True, frozen=True)
class TimerSnapshot:
    minutes: int
    seconds: int
    armed: bool

    @property
    def display(self) -> str:
        return f"{self.minutes:02d}:{self.seconds:02d}"


TimerListener = Callable[[TimerEvent, TimerSnapshot], None]
SessionListener = Callable[[int], None]


class FocusTimer:
    def __init__(
        self,
        scheduler: Scheduler,
        *,
        tick_interval: float = 1.0,
        achievements: AchievementSink | None = None,
    ) -> None:
        self._ticker = RecurringTick(scheduler, tick_interval, self.on_tick)
        self._achievements = achievements
        self._minutes = SESSION_MINUTES
        self._seconds = 0
        self._listeners: list[TimerListener] = []
        self._session_listeners: list[SessionListener] = []

    def add_listener(self, listener: TimerListener) -> None:
        self._listeners.append(listener)

    def add_session_listener(self, listener: SessionListener) -> None:
        """Called with the session length (minutes) when a session completes."""
        self._session_listeners.append(listener)

    @property
    def armed(self) -> bool:
        return self._ticker.armed

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(minutes=self._minutes, seconds=self._seconds, armed=self.armed)

    def _emit(self, event: TimerEvent) -> None:
        snap = self.snapshot()
        for listener in self._listeners:
            listener(event, snap)

    # ---- user operations ----

    def start(self) -> None:
        if self.armed:
            return
        self._ticker.arm()
        logger.info("Timer started at %s", self.snapshot().display)
        self._emit(TimerEvent.STARTED)

    def pause(self) -> None:
        was_armed = self.armed
        self._ticker.cancel()
        if was_armed:
            logger.info("Timer paused at %s", self.snapshot().display)
            self._emit(TimerEvent.PAUSED)

    def reset(self) -> None:
        self._ticker.cancel()
        self._restore_default()
        logger.info("Timer reset")
        self._emit(TimerEvent.RESET)

    # ---- clock ----

    def on_tick(self) -> None:
        if not self.armed:
            logger.debug("Tick ignored: timer not armed")
            return

        if self._seconds == 0:
            self._minutes -= 1
            self._seconds = 59
        else:
            self._seconds -= 1

        if self._minutes == 0 and self._seconds == 0:
            self._complete_session()
            return

        self._emit(TimerEvent.TICK)

    def _restore_default(self) -> None:
        self._minutes = SESSION_MINUTES
        self._seconds = 0

    def _complete_session(self) -> None:
        self._ticker.cancel()
        logger.info("Focus session completed")

        for listener in self._session_listeners:
            listener(SESSION_MINUTES)

        if self._achievements is not None:
            self._achievements.post(MSG_SESSION_COMPLETED)

        self._restore_default()
        self._emit(TimerEvent.SESSION_COMPLETED)
