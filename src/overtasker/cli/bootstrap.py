# src/overtasker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the task store, timer, stats and achievements into one AppState,
- connects component events to core.api notifications.
"""

from __future__ import annotations

import logging

from ..achievements.notifier import AchievementNotifier
from ..config import get_settings
from ..core import api
from ..core.clock import today_label
from ..core.ports import DayProvider, Scheduler
from ..core.state import AppState, ChangeKind
from ..stats.aggregator import StatsAggregator
from ..tasks.task_store import TaskStore
from ..timer.focus_timer import FocusTimer

logger = logging.getLogger(__name__)


def create_initial_state(
    *,
    scheduler: Scheduler,
    settings=None,
    today: DayProvider | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings/scheduler/today injectable makes the app easy to test with
    a fake clock. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if today is None:
        today = today_label

    achievements = AchievementNotifier(
        scheduler,
        lifetime=float(getattr(settings, "achievement_lifetime", 5.0)),
        limit=int(getattr(settings, "achievement_limit", 5)),
    )
    task_store = TaskStore(today, achievements)
    stats = StatsAggregator(
        task_store,
        today,
        achievements,
        repeat_goal=bool(getattr(settings, "repeat_goal", False)),
    )
    tick_interval = float(getattr(settings, "tick_interval", 1.0))
    timer = FocusTimer(
        scheduler,
        tick_interval=tick_interval,
        achievements=achievements,
    )

    state = AppState(
        settings=settings,
        scheduler=scheduler,
        task_store=task_store,
        timer=timer,
        stats=stats,
        achievements=achievements,
    )

    # Order matters: counters first, then the adapter-facing refresh.
    timer.add_session_listener(stats.record_session)
    timer.add_listener(lambda event, snap: api.on_timer_event(state, event, snap))
    achievements.add_listener(lambda: api.publish(state, ChangeKind.ACHIEVEMENTS))

    logger.info("State ready (tick=%ss)", tick_interval)
    return state


def shutdown_state(state: AppState) -> None:
    """Stop the clock and drop pending callbacks (best-effort)."""
    handle, state.welcome_handle = state.welcome_handle, None
    if handle is not None:
        handle.cancel()
    try:
        state.timer.pause()
    except Exception:
        logger.exception("Failed to stop timer.")
    try:
        state.achievements.clear()
    except Exception:
        logger.exception("Failed to clear achievements.")
