# src/overtasker/core/api.py

from __future__ import annotations

"""
Operations exposed to presentation adapters.

Each mutation runs in a fixed order:
1. component mutation (task store / timer),
2. stats refresh (may post the goal achievement),
3. change notification to subscribed adapters.

Nothing here raises for user-level failures: empty text returns None/False,
unknown ids return False.
"""

import dataclasses
import logging

from ..stats.aggregator import StatsSnapshot
from ..tasks.task_models import Task
from ..timer.focus_timer import TimerEvent, TimerSnapshot
from .state import AppState, ChangeKind, ChangeListener

logger = logging.getLogger(__name__)

MSG_WELCOME = "👋 Welcome to OVERTASKER! Start by adding your first task."


def subscribe(state: AppState, listener: ChangeListener) -> None:
    state.listeners.append(listener)


def publish(state: AppState, *kinds: ChangeKind) -> None:
    """Notify adapters (best-effort: a broken renderer never aborts a mutation)."""
    changed = frozenset(kinds)
    for listener in list(state.listeners):
        try:
            listener(changed)
        except Exception:
            logger.exception("Change listener failed kinds=%s", sorted(changed))


def _refresh(state: AppState, *kinds: ChangeKind) -> None:
    state.stats.refresh()
    publish(state, *kinds, ChangeKind.STATS)


# ---- tasks ----

def create_task(state: AppState, text: str) -> Task | None:
    task = state.task_store.create(text)
    if task is None:
        return None
    _refresh(state, ChangeKind.TASKS)
    return dataclasses.replace(task)


def toggle_task(state: AppState, task_id: int) -> bool:
    if not state.task_store.toggle(task_id):
        return False
    _refresh(state, ChangeKind.TASKS)
    return True


def edit_task(state: AppState, task_id: int, text: str) -> bool:
    if not state.task_store.edit(task_id, text):
        return False
    publish(state, ChangeKind.TASKS)
    return True


def delete_task(state: AppState, task_id: int) -> bool:
    if not state.task_store.delete(task_id):
        return False
    _refresh(state, ChangeKind.TASKS)
    return True


# ---- timer ----

def start_timer(state: AppState) -> None:
    state.timer.start()


def pause_timer(state: AppState) -> None:
    state.timer.pause()


def reset_timer(state: AppState) -> None:
    state.timer.reset()


def toggle_timer(state: AppState) -> bool:
    """Start if idle, pause if running. Returns the new armed flag."""
    if state.timer.armed:
        state.timer.pause()
    else:
        state.timer.start()
    return state.timer.armed


def on_timer_event(state: AppState, event: TimerEvent, snapshot: TimerSnapshot) -> None:
    if event == TimerEvent.SESSION_COMPLETED:
        # Timer is already back at 25:00 and the counters are recorded.
        _refresh(state, ChangeKind.TIMER)
        return
    publish(state, ChangeKind.TIMER)


# ---- session ----

def begin_session(state: AppState) -> None:
    """Evaluate the day streak and schedule the first-run welcome message."""
    state.stats.update_streak()
    _refresh(state)

    delay = float(getattr(state.settings, "welcome_delay", 1.0))
    if state.welcome_handle is not None:
        state.welcome_handle.cancel()
    state.welcome_handle = state.scheduler.call_later(delay, lambda: _maybe_welcome(state))


def _maybe_welcome(state: AppState) -> None:
    state.welcome_handle = None
    if len(state.task_store) == 0 and state.stats.tasks_completed == 0:
        state.achievements.post(MSG_WELCOME)


# ---- read accessors ----

def list_tasks(state: AppState) -> list[Task]:
    return [dataclasses.replace(t) for t in state.task_store.all()]


def timer_snapshot(state: AppState) -> TimerSnapshot:
    return state.timer.snapshot()


def stats_snapshot(state: AppState) -> StatsSnapshot:
    return state.stats.snapshot()


def achievement_messages(state: AppState) -> list[str]:
    return state.achievements.messages()
