# src/overtasker/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from ..achievements.notifier import AchievementNotifier
from ..stats.aggregator import StatsAggregator
from ..tasks.task_store import TaskStore
from ..timer.focus_timer import FocusTimer
from .ports import ScheduledHandle, Scheduler


class ChangeKind(StrEnum):
    TASKS = "tasks"
    TIMER = "timer"
    STATS = "stats"
    ACHIEVEMENTS = "achievements"


ChangeListener = Callable[[frozenset[ChangeKind]], None]


@dataclass
class AppState:
    """
    The single session state.

    Built by cli.bootstrap.create_initial_state() and passed explicitly to
    every operation in core.api; nothing in the core reads it from a global.
    """

    # Store Settings on the state for easy access in other modules.
    settings: object

    scheduler: Scheduler
    task_store: TaskStore
    timer: FocusTimer
    stats: StatsAggregator
    achievements: AchievementNotifier

    listeners: list[ChangeListener] = field(default_factory=list)
    welcome_handle: ScheduledHandle | None = None
