# src/overtasker/stats/aggregator.py

from __future__ import annotations

"""
Statistics and streaks.

Counters are kept incrementally from TaskStore / FocusTimer events;
progress is derived from the store on every refresh().

Invariant: tasks_completed == number of completed tasks in the store.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum

from ..core.ports import AchievementSink, DayProvider
from ..tasks.task_models import TaskChange, TaskChangeKind
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

GOOD_THRESHOLD = 60.0
GOAL_THRESHOLD = 100.0

MSG_GOAL_ACHIEVED = "🎯 Daily goal achieved! You're on fire!"


class ProgressTier(StrEnum):
    DEFAULT = "default"
    GOOD = "good"
    GOAL = "goal"


def progress_percent(completed: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return completed / total * 100.0


def progress_tier(percent: float) -> ProgressTier:
    if percent >= GOAL_THRESHOLD:
        return ProgressTier.GOAL
    if percent >= GOOD_THRESHOLD:
        return ProgressTier.GOOD
    return ProgressTier.DEFAULT


@dataclass(slots=True, frozen=True)
class StatsSnapshot:
    tasks_completed: int
    today_tasks: int
    pomodoro_sessions: int
    total_focus_minutes: int
    current_streak: int
    last_active_date: date | None
    total_tasks: int
    progress_percent: float
    tier: ProgressTier

    @property
    def focus_hours(self) -> int:
        return self.total_focus_minutes // 60

    @property
    def progress_label(self) -> str:
        # half-up, never banker's rounding
        return f"{int(self.progress_percent + 0.5)}%"


class StatsAggregator:
    def __init__(
        self,
        task_store: TaskStore,
        today: DayProvider,
        achievements: AchievementSink | None = None,
        *,
        repeat_goal: bool = False,
    ) -> None:
        self._store = task_store
        self._today = today
        self._achievements = achievements
        self._repeat_goal = repeat_goal

        self.tasks_completed = 0
        self.today_tasks = 0
        self.pomodoro_sessions = 0
        self.total_focus_minutes = 0
        self.current_streak = 0
        self.last_active_date: date | None = None

        self._percent = 0.0
        self._at_goal = False

        task_store.add_listener(self._on_task_change)

    # ---- event intake ----

    def _on_task_change(self, change: TaskChange) -> None:
        task = change.task

        if change.kind == TaskChangeKind.CREATED:
            self.today_tasks += 1
        elif change.kind == TaskChangeKind.TOGGLED:
            self.tasks_completed += 1 if task.completed else -1
        elif change.kind == TaskChangeKind.DELETED:
            # Emitted before removal: task still carries its final state.
            if task.completed:
                self.tasks_completed -= 1
            if task.created_at == self._today():
                self.today_tasks -= 1

    def record_session(self, minutes: int) -> None:
        self.pomodoro_sessions += 1
        self.total_focus_minutes += int(minutes)
        logger.info(
            "Session recorded: sessions=%s focus_minutes=%s",
            self.pomodoro_sessions,
            self.total_focus_minutes,
        )

    # ---- derived ----

    def refresh(self) -> StatsSnapshot:
        """
        Recompute progress and evaluate the daily-goal achievement.

        The goal toast fires when progress crosses 100% from below.
        With repeat_goal=True it fires on every refresh at 100% instead.
        """
        total = len(self._store)
        self._percent = progress_percent(self._store.count_completed(), total)

        reached = total > 0 and self._percent >= GOAL_THRESHOLD
        if reached and (self._repeat_goal or not self._at_goal):
            logger.info("Daily goal reached (%s tasks)", total)
            if self._achievements is not None:
                self._achievements.post(MSG_GOAL_ACHIEVED)
        self._at_goal = reached

        return self.snapshot()

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            tasks_completed=self.tasks_completed,
            today_tasks=self.today_tasks,
            pomodoro_sessions=self.pomodoro_sessions,
            total_focus_minutes=self.total_focus_minutes,
            current_streak=self.current_streak,
            last_active_date=self.last_active_date,
            total_tasks=len(self._store),
            progress_percent=self._percent,
            tier=progress_tier(self._percent),
        )

    def update_streak(self) -> None:
        """
        Evaluate the day streak once per session start.

        - already counted today -> no-op
        - last active yesterday -> streak + 1 (toast if > 1)
        - anything else         -> streak restarts at 1
        """
        today = self._today()
        yesterday = today - timedelta(days=1)
        previous = self.last_active_date

        if previous == today:
            return

        if previous == yesterday:
            self.current_streak += 1
            if self.current_streak > 1 and self._achievements is not None:
                self._achievements.post(f"🔥 {self.current_streak} day streak! Keep it up!")
        else:
            self.current_streak = 1

        self.last_active_date = today
        logger.info("Streak updated: %s day(s)", self.current_streak)
