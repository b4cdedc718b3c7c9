# src/overtasker/tasks/task_store.py

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable

from ..core.ports import AchievementSink, DayProvider
from .task_models import Task, TaskChange, TaskChangeKind

logger = logging.getLogger(__name__)

TaskListener = Callable[[TaskChange], None]

MSG_TASK_COMPLETED = "✅ Great job! Task completed!"


class TaskStore:
    """
    In-memory ordered task collection.

    - Insertion order is the only order; nothing is ever sorted.
    - Unknown ids are a benign race (a UI action deferred past a delete),
      so toggle/edit/delete return False instead of raising.
    - Empty or whitespace-only text never reaches a Task.
    """

    def __init__(
        self,
        today: DayProvider,
        achievements: AchievementSink | None = None,
    ) -> None:
        self._today = today
        self._achievements = achievements
        self._tasks: dict[int, Task] = {}
        self._ids = itertools.count(1)
        self._listeners: list[TaskListener] = []

    def add_listener(self, listener: TaskListener) -> None:
        self._listeners.append(listener)

    def _emit(self, kind: TaskChangeKind, task: Task) -> None:
        change = TaskChange(kind=kind, task=task)
        for listener in self._listeners:
            listener(change)

    # ---- queries ----

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: int) -> Task | None:
        return self._tasks.get(task_id)

    def all(self) -> list[Task]:
        # dicts keep insertion order
        return list(self._tasks.values())

    def count_completed(self) -> int:
        return sum(1 for t in self._tasks.values() if t.completed)

    # ---- mutations ----

    def create(self, raw_text: str) -> Task | None:
        text = (raw_text or "").strip()
        if not text:
            logger.debug("Rejected empty task text")
            return None

        task = Task(id=next(self._ids), text=text, created_at=self._today())
        self._tasks[task.id] = task
        logger.info("Task %s created", task.id)
        self._emit(TaskChangeKind.CREATED, task)
        return task

    def toggle(self, task_id: int) -> bool:
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("toggle: task %s not found", task_id)
            return False

        task.completed = not task.completed
        logger.info("Task %s -> %s", task_id, "done" if task.completed else "open")
        self._emit(TaskChangeKind.TOGGLED, task)

        if task.completed and self._achievements is not None:
            self._achievements.post(MSG_TASK_COMPLETED)
        return True

    def edit(self, task_id: int, new_text: str) -> bool:
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("edit: task %s not found", task_id)
            return False

        text = (new_text or "").strip()
        if not text:
            # Keep the previous text; an empty edit is not a clear.
            logger.debug("edit: empty text for task %s ignored", task_id)
            return False

        task.text = text
        self._emit(TaskChangeKind.EDITED, task)
        return True

    def delete(self, task_id: int) -> bool:
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("delete: task %s not found", task_id)
            return False

        # Listeners must see the task before it disappears.
        self._emit(TaskChangeKind.DELETED, task)
        del self._tasks[task_id]
        logger.info("Task %s deleted", task_id)
        return True
