# src/overtasker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class TaskChangeKind(StrEnum):
    CREATED = "created"
    TOGGLED = "toggled"
    EDITED = "edited"
    DELETED = "deleted"


@dataclass(slots=True)
class Task:
    """
    One entry of the task list.

    Notes:
    - text is always non-empty and already trimmed.
    - created_at is a calendar day, used only for "created today" checks.
    """

    id: int
    text: str
    created_at: date
    completed: bool = False


@dataclass(slots=True, frozen=True)
class TaskChange:
    """
    Emitted by TaskStore after the mutation, except DELETED which is emitted
    while the task is still in the store (listeners see its final state).
    """

    kind: TaskChangeKind
    task: Task
