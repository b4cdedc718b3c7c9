# src/overtasker/achievements/notifier.py

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.ports import ScheduledHandle, Scheduler

logger = logging.getLogger(__name__)

PLACEHOLDER_MESSAGE = "🏆 Complete your first task to unlock achievements!"

NotifierListener = Callable[[], None]


@dataclass(slots=True, frozen=True)
class Achievement:
    id: int
    message: str
    created_at: float
    lifetime: float | None  # None: stays until replaced (placeholder)


class AchievementNotifier:
    """
    Bounded most-recent-first list of achievement toasts.

    - post() inserts at the front.
    - Each posted entry expires on its own after `lifetime` seconds.
    - At most `limit` entries are visible; overflow evicts the oldest at once.
    - A placeholder that is the only entry gets replaced, not stacked.

    The notifier does not know why an achievement fired; callers decide.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        lifetime: float = 5.0,
        limit: int = 5,
        placeholder: str | None = PLACEHOLDER_MESSAGE,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self._scheduler = scheduler
        self._lifetime = float(lifetime)
        self._limit = int(limit)
        self._placeholder = placeholder
        self._ids = itertools.count(1)
        self._entries: list[Achievement] = []
        self._expiry: dict[int, ScheduledHandle] = {}
        self._listeners: list[NotifierListener] = []

        if placeholder:
            self._entries.append(
                Achievement(
                    id=next(self._ids),
                    message=placeholder,
                    created_at=scheduler.time(),
                    lifetime=None,
                )
            )

    def add_listener(self, listener: NotifierListener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    def entries(self) -> list[Achievement]:
        return list(self._entries)

    def messages(self) -> list[str]:
        return [e.message for e in self._entries]

    def post(self, message: str) -> Achievement:
        if (
            self._placeholder
            and len(self._entries) == 1
            and self._entries[0].message == self._placeholder
        ):
            self._drop(self._entries[0].id)

        entry = Achievement(
            id=next(self._ids),
            message=message,
            created_at=self._scheduler.time(),
            lifetime=self._lifetime,
        )
        self._entries.insert(0, entry)
        self._expiry[entry.id] = self._scheduler.call_later(
            self._lifetime, lambda: self._expire(entry.id)
        )
        logger.info("Achievement posted: %s", message)

        while len(self._entries) > self._limit:
            evicted = self._entries[-1]
            self._drop(evicted.id)
            logger.debug("Achievement %s evicted (limit=%s)", evicted.id, self._limit)

        self._notify()
        return entry

    def clear(self) -> None:
        for handle in self._expiry.values():
            handle.cancel()
        self._expiry.clear()
        self._entries.clear()
        self._notify()

    def _drop(self, entry_id: int) -> bool:
        handle = self._expiry.pop(entry_id, None)
        if handle is not None:
            handle.cancel()
        for i, e in enumerate(self._entries):
            if e.id == entry_id:
                del self._entries[i]
                return True
        return False

    def _expire(self, entry_id: int) -> None:
        # The entry may already be gone (evicted or cleared).
        if not self._drop(entry_id):
            logger.debug("Expiry for achievement %s skipped: not visible", entry_id)
            return
        logger.debug("Achievement %s expired", entry_id)
        self._notify()
