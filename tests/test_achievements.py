# tests/test_achievements.py

from __future__ import annotations

from overtasker.achievements.notifier import PLACEHOLDER_MESSAGE, AchievementNotifier

from .fakes import FakeScheduler


def test_placeholder_replaced_by_first_post() -> None:
    scheduler = FakeScheduler()
    notifier = AchievementNotifier(scheduler)
    assert notifier.messages() == [PLACEHOLDER_MESSAGE]

    notifier.post("first")
    notifier.post("second")

    assert notifier.messages() == ["second", "first"]


def test_placeholder_does_not_expire() -> None:
    scheduler = FakeScheduler()
    notifier = AchievementNotifier(scheduler)
    scheduler.advance(60)
    assert notifier.messages() == [PLACEHOLDER_MESSAGE]


def test_entries_expire_after_lifetime() -> None:
    scheduler = FakeScheduler()
    notifier = AchievementNotifier(scheduler, lifetime=5.0, placeholder=None)

    notifier.post("a")
    scheduler.advance(2)
    notifier.post("b")

    scheduler.advance(2)
    assert notifier.messages() == ["b", "a"]

    scheduler.advance(1)  # t=5: "a" is gone
    assert notifier.messages() == ["b"]

    scheduler.advance(2)  # t=7: "b" is gone
    assert notifier.messages() == []


def test_bound_evicts_oldest_immediately() -> None:
    scheduler = FakeScheduler()
    notifier = AchievementNotifier(scheduler, limit=5, placeholder=None)

    for i in range(8):
        notifier.post(f"m{i}")
        assert len(notifier.messages()) <= 5

    assert notifier.messages() == ["m7", "m6", "m5", "m4", "m3"]
    # evicted entries have their expiry cancelled
    assert scheduler.pending() == 5


def test_evicted_entry_expiry_is_harmless() -> None:
    scheduler = FakeScheduler()
    notifier = AchievementNotifier(scheduler, lifetime=5.0, limit=2, placeholder=None)
    changes = []
    notifier.add_listener(lambda: changes.append(notifier.messages()))

    notifier.post("a")
    scheduler.advance(1)
    notifier.post("b")
    scheduler.advance(1)
    notifier.post("c")  # evicts "a"

    scheduler.advance(10)

    assert notifier.messages() == []
    # three posts + two real expiries, nothing for the evicted entry
    assert len(changes) == 5


def test_clear_cancels_pending_expiries() -> None:
    scheduler = FakeScheduler()
    notifier = AchievementNotifier(scheduler, placeholder=None)
    notifier.post("a")
    notifier.post("b")

    notifier.clear()

    assert notifier.messages() == []
    assert scheduler.pending() == 0
