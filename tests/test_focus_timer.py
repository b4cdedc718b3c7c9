# tests/test_focus_timer.py

from __future__ import annotations

from overtasker.timer.focus_timer import (
    MSG_SESSION_COMPLETED,
    SESSION_MINUTES,
    FocusTimer,
    TimerEvent,
)

from .fakes import FakeScheduler, RecordingSink


def _timer():
    scheduler = FakeScheduler()
    sink = RecordingSink()
    timer = FocusTimer(scheduler, tick_interval=1.0, achievements=sink)
    return scheduler, sink, timer


def test_initial_state_is_idle_at_default() -> None:
    _, _, timer = _timer()
    snap = timer.snapshot()
    assert (snap.minutes, snap.seconds, snap.armed) == (25, 0, False)
    assert snap.display == "25:00"


def test_ticks_count_down_with_minute_borrow() -> None:
    scheduler, _, timer = _timer()
    timer.start()

    scheduler.advance(1)
    assert timer.snapshot().display == "24:59"

    scheduler.advance(59)
    assert timer.snapshot().display == "24:00"

    scheduler.advance(1)
    assert timer.snapshot().display == "23:59"


def test_start_is_idempotent() -> None:
    scheduler, _, timer = _timer()
    timer.start()
    timer.start()
    timer.start()

    scheduler.advance(10)

    assert timer.snapshot().display == "24:50"
    assert scheduler.pending() == 1


def test_pause_preserves_time_and_stops_ticks() -> None:
    scheduler, _, timer = _timer()
    timer.start()
    scheduler.advance(7)
    timer.pause()

    scheduler.advance(100)

    snap = timer.snapshot()
    assert snap.display == "24:53"
    assert snap.armed is False
    assert scheduler.pending() == 0

    timer.start()
    scheduler.advance(3)
    assert timer.snapshot().display == "24:50"


def test_reset_always_restores_default() -> None:
    scheduler, _, timer = _timer()
    timer.reset()
    assert timer.snapshot().display == "25:00"

    timer.start()
    scheduler.advance(125)
    timer.reset()
    snap = timer.snapshot()
    assert (snap.minutes, snap.seconds, snap.armed) == (25, 0, False)

    scheduler.advance(10)
    assert timer.snapshot().display == "25:00"


def test_tick_ignored_when_not_armed() -> None:
    _, _, timer = _timer()
    timer.on_tick()
    assert timer.snapshot().display == "25:00"


def test_full_session_completes_exactly_once() -> None:
    scheduler, sink, timer = _timer()
    sessions: list[int] = []
    events: list[TimerEvent] = []
    timer.add_session_listener(sessions.append)
    timer.add_listener(lambda event, snap: events.append(event))

    timer.start()
    scheduler.advance(1500)

    assert sessions == [SESSION_MINUTES]
    assert sink.posted == [MSG_SESSION_COMPLETED]
    assert events.count(TimerEvent.SESSION_COMPLETED) == 1
    snap = timer.snapshot()
    assert (snap.minutes, snap.seconds, snap.armed) == (25, 0, False)

    # disarmed: no further ticks or sessions
    scheduler.advance(3000)
    assert sessions == [SESSION_MINUTES]
    assert timer.snapshot().display == "25:00"


def test_session_completed_snapshot_is_post_reset() -> None:
    scheduler, _, timer = _timer()
    seen = []
    timer.add_listener(
        lambda event, snap: seen.append(snap) if event == TimerEvent.SESSION_COMPLETED else None
    )

    timer.start()
    scheduler.advance(1500)

    assert len(seen) == 1
    assert (seen[0].minutes, seen[0].seconds, seen[0].armed) == (25, 0, False)
