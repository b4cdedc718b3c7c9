# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from overtasker.cli.bootstrap import create_initial_state
from overtasker.core.state import AppState

from .fakes import FakeDay, FakeScheduler


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="overtasker",
        tick_interval=1.0,
        welcome_delay=1.0,
        achievement_lifetime=5.0,
        achievement_limit=5,
        repeat_goal=False,
    )


@pytest.fixture()
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture()
def day() -> FakeDay:
    return FakeDay()


@pytest.fixture()
def state(settings: SimpleNamespace, scheduler: FakeScheduler, day: FakeDay) -> AppState:
    """AppState wired with the fake scheduler and a movable calendar."""
    return create_initial_state(settings=settings, scheduler=scheduler, today=day)
