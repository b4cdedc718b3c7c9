# src/overtasker/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core import api
from ..core.state import AppState, ChangeKind

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class _AchievementPrinter:
    """Print each achievement once, the moment it becomes visible."""

    def __init__(self, state: AppState) -> None:
        self._state = state
        self._seen: set[int] = {e.id for e in state.achievements.entries()}

    def __call__(self, changed: frozenset[ChangeKind]) -> None:
        if ChangeKind.ACHIEVEMENTS not in changed:
            return
        visible = self._state.achievements.entries()
        for entry in reversed(visible):
            if entry.id not in self._seen:
                _print_ts(f"[ACHIEVEMENT] {entry.message}")
        self._seen = {e.id for e in visible}

class _LineReader:
    """
    Reads stdin lines on a daemon thread and hands them to the event loop.

    A blocked input() never holds up interpreter exit (Ctrl+C, loop shutdown),
    unlike a default-executor thread. The next line is only requested after
    the previous one has been handled, so the prompt never races the reply.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        read_line: Callable[[str], str] = input,
        prompt: str = ">>> ",
    ) -> None:
        self._loop = loop
        self._read_line = read_line
        self._prompt = prompt
        self._lines: asyncio.Queue[str | None] = asyncio.Queue()
        self._want = threading.Event()
        self._thread = threading.Thread(target=self._run, name="console-reader", daemon=True)

    def start(self) -> None:
        self._thread.start()

    async def next_line(self) -> str | None:
        """Next raw line, or None on EOF."""
        self._want.set()
        return await self._lines.get()

    def _deliver(self, line: str | None) -> bool:
        try:
            self._loop.call_soon_threadsafe(self._lines.put_nowait, line)
        except RuntimeError:
            # loop already closed: the app is exiting
            return False
        return True

    def _run(self) -> None:
        while True:
            self._want.wait()
            self._want.clear()
            try:
                line = self._read_line(self._prompt)
            except EOFError:
                self._deliver(None)
                return
            if not self._deliver(line):
                return


async def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
) -> None:
    """
    Interactive console adapter.

    Input is read on a daemon thread so the event loop keeps delivering
    timer ticks and achievement expiries while we wait for the user.
    Leave with /exit, /quit, EOF (Ctrl+D) or Ctrl+C.
    """
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "overtasker"))
    _print_ts(f"[{app_name.upper()}] Use /help for commands. Use /exit to quit.\n")

    api.subscribe(state, _AchievementPrinter(state))

    def emit(text: str) -> None:
        _print_ts(text)

    reader = _LineReader(asyncio.get_running_loop(), read_line)
    reader.start()

    while True:
        raw = await reader.next_line()
        if raw is None:
            logger.info("Console EOF received, exiting.")
            break

        user_input = raw.strip()
        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            # Bare text is the common case: treat it as a new task.
            user_input = f"/add {user_input}"

        try:
            cmd_response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is not None:
            _print_ts(cmd_response)

    logger.info("Console connector finished.")
