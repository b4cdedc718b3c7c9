# tests/test_console_connector.py

from __future__ import annotations

import asyncio
import threading

import pytest

from overtasker.connectors.console_connector import _LineReader, run_console_loop


class ScriptedInput:
    """input() replacement: returns queued lines, then raises EOFError."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = list(lines)
        self.prompts: list[str] = []
        self.threads: set[str] = set()

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.threads.add(threading.current_thread().name)
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)


@pytest.mark.asyncio
async def test_console_handles_commands_until_eof(state, capsys) -> None:
    script = ScriptedInput(["Write   report", "", "/done 1", "/stats"])

    await asyncio.wait_for(run_console_loop(state, read_line=script), timeout=5)

    task = state.task_store.get(1)
    assert task.text == "Write   report"
    assert task.completed is True
    assert "Progress: 100% (goal)" in capsys.readouterr().out
    # one prompt per line, plus the final read that hit EOF
    assert len(script.prompts) == 5
    assert script.threads == {"console-reader"}


@pytest.mark.asyncio
async def test_console_exit_command_stops_reading(state) -> None:
    script = ScriptedInput(["/add a", "/exit", "/add never"])

    await asyncio.wait_for(run_console_loop(state, read_line=script), timeout=5)

    assert [t.text for t in state.task_store.all()] == ["a"]
    assert len(script.prompts) == 2


def test_reader_thread_is_daemon(state) -> None:
    loop = asyncio.new_event_loop()
    try:
        reader = _LineReader(loop, ScriptedInput([]))
        assert reader._thread.daemon is True
    finally:
        loop.close()
