# src/overtasker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core import api
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, str], str]
CommandHandler3 = Callable[[AppState, str, CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command rest of line".

        Only the command name is split off; handlers get the remainder
        verbatim (minus the separating whitespace) so task text keeps its
        inner spacing. Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, arg, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, arg)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _split_id(arg: str) -> tuple[int | None, str]:
    """Split "<id> rest" into (id, rest); id is None if missing or not a number."""
    parts = arg.split(maxsplit=1)
    if not parts:
        return None, ""
    rest = parts[1] if len(parts) > 1 else ""
    try:
        return int(parts[0]), rest
    except ValueError:
        return None, rest


def format_tasks(state: AppState) -> str:
    tasks = api.list_tasks(state)
    if not tasks:
        return "Ready to boost your productivity? Add your first task with /add! 🚀"
    lines = []
    for t in tasks:
        mark = "x" if t.completed else " "
        lines.append(f"  [{mark}] {t.id}. {t.text}")
    return "\n".join(lines)


def cmd_help(state: AppState, arg: str) -> str:
    return registry.build_help()


def cmd_add(state: AppState, arg: str, emit: CommandEmitter | None = None) -> str:
    task = api.create_task(state, arg)
    if task is None:
        if emit:
            # transient invalid-input cue
            emit("[!] invalid input")
        return "Task text cannot be empty."
    return f"Added task {task.id}: {task.text}"


def cmd_done(state: AppState, arg: str) -> str:
    """
    /done <id> -> toggle completion (run again to reopen)
    """
    task_id, _ = _split_id(arg)
    if task_id is None:
        return "Usage: /done <id>"
    if not api.toggle_task(state, task_id):
        return f"No task with id {task_id}."
    return format_tasks(state)


def cmd_edit(state: AppState, arg: str) -> str:
    task_id, text = _split_id(arg)
    if task_id is None or not text:
        return "Usage: /edit <id> <new text>"
    if not api.edit_task(state, task_id, text):
        return f"Task {task_id} unchanged."
    return format_tasks(state)


def cmd_del(state: AppState, arg: str) -> str:
    task_id, _ = _split_id(arg)
    if task_id is None:
        return "Usage: /del <id>"
    if not api.delete_task(state, task_id):
        return f"No task with id {task_id}."
    return f"Deleted task {task_id}."


def cmd_list(state: AppState, arg: str) -> str:
    return format_tasks(state)


def cmd_start(state: AppState, arg: str) -> str:
    api.start_timer(state)
    return f"Timer running: {api.timer_snapshot(state).display}"


def cmd_pause(state: AppState, arg: str) -> str:
    api.pause_timer(state)
    return f"Timer paused: {api.timer_snapshot(state).display}"


def cmd_reset(state: AppState, arg: str) -> str:
    api.reset_timer(state)
    return f"Timer reset: {api.timer_snapshot(state).display}"


def cmd_timer(state: AppState, arg: str) -> str:
    """
    /timer         -> show remaining time
    /timer toggle  -> start if paused, pause if running
    """
    if arg.strip().lower() == "toggle":
        api.toggle_timer(state)

    snap = api.timer_snapshot(state)
    return f"Timer {'running' if snap.armed else 'paused'}: {snap.display}"


def cmd_stats(state: AppState, arg: str) -> str:
    s = api.stats_snapshot(state)
    return (
        "Stats:\n"
        f"  Completed: {s.tasks_completed}\n"
        f"  Today: {s.today_tasks}\n"
        f"  Pomodoros: {s.pomodoro_sessions}\n"
        f"  Focus time: {s.focus_hours}h\n"
        f"  Streak: {s.current_streak}\n"
        f"  Progress: {s.progress_label} ({s.tier.value})"
    )


def cmd_achievements(state: AppState, arg: str) -> str:
    messages = api.achievement_messages(state)
    if not messages:
        return "No achievements on screen."
    return "\n".join(f"  {m}" for m in messages)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.")
registry.register("done", cmd_done, help_text="Toggle a task: /done <id>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Rename a task: /edit <id> <text>.")
registry.register("del", cmd_del, help_text="Delete a task: /del <id>.", aliases=["rm"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("start", cmd_start, help_text="Start the focus timer.")
registry.register("pause", cmd_pause, help_text="Pause the focus timer.")
registry.register("reset", cmd_reset, help_text="Reset the focus timer to 25:00.")
registry.register("timer", cmd_timer, help_text="Timer status: /timer | /timer toggle.")
registry.register("stats", cmd_stats, help_text="Show statistics and progress.")
registry.register(
    "achievements", cmd_achievements, help_text="Show visible achievements.", aliases=["ach"]
)
