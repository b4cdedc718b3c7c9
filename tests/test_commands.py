# tests/test_commands.py

from __future__ import annotations

from overtasker.cli.commands import CommandRegistry, registry


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    notes: list[str] = []
    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_task_commands_round_trip(state) -> None:
    assert registry.handle(state, "/add Write report") == "Added task 1: Write report"
    assert "[ ] 1. Write report" in registry.handle(state, "/list")

    assert "[x] 1. Write report" in registry.handle(state, "/done 1")
    assert "Progress: 100% (goal)" in registry.handle(state, "/stats")

    assert "[x] 1. Final report" in registry.handle(state, "/edit 1 Final report")
    assert registry.handle(state, "/del 1") == "Deleted task 1."
    assert registry.handle(state, "/del 1") == "No task with id 1."


def test_add_and_edit_keep_inner_whitespace(state) -> None:
    registry.handle(state, "/add   a   b\tc  ")
    assert state.task_store.get(1).text == "a   b\tc"

    registry.handle(state, "/edit 1   x  \t y ")
    assert state.task_store.get(1).text == "x  \t y"


def test_registry_passes_rest_of_line_verbatim(state) -> None:
    reg = CommandRegistry()
    reg.register("echo", lambda state, arg: arg, "echo")

    assert reg.handle(state, "/echo one   two") == "one   two"
    assert reg.handle(state, "/echo") == ""


def test_add_blank_emits_invalid_input(state) -> None:
    notes: list[str] = []
    reply = registry.handle(state, "/add", emit=notes.append)
    assert reply == "Task text cannot be empty."
    assert notes == ["[!] invalid input"]


def test_bad_ids_show_usage(state) -> None:
    assert registry.handle(state, "/done abc") == "Usage: /done <id>"
    assert registry.handle(state, "/edit 1") == "Usage: /edit <id> <new text>"


def test_timer_commands(state, scheduler) -> None:
    assert registry.handle(state, "/start") == "Timer running: 25:00"
    scheduler.advance(90)
    assert registry.handle(state, "/pause") == "Timer paused: 23:30"
    assert registry.handle(state, "/timer toggle") == "Timer running: 23:30"
    assert registry.handle(state, "/reset") == "Timer reset: 25:00"
    assert registry.handle(state, "/timer") == "Timer paused: 25:00"


def test_achievements_command_lists_visible(state) -> None:
    registry.handle(state, "/add t")
    registry.handle(state, "/done 1")
    out = registry.handle(state, "/ach")
    assert "Daily goal achieved" in out
    assert "Task completed" in out
