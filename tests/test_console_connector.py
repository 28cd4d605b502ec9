# tests/test_console_connector.py

from __future__ import annotations

import pytest

from task_picker.connectors.console_connector import _as_command, run_console_loop

from .fakes import ScriptedInput, configured


@pytest.fixture()
def printed(monkeypatch) -> list[str]:
    out: list[str] = []
    monkeypatch.setattr("builtins.print", lambda *args, **kwargs: out.append(" ".join(map(str, args))))
    return out


def test_as_command_routes_bare_prefix(state) -> None:
    assert _as_command(state, "task") == "/task"
    assert _as_command(state, "Task attach") == "/Task attach"
    assert _as_command(state, "tasks") == "tasks"
    assert _as_command(state, "/help") == "/help"


def test_console_loop_opens_picker_for_bare_task(state, task_service, quick_pick, monkeypatch, printed) -> None:
    task_service.configured = [configured("build")]
    monkeypatch.setattr("builtins.input", ScriptedInput(["task", "task attach"]))

    run_console_loop(state)

    assert len(quick_pick.opened) == 2
    assert quick_pick.opened[0].options.fuzzy_sort is False
    assert quick_pick.opened[1].options.fuzzy_sort is True
    assert any("Detecting tasks" in line for line in printed)


def test_console_loop_rejects_plain_text(state, quick_pick, monkeypatch, printed) -> None:
    monkeypatch.setattr("builtins.input", ScriptedInput(["hello there"]))

    run_console_loop(state)

    assert quick_pick.opened == []
    assert any("Not a command" in line for line in printed)


def test_console_loop_survives_crashing_handler(state, monkeypatch, printed) -> None:
    async def broken_open() -> None:
        raise RuntimeError("task detection failed")

    monkeypatch.setattr(state.session, "open", broken_open)
    monkeypatch.setattr("builtins.input", ScriptedInput(["/task", "/running"]))

    run_console_loop(state)

    assert any("Internal error while handling a command." in line for line in printed)
    assert any("No running tasks." in line for line in printed)


@pytest.mark.parametrize("exit_cmd", ["/exit", "/QUIT"])
def test_console_loop_stops_on_exit(state, quick_pick, monkeypatch, printed, exit_cmd) -> None:
    scripted = ScriptedInput([exit_cmd, "/task"])
    monkeypatch.setattr("builtins.input", scripted)

    run_console_loop(state)

    assert scripted.lines == ["/task"]
    assert quick_pick.opened == []
