# src/task_picker/cli/commands.py

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /task, ...)."""

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
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def _notify(emit: CommandEmitter | None, text: str) -> None:
    if emit:
        with contextlib.suppress(Exception):
            emit(text)


def cmd_task(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /task            -> pick a task to run
    /task attach     -> same as /task-attach
    /task configure  -> same as /task-configure
    """
    if args:
        sub = args[0].lower()
        if sub == "attach":
            return cmd_task_attach(state, args[1:])
        if sub == "configure":
            return cmd_task_configure(state, args[1:], emit)
        return "Usage: /task | /task attach | /task configure"

    logger.debug("Run picker requested")
    # Task detection may scan the workspace; tell the user before the picker shows up.
    _notify(emit, "[TASK] Detecting tasks...")
    asyncio.run(state.session.open())
    return ""


def cmd_task_attach(state: AppState, args: list[str]) -> str:
    logger.debug("Attach picker requested")
    asyncio.run(state.session.attach())
    return ""


def cmd_task_configure(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    logger.debug("Configure picker requested")
    _notify(emit, "[TASK] Detecting tasks...")
    asyncio.run(state.session.configure())
    return ""


def cmd_running(state: AppState, args: list[str]) -> str:
    running = asyncio.run(state.task_service.get_running_tasks())
    if not running:
        return "No running tasks."
    lines = ["Running tasks:"]
    for info in running:
        terminal = f"terminal {info.terminal_id}" if info.terminal_id is not None else "no terminal"
        lines.append(f"  {info.task_id}. {info.config.label} ({terminal})")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("task", cmd_task, help_text="Pick a task to run.", aliases=["run"])
registry.register(
    "task-attach", cmd_task_attach, help_text="Attach to a running task.", aliases=["attach"]
)
registry.register(
    "task-configure",
    cmd_task_configure,
    help_text="Configure a detected task.",
    aliases=["configure"],
)
registry.register("running", cmd_running, help_text="List running tasks.", aliases=["ps"])
