# src/task_picker/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _as_command(state: AppState, line: str) -> str:
    """Bare handler prefix ("task", "task attach") is accepted as a shortcut for /task."""
    prefix = state.session.prefix.strip().lower()
    lowered = line.lower()
    if lowered == prefix or lowered.startswith(prefix + " "):
        return "/" + line
    return line


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts(f"[CONSOLE] {state.session.description}: type /task (or 'task'). Use /help for commands, /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        line = _as_command(state, user_input)
        try:
            cmd_response = command_registry.handle(state, line, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is None:
            _print_ts("Not a command. Use /help to list available commands.")
            continue

        if cmd_response:
            _print_ts(cmd_response)

    logger.info("Console connector finished.")
