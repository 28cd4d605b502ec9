# src/task_picker/core/ports.py

"""
Ports (interfaces) used by the core.

The picker core depends on Protocols instead of concrete implementations.
This keeps the execution engine, workspace and picker widget swappable and makes
testing easier.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from ..tasks.task_models import RunningTaskInfo, TaskDescriptor


class TaskService(Protocol):
    """
    Task provider + execution engine.

    Queries may suspend; dispatch calls (run/attach/configure) are fire-and-forget,
    the engine schedules its own work.
    """

    @property
    def recent_tasks(self) -> Sequence[TaskDescriptor]: ...

    def get_configured_tasks(self) -> Sequence[TaskDescriptor]: ...
    async def get_provided_tasks(self) -> Sequence[TaskDescriptor]: ...
    async def get_running_tasks(self) -> Sequence[RunningTaskInfo]: ...

    def run(self, source: str, label: str) -> None: ...
    def run_configured_task(self, source: str, label: str) -> None: ...
    def attach(self, terminal_id: int, task_id: int) -> None: ...
    def configure(self, task: TaskDescriptor) -> None: ...


class WorkspaceInfo(Protocol):
    @property
    def is_multi_root(self) -> bool: ...


class LabelProvider(Protocol):
    def get_long_name(self, uri: str) -> str: ...


# ---- picker widget contract ----


class PickMode(StrEnum):
    """How the picker invokes an item: OPEN is the confirm/accept gesture."""

    OPEN = "open"
    PREVIEW = "preview"


class QuickOpenItem(Protocol):
    """What the picker renders and dispatches."""

    @property
    def label(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def group_label(self) -> str | None: ...

    @property
    def show_separator(self) -> bool: ...

    def run(self, mode: PickMode) -> bool: ...


class QuickOpenAction(Protocol):
    """Secondary per-item action (e.g. "Configure Task")."""

    @property
    def id(self) -> str: ...

    @property
    def label(self) -> str: ...

    def is_enabled(self, item: QuickOpenItem) -> bool: ...
    def run(self, item: QuickOpenItem) -> bool: ...


class QuickOpenActionProvider(Protocol):
    def has_actions(self, item: QuickOpenItem) -> bool: ...
    def get_actions(self, item: QuickOpenItem) -> Sequence[QuickOpenAction]: ...


ItemAcceptor = Callable[[Sequence[QuickOpenItem], QuickOpenActionProvider | None], None]
# acceptor(items, action_provider) used by the pull-style on_type callback.


class QuickOpenModel(Protocol):
    def on_type(self, look_for: str, acceptor: ItemAcceptor) -> None: ...


@dataclass(frozen=True, slots=True)
class PickerOptions:
    """
    Options handed to the picker widget.

    fuzzy_sort=False keeps the model's order (bucket priority) instead of relevance order.
    on_close(canceled) is called once when the picker closes.
    """

    placeholder: str = ""
    fuzzy_match_label: bool = True
    fuzzy_sort: bool = False
    on_close: Callable[[bool], None] | None = None


class QuickPick(Protocol):
    """External picker widget: renders, filters by text, and dispatches the selection."""

    def open(self, model: QuickOpenModel, options: PickerOptions) -> None:
        """
        Called synchronously from the session coroutines. A widget that blocks here
        (e.g. on console input) blocks the event loop until it returns.
        """
        ...
