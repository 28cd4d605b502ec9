# src/task_picker/quick_open/session.py

"""
Task quick-open session.

Owns the item list the picker pulls from and drives it through
IDLE -> BUILDING -> READY -> PRESENTING -> IDLE.

Three entry points, each rebuilding everything from scratch:
- open():      run a task (recent / configured / detected, priority ordered)
- attach():    attach to a running, terminal-backed task
- configure(): open the configuration of a detected task

Text filtering and fuzzy matching belong to the picker widget; the session only
supplies the candidate list through on_type().
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import StrEnum

from ..core.ports import (
    ItemAcceptor,
    LabelProvider,
    PickerOptions,
    QuickOpenActionProvider,
    QuickOpenItem,
    QuickPick,
    TaskService,
    WorkspaceInfo,
)
from ..tasks.reconciler import reconcile_tasks
from .actions import TaskActionProvider
from .items import PlaceholderItem, build_attach_items, build_configure_items, build_run_items

logger = logging.getLogger(__name__)

RUN_PLACEHOLDER = "Select the task to run"
ATTACH_PLACEHOLDER = "Choose task to open"
CONFIGURE_PLACEHOLDER = "Select a task to configure"


class SessionState(StrEnum):
    IDLE = "idle"
    BUILDING = "building"
    READY = "ready"
    PRESENTING = "presenting"


class QuickOpenTask:
    prefix = "task "
    description = "Run Task"

    def __init__(
        self,
        task_service: TaskService,
        quick_pick: QuickPick,
        workspace: WorkspaceInfo,
        label_provider: LabelProvider,
        action_provider: QuickOpenActionProvider | None = None,
    ) -> None:
        self._task_service = task_service
        self._quick_pick = quick_pick
        self._workspace = workspace
        self._label_provider = label_provider
        self._task_action_provider = action_provider or TaskActionProvider(task_service)

        self.items: list[QuickOpenItem] = []
        self.action_provider: QuickOpenActionProvider | None = None
        self.state = SessionState.IDLE

    def _set_state(self, state: SessionState) -> None:
        if state != self.state:
            logger.debug("Task picker state %s -> %s", self.state.value, state.value)
        self.state = state

    def _reset(self) -> None:
        self._set_state(SessionState.BUILDING)
        self.items = []
        self.action_provider = None

    def _set_items(self, items: Sequence[QuickOpenItem]) -> None:
        self.items = list(items) if items else [PlaceholderItem()]
        self._set_state(SessionState.READY)

    # ---- entry points ----

    async def init(self) -> None:
        """Build the run-flow item list (recent, configured, detected)."""
        self._reset()

        recent = list(self._task_service.recent_tasks)
        configured = list(self._task_service.get_configured_tasks())
        detected = list(await self._task_service.get_provided_tasks())

        reconciled = reconcile_tasks(recent, configured, detected)
        is_multi_root = self._workspace.is_multi_root
        logger.debug(
            "Reconciled tasks recent=%d configured=%d detected=%d multi_root=%s",
            len(reconciled.recent),
            len(reconciled.configured),
            len(reconciled.detected),
            is_multi_root,
        )

        items = build_run_items(reconciled, self._task_service, is_multi_root)
        self.action_provider = self._task_action_provider if items else None
        self._set_items(items)

    async def open(self) -> None:
        await self.init()
        self._present(RUN_PLACEHOLDER, fuzzy_sort=False)

    async def attach(self) -> None:
        self._reset()
        running = await self._task_service.get_running_tasks()
        self._set_items(build_attach_items(running, self._task_service))
        self._present(ATTACH_PLACEHOLDER, fuzzy_sort=True)

    async def configure(self) -> None:
        self._reset()
        provided = await self._task_service.get_provided_tasks()
        self._set_items(build_configure_items(provided, self._task_service, self._label_provider))
        self._present(CONFIGURE_PLACEHOLDER, fuzzy_sort=True)

    # ---- picker model ----

    def get_options(self) -> PickerOptions:
        return PickerOptions(fuzzy_match_label=True, fuzzy_sort=False, on_close=self.on_close)

    def on_type(self, look_for: str, acceptor: ItemAcceptor) -> None:
        acceptor(self.items, self.action_provider)

    def on_close(self, canceled: bool) -> None:
        logger.debug("Task picker closed (canceled=%s)", canceled)
        self._set_state(SessionState.IDLE)

    def _present(self, placeholder: str, *, fuzzy_sort: bool) -> None:
        options = PickerOptions(
            placeholder=placeholder,
            fuzzy_match_label=True,
            fuzzy_sort=fuzzy_sort,
            on_close=self.on_close,
        )
        self._set_state(SessionState.PRESENTING)
        self._quick_pick.open(self, options)
