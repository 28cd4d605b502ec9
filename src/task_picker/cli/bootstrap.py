# src/task_picker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the local task service, workspace, label provider and console picker
  into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_picker import ConsoleQuickPick
from ..core.labels import PathLabelProvider
from ..core.ports import QuickPick
from ..core.state import AppState
from ..core.workspace import LocalWorkspace
from ..quick_open.session import QuickOpenTask
from ..tasks.task_store import LocalTaskService, TaskFileStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_file.parent.mkdir(parents=True, exist_ok=True)
    settings.recent_tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, quick_pick: QuickPick | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the picker) injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskFileStore(
        settings.tasks_file,
        settings.recent_tasks_path,
        recent_limit=settings.recent_limit,
    )
    task_service = LocalTaskService(store)
    workspace = LocalWorkspace(settings.workspace_path)
    label_provider = PathLabelProvider()

    session = QuickOpenTask(
        task_service,
        quick_pick or ConsoleQuickPick(),
        workspace,
        label_provider,
    )
    logger.info(
        "Task picker wired tasks_file=%s workspace=%s multi_root=%s",
        settings.tasks_file,
        settings.workspace_path,
        workspace.is_multi_root,
    )

    return AppState(
        settings=settings,
        task_service=task_service,
        workspace=workspace,
        label_provider=label_provider,
        session=session,
    )
