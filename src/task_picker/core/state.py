# src/task_picker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..quick_open.session import QuickOpenTask
from .ports import LabelProvider, TaskService, WorkspaceInfo


@dataclass
class AppState:
    # Settings are kept on the state so command handlers can read them.
    settings: object

    task_service: TaskService
    workspace: WorkspaceInfo
    label_provider: LabelProvider
    session: QuickOpenTask
