# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_picker.core.state import AppState
from task_picker.quick_open.session import QuickOpenTask

from .fakes import FakeLabelProvider, FakeQuickPick, FakeTaskService, FakeWorkspace


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="task-picker-test",
        log_level="DEBUG",
        console_enabled=True,
        data_dir=tmp_path,
        tasks_file=tmp_path / "tasks.json",
        recent_tasks_path=tmp_path / "recent_tasks.json",
        workspace_path=None,
        recent_limit=5,
    )


@pytest.fixture()
def task_service() -> FakeTaskService:
    return FakeTaskService()


@pytest.fixture()
def quick_pick() -> FakeQuickPick:
    return FakeQuickPick()


@pytest.fixture()
def workspace() -> FakeWorkspace:
    return FakeWorkspace()


@pytest.fixture()
def session(task_service, quick_pick, workspace) -> QuickOpenTask:
    return QuickOpenTask(task_service, quick_pick, workspace, FakeLabelProvider())


@pytest.fixture()
def state(settings, task_service, workspace, session) -> AppState:
    return AppState(
        settings=settings,
        task_service=task_service,
        workspace=workspace,
        label_provider=FakeLabelProvider(),
        session=session,
    )
