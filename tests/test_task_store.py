# tests/test_task_store.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from task_picker.tasks.task_models import TaskKind
from task_picker.tasks.task_store import LocalTaskService, TaskFileStore

from .fakes import configured, detected


def _write_tasks(path: Path) -> None:
    path.write_text(
        json.dumps(
            {
                "configured": [
                    {"label": "build", "type": "shell"},
                    {"label": "serve", "type": "process", "source": "file:///ws/tasks.json"},
                    {"type": "shell"},
                    "garbage",
                ],
                "detected": [
                    {"label": "test", "source": "npm", "scope": "file:///ws"},
                    {"label": "build", "source": "npm"},
                ],
            }
        ),
        "utf-8",
    )


@pytest.fixture()
def store(tmp_path: Path) -> TaskFileStore:
    tasks_file = tmp_path / "tasks.json"
    _write_tasks(tasks_file)
    return TaskFileStore(tasks_file, tmp_path / "recent.json", recent_limit=2)


def test_load_skips_bad_entries_and_sets_kinds(store: TaskFileStore) -> None:
    configured = store.load_configured()
    detected_tasks = store.load_detected()

    assert [t.label for t in configured] == ["build", "serve"]
    assert all(t.kind == TaskKind.CONFIGURED for t in configured)
    assert configured[0].source == store.tasks_file_uri
    assert configured[1].source == "file:///ws/tasks.json"

    assert [t.label for t in detected_tasks] == ["test", "build"]
    assert all(t.is_contributed for t in detected_tasks)


def test_missing_or_broken_files_mean_no_tasks(tmp_path: Path) -> None:
    missing = TaskFileStore(tmp_path / "nope.json", tmp_path / "recent.json")
    assert missing.load_configured() == []
    assert missing.load_recent() == []

    broken_file = tmp_path / "broken.json"
    broken_file.write_text("{not json", "utf-8")
    broken = TaskFileStore(broken_file, tmp_path / "recent.json")
    assert broken.load_detected() == []


def test_push_recent_dedups_and_caps(store: TaskFileStore) -> None:
    a, b, c = detected("a"), detected("b"), detected("c")
    store.push_recent(a)
    store.push_recent(b)
    store.push_recent(a)
    recent = store.push_recent(c)

    assert [t.label for t in recent] == ["c", "a"]
    assert [t.label for t in store.load_recent()] == ["c", "a"]
    assert store.load_recent()[0].is_contributed


@pytest.mark.asyncio
async def test_local_service_run_records_recent_and_running(store: TaskFileStore) -> None:
    service = LocalTaskService(store)

    service.run("npm", "test")
    service.run_configured_task("file:///ws/tasks.json", "serve")

    assert [t.label for t in service.recent_tasks] == ["serve", "test"]
    running = await service.get_running_tasks()
    assert [(r.task_id, r.config.label) for r in running] == [(1, "test"), (2, "serve")]
    assert running[0].terminal_id is not None
    # "process" tasks are not terminal-backed
    assert running[1].terminal_id is None


@pytest.mark.asyncio
async def test_local_service_ignores_unknown_tasks(store: TaskFileStore) -> None:
    service = LocalTaskService(store)

    service.run("npm", "nope")
    service.run_configured_task("file:///elsewhere", "serve")

    assert service.recent_tasks == ()
    assert await service.get_running_tasks() == ()


def test_local_service_configure_copies_detected_task(store: TaskFileStore) -> None:
    service = LocalTaskService(store)
    provided = store.load_detected()

    service.configure(provided[0])
    service.configure(provided[0])
    service.configure(provided[1])  # "build" is already configured

    configured = store.load_configured()
    assert [t.label for t in configured] == ["build", "serve", "test"]
    added = configured[-1]
    assert added.kind == TaskKind.CONFIGURED
    assert added.type == "npm"
    assert added.scope == "file:///ws"
    assert added.source == store.tasks_file_uri


def test_add_configured_leaves_unparseable_tasks_file_alone(tmp_path: Path) -> None:
    tasks_file = tmp_path / "tasks.json"
    original = (
        '{"configured": [{"label": "build", "type": "shell"}],'
        ' "detected": [{"label": "t", "source": "npm"},]}'
    )
    tasks_file.write_text(original, "utf-8")
    store = TaskFileStore(tasks_file, tmp_path / "recent.json")

    assert store.add_configured(configured("new")) is False
    assert tasks_file.read_text("utf-8") == original

    service = LocalTaskService(store)
    service.configure(detected("t"))
    assert tasks_file.read_text("utf-8") == original


def test_add_configured_creates_missing_tasks_file(tmp_path: Path) -> None:
    tasks_file = tmp_path / "tasks.json"
    store = TaskFileStore(tasks_file, tmp_path / "recent.json")

    assert store.add_configured(configured("new")) is True
    assert [t.label for t in store.load_configured()] == ["new"]
