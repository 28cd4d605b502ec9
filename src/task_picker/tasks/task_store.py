# src/task_picker/tasks/task_store.py

from __future__ import annotations

import contextlib
import itertools
import json
import logging
import os
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path
from typing import Any

from .task_models import RunningTaskInfo, TaskDescriptor, TaskKind

logger = logging.getLogger(__name__)


class TaskFileStore:
    """
    JSON-file task definitions + recent-task history.

    tasks file layout:
        {"configured": [{"label": ..., "type": ..., "source": ...}, ...],
         "detected":   [{"label": ..., "source": "<provider>", "scope": ...}, ...]}

    Loading is best-effort: a missing or broken file means "no tasks", bad entries
    are skipped. Writes go through a temp file + os.replace, and a tasks file that
    exists but cannot be parsed is never rewritten.
    """

    def __init__(
        self,
        tasks_file: str | Path,
        recent_path: str | Path,
        *,
        recent_limit: int = 20,
    ) -> None:
        self._tasks_file = Path(tasks_file)
        self._recent_path = Path(recent_path)
        self._recent_limit = max(1, int(recent_limit))

    @property
    def tasks_file_uri(self) -> str:
        return self._tasks_file.resolve().as_uri()

    # ---- low-level helpers ----

    @staticmethod
    def _read_json(path: Path) -> Any:
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text("utf-8"))
        except Exception:
            logger.exception("Failed to read %s", path)
            return None

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, path)
        except Exception:
            logger.exception("Failed to write %s", path)

    @staticmethod
    def _parse_tasks(raw: Any, kind: TaskKind, where: str) -> list[TaskDescriptor]:
        if not isinstance(raw, list):
            return []
        out: list[TaskDescriptor] = []
        for entry in raw:
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object task entry in %s: %r", where, entry)
                continue
            try:
                out.append(TaskDescriptor.from_dict(entry, kind=kind))
            except ValueError as e:
                logger.warning("Skipping task entry in %s: %s", where, e)
        return out

    def _load_sections(self) -> dict[str, Any]:
        data = self._read_json(self._tasks_file)
        return data if isinstance(data, dict) else {}

    # ---- task definitions ----

    def load_configured(self) -> list[TaskDescriptor]:
        raw = self._load_sections().get("configured")
        tasks = self._parse_tasks(raw, TaskKind.CONFIGURED, str(self._tasks_file))
        # Configured tasks without an explicit source belong to the tasks file itself.
        return [t if t.source else replace(t, source=self.tasks_file_uri) for t in tasks]

    def load_detected(self) -> list[TaskDescriptor]:
        raw = self._load_sections().get("detected")
        return self._parse_tasks(raw, TaskKind.CONTRIBUTED, str(self._tasks_file))

    def add_configured(self, task: TaskDescriptor) -> bool:
        """
        Append a configured task.

        Returns False without writing if a configured task with that label already exists,
        or if the tasks file exists but cannot be parsed (it is left untouched).
        """
        if self._tasks_file.exists():
            data = self._read_json(self._tasks_file)
            if not isinstance(data, dict):
                logger.error("Not updating unreadable tasks file %s; fix it by hand first", self._tasks_file)
                return False
            sections: dict[str, Any] = data
        else:
            sections = {}

        configured = sections.get("configured")
        if not isinstance(configured, list):
            configured = []

        if any(isinstance(e, dict) and e.get("label") == task.label for e in configured):
            return False

        configured.append(task.to_dict())
        sections["configured"] = configured
        self._write_json(self._tasks_file, sections)
        logger.info("Added configured task label=%s to %s", task.label, self._tasks_file)
        return True

    # ---- recent history ----

    def load_recent(self) -> list[TaskDescriptor]:
        return self._parse_tasks(self._read_json(self._recent_path), TaskKind.CONFIGURED, str(self._recent_path))

    def push_recent(self, task: TaskDescriptor) -> list[TaskDescriptor]:
        """Move `task` to the front of the history (deduplicated by label, capped)."""
        recent = [t for t in self.load_recent() if t.label != task.label]
        recent.insert(0, task)
        recent = recent[: self._recent_limit]
        self._write_json(self._recent_path, [t.to_dict() for t in recent])
        with contextlib.suppress(Exception):
            os.chmod(self._recent_path, 0o600)
        return recent


class LocalTaskService:
    """
    TaskService backed by TaskFileStore.

    Nothing is executed: running a task records it in the recent history and in an
    in-memory list of running instances so the attach flow has something to show.
    Tasks of type "process" are treated as having no terminal.
    """

    def __init__(self, store: TaskFileStore) -> None:
        self._store = store
        self._recent: list[TaskDescriptor] = store.load_recent()
        self._running: list[RunningTaskInfo] = []
        self._task_ids = itertools.count(1)
        self._terminal_ids = itertools.count(1)

    @property
    def recent_tasks(self) -> Sequence[TaskDescriptor]:
        return tuple(self._recent)

    def get_configured_tasks(self) -> Sequence[TaskDescriptor]:
        return self._store.load_configured()

    async def get_provided_tasks(self) -> Sequence[TaskDescriptor]:
        return self._store.load_detected()

    async def get_running_tasks(self) -> Sequence[RunningTaskInfo]:
        return tuple(self._running)

    def _start(self, task: TaskDescriptor) -> RunningTaskInfo:
        self._recent = self._store.push_recent(task)
        terminal_id = None if task.type == "process" else next(self._terminal_ids)
        info = RunningTaskInfo(task_id=next(self._task_ids), config=task, terminal_id=terminal_id)
        self._running.append(info)
        logger.info("Task started task_id=%s label=%s terminal_id=%s", info.task_id, task.label, terminal_id)
        return info

    @staticmethod
    def _find(tasks: Sequence[TaskDescriptor], source: str, label: str) -> TaskDescriptor | None:
        for task in tasks:
            if task.source == source and task.label == label:
                return task
        return None

    def run(self, source: str, label: str) -> None:
        task = self._find(self._store.load_detected(), source, label)
        if task is None:
            logger.warning("No detected task source=%s label=%s", source, label)
            return
        self._start(task)

    def run_configured_task(self, source: str, label: str) -> None:
        task = self._find(self._store.load_configured(), source, label)
        if task is None:
            logger.warning("No configured task source=%s label=%s", source, label)
            return
        self._start(task)

    def attach(self, terminal_id: int, task_id: int) -> None:
        for info in self._running:
            if info.task_id == task_id and info.terminal_id == terminal_id:
                logger.info("Attached to task_id=%s terminal_id=%s", task_id, terminal_id)
                return
        logger.warning("No running task task_id=%s terminal_id=%s", task_id, terminal_id)

    def configure(self, task: TaskDescriptor) -> None:
        configured = TaskDescriptor(
            label=task.label,
            source=self._store.tasks_file_uri,
            kind=TaskKind.CONFIGURED,
            type=task.type or task.source,
            scope=task.scope,
        )
        if not self._store.add_configured(configured):
            logger.info("Task label=%s was not added to the configured tasks", task.label)
