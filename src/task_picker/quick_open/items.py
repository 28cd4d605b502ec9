# src/task_picker/quick_open/items.py

"""
Picker items for the task flows.

Each item wraps one task (or running task) and knows how to render itself and what
to do when the user accepts it. Grouping decisions (group label, separator) are made
once by the builders below and stored on the items.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.labels import uri_display_name, uri_path
from ..core.ports import LabelProvider, PickMode, TaskService
from ..tasks.reconciler import ReconciledTasks
from ..tasks.task_models import RunningTaskInfo, TaskDescriptor

logger = logging.getLogger(__name__)

NO_TASKS_LABEL = "No tasks found"

RECENT_GROUP = "recently used tasks"
CONFIGURED_GROUP = "configured tasks"
DETECTED_GROUP = "detected tasks"


class PlaceholderItem:
    """Informational, non-actionable entry shown when a flow has nothing to offer."""

    description = ""
    group_label: str | None = None
    show_separator = False

    def __init__(self, label: str = NO_TASKS_LABEL) -> None:
        self.label = label

    def run(self, mode: PickMode) -> bool:
        return False

    def __repr__(self) -> str:
        return f"PlaceholderItem({self.label!r})"


class RunnableTaskItem:
    def __init__(
        self,
        task: TaskDescriptor,
        task_service: TaskService,
        is_multi_root: bool,
        *,
        group_label: str | None = None,
        show_separator: bool = False,
    ) -> None:
        self.task = task
        self.group_label = group_label
        self.show_separator = show_separator
        self._task_service = task_service
        self._is_multi_root = is_multi_root

    @property
    def label(self) -> str:
        if self.task.is_contributed:
            return f"{self.task.source}: {self.task.label}"
        return f"{self.task.type}: {self.task.label}"

    @property
    def description(self) -> str:
        if not self._is_multi_root:
            return ""
        if self.task.is_contributed:
            if self.task.scope:
                return uri_path(self.task.scope)
            return self.task.source
        return uri_display_name(self.task.source)

    def run(self, mode: PickMode) -> bool:
        if mode != PickMode.OPEN:
            return False

        if self.task.is_contributed:
            logger.info("Running detected task source=%s label=%s", self.task.source, self.task.label)
            self._task_service.run(self.task.source, self.task.label)
        else:
            logger.info("Running configured task source=%s label=%s", self.task.source, self.task.label)
            self._task_service.run_configured_task(self.task.source, self.task.label)
        return True

    def __repr__(self) -> str:
        return f"RunnableTaskItem({self.task.label!r}, group={self.group_label!r})"


class AttachableTaskItem:
    description = ""
    group_label: str | None = None
    show_separator = False

    def __init__(self, info: RunningTaskInfo, label: str, task_service: TaskService) -> None:
        self.info = info
        self.label = label
        self._task_service = task_service

    def run(self, mode: PickMode) -> bool:
        if mode != PickMode.OPEN:
            return False
        if self.info.terminal_id is not None:
            logger.info("Attaching to task_id=%s terminal_id=%s", self.info.task_id, self.info.terminal_id)
            self._task_service.attach(self.info.terminal_id, self.info.task_id)
        return True

    def __repr__(self) -> str:
        return f"AttachableTaskItem(task_id={self.info.task_id})"


class ConfigurableTaskItem:
    group_label: str | None = None
    show_separator = False

    def __init__(self, task: TaskDescriptor, task_service: TaskService, label_provider: LabelProvider) -> None:
        self.task = task
        self._task_service = task_service
        self._label_provider = label_provider

    @property
    def label(self) -> str:
        return f"{self.task.source}: {self.task.label}"

    @property
    def description(self) -> str:
        if self.task.scope:
            return self._label_provider.get_long_name(self.task.scope)
        return self.task.source

    def run(self, mode: PickMode) -> bool:
        if mode != PickMode.OPEN:
            return False
        logger.info("Configuring task source=%s label=%s", self.task.source, self.task.label)
        self._task_service.configure(self.task)
        return True

    def __repr__(self) -> str:
        return f"ConfigurableTaskItem({self.task.label!r})"


def build_run_items(
    reconciled: ReconciledTasks,
    task_service: TaskService,
    is_multi_root: bool,
) -> list[RunnableTaskItem]:
    """
    Runnable items in bucket order (recent, configured, detected).

    The first item of a bucket carries the bucket's group label, and a separator
    when any earlier bucket is non-empty.
    """
    buckets: list[tuple[str, Sequence[TaskDescriptor]]] = [
        (RECENT_GROUP, reconciled.recent),
        (CONFIGURED_GROUP, reconciled.configured),
        (DETECTED_GROUP, reconciled.detected),
    ]

    items: list[RunnableTaskItem] = []
    for group, tasks in buckets:
        has_previous = bool(items)
        for index, task in enumerate(tasks):
            first = index == 0
            items.append(
                RunnableTaskItem(
                    task,
                    task_service,
                    is_multi_root,
                    group_label=group if first else None,
                    show_separator=first and has_previous,
                )
            )
    return items


def running_task_label(info: RunningTaskInfo) -> str:
    return f"Task id: {info.task_id}, label: {info.config.label}"


def build_attach_items(running: Sequence[RunningTaskInfo], task_service: TaskService) -> list[AttachableTaskItem]:
    # Only terminal-backed tasks can be attached to; the rest are not listed.
    return [
        AttachableTaskItem(info, running_task_label(info), task_service)
        for info in running
        if info.terminal_id is not None
    ]


def build_configure_items(
    provided: Sequence[TaskDescriptor],
    task_service: TaskService,
    label_provider: LabelProvider,
) -> list[ConfigurableTaskItem]:
    return [ConfigurableTaskItem(task, task_service, label_provider) for task in provided]
