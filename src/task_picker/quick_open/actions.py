# src/task_picker/quick_open/actions.py

"""Secondary actions offered on run-picker items."""

from __future__ import annotations

import logging

from ..core.ports import QuickOpenAction, QuickOpenItem, TaskService
from .items import RunnableTaskItem

logger = logging.getLogger(__name__)


class ConfigureTaskAction:
    id = "workbench.action.tasks.configure"
    label = "Configure Task"

    def __init__(self, task_service: TaskService) -> None:
        self._task_service = task_service

    def is_enabled(self, item: QuickOpenItem) -> bool:
        return isinstance(item, RunnableTaskItem)

    def run(self, item: QuickOpenItem) -> bool:
        if not isinstance(item, RunnableTaskItem):
            return False
        logger.info("Configure action for task label=%s", item.task.label)
        self._task_service.configure(item.task)
        return True


class TaskActionProvider:
    def __init__(self, task_service: TaskService) -> None:
        self._actions: list[QuickOpenAction] = [ConfigureTaskAction(task_service)]

    def has_actions(self, item: QuickOpenItem) -> bool:
        return any(action.is_enabled(item) for action in self._actions)

    def get_actions(self, item: QuickOpenItem) -> list[QuickOpenAction]:
        return [action for action in self._actions if action.is_enabled(item)]
