# src/task_picker/tasks/reconciler.py

"""
Task reconciliation.

Merges the three task sources shown by the run picker into three disjoint,
ordered buckets. Priority: recent > configured > detected; ties keep encounter order.

- recent entries are resolved to a current definition (configured first, then detected);
  entries without a definition are stale and dropped
- configured tasks already shown as recent are skipped
- detected tasks are skipped if shown as recent, or if ANY configured task has the
  same label (checked against the unfiltered configured list, so a configured task
  moved into "recent" still hides its detected twin)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .task_models import TaskDescriptor, tasks_equal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconciledTasks:
    recent: tuple[TaskDescriptor, ...] = ()
    configured: tuple[TaskDescriptor, ...] = ()
    detected: tuple[TaskDescriptor, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.recent or self.configured or self.detected)

    def __len__(self) -> int:
        return len(self.recent) + len(self.configured) + len(self.detected)

    def __iter__(self) -> Iterator[TaskDescriptor]:
        yield from self.recent
        yield from self.configured
        yield from self.detected


def find_by_label(label: str, tasks: Sequence[TaskDescriptor]) -> TaskDescriptor | None:
    for task in tasks:
        if task.label == label:
            return task
    return None


def _contains(tasks: Sequence[TaskDescriptor], candidate: TaskDescriptor) -> bool:
    return any(tasks_equal(task, candidate) for task in tasks)


def reconcile_tasks(
    recent: Sequence[TaskDescriptor],
    configured: Sequence[TaskDescriptor],
    detected: Sequence[TaskDescriptor],
) -> ReconciledTasks:
    filtered_recent: list[TaskDescriptor] = []
    for entry in recent:
        resolved = find_by_label(entry.label, configured) or find_by_label(entry.label, detected)
        if resolved is None:
            logger.debug("Dropping stale recent task label=%r", entry.label)
            continue
        if not _contains(filtered_recent, resolved):
            filtered_recent.append(resolved)

    filtered_configured = [task for task in configured if not _contains(filtered_recent, task)]

    configured_labels = {task.label for task in configured}
    filtered_detected = [
        task
        for task in detected
        if not _contains(filtered_recent, task) and task.label not in configured_labels
    ]

    return ReconciledTasks(
        recent=tuple(filtered_recent),
        configured=tuple(filtered_configured),
        detected=tuple(filtered_detected),
    )
