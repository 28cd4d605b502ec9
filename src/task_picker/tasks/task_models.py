# src/task_picker/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskKind(StrEnum):
    """
    Where a task definition comes from.

    - CONFIGURED: written by the user in a tasks file (has a task `type`)
    - CONTRIBUTED: detected by a task provider (its `source` is the provider name)
    """

    CONFIGURED = "configured"
    CONTRIBUTED = "contributed"

    @classmethod
    def from_raw(cls, raw: str | None, default: TaskKind) -> TaskKind:
        if not raw:
            return default
        try:
            return cls(raw)
        except ValueError:
            return default


@dataclass(frozen=True, slots=True, eq=False)
class TaskDescriptor:
    """
    Immutable description of a task definition.

    Identity is the label only: two descriptors seen through different sources
    (e.g. a recent entry and a configured one) are the same task if their labels match.
    """

    label: str
    source: str
    kind: TaskKind = TaskKind.CONFIGURED
    type: str = ""
    scope: str | None = None

    @property
    def is_contributed(self) -> bool:
        return self.kind == TaskKind.CONTRIBUTED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskDescriptor):
            return NotImplemented
        return self.label == other.label

    def __hash__(self) -> int:
        return hash(self.label)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], *, kind: TaskKind = TaskKind.CONFIGURED) -> TaskDescriptor:
        label = raw.get("label")
        if not isinstance(label, str) or not label:
            raise ValueError(f"task definition without a label: {dict(raw)!r}")

        scope = raw.get("scope")
        return cls(
            label=label,
            source=str(raw.get("source") or ""),
            kind=TaskKind.from_raw(raw.get("kind"), kind),
            type=str(raw.get("type") or ""),
            scope=str(scope) if scope else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "label": self.label,
            "source": self.source,
            "kind": self.kind.value,
        }
        if self.type:
            out["type"] = self.type
        if self.scope:
            out["scope"] = self.scope
        return out


def tasks_equal(a: TaskDescriptor, b: TaskDescriptor) -> bool:
    """Task identity: labels match, provenance is ignored."""
    return a.label == b.label


@dataclass(frozen=True, slots=True)
class RunningTaskInfo:
    """Snapshot of a live task instance as reported by the execution engine."""

    task_id: int
    config: TaskDescriptor
    terminal_id: int | None = None
