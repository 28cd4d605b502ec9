# tests/test_reconciler.py

from __future__ import annotations

from task_picker.tasks.reconciler import reconcile_tasks
from task_picker.tasks.task_models import TaskDescriptor, TaskKind

from .fakes import configured, detected


def _recent(label: str) -> TaskDescriptor:
    # History entries only need to carry the label.
    return TaskDescriptor(label=label, source="", kind=TaskKind.CONFIGURED)


def _labels(tasks) -> list[str]:
    return [t.label for t in tasks]


def test_recent_resolves_to_configured_definition() -> None:
    a_recent = _recent("A")
    a_conf = configured("A", type="shell")
    b = configured("B")
    c = detected("C")

    out = reconcile_tasks([a_recent], [a_conf, b], [c])

    assert len(out.recent) == 1
    assert out.recent[0] is a_conf
    assert list(out.configured) == [b]
    assert out.configured[0] is b
    assert out.detected[0] is c
    assert len(out.detected) == 1


def test_recent_prefers_configured_over_detected() -> None:
    conf = configured("A")
    det = detected("A")

    out = reconcile_tasks([_recent("A")], [conf], [det])

    assert out.recent[0] is conf
    assert out.configured == ()
    assert out.detected == ()


def test_recent_falls_back_to_detected() -> None:
    det = detected("npm: test")

    out = reconcile_tasks([_recent("npm: test")], [], [det])

    assert out.recent[0] is det
    assert out.detected == ()


def test_stale_recent_is_dropped() -> None:
    out = reconcile_tasks([_recent("gone"), _recent("B")], [configured("B")], [detected("C")])

    assert _labels(out.recent) == ["B"]
    assert "gone" not in _labels(out)


def test_duplicate_recent_entries_collapse_in_order() -> None:
    recent = [_recent("B"), _recent("A"), _recent("B"), _recent("A")]

    out = reconcile_tasks(recent, [configured("A"), configured("B")], [])

    assert _labels(out.recent) == ["B", "A"]
    assert out.configured == ()


def test_detected_suppressed_by_configured_without_recent() -> None:
    x = configured("X")
    x_det = detected("X")

    out = reconcile_tasks([], [x], [x_det])

    assert list(out.configured) == [x]
    assert out.detected == ()


def test_detected_suppressed_by_configured_moved_into_recent() -> None:
    # The configured twin is shown as "recent"; detected still yields to it.
    out = reconcile_tasks([_recent("X")], [configured("X")], [detected("X"), detected("Y")])

    assert _labels(out.recent) == ["X"]
    assert out.configured == ()
    assert _labels(out.detected) == ["Y"]


def test_outputs_are_pairwise_disjoint() -> None:
    recent = [_recent(label) for label in ("a", "d", "z")]
    conf = [configured(label) for label in ("a", "b", "c")]
    det = [detected(label) for label in ("c", "d", "e")]

    out = reconcile_tasks(recent, conf, det)

    r, c, d = set(_labels(out.recent)), set(_labels(out.configured)), set(_labels(out.detected))
    assert not (r & c) and not (r & d) and not (c & d)
    assert r == {"a", "d"}
    assert c == {"b", "c"}
    assert d == {"e"}


def test_empty_inputs_yield_empty_outputs() -> None:
    out = reconcile_tasks([], [], [])

    assert out.is_empty
    assert len(out) == 0
    assert (out.recent, out.configured, out.detected) == ((), (), ())


def test_reconciliation_is_idempotent() -> None:
    recent = [_recent("b"), _recent("x")]
    conf = [configured("a"), configured("b")]
    det = [detected("b"), detected("x"), detected("y")]

    first = reconcile_tasks(recent, conf, det)
    second = reconcile_tasks(recent, conf, det)

    for lhs, rhs in zip(first, second, strict=True):
        assert lhs is rhs
    assert _labels(first.recent) == _labels(second.recent) == ["b", "x"]
    assert _labels(first.detected) == ["y"]
