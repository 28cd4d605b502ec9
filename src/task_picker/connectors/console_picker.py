# src/task_picker/connectors/console_picker.py

"""
Console stand-in for the picker widget.

Renders the model's items as a numbered list and reads one line at a time:
- <n>      accept item n (PickMode.OPEN)
- !<n>     show secondary actions for item n and pick one
- <text>   filter labels by <text> (subsequence match, case-insensitive)
- empty    cancel
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..core.ports import (
    PickerOptions,
    PickMode,
    QuickOpenActionProvider,
    QuickOpenItem,
    QuickOpenModel,
)

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def match_position(look_for: str, label: str) -> int | None:
    """
    Index in `label` where a case-insensitive subsequence match of `look_for` starts,
    or None if there is no match.
    """
    needle = look_for.strip().lower()
    if not needle:
        return 0
    hay = label.lower()
    start = hay.find(needle[0])
    if start == -1:
        return None
    pos = start
    for ch in needle:
        pos = hay.find(ch, pos)
        if pos == -1:
            return None
        pos += 1
    return start


def filter_items(
    items: Sequence[QuickOpenItem],
    look_for: str,
    options: PickerOptions,
) -> list[QuickOpenItem]:
    if not look_for.strip() or not options.fuzzy_match_label:
        return list(items)

    scored: list[tuple[int, int, QuickOpenItem]] = []
    for index, item in enumerate(items):
        pos = match_position(look_for, item.label)
        if pos is not None:
            scored.append((pos, index, item))

    if options.fuzzy_sort:
        scored.sort(key=lambda s: (s[0], s[1]))
    return [item for _, _, item in scored]


class ConsoleQuickPick:
    def __init__(self, input_fn: InputFn = input, output_fn: OutputFn = print) -> None:
        self._input = input_fn
        self._output = output_fn

    def _render(self, items: Sequence[QuickOpenItem], filtered: bool) -> None:
        for n, item in enumerate(items, start=1):
            if item.show_separator and not filtered:
                self._output("  " + "-" * 40)
            if item.group_label and not filtered:
                self._output(f"  [{item.group_label}]")
            line = f"  {n:>2}. {item.label}"
            if item.description:
                line += f"  ({item.description})"
            self._output(line)

    def _pull(self, model: QuickOpenModel, look_for: str) -> tuple[Sequence[QuickOpenItem], QuickOpenActionProvider | None]:
        pulled: dict[str, object] = {}

        def acceptor(items: Sequence[QuickOpenItem], action_provider: QuickOpenActionProvider | None = None) -> None:
            pulled["items"] = items
            pulled["actions"] = action_provider

        model.on_type(look_for, acceptor)
        items = pulled.get("items") or []
        actions = pulled.get("actions")
        return items, actions  # type: ignore[return-value]

    def _read(self, prompt: str) -> str | None:
        try:
            return self._input(prompt).strip()
        except (EOFError, KeyboardInterrupt):
            return None

    def _pick_index(self, raw: str, count: int) -> int | None:
        if not raw.isdigit():
            return None
        n = int(raw)
        if 1 <= n <= count:
            return n - 1
        self._output(f"  No item {n}.")
        return -1

    def _run_secondary(self, item: QuickOpenItem, provider: QuickOpenActionProvider | None) -> bool:
        if provider is None or not provider.has_actions(item):
            self._output("  No actions for this item.")
            return False
        actions = list(provider.get_actions(item))
        for n, action in enumerate(actions, start=1):
            self._output(f"    {n}. {action.label}")
        raw = self._read("  action> ")
        if not raw:
            return False
        idx = self._pick_index(raw, len(actions))
        if idx is None or idx < 0:
            return False
        return actions[idx].run(item)

    def open(self, model: QuickOpenModel, options: PickerOptions) -> None:
        look_for = ""
        canceled = True
        try:
            while True:
                items, provider = self._pull(model, look_for)
                visible = filter_items(items, look_for, options)
                self._output(f"{options.placeholder}" + (f"  [filter: {look_for}]" if look_for else ""))
                self._render(visible, filtered=bool(look_for) and options.fuzzy_sort)

                raw = self._read("task> ")
                if not raw:
                    break

                if raw.startswith("!"):
                    idx = self._pick_index(raw[1:], len(visible))
                    if idx is not None and idx >= 0 and self._run_secondary(visible[idx], provider):
                        canceled = False
                        break
                    continue

                idx = self._pick_index(raw, len(visible))
                if idx is None:
                    look_for = raw
                    continue
                if idx < 0:
                    continue
                if visible[idx].run(PickMode.OPEN):
                    canceled = False
                    break
                logger.debug("Item %r did not accept the selection", visible[idx].label)
        finally:
            if options.on_close is not None:
                options.on_close(canceled)
