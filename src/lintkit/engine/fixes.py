from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from lintkit.engine.ranges import RangeIndex
from lintkit.engine.types import FixEntry, FixerAttempt, RuleName

if TYPE_CHECKING:
    from lintkit.engine.context import LintSession

logger = logging.getLogger(__name__)


class FixRegistry:
    """Deferred fixes, one list per rule, in the order they were reported."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[RuleName, list[FixEntry]] = {}

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def register(self, entry: FixEntry) -> None:
        self._entries.setdefault(entry.rule_name, []).append(entry)

    def entries_for(self, rule_name: RuleName) -> tuple[FixEntry, ...]:
        return tuple(self._entries.get(rule_name, ()))

    def pending(self) -> Iterator[tuple[RuleName, list[FixEntry]]]:
        yield from self._entries.items()

    def queue(self) -> list[tuple[RuleName, FixEntry]]:
        """Every entry in drain order: rules by first registration, then arrival order."""

        return [(rule_name, entry) for rule_name, entries in self._entries.items() for entry in entries]


def _shift_pending(pending: Iterable[tuple[RuleName, FixEntry]], after_line: int, delta: int) -> None:
    # Keep not-yet-applied entries in the coordinates of the edited document.
    for _, entry in pending:
        if entry.range.start.line > after_line:
            entry.range = entry.range.shifted(delta)


def apply_fixes(session: LintSession, ranges: RangeIndex) -> int:
    """
    Run every deferred fix in registration order and return how many ran.

    Eligibility is checked against the current state of `ranges`, which each
    applied fix updates for the lines it inserted or removed. Entries that
    have not run yet move with the edit; applied entries keep the range they
    were attempted at. Callback exceptions propagate; fixes applied before
    the failure stay applied.
    """

    ignore_disables = session.config.ignore_disables
    queue = session.registry.queue()
    applied = 0

    for pos, (rule_name, entry) in enumerate(queue):
        eligible = not entry.unfixable and (
            ignore_disables or not ranges.contains(rule_name, entry.range.start.line)
        )
        attempted = entry.range
        if eligible:
            new_range = entry.callback(*entry.args)
            applied += 1
            if new_range is not None:
                after_line = entry.range.end_line
                delta = new_range.end_line - after_line
                if delta:
                    if not ignore_disables:
                        ranges.apply_offset(after_line, delta)
                    _shift_pending(itertools.islice(queue, pos + 1, None), after_line, delta)
        logger.debug("fix %s at line %d: %s", rule_name, attempted.start.line, "applied" if eligible else "skipped")
        session.record_fixer(rule_name, FixerAttempt(range=attempted, fixed=eligible))

    return applied
