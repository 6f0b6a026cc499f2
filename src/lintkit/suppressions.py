from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from lintkit.engine.ranges import RangeIndex, RangeView
from lintkit.engine.types import WILDCARD, DisabledRange, SuppressedWarning

logger = logging.getLogger(__name__)

DirectiveKind = Literal["disable", "enable", "disable-line", "disable-next-line"]


@dataclass(frozen=True, slots=True)
class Directive:
    kind: DirectiveKind
    line: int
    rules: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ScanResult:
    """
    Disabled ranges extracted from in-source directives.

    Supported directives:
    - `lintkit-disable [rules]` / `lintkit-enable [rules]` (open / close a range)
    - `lintkit-disable-line [rules]` (suppresses reports on that same line)
    - `lintkit-disable-next-line [rules]` (suppresses reports on the next line)

    Without a rule list (or with `all`) a directive applies to every rule.
    """

    ranges: RangeIndex
    directives: tuple[Directive, ...]


_DIRECTIVE_RE = re.compile(
    r"lintkit-(?P<kind>disable-next-line|disable-line|disable|enable)(?![\w-])(?=[ \t]|\*/|$)(?P<tail>.*)",
    re.IGNORECASE,
)

# The rule list ends at a description, a comment closer or another comment.
_TAIL_END_RE = re.compile(r"--|\*/|#")


def parse_disabled_ranges(lines: Sequence[str]) -> ScanResult:
    index = RangeIndex()
    directives: list[Directive] = []
    open_ranges: dict[str, int] = {}

    for idx, line in enumerate(lines, start=1):
        for match in _DIRECTIVE_RE.finditer(line.rstrip("\r\n")):
            kind: DirectiveKind = match.group("kind").lower()  # type: ignore[assignment]
            rules = _parse_rules(match.group("tail"))
            directives.append(Directive(kind=kind, line=idx, rules=rules))

            if kind == "disable-line":
                _add(index, rules, start=idx, end=idx)
            elif kind == "disable-next-line":
                _add(index, rules, start=idx + 1, end=idx + 1)
            elif kind == "disable":
                for key in rules or (WILDCARD,):
                    # A second disable for an already disabled key is redundant.
                    open_ranges.setdefault(key, idx)
            else:
                _close(index, open_ranges, rules, line=idx)

    for key, start in open_ranges.items():
        _add(index, () if key == WILDCARD else (key,), start=start, end=None)

    return ScanResult(ranges=index, directives=tuple(directives))


def _add(index: RangeIndex, rules: tuple[str, ...], *, start: int, end: int | None) -> None:
    if not rules:
        index.add(WILDCARD, DisabledRange(start=start, end=end))
        return
    for rule in rules:
        index.add(rule, DisabledRange(start=start, end=end, rules=frozenset({rule})))


def _close(index: RangeIndex, open_ranges: dict[str, int], rules: tuple[str, ...], *, line: int) -> None:
    keys = list(open_ranges) if not rules else list(rules)
    for key in keys:
        start = open_ranges.pop(key, None)
        if start is None:
            if key != WILDCARD and WILDCARD in open_ranges:
                logger.warning(
                    "line %d: cannot re-enable %r inside a range that disables all rules; directive ignored",
                    line,
                    key,
                )
            continue
        _add(index, () if key == WILDCARD else (key,), start=start, end=line)


def _parse_rules(value: str) -> tuple[str, ...]:
    rules: list[str] = []
    end = _TAIL_END_RE.search(value)
    if end is not None:
        value = value[: end.start()]
    for token in re.split(r"[,\s]+", value.strip()):
        normalized = token.strip().lower()
        if not normalized:
            continue
        if normalized == WILDCARD:
            return ()
        if normalized not in rules:
            rules.append(normalized)
    return tuple(rules)


def needless_disables(
    ranges: RangeIndex | RangeView,
    suppressed: Iterable[SuppressedWarning],
) -> list[tuple[str, DisabledRange]]:
    """
    Return the disabled ranges that suppressed nothing.

    `ranges` must be in the coordinates the suppression log was recorded in,
    i.e. a snapshot taken before any fix ran.
    """

    log = list(suppressed)
    unused: list[tuple[str, DisabledRange]] = []
    for key, items in ranges.snapshot().items():
        for disabled in items:
            if not any(_matches(key, disabled, w) for w in log):
                unused.append((key, disabled))
    return unused


def _matches(key: str, disabled: DisabledRange, warning: SuppressedWarning) -> bool:
    if key != WILDCARD and key != warning.rule:
        return False
    return disabled.covers(warning.rule, warning.line)
