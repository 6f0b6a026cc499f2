from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

Severity = Literal["error", "warning"]
RuleName = str

WILDCARD = "all"


@dataclass(frozen=True, slots=True)
class Position:
    line: int  # 1-based
    column: int = 1  # 1-based


@dataclass(frozen=True, slots=True)
class Range:
    start: Position
    end: Position | None = None

    @property
    def end_line(self) -> int:
        return self.end.line if self.end is not None else self.start.line

    def shifted(self, delta: int) -> Range:
        end = Position(self.end.line + delta, self.end.column) if self.end is not None else None
        return Range(start=Position(self.start.line + delta, self.start.column), end=end)


@dataclass(frozen=True, slots=True)
class DisabledRange:
    """
    A line interval in which reports are suppressed.

    `end=None` keeps the range open until the end of the document.
    `rules=None` applies the range to every rule.
    """

    start: int
    end: int | None = None
    rules: frozenset[RuleName] | None = None

    def __post_init__(self) -> None:
        if self.end is not None and self.end < self.start:
            raise ValueError(f"Disabled range ends before it starts: {self.start}..{self.end}")

    def covers(self, rule_name: RuleName, line: int) -> bool:
        if line < self.start:
            return False
        if self.end is not None and line > self.end:
            return False
        return self.rules is None or rule_name in self.rules

    def offset(self, after_line: int, delta: int) -> DisabledRange:
        start = self.start + delta if self.start > after_line else self.start
        end = self.end
        if end is not None and end > after_line:
            end = max(end + delta, start)
        if start == self.start and end == self.end:
            return self
        return DisabledRange(start=start, end=end, rules=self.rules)


class Node(Protocol):
    # Anything that can turn offsets relative to itself into a line/column range.
    def range_by(self, *, index: int | None = None, end_index: int | None = None) -> Range: ...


FixCallback = Callable[..., "Range | None"]


@dataclass(frozen=True, slots=True)
class Problem:
    rule_name: RuleName
    message: str | Callable[..., str]
    message_args: Sequence[Any] = ()
    severity: Any = None
    line: int | None = None
    start: Position | None = None
    end: Position | None = None
    node: Node | None = None
    index: int | None = None
    end_index: int | None = None
    fix: FixCallback | None = None
    fix_args: Sequence[Any] = ()
    word: str | None = None


@dataclass(slots=True)
class FixEntry:
    rule_name: RuleName
    range: Range
    callback: FixCallback
    args: tuple[Any, ...] = ()
    unfixable: bool = False


@dataclass(frozen=True, slots=True)
class FixerAttempt:
    range: Range
    fixed: bool


@dataclass(frozen=True, slots=True)
class SuppressedWarning:
    rule: RuleName
    line: int


@dataclass(frozen=True, slots=True)
class Diagnostic:
    rule_name: RuleName
    severity: Severity
    message: str
    line: int
    column: int | None = None
    node: Node | None = field(default=None, compare=False)
    start: Position | None = None
    end: Position | None = None
    index: int | None = None
    end_index: int | None = None
    word: str | None = None
