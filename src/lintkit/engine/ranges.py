from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from lintkit.engine.types import WILDCARD, DisabledRange, RuleName


class RangeView:
    """Read-only queries over a `RangeIndex`."""

    __slots__ = ("_index",)

    def __init__(self, index: RangeIndex) -> None:
        self._index = index

    def ranges_for(self, rule_name: RuleName) -> tuple[DisabledRange, ...]:
        return self._index.ranges_for(rule_name)

    def contains(self, rule_name: RuleName, line: int) -> bool:
        return self._index.contains(rule_name, line)

    def keys(self) -> tuple[str, ...]:
        return self._index.keys()

    def snapshot(self) -> Mapping[str, tuple[DisabledRange, ...]]:
        return self._index.snapshot()


class RangeIndex:
    """
    Disabled line ranges keyed by rule name, plus the `all` wildcard key.

    Lookups always take the union of a rule's own ranges and the wildcard
    ranges. The index is owned by a single document pass and is only ever
    mutated through `add` and `apply_offset`.
    """

    __slots__ = ("_ranges",)

    def __init__(self, ranges: Mapping[str, Iterable[DisabledRange]] | None = None) -> None:
        self._ranges: dict[str, list[DisabledRange]] = {}
        for key, items in (ranges or {}).items():
            for item in items:
                self.add(key, item)

    def __iter__(self) -> Iterator[tuple[str, DisabledRange]]:
        for key, items in self._ranges.items():
            for item in items:
                yield key, item

    def __len__(self) -> int:
        return sum(len(items) for items in self._ranges.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeIndex):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __repr__(self) -> str:
        return f"RangeIndex({dict(self.snapshot())!r})"

    def add(self, key: str, disabled: DisabledRange) -> None:
        self._ranges.setdefault(key, []).append(disabled)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._ranges)

    def ranges_for(self, rule_name: RuleName) -> tuple[DisabledRange, ...]:
        own = self._ranges.get(rule_name, []) if rule_name != WILDCARD else []
        return (*own, *self._ranges.get(WILDCARD, []))

    def contains(self, rule_name: RuleName, line: int) -> bool:
        return any(r.covers(rule_name, line) for r in self.ranges_for(rule_name))

    def apply_offset(self, after_line: int, delta: int) -> None:
        """
        Shift every range boundary that lies strictly after `after_line`.

        A range overlapping `after_line` keeps its start and only its end moves.
        """

        if delta == 0:
            return
        for items in self._ranges.values():
            items[:] = [r.offset(after_line, delta) for r in items]

    def snapshot(self) -> Mapping[str, tuple[DisabledRange, ...]]:
        return MappingProxyType({key: tuple(items) for key, items in self._ranges.items()})

    def copy(self) -> RangeIndex:
        return RangeIndex(self.snapshot())

    def view(self) -> RangeView:
        return RangeView(self)
