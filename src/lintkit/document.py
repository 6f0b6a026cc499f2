from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass

from lintkit.engine.types import Position, Range


class LineHandle:
    """
    A stable reference to one line of a `Document`.

    Handles survive insertions and removals elsewhere in the document, so fix
    callbacks can hold on to the line they were reported against.
    """

    __slots__ = ("text", "removed")

    def __init__(self, text: str) -> None:
        self.text = text
        self.removed = False

    def __repr__(self) -> str:
        return f"LineHandle({self.text!r})"


class Document:
    """Mutable line-oriented text with offset to line/column lookup."""

    def __init__(self, text: str) -> None:
        self._trailing_newline = text.endswith("\n")
        body = text[:-1] if self._trailing_newline else text
        self._lines: list[LineHandle] = [LineHandle(line) for line in body.split("\n")] if text else []
        self._original = text
        self._starts = _line_starts(text)

    @property
    def text(self) -> str:
        body = "\n".join(h.text for h in self._lines)
        if self._trailing_newline and self._lines:
            body += "\n"
        return body

    @property
    def changed(self) -> bool:
        return self.text != self._original

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(h.text for h in self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def handle(self, line: int) -> LineHandle:
        if not (1 <= line <= len(self._lines)):
            raise IndexError(f"line {line} out of range (1..{len(self._lines)})")
        return self._lines[line - 1]

    def line_number(self, handle: LineHandle) -> int:
        if handle.removed:
            raise ValueError("line was removed from the document")
        for idx, candidate in enumerate(self._lines, start=1):
            if candidate is handle:
                return idx
        raise ValueError("line does not belong to this document")

    def replace(self, handle: LineHandle, text: str) -> Range:
        line = self.line_number(handle)
        handle.text = text
        return Range(start=Position(line, 1), end=Position(line, len(text) + 1))

    def remove(self, handles: Iterable[LineHandle]) -> Range:
        """
        Remove `handles` and return the collapsed range they occupied.

        The returned range ends on the line before the first removed line
        (line 0 when the document's first line went), so the difference to the
        old end line is the number of removed lines.
        """

        targets = list(handles)
        if not targets:
            raise ValueError("nothing to remove")
        first = min(self.line_number(h) for h in targets)
        ids = {id(h) for h in targets}
        self._lines = [h for h in self._lines if id(h) not in ids]
        for h in targets:
            h.removed = True
        return Range(start=Position(first, 1), end=Position(first - 1, 1))

    def insert_after(self, handle: LineHandle, texts: Iterable[str]) -> Range:
        line = self.line_number(handle)
        new = [LineHandle(t) for t in texts]
        self._lines[line:line] = new
        end_line = line + len(new)
        return Range(start=Position(line, 1), end=Position(end_line, 1))

    def offset_to_position(self, offset: int) -> Position:
        """Map an offset into the original text to a 1-based position."""

        if offset < 0:
            raise ValueError("offset must be >= 0")
        idx = bisect_right(self._starts, offset) - 1
        return Position(line=idx + 1, column=offset - self._starts[idx] + 1)

    def range_by(self, *, index: int | None = None, end_index: int | None = None) -> Range:
        start = self.offset_to_position(index or 0)
        end = self.offset_to_position(end_index) if end_index is not None else None
        return Range(start=start, end=end)


@dataclass(frozen=True, slots=True)
class SourceNode:
    """A span of the original document text; offsets passed to it are relative."""

    document: Document
    offset: int
    length: int = 0

    def range_by(self, *, index: int | None = None, end_index: int | None = None) -> Range:
        start = self.offset + (index or 0)
        end = self.offset + end_index if end_index is not None else self.offset + self.length
        return Range(start=self.document.offset_to_position(start), end=self.document.offset_to_position(end))


def _line_starts(text: str) -> list[int]:
    starts = [0]
    for idx, ch in enumerate(text):
        if ch == "\n":
            starts.append(idx + 1)
    return starts
