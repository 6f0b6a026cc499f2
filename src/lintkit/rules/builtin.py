from __future__ import annotations

from lintkit.document import Document, LineHandle, SourceNode
from lintkit.engine.types import Position, Range
from lintkit.rules.base import BaseRule, RuleContext, RuleMeta


class NoTrailingWhitespace(BaseRule):
    meta = RuleMeta(
        name="no-trailing-whitespace",
        description="Disallow whitespace at the end of a line.",
        fixable=True,
    )

    def check(self, ctx: RuleContext) -> None:
        for line_no, text in enumerate(ctx.lines, start=1):
            stripped = text.rstrip()
            if stripped == text:
                continue
            handle = ctx.document.handle(line_no)
            self._report(
                ctx,
                message="Unexpected trailing whitespace",
                start=Position(line_no, len(stripped) + 1),
                end=Position(line_no, len(text) + 1),
                fix=_strip_trailing,
                fix_args=(ctx.document, handle),
            )


def _strip_trailing(document: Document, handle: LineHandle) -> Range | None:
    # An earlier fix may already have removed the line.
    if handle.removed:
        return None
    return document.replace(handle, handle.text.rstrip())


class NoMultipleEmptyLines(BaseRule):
    meta = RuleMeta(
        name="no-multiple-empty-lines",
        description="Limit the number of consecutive empty lines.",
        fixable=True,
    )

    def __init__(self, maximum: int = 1) -> None:
        self.maximum = maximum

    def check(self, ctx: RuleContext) -> None:
        run: list[int] = []
        for line_no, text in enumerate((*ctx.lines, "x"), start=1):
            if not text.strip():
                run.append(line_no)
                continue
            if len(run) > self.maximum:
                excess = run[self.maximum :]
                handles = tuple(ctx.document.handle(n) for n in excess)
                self._report(
                    ctx,
                    message="Expected no more than %d empty line(s)",
                    message_args=(self.maximum,),
                    start=Position(excess[0], 1),
                    end=Position(excess[-1], 1),
                    fix=_remove_lines,
                    fix_args=(ctx.document, handles),
                )
            run = []


def _remove_lines(document: Document, handles: tuple[LineHandle, ...]) -> Range:
    return document.remove(handles)


class NoTabs(BaseRule):
    meta = RuleMeta(
        name="no-tabs",
        description="Disallow tab characters.",
        default_severity="warning",
    )

    def check(self, ctx: RuleContext) -> None:
        offset = 0
        for text in ctx.lines:
            col = text.find("\t")
            if col != -1:
                node = SourceNode(ctx.document, offset=offset, length=len(text))
                self._report(
                    ctx,
                    message="Unexpected tab character",
                    node=node,
                    index=col,
                    end_index=col + 1,
                    word="\t",
                )
            offset += len(text) + 1


class MaxLineLength(BaseRule):
    meta = RuleMeta(
        name="max-line-length",
        description="Limit the length of a line.",
    )

    def __init__(self, limit: int = 100) -> None:
        self.limit = limit

    def check(self, ctx: RuleContext) -> None:
        for line_no, text in enumerate(ctx.lines, start=1):
            if len(text) > self.limit:
                self._report(
                    ctx,
                    message="Expected line length to be no more than %d characters (found %d)",
                    message_args=(self.limit, len(text)),
                    line=line_no,
                )


def builtin_rules() -> list[BaseRule]:
    return [
        MaxLineLength(),
        NoMultipleEmptyLines(),
        NoTabs(),
        NoTrailingWhitespace(),
    ]
