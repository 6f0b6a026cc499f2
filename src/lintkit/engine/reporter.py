from __future__ import annotations

import logging

from lintkit.engine.context import LintSession
from lintkit.engine.messages import build_message
from lintkit.engine.severity import resolve_severity
from lintkit.engine.suppression import check_suppression
from lintkit.engine.types import Diagnostic, FixEntry, Problem, Range, RuleName

logger = logging.getLogger(__name__)


class ReportError(RuntimeError):
    """A rule called `report()` without the data the call requires."""

    reason = "invalid report"

    def __init__(self, rule_name: RuleName) -> None:
        self.rule_name = rule_name
        super().__init__(f'The "{rule_name}" rule failed to report a problem: {self.reason}.')


class MissingLineError(ReportError):
    reason = "missing line/node"


class FixPositionError(ReportError):
    reason = "fix requires position data"


def report(session: LintSession, problem: Problem) -> FixEntry | Diagnostic | None:
    """
    Report one problem against the session's document.

    Returns the registered `FixEntry` when the problem's fix is deferred, the
    emitted `Diagnostic`, or None when the problem was dropped (quiet mode or
    suppressed).
    """

    config = session.config
    node_range = _node_range(problem)
    line = _resolve_line(problem, node_range)
    if line is None:
        raise MissingLineError(problem.rule_name)

    if problem.fix is not None:
        fix_range = _fix_range(problem)
        if fix_range is None:
            raise FixPositionError(problem.rule_name)
        if config.fix:
            entry = FixEntry(
                rule_name=problem.rule_name,
                range=fix_range,
                callback=problem.fix,
                args=tuple(problem.fix_args),
            )
            session.registry.register(entry)
            return entry

    severity = resolve_severity(problem, config)

    # In quiet mode, mere warnings are ignored.
    if config.quiet and severity != "error":
        return None

    if check_suppression(
        session.view,
        problem.rule_name,
        line,
        ignore_disables=config.ignore_disables,
        log=session.suppressed,
    ):
        return None

    if severity == "error":
        session.has_error = True
    elif severity == "warning":
        session.has_warning = True

    message = build_message(config.custom_messages.get(problem.rule_name) or problem.message, problem.message_args)
    column = problem.start.column if problem.start is not None else None
    if column is None and node_range is not None:
        column = node_range.start.column

    diagnostic = Diagnostic(
        rule_name=problem.rule_name,
        severity=severity,
        message=message,
        line=line,
        column=column,
        node=problem.node,
        start=problem.start,
        end=problem.end,
        index=problem.index if problem.start is None else None,
        end_index=problem.end_index if problem.end is None else None,
        word=problem.word or None,
    )
    session.diagnostics.append(diagnostic)
    return diagnostic


def _node_range(problem: Problem) -> Range | None:
    if problem.node is None:
        return None
    return problem.node.range_by(index=problem.index, end_index=problem.end_index)


def _resolve_line(problem: Problem, node_range: Range | None) -> int | None:
    if problem.line:
        return problem.line
    if problem.start is not None:
        return problem.start.line
    if node_range is not None:
        return node_range.start.line
    return None


def _fix_range(problem: Problem) -> Range | None:
    # A fix cannot be offset-tracked without exact bounds.
    if problem.start is not None and problem.end is not None:
        return Range(start=problem.start, end=problem.end)
    if problem.node is not None and problem.index is not None and problem.end_index is not None:
        return problem.node.range_by(index=problem.index, end_index=problem.end_index)
    return None
