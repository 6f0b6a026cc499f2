from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from lintkit import __version__
from lintkit.engine.types import Diagnostic, FixerAttempt, Position
from lintkit.linter import LintResult

REPORT_SCHEMA_VERSION = 1


def render_json(results: Sequence[LintResult], *, show_needless: bool = False) -> str:
    payload = {
        "schema_version": REPORT_SCHEMA_VERSION,
        "tool": {"name": "lintkit", "version": __version__},
        "results": [_result_to_dict(r, show_needless=show_needless) for r in results],
    }
    return json.dumps(payload, indent=2, sort_keys=False)


def _result_to_dict(result: LintResult, *, show_needless: bool) -> dict[str, Any]:
    out: dict[str, Any] = {
        "path": str(result.path) if result.path is not None else None,
        "errored": result.has_error,
        "warned": result.has_warning,
        "diagnostics": [_diagnostic_to_dict(d) for d in result.diagnostics],
        "suppressed": [{"rule": w.rule, "line": w.line} for w in result.suppressed],
        "fixes_applied": result.fixes_applied,
        "fixers": {name: [_attempt_to_dict(a) for a in attempts] for name, attempts in result.fixers.items()},
    }
    if show_needless:
        out["needless_disables"] = [
            {"rule": key, "start": r.start, "end": r.end} for key, r in result.needless_disables
        ]
    return out


def _diagnostic_to_dict(d: Diagnostic) -> dict[str, Any]:
    return {
        "rule": d.rule_name,
        "severity": d.severity,
        "message": d.message,
        "line": d.line,
        "column": d.column,
        "end": _position(d.end),
        "word": d.word,
    }


def _attempt_to_dict(a: FixerAttempt) -> dict[str, Any]:
    return {"start": _position(a.range.start), "end": _position(a.range.end), "fixed": a.fixed}


def _position(p: Position | None) -> dict[str, int] | None:
    if p is None:
        return None
    return {"line": p.line, "column": p.column}
