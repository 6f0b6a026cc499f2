from __future__ import annotations

import difflib
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from lintkit.config import LintConfig, compute_enabled_rules
from lintkit.document import Document
from lintkit.engine.context import LintSession
from lintkit.engine.fixes import apply_fixes
from lintkit.engine.types import Diagnostic, DisabledRange, FixerAttempt, SuppressedWarning
from lintkit.rules.base import BaseRule, RuleContext
from lintkit.rules.registry import builtin_rules
from lintkit.suppressions import needless_disables, parse_disabled_ranges

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LintResult:
    path: Path | None
    source: str
    output: str
    diagnostics: tuple[Diagnostic, ...]
    suppressed: tuple[SuppressedWarning, ...]
    fixers: Mapping[str, tuple[FixerAttempt, ...]]
    needless_disables: tuple[tuple[str, DisabledRange], ...]
    fixes_applied: int = 0
    has_error: bool = False
    has_warning: bool = False

    @property
    def changed(self) -> bool:
        return self.source != self.output

    @property
    def diff(self) -> str:
        if not self.changed:
            return ""
        name = str(self.path) if self.path is not None else "<text>"
        diff = difflib.unified_diff(
            self.source.splitlines(keepends=False),
            self.output.splitlines(keepends=False),
            fromfile=name,
            tofile=name,
            lineterm="",
        )
        return "\n".join(diff)


def lint_text(
    text: str,
    config: LintConfig | None = None,
    *,
    path: Path | None = None,
    rules: Iterable[BaseRule] | None = None,
) -> LintResult:
    """
    Run one full document pass: scan directives, report, then apply fixes.

    Reports are collected in full before any fix runs. Needless disables are
    computed against the ranges as they were before fixing, and only when
    fixing is off (deferred fixes never reach the suppression log).
    """

    cfg = config or LintConfig()
    document = Document(text)
    scan = parse_disabled_ranges(document.lines)
    session = LintSession(config=cfg, ranges=scan.ranges, document=document)
    initial = scan.ranges.copy()

    available = list(rules) if rules is not None else list(builtin_rules())
    enabled = compute_enabled_rules(cfg, available=(r.meta.name for r in available))
    ctx = RuleContext(session=session, document=document, path=str(path) if path is not None else None)
    for rule in available:
        if rule.meta.name not in enabled:
            continue
        rule.check(ctx)

    applied = 0
    if cfg.fix and len(session.registry):
        applied = apply_fixes(session, session.ranges)
        logger.debug("applied %d of %d fix(es)", applied, len(session.registry))

    unused: tuple[tuple[str, DisabledRange], ...] = ()
    if not cfg.fix:
        unused = tuple(needless_disables(initial, session.suppressed))

    return LintResult(
        path=path,
        source=text,
        output=document.text,
        diagnostics=tuple(session.diagnostics),
        suppressed=tuple(session.suppressed),
        fixers=MappingProxyType({name: tuple(items) for name, items in session.fixers.items()}),
        needless_disables=unused,
        fixes_applied=applied,
        has_error=session.has_error,
        has_warning=session.has_warning,
    )


def lint_path(
    path: Path,
    config: LintConfig | None = None,
    *,
    dry_run: bool = False,
    backup: bool = False,
) -> LintResult:
    original = path.read_text(encoding="utf-8", errors="replace")
    result = lint_text(original, config, path=path)

    if result.changed and not dry_run:
        if backup:
            backup_path = path.with_suffix(path.suffix + ".lintkit.bak")
            if not backup_path.exists():
                backup_path.write_text(original, encoding="utf-8")
        path.write_text(result.output, encoding="utf-8")
        logger.info("fixed %s (%d fix(es))", path, result.fixes_applied)

    return result
