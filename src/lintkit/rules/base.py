from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from lintkit.document import Document
from lintkit.engine.context import LintSession
from lintkit.engine.reporter import report
from lintkit.engine.types import Diagnostic, FixEntry, Problem, Severity


@dataclass(frozen=True, slots=True)
class RuleMeta:
    name: str
    description: str
    default_severity: Severity | None = None
    fixable: bool = False


@dataclass(frozen=True, slots=True)
class RuleContext:
    session: LintSession
    document: Document
    path: str | None = None

    @property
    def lines(self) -> tuple[str, ...]:
        return self.document.lines


class BaseRule(ABC):
    meta: RuleMeta

    @abstractmethod
    def check(self, ctx: RuleContext) -> None: ...

    def _report(self, ctx: RuleContext, **fields: Any) -> FixEntry | Diagnostic | None:
        # A rule's own default yields to a severity configured for it.
        if "severity" not in fields and self.meta.name not in ctx.session.config.rule_severities:
            fields["severity"] = self.meta.default_severity
        return report(ctx.session, Problem(rule_name=self.meta.name, **fields))
