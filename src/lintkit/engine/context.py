from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lintkit.config import LintConfig
from lintkit.engine.fixes import FixRegistry
from lintkit.engine.ranges import RangeIndex, RangeView
from lintkit.engine.types import Diagnostic, FixerAttempt, RuleName, SuppressedWarning

if TYPE_CHECKING:
    from lintkit.document import Document


@dataclass(slots=True)
class LintSession:
    """
    Everything one document pass reads and writes.

    Sessions share no state, so separate documents can be linted
    concurrently. Within a session reporting and fixing are sequential.
    """

    config: LintConfig
    ranges: RangeIndex = field(default_factory=RangeIndex)
    document: Document | None = None
    registry: FixRegistry = field(default_factory=FixRegistry)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    suppressed: list[SuppressedWarning] = field(default_factory=list)
    fixers: dict[RuleName, list[FixerAttempt]] = field(default_factory=dict)
    has_error: bool = False
    has_warning: bool = False

    @property
    def view(self) -> RangeView:
        return self.ranges.view()

    def record_fixer(self, rule_name: RuleName, attempt: FixerAttempt) -> None:
        self.fixers.setdefault(rule_name, []).append(attempt)
