from __future__ import annotations

__version__ = "0.3.0"

from lintkit.config import ConfigError, LintConfig, load_config  # noqa: E402
from lintkit.engine.context import LintSession  # noqa: E402
from lintkit.engine.fixes import FixRegistry, apply_fixes  # noqa: E402
from lintkit.engine.ranges import RangeIndex, RangeView  # noqa: E402
from lintkit.engine.reporter import FixPositionError, MissingLineError, ReportError, report  # noqa: E402
from lintkit.engine.types import (  # noqa: E402
    WILDCARD,
    Diagnostic,
    DisabledRange,
    FixEntry,
    Position,
    Problem,
    Range,
)
from lintkit.linter import LintResult, lint_path, lint_text  # noqa: E402

__all__ = [
    "WILDCARD",
    "ConfigError",
    "Diagnostic",
    "DisabledRange",
    "FixEntry",
    "FixPositionError",
    "FixRegistry",
    "LintConfig",
    "LintResult",
    "LintSession",
    "MissingLineError",
    "Position",
    "Problem",
    "Range",
    "RangeIndex",
    "RangeView",
    "ReportError",
    "__version__",
    "apply_fixes",
    "lint_path",
    "lint_text",
    "load_config",
    "report",
]
