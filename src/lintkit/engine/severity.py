from __future__ import annotations

from lintkit.config import LintConfig
from lintkit.engine.types import Problem, Severity
from lintkit.engine.values import dynamic


def resolve_severity(problem: Problem, config: LintConfig) -> Severity:
    """
    Resolve the effective severity for `problem`.

    The problem's own severity wins over the configured per-rule severity,
    which wins over `config.default_severity`. Callable severities receive the
    problem's message args; a falsy result falls back to the default.
    Exceptions raised by a severity callable propagate to the caller.
    """

    default = config.default_severity
    option = problem.severity
    if option is None:
        option = config.rule_severities.get(problem.rule_name)

    resolvable = dynamic(option)
    if resolvable is None:
        return default
    return resolvable.evaluate(tuple(problem.message_args)) or default
