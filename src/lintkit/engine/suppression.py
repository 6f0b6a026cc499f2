from __future__ import annotations

import logging

from lintkit.engine.ranges import RangeView
from lintkit.engine.types import RuleName, SuppressedWarning

logger = logging.getLogger(__name__)


def check_suppression(
    ranges: RangeView,
    rule_name: RuleName,
    line: int,
    *,
    ignore_disables: bool,
    log: list[SuppressedWarning],
) -> bool:
    """
    Return True when a disabled range suppresses `rule_name` at `line`.

    Every matching range is recorded in `log` so needless disables can be
    computed later. Without `ignore_disables` the first match wins; with it
    every match is recorded and nothing is suppressed.
    """

    for disabled in ranges.ranges_for(rule_name):
        if not disabled.covers(rule_name, line):
            continue
        log.append(SuppressedWarning(rule=rule_name, line=line))
        logger.debug("disable directive %s..%s matched %s at line %d", disabled.start, disabled.end, rule_name, line)
        if not ignore_disables:
            return True
    return False
