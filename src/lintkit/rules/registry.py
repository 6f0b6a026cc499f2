from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType

from lintkit.rules.base import BaseRule, RuleMeta
from lintkit.rules.builtin import builtin_rules as _builtin_rules

_RULE_NAME_RE = re.compile(r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*$")


@lru_cache(maxsize=1)
def builtin_rules() -> tuple[BaseRule, ...]:
    by_name: dict[str, BaseRule] = {}
    for rule in _builtin_rules():
        name = rule.meta.name
        if not _RULE_NAME_RE.match(name):  # pragma: no cover
            raise RuntimeError(f"Rule name must be lowercase kebab-case: {name!r}")
        if name in by_name:  # pragma: no cover
            raise RuntimeError(f"Duplicate rule name: {name}")
        by_name[name] = rule

    # Stable, alphabetical order; fixes are drained in this order too.
    return tuple(by_name[k] for k in sorted(by_name))


@lru_cache(maxsize=1)
def rule_meta_by_name() -> Mapping[str, RuleMeta]:
    return MappingProxyType({r.meta.name: r.meta for r in builtin_rules()})
