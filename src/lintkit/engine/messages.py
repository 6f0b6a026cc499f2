from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from lintkit.engine.values import Static, dynamic

_PLACEHOLDER_RE = re.compile(r"%[ds]")


def printf_like(fmt: str, *args: Any) -> str:
    """
    Substitute `%s` / `%d` placeholders left to right.

    Placeholders beyond the supplied args stay literal; extra args are ignored.
    Substituted text is never rescanned for placeholders.
    """

    remaining = iter(args)
    missing = object()

    def _substitute(match: re.Match[str]) -> str:
        value = next(remaining, missing)
        if value is missing:
            return match.group(0)
        return str(value)

    return _PLACEHOLDER_RE.sub(_substitute, fmt)


def build_message(message: Any, message_args: Sequence[Any] = ()) -> str:
    args = tuple(message_args)
    resolvable = dynamic(message)
    if resolvable is None:
        return ""
    if isinstance(resolvable, Static):
        return printf_like(str(resolvable.value), *args)
    return str(resolvable.evaluate(args))
