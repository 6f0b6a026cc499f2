from __future__ import annotations

from collections.abc import Callable

import pytest

from lintkit.config import LintConfig
from lintkit.engine.context import LintSession
from lintkit.engine.ranges import RangeIndex
from lintkit.engine.types import DisabledRange


@pytest.fixture()
def make_session() -> Callable[..., LintSession]:
    def _make(
        ranges: dict[str, list[DisabledRange]] | None = None,
        **config_fields,
    ) -> LintSession:
        return LintSession(config=LintConfig(**config_fields), ranges=RangeIndex(ranges or {}))

    return _make
