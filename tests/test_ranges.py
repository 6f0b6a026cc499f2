from __future__ import annotations

import pytest

from lintkit.engine.ranges import RangeIndex
from lintkit.engine.types import WILDCARD, DisabledRange


def test_ranges_for_is_the_union_of_rule_and_wildcard_ranges() -> None:
    index = RangeIndex(
        {
            "foo": [DisabledRange(10, 12, rules=frozenset({"foo"}))],
            WILDCARD: [DisabledRange(1, 3)],
        }
    )

    assert index.ranges_for("foo") == (DisabledRange(10, 12, rules=frozenset({"foo"})), DisabledRange(1, 3))
    assert index.ranges_for("bar") == (DisabledRange(1, 3),)
    assert RangeIndex().ranges_for("foo") == ()


def test_contains_checks_both_rule_specific_and_wildcard_ranges() -> None:
    index = RangeIndex(
        {
            "foo": [DisabledRange(10, 12, rules=frozenset({"foo"}))],
            WILDCARD: [DisabledRange(1, 3)],
        }
    )

    assert index.contains("foo", 2)
    assert index.contains("foo", 11)
    assert index.contains("bar", 2)
    assert not index.contains("bar", 11)
    assert not index.contains("foo", 5)


def test_open_ended_range_covers_everything_after_start() -> None:
    index = RangeIndex({WILDCARD: [DisabledRange(4)]})

    assert not index.contains("foo", 3)
    assert index.contains("foo", 4)
    assert index.contains("foo", 100_000)


def test_rules_restriction_limits_which_rules_a_range_applies_to() -> None:
    index = RangeIndex({"foo": [DisabledRange(1, 5, rules=frozenset({"bar"}))]})

    assert not index.contains("foo", 2)


def test_apply_offset_shifts_ranges_after_the_edit() -> None:
    index = RangeIndex(
        {
            WILDCARD: [DisabledRange(12, 14), DisabledRange(2, 4)],
            "foo": [DisabledRange(11, None, rules=frozenset({"foo"}))],
        }
    )

    index.apply_offset(10, 2)

    assert index.ranges_for("foo") == (
        DisabledRange(13, None, rules=frozenset({"foo"})),
        DisabledRange(14, 16),
        DisabledRange(2, 4),
    )


def test_apply_offset_leaves_start_of_overlapping_range_alone() -> None:
    index = RangeIndex({WILDCARD: [DisabledRange(8, 10), DisabledRange(8, 15), DisabledRange(10, 10)]})

    index.apply_offset(10, 2)

    assert index.ranges_for("foo") == (DisabledRange(8, 10), DisabledRange(8, 17), DisabledRange(10, 10))


def test_apply_offset_with_negative_delta_never_inverts_a_range() -> None:
    index = RangeIndex({WILDCARD: [DisabledRange(8, 11), DisabledRange(20, 22)]})

    index.apply_offset(10, -5)

    assert index.ranges_for("foo") == (DisabledRange(8, 8), DisabledRange(15, 17))


def test_apply_offset_zero_is_a_no_op() -> None:
    index = RangeIndex({WILDCARD: [DisabledRange(12, 14)]})
    before = index.snapshot()

    index.apply_offset(1, 0)

    assert index.snapshot() == before


def test_copy_is_independent_of_the_original() -> None:
    index = RangeIndex({WILDCARD: [DisabledRange(12, 14)]})
    copy = index.copy()

    index.apply_offset(1, 3)

    assert copy.ranges_for("foo") == (DisabledRange(12, 14),)
    assert index != copy


def test_view_exposes_queries_but_not_mutation() -> None:
    index = RangeIndex({WILDCARD: [DisabledRange(1, 2)]})
    view = index.view()

    assert view.contains("foo", 1)
    assert view.keys() == (WILDCARD,)
    assert not hasattr(view, "apply_offset")
    assert not hasattr(view, "add")

    with pytest.raises(TypeError):
        view.snapshot()[WILDCARD] = ()  # type: ignore[index]


def test_disabled_range_rejects_end_before_start() -> None:
    with pytest.raises(ValueError):
        DisabledRange(5, 4)
