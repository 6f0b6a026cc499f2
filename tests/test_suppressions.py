from __future__ import annotations

import logging

from lintkit.engine.types import WILDCARD, DisabledRange, SuppressedWarning
from lintkit.suppressions import Directive, needless_disables, parse_disabled_ranges


def test_disable_enable_pair_makes_a_wildcard_range() -> None:
    scan = parse_disabled_ranges(
        [
            "x = 1\n",
            "# lintkit-disable\n",
            "y = 2\n",
            "# lintkit-enable\n",
            "z = 3\n",
        ]
    )

    assert scan.ranges.snapshot() == {WILDCARD: (DisabledRange(2, 4),)}
    assert scan.directives == (Directive("disable", 2), Directive("enable", 4))


def test_unclosed_disable_runs_to_end_of_document() -> None:
    scan = parse_disabled_ranges(["# lintkit-disable no-tabs\n", "x\n"])

    assert scan.ranges.snapshot() == {"no-tabs": (DisabledRange(1, None, rules=frozenset({"no-tabs"})),)}
    assert scan.ranges.contains("no-tabs", 10_000)
    assert not scan.ranges.contains("max-line-length", 2)


def test_rule_list_is_case_insensitive_and_comma_or_space_separated() -> None:
    scan = parse_disabled_ranges(["x = 1  # lintkit-disable-line No-Tabs, max-line-length  no-tabs\n"])

    assert scan.ranges.keys() == ("no-tabs", "max-line-length")
    assert scan.ranges.contains("no-tabs", 1)
    assert scan.ranges.contains("max-line-length", 1)
    assert not scan.ranges.contains("no-tabs", 2)


def test_disable_next_line_targets_only_the_following_line() -> None:
    scan = parse_disabled_ranges(["// lintkit-disable-next-line\n", "a\n", "b\n"])

    assert not scan.ranges.contains("any", 1)
    assert scan.ranges.contains("any", 2)
    assert not scan.ranges.contains("any", 3)


def test_all_keyword_is_wildcard() -> None:
    scan = parse_disabled_ranges(["/* lintkit-disable-line all */\n"])

    assert scan.ranges.snapshot() == {WILDCARD: (DisabledRange(1, 1),)}


def test_description_after_double_dash_is_ignored() -> None:
    scan = parse_disabled_ranges(["x  # lintkit-disable-line no-tabs -- generated file\n"])

    assert scan.ranges.keys() == ("no-tabs",)


def test_enable_with_rules_closes_only_those_rules() -> None:
    scan = parse_disabled_ranges(
        [
            "# lintkit-disable no-tabs, max-line-length\n",
            "a\n",
            "# lintkit-enable no-tabs\n",
            "b\n",
        ]
    )

    assert scan.ranges.ranges_for("no-tabs") == (DisabledRange(1, 3, rules=frozenset({"no-tabs"})),)
    assert scan.ranges.ranges_for("max-line-length") == (
        DisabledRange(1, None, rules=frozenset({"max-line-length"})),
    )


def test_reenabling_one_rule_inside_wildcard_range_warns(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="lintkit.suppressions")

    scan = parse_disabled_ranges(["# lintkit-disable\n", "# lintkit-enable no-tabs\n", "x\n"])

    assert scan.ranges.contains("no-tabs", 3)
    assert any("cannot re-enable 'no-tabs'" in rec.getMessage() for rec in caplog.records)


def test_lookalike_words_are_not_directives() -> None:
    scan = parse_disabled_ranges(["# lintkit-disabled is not a directive\n", "# lintkit-disable: nope\n"])

    assert len(scan.ranges) == 0
    assert scan.directives == ()


def test_needless_disables_reports_ranges_that_suppressed_nothing() -> None:
    scan = parse_disabled_ranges(
        [
            "a  # lintkit-disable-line no-tabs\n",
            "b  # lintkit-disable-line\n",
            "c  # lintkit-disable-line max-line-length\n",
        ]
    )
    log = [SuppressedWarning(rule="no-tabs", line=1), SuppressedWarning(rule="no-tabs", line=3)]

    unused = needless_disables(scan.ranges, log)

    assert unused == [
        (WILDCARD, DisabledRange(2, 2)),
        ("max-line-length", DisabledRange(3, 3, rules=frozenset({"max-line-length"}))),
    ]


def test_description_may_contain_any_punctuation() -> None:
    scan = parse_disabled_ranges(["x\t  # lintkit-disable-line no-tabs -- see issue #12. Don't: touch!\n"])

    assert scan.ranges.snapshot() == {"no-tabs": (DisabledRange(1, 1, rules=frozenset({"no-tabs"})),)}
    assert scan.directives == (Directive("disable-line", 1, ("no-tabs",)),)


def test_directive_followed_by_another_comment() -> None:
    scan = parse_disabled_ranges(
        [
            "import os  # lintkit-disable-line  # noqa: F401\n",
            "y = 2  # lintkit-disable-line max-line-length # type: ignore\n",
        ]
    )

    assert scan.ranges.snapshot() == {
        WILDCARD: (DisabledRange(1, 1),),
        "max-line-length": (DisabledRange(2, 2, rules=frozenset({"max-line-length"})),),
    }


def test_html_comment_closer_ends_rule_list() -> None:
    scan = parse_disabled_ranges(["<!-- lintkit-disable-next-line no-tabs -->\n", "\tx\n"])

    assert scan.ranges.keys() == ("no-tabs",)
    assert scan.ranges.contains("no-tabs", 2)
