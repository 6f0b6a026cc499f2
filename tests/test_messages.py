from __future__ import annotations

from lintkit.engine.messages import build_message, printf_like


def test_placeholders_are_consumed_left_to_right() -> None:
    assert build_message("Expected %s but found %s", ["a", "b"]) == "Expected a but found b"


def test_extra_placeholders_stay_literal() -> None:
    assert build_message("Expected %s but found %s", ["a"]) == "Expected a but found %s"


def test_extra_args_are_ignored() -> None:
    assert printf_like("Expected %d", 1, 2) == "Expected 1"


def test_digit_placeholder_uses_str_of_arg() -> None:
    assert printf_like("Expected no more than %d empty line(s)", 2) == "Expected no more than 2 empty line(s)"


def test_substituted_text_is_not_rescanned() -> None:
    assert printf_like("%s then %s", "50%s", "x") == "50%s then x"


def test_message_without_args_is_returned_as_is() -> None:
    assert build_message("Unexpected tab character") == "Unexpected tab character"


def test_callable_message_receives_args_spread() -> None:
    def message(expected, actual):
        return f"want {expected}, got {actual}"

    assert build_message(message, ("a", "b")) == "want a, got b"
