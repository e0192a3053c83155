"""Tests for failure message formatting."""

import pytest

from fluentmatch.config import MatcherSettings
from fluentmatch.equality import compare
from fluentmatch.errors import AssertionFailure, InvalidArgument
from fluentmatch.reporting import export, fail, fail_comparison, fail_predicate, format_message


# --- format_message ---


def test_format_message_substitutes_in_order():
    assert format_message("%s has %d items at %f", ["cart", 3, 1.5]) == "cart has 3 items at 1.500000"


def test_format_message_without_args_is_untouched():
    assert format_message("100% sure") == "100% sure"


def test_format_message_literal_percent():
    assert format_message("%d%% done", [50]) == "50% done"


def test_format_message_surplus_args_ignored():
    assert format_message("only %s", ["one", "two"]) == "only one"


def test_format_message_too_few_args():
    with pytest.raises(InvalidArgument, match="needs more than 1"):
        format_message("%s and %s", ["one"])


def test_format_message_bad_number():
    with pytest.raises(InvalidArgument):
        format_message("%d", ["x"])


# --- export ---


def test_export_disambiguates_string_and_int():
    assert export("1") != export(1)
    assert export("1") == "'1'"


def test_export_keeps_insertion_order():
    assert export({"b": 1, "a": 2}) == "{'b': 1, 'a': 2}"


def test_export_truncates_long_values():
    text = export("x" * 100, MatcherSettings(max_repr_length=20))
    assert len(text) == 20
    assert text.endswith("...")


# --- fail ---


def test_fail_raises_formatted_message():
    with pytest.raises(AssertionFailure) as exc_info:
        fail("expected %s, got %s", "a", "b", expected="a", actual="b")
    failure = exc_info.value
    assert str(failure) == "expected a, got b"
    assert failure.expected_repr == "'a'"
    assert failure.actual_repr == "'b'"


def test_failure_is_an_assertion_error():
    with pytest.raises(AssertionError):
        fail("boom")


# --- fail_comparison ---


def test_fail_comparison_shows_both_operands():
    with pytest.raises(AssertionFailure) as exc_info:
        fail_comparison("contains", "world", "hello")
    assert str(exc_info.value) == "Failed asserting that 'hello' contains 'world'."


def test_fail_comparison_custom_message_first():
    with pytest.raises(AssertionFailure) as exc_info:
        fail_comparison("is equal to", 1, 2, "totals differ")
    assert str(exc_info.value) == "totals differ\nFailed asserting that 2 is equal to 1."


def test_fail_comparison_mismatch_location():
    outcome = compare({"a": [1, 2]}, {"a": [1, 5]})
    with pytest.raises(AssertionFailure) as exc_info:
        fail_comparison("is equal to", {"a": [1, 2]}, {"a": [1, 5]}, outcome=outcome)
    assert "Mismatch at $actual['a'][1]: expected 2, got 5" in str(exc_info.value)


def test_fail_comparison_embeds_diff_for_multiline_strings():
    with pytest.raises(AssertionFailure) as exc_info:
        fail_comparison("is equal to", "a\nb\nc\n", "a\nb\nd\n")
    failure = exc_info.value
    assert failure.diff is not None
    assert "-c" in failure.diff.split("\n")
    assert "+d" in failure.diff.split("\n")
    assert failure.diff in str(failure)


def test_fail_comparison_no_diff_for_single_line_strings():
    with pytest.raises(AssertionFailure) as exc_info:
        fail_comparison("is equal to", "abc", "abd")
    assert exc_info.value.diff is None


def test_fail_comparison_diff_can_be_disabled():
    settings = MatcherSettings(show_diff=False)
    with pytest.raises(AssertionFailure) as exc_info:
        fail_comparison("is equal to", "a\nb", "a\nc", settings=settings)
    assert exc_info.value.diff is None


def test_fail_predicate():
    with pytest.raises(AssertionFailure) as exc_info:
        fail_predicate("is true", 0)
    assert str(exc_info.value) == "Failed asserting that 0 is true."
    assert exc_info.value.actual_repr == "0"
