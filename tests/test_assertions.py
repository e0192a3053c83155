"""Tests for data-driven assertions."""

import logging

import pytest

from fluentmatch.assertions import DATA_MATCHERS, AssertionResult, evaluate_assertion, evaluate_checks
from fluentmatch.config import CheckSpec, MatcherSettings
from fluentmatch.expect import Expectation


# --- evaluate_assertion dispatcher ---


def test_evaluate_assertion_pass():
    result = evaluate_assertion("hello world", {"to_contain": "world"})
    assert isinstance(result, AssertionResult)
    assert result.passed is True
    assert result.name == "to_contain"
    assert result.score == 1.0


def test_evaluate_assertion_fail_keeps_message():
    result = evaluate_assertion("hello", {"to_contain": "world"})
    assert result.passed is False
    assert result.score == 0.0
    assert result.message == "Failed asserting that 'hello' contains 'world'."


def test_evaluate_assertion_list_value_is_positional_args():
    result = evaluate_assertion(1.05, {"to_equal_with_delta": [1.0, 0.1]})
    assert result.passed is True


def test_evaluate_assertion_wrapped_list_argument():
    assert evaluate_assertion([1, 2], {"to_equal": [[1, 2]]}).passed is True


def test_evaluate_assertion_no_arguments():
    assert evaluate_assertion(True, {"to_be_true": None}).passed is True


def test_evaluate_assertion_negate():
    result = evaluate_assertion([1, 2], {"to_contain": 3, "negate": True})
    assert result.passed is True
    assert result.name == "not_to_contain"

    result = evaluate_assertion([1, 2], {"to_contain": 2, "negate": True})
    assert result.passed is False
    assert "Expected `to_contain` to fail" in result.message


def test_evaluate_assertion_custom_name():
    result = evaluate_assertion({"a": 1}, {"to_contain_key": "a", "name": "has a"})
    assert result.name == "has a"


def test_evaluate_assertion_check_spec():
    spec = CheckSpec(matcher="to_be_type", args="string")
    assert evaluate_assertion("x", spec).passed is True


def test_evaluate_assertion_uses_settings():
    settings = MatcherSettings(almost_equal_delta=0.5)
    result = evaluate_assertion(1.4, {"to_almost_equal": 1.0}, settings=settings)
    assert result.passed is True


def test_evaluate_assertion_unknown_matcher():
    with pytest.raises(ValueError, match="[Uu]nknown"):
        evaluate_assertion("x", {"to_be_awesome": True})


def test_evaluate_assertion_rejects_live_object_matchers():
    with pytest.raises(ValueError, match="Unknown matcher: 'to_throw'"):
        evaluate_assertion(len, {"to_throw": "TypeError"})


def test_evaluate_assertion_empty_spec():
    with pytest.raises(ValueError, match="Empty"):
        evaluate_assertion("x", {})


def test_evaluate_assertion_two_matcher_keys():
    with pytest.raises(ValueError, match="exactly one matcher"):
        evaluate_assertion("x", {"to_contain": "x", "to_equal": "x"})


def test_evaluate_assertion_bad_arity():
    with pytest.raises(ValueError, match="Bad arguments"):
        evaluate_assertion(1, {"to_equal_with_delta": [1.0]})


def test_evaluate_assertion_invalid_argument_propagates():
    with pytest.raises(ValueError):
        evaluate_assertion(42, {"to_contain": 1})


def test_evaluate_assertion_logs(caplog):
    caplog.set_level(logging.INFO)
    evaluate_assertion("abc", {"to_contain": "b"})
    assert "to_contain passed" in caplog.text


def test_data_matchers_exist_on_expectation():
    for name in DATA_MATCHERS:
        assert callable(getattr(Expectation, name))


# --- score and weight fields ---


def test_evaluate_assertion_extracts_weight():
    r = evaluate_assertion("abc", {"to_contain": "a", "weight": 3.0})
    assert r.weight == 3.0
    assert r.score == 1.0


def test_evaluate_assertion_default_weight():
    r = evaluate_assertion("abc", {"to_contain": "a"})
    assert r.weight == 1.0


# --- evaluate_checks ---


def test_evaluate_checks_uses_each_subject():
    checks = [
        CheckSpec(subject=[3, 1], matcher="to_have_same_content_as", args=[[1, 3]]),
        CheckSpec(subject={"a": 1}, matcher="to_include", args=[{"a": 2}]),
    ]
    results = evaluate_checks(checks)
    assert [r.passed for r in results] == [True, False]
