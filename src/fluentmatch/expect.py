"""Fluent entry point: ``expect(value).to_equal(expected)``.

Every matcher takes an optional ``msg`` template followed by its
substitution args, e.g. ``expect(x).to_equal(1, "row %d of %s", 3, "users")``.
Matchers return silently on success and raise AssertionFailure otherwise.

Sections:
    - Basic value assertions
    - Negated basic value assertions
    - Function call assertions
    - Function exception assertions
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from fluentmatch import calls as call_checks
from fluentmatch.config import MatcherSettings, get_settings
from fluentmatch.containment import contains, contains_key
from fluentmatch.equality import compare, identical
from fluentmatch.errors import InvalidArgument
from fluentmatch.negation import InvertedExpectation
from fluentmatch.raising import assert_does_not_raise, assert_raises, assert_raises_with_code
from fluentmatch.reporting import fail_comparison, fail_predicate, format_message
from fluentmatch.snapshot import Snapshot, assert_matches_snapshot
from fluentmatch.sorting import assert_sorted_by, assert_sorted_by_key
from fluentmatch.structural import (
    assert_contents_equal,
    assert_deep_equal_ignoring_order,
    assert_subset,
)
from fluentmatch.type_registry import matches_type
from fluentmatch.uri import URIParser, assert_uris_equivalent, parse_uri

logger = logging.getLogger(__name__)


class Expectation:
    """The subject(s) of one assertion plus every matcher that can be applied to them."""

    def __init__(self, subjects: Sequence[Any], settings: MatcherSettings | None = None):
        self.subjects = tuple(subjects)
        self.settings = settings or get_settings()

    def __repr__(self) -> str:
        return f"Expectation{self.subjects!r}"

    # --- plumbing ---

    def _single(self, method: str) -> Any:
        if len(self.subjects) != 1:
            raise InvalidArgument(f"Single arg expected for expect().{method}()")
        return self.subjects[0]

    def _passed(self, method: str) -> None:
        logger.debug(f"{method} passed")

    def _compare(
        self,
        method: str,
        description: str,
        expected: Any,
        msg: str,
        args: Sequence[Any],
        *,
        delta: float | None = None,
        nan_equal: bool = False,
    ) -> None:
        actual = self._single(method)
        outcome = compare(expected, actual, delta=delta, nan_equal=nan_equal)
        if not outcome.matched:
            fail_comparison(
                description,
                expected,
                actual,
                format_message(msg, args),
                outcome=outcome,
                settings=self.settings,
            )
        self._passed(method)

    def _check(
        self,
        method: str,
        matched: bool,
        description: str,
        expected: Any,
        msg: str,
        args: Sequence[Any],
    ) -> None:
        if not matched:
            fail_comparison(
                description,
                expected,
                self.subjects[0],
                format_message(msg, args),
                settings=self.settings,
            )
        self._passed(method)

    def _check_predicate(
        self, method: str, matched: bool, description: str, msg: str, args: Sequence[Any]
    ) -> None:
        if not matched:
            fail_predicate(
                description,
                self.subjects[0],
                format_message(msg, args),
                settings=self.settings,
            )
        self._passed(method)

    def _ordered(self, method: str, expected: Any, op: Callable[[Any, Any], bool]) -> bool:
        actual = self._single(method)
        try:
            return bool(op(actual, expected))
        except TypeError:
            raise InvalidArgument(
                f"Cannot order {type(actual).__qualname__} against {type(expected).__qualname__}"
            ) from None

    # --- negation ---

    @property
    def not_(self) -> InvertedExpectation:
        """``expect(x).not_.to_equal(y)`` passes iff ``to_equal`` fails."""
        return InvertedExpectation(self)

    def iff(self, condition: Any) -> Expectation | InvertedExpectation:
        """Keep the expectation when ``condition`` is truthy, invert it otherwise.

        ``expect(foo).iff(foo is bar).to_be_same(bar)`` always passes.
        """
        if condition:
            return self
        return InvertedExpectation(self)

    # --- basic value assertions ---

    def to_equal(self, expected: Any, msg: str = "", *args: Any) -> None:
        """Roughly ``actual == expected``; objects of one class compare by attributes."""
        self._compare("to_equal", "is equal to", expected, msg, args)

    def to_equal_with_delta(self, expected: Any, delta: float, msg: str = "", *args: Any) -> None:
        """Numbers, including those nested in containers, may differ by at most ``delta``."""
        if delta < 0:
            raise InvalidArgument("delta must not be negative")
        self._compare(
            "to_equal_with_delta", f"is equal to (delta {delta!r})", expected, msg, args, delta=delta
        )

    def to_almost_equal(self, expected: Any, msg: str = "", *args: Any) -> None:
        self._compare(
            "to_almost_equal",
            "is almost equal to",
            expected,
            msg,
            args,
            delta=self.settings.almost_equal_delta,
            nan_equal=True,
        )

    def to_equal_with_nan_equal(self, expected: Any, msg: str = "", *args: Any) -> None:
        """Same as to_equal() except NaN is treated as equal to itself."""
        self._compare("to_equal_with_nan_equal", "is equal to", expected, msg, args, nan_equal=True)

    def to_be_same(self, expected: Any, msg: str = "", *args: Any) -> None:
        """Same instance for objects and containers, same type and value for primitives."""
        actual = self._single("to_be_same")
        self._check("to_be_same", identical(expected, actual), "is identical to", expected, msg, args)

    def to_be_true(self, msg: str = "", *args: Any) -> None:
        actual = self._single("to_be_true")
        self._check_predicate("to_be_true", actual is True, "is true", msg, args)

    def to_be_false(self, msg: str = "", *args: Any) -> None:
        actual = self._single("to_be_false")
        self._check_predicate("to_be_false", actual is False, "is false", msg, args)

    def to_be_none(self, msg: str = "", *args: Any) -> None:
        actual = self._single("to_be_none")
        self._check_predicate("to_be_none", actual is None, "is None", msg, args)

    def to_be_empty(self, msg: str = "", *args: Any) -> None:
        actual = self._single("to_be_empty")
        self._check_predicate("to_be_empty", not actual, "is empty", msg, args)

    def to_be_greater_than(self, expected: Any, msg: str = "", *args: Any) -> None:
        matched = self._ordered("to_be_greater_than", expected, lambda a, e: a > e)
        self._check("to_be_greater_than", matched, "is greater than", expected, msg, args)

    def to_be_less_than(self, expected: Any, msg: str = "", *args: Any) -> None:
        matched = self._ordered("to_be_less_than", expected, lambda a, e: a < e)
        self._check("to_be_less_than", matched, "is less than", expected, msg, args)

    def to_be_less_than_or_equal_to(self, expected: Any, msg: str = "", *args: Any) -> None:
        matched = self._ordered("to_be_less_than_or_equal_to", expected, lambda a, e: a <= e)
        self._check("to_be_less_than_or_equal_to", matched, "is equal to or less than", expected, msg, args)

    def to_be_greater_than_or_equal_to(self, expected: Any, msg: str = "", *args: Any) -> None:
        matched = self._ordered("to_be_greater_than_or_equal_to", expected, lambda a, e: a >= e)
        self._check(
            "to_be_greater_than_or_equal_to", matched, "is equal to or greater than", expected, msg, args
        )

    def to_be_instance_of(self, class_or_interface: type | str, msg: str = "", *args: Any) -> Any:
        """Assert ``isinstance`` and hand the subject back for further use."""
        actual = self._single("to_be_instance_of")
        self._check(
            "to_be_instance_of",
            matches_type(class_or_interface, actual),
            "is an instance of",
            class_or_interface,
            msg,
            args,
        )
        return actual

    def to_match_regexp(self, pattern: str | re.Pattern, msg: str = "", *args: Any) -> None:
        actual = self._single("to_match_regexp")
        if not isinstance(actual, str):
            raise InvalidArgument(f"to_match_regexp() needs a string subject, not {type(actual).__qualname__}")
        matched = re.search(pattern, actual) is not None
        self._check("to_match_regexp", matched, "matches pattern", pattern, msg, args)

    def to_be_type(self, type_name: str, msg: str = "", *args: Any) -> None:
        """Check against a type token such as ``"int"`` or ``"vec"``, or a class name.

        Example: ``expect(x).to_be_type("string")``
        """
        actual = self._single("to_be_type")
        self._check("to_be_type", matches_type(type_name, actual), "is of type", type_name, msg, args)

    def to_contain(self, needle: Any, msg: str = "", *args: Any) -> None:
        """Substring search for strings, element search for any other iterable.

        Object needles are compared by identity, everything else by value.
        """
        actual = self._single("to_contain")
        self._check("to_contain", contains(needle, actual), "contains", needle, msg, args)

    def to_contain_case_insensitive(self, needle: Any, msg: str = "", *args: Any) -> None:
        actual = self._single("to_contain_case_insensitive")
        matched = contains(needle, actual, case_insensitive=True)
        self._check("to_contain_case_insensitive", matched, "contains (ignoring case)", needle, msg, args)

    def to_contain_key(self, key: Any, msg: str = "", *args: Any) -> None:
        """The mapping subject has ``key``. For sets use to_contain()."""
        actual = self._single("to_contain_key")
        self._check("to_contain_key", contains_key(key, actual), "has the key", key, msg, args)

    def to_include(self, expected_subset: Any, msg: str = "", *args: Any) -> None:
        """Every key/value of ``expected_subset`` is present in the subject; extra keys are fine."""
        actual = self._single("to_include")
        assert_subset(expected_subset, actual, format_message(msg, args), settings=self.settings)
        self._passed("to_include")

    def to_have_same_shape_as(self, expected: Any, msg: str = "", *args: Any) -> None:
        """Same keys and values at every depth, regardless of key order."""
        actual = self._single("to_have_same_shape_as")
        assert_deep_equal_ignoring_order(expected, actual, format_message(msg, args), settings=self.settings)
        self._passed("to_have_same_shape_as")

    def to_have_same_content_as(self, expected: Iterable[Any], msg: str = "", *args: Any) -> None:
        """Same items regardless of order."""
        actual = self._single("to_have_same_content_as")
        assert_contents_equal(expected, actual, format_message(msg, args), settings=self.settings)
        self._passed("to_have_same_content_as")

    def to_be_sorted_by(self, comparator: Callable[[Any, Any], bool], msg: str = "", *args: Any) -> None:
        """``comparator(a, b)`` must hold for every consecutive pair."""
        actual = self._single("to_be_sorted_by")
        assert_sorted_by(actual, comparator, format_message(msg, args), settings=self.settings)
        self._passed("to_be_sorted_by")

    def to_be_sorted_by_key(self, key_extractor: Callable[[Any], Any], msg: str = "", *args: Any) -> None:
        actual = self._single("to_be_sorted_by_key")
        assert_sorted_by_key(actual, key_extractor, format_message(msg, args), settings=self.settings)
        self._passed("to_be_sorted_by_key")

    def to_equal_uri(
        self, expected_uri: str, msg: str = "", *args: Any, parser: URIParser = parse_uri
    ) -> None:
        """Scheme, host and port match exactly, paths after clean-up, query params in any order."""
        actual = self._single("to_equal_uri")
        assert_uris_equivalent(
            expected_uri, actual, format_message(msg, args), parser=parser, settings=self.settings
        )
        self._passed("to_equal_uri")

    def to_match_snapshot(self, snapshot: Snapshot | None, msg: str = "", *args: Any) -> None:
        actual = self._single("to_match_snapshot")
        assert_matches_snapshot(snapshot, actual, format_message(msg, args), settings=self.settings)
        self._passed("to_match_snapshot")

    # --- negated basic value assertions ---

    def to_not_equal(self, expected: Any, msg: str = "", *args: Any) -> None:
        actual = self._single("to_not_equal")
        matched = not compare(expected, actual).matched
        self._check("to_not_equal", matched, "is not equal to", expected, msg, args)

    def to_not_be_none(self, msg: str = "", *args: Any) -> Any:
        """Assert the subject is not None and hand it back."""
        actual = self._single("to_not_be_none")
        self._check_predicate("to_not_be_none", actual is not None, "is not None", msg, args)
        return actual

    def to_not_be_type(self, type_name: str, msg: str = "", *args: Any) -> None:
        actual = self._single("to_not_be_type")
        matched = not matches_type(type_name, actual)
        self._check("to_not_be_type", matched, "is not of type", type_name, msg, args)

    def to_not_be_same(self, expected: Any, msg: str = "", *args: Any) -> None:
        actual = self._single("to_not_be_same")
        matched = not identical(expected, actual)
        self._check("to_not_be_same", matched, "is not identical to", expected, msg, args)

    def to_not_be_empty(self, msg: str = "", *args: Any) -> None:
        actual = self._single("to_not_be_empty")
        self._check_predicate("to_not_be_empty", bool(actual), "is not empty", msg, args)

    def to_not_be_instance_of(self, class_or_interface: type | str, msg: str = "", *args: Any) -> None:
        actual = self._single("to_not_be_instance_of")
        matched = not matches_type(class_or_interface, actual)
        self._check("to_not_be_instance_of", matched, "is not an instance of", class_or_interface, msg, args)

    def to_not_contain(self, needle: Any, msg: str = "", *args: Any) -> None:
        actual = self._single("to_not_contain")
        self._check("to_not_contain", not contains(needle, actual), "does not contain", needle, msg, args)

    def to_not_contain_key(self, key: Any, msg: str = "", *args: Any) -> None:
        actual = self._single("to_not_contain_key")
        matched = not contains_key(key, actual)
        self._check("to_not_contain_key", matched, "does not have the key", key, msg, args)

    def to_not_match_regexp(self, pattern: str | re.Pattern, msg: str = "", *args: Any) -> None:
        actual = self._single("to_not_match_regexp")
        if not isinstance(actual, str):
            raise InvalidArgument(
                f"to_not_match_regexp() needs a string subject, not {type(actual).__qualname__}"
            )
        matched = re.search(pattern, actual) is None
        self._check("to_not_match_regexp", matched, "does not match pattern", pattern, msg, args)

    # --- function call assertions ---
    #
    #   expect(mock_foo, "bar").was_called_once()
    #   expect(mock_fn).was_called_with((1, 2), (3, 4))

    def _recorder(self) -> call_checks.CallRecorder:
        return call_checks.recorder_for(self.subjects)

    def was_called_once(self, msg: str = "", *args: Any) -> None:
        self.was_called_n_times(1, msg, *args)

    def was_called_twice(self, msg: str = "", *args: Any) -> None:
        self.was_called_n_times(2, msg, *args)

    def was_called_n_times(self, times: int, msg: str = "", *args: Any) -> None:
        call_checks.assert_called_n_times(
            self._recorder(), times, format_message(msg, args), settings=self.settings
        )

    def was_called_once_with(self, *args: Any, **kwargs: Any) -> None:
        """Called exactly once, and that call had these arguments."""
        call_checks.assert_called_once_with(self._recorder(), args, kwargs, settings=self.settings)

    def was_called_last_with(self, *args: Any, **kwargs: Any) -> None:
        """Called at least once, and the final call had these arguments."""
        call_checks.assert_called_last_with(self._recorder(), args, kwargs, settings=self.settings)

    def was_called_with(self, *calls: Sequence[Any], msg: str = "") -> None:
        """Positional arguments of all calls, in call order."""
        call_checks.assert_calls(self._recorder(), calls, msg, settings=self.settings)

    def was_called_with_array(self, calls: Sequence[Sequence[Any]], msg: str = "", *args: Any) -> None:
        """Same as was_called_with() but takes the calls as one sequence."""
        call_checks.assert_calls(
            self._recorder(), calls, format_message(msg, args), settings=self.settings
        )

    def was_called_with_arguments_passing(self, predicate: Callable[..., bool], msg: str = "") -> None:
        call_checks.assert_calls_pass(self._recorder(), predicate, msg, settings=self.settings)

    def was_not_called(self, msg: str = "", *args: Any) -> None:
        call_checks.assert_not_called(self._recorder(), format_message(msg, args), settings=self.settings)

    # --- function exception assertions ---

    def not_to_throw(self, msg: str | None = None, *args: Any) -> None:
        """The callable subject returns (or its awaitable settles) without raising."""
        fn = self._single("not_to_throw")
        assert_does_not_raise(fn, (), format_message(msg or "", args), settings=self.settings)
        self._passed("not_to_throw")

    def to_throw(
        self,
        exception_class: type[BaseException],
        expected_message: str | None = None,
        msg: str | None = None,
        *args: Any,
    ) -> BaseException:
        """The callable subject raises ``exception_class``; its message contains ``expected_message``.

        Returns the caught exception.
        """
        return self.to_throw_when_called_with((), exception_class, expected_message, msg, *args)

    def to_throw_when_called_with(
        self,
        call_args: Sequence[Any],
        exception_class: type[BaseException],
        expected_message: str | None = None,
        msg: str | None = None,
        *args: Any,
    ) -> BaseException:
        fn = self._single("to_throw_when_called_with")
        exception = assert_raises(
            fn,
            call_args,
            exception_class,
            expected_message,
            format_message(msg or "", args),
            settings=self.settings,
        )
        self._passed("to_throw_when_called_with")
        return exception

    def to_throw_with_code(
        self,
        exception_class: type[BaseException],
        code: Any,
        data: Any = None,
        msg: str | None = None,
        *args: Any,
    ) -> BaseException:
        """The callable subject raises ``exception_class`` whose ``code`` (or ``errno``) equals ``code``.

        Example::

            expect(lambda: sys.exit(3)).to_throw_with_code(SystemExit, 3)
        """
        return self.to_throw_with_code_when_called_with((), exception_class, code, data, msg, *args)

    def to_throw_with_code_when_called_with(
        self,
        call_args: Sequence[Any],
        exception_class: type[BaseException],
        code: Any,
        data: Any = None,
        msg: str | None = None,
        *args: Any,
    ) -> BaseException:
        fn = self._single("to_throw_with_code_when_called_with")
        exception = assert_raises_with_code(
            fn,
            call_args,
            exception_class,
            code,
            data,
            format_message(msg or "", args),
            settings=self.settings,
        )
        self._passed("to_throw_with_code_when_called_with")
        return exception


def expect(*subjects: Any, settings: MatcherSettings | None = None) -> Expectation:
    """Start an assertion.

    Example usage:

        expect(foo).to_equal("bar")
        expect(mock_foo, "bar").was_called_once()
    """
    return Expectation(subjects, settings)
