"""Identity, value and tolerance equality.

Nothing here raises on a mismatch: every entry point returns a bool or a
ComparisonOutcome and the caller decides how to report it. The only
exception raised is InvalidArgument for cyclic structures.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fluentmatch.categories import Category, classify, has_attributes, is_container
from fluentmatch.errors import InvalidArgument


@dataclass
class ComparisonOutcome:
    """Result of a structural comparison.

    Attributes:
        matched: Whether the operands compared equal.
        path: Where the first mismatch was found (e.g. "$actual['a'][2]").
        expected_repr: repr of the expected value at ``path``.
        actual_repr: repr of the actual value at ``path``.
    """

    matched: bool
    path: str = ""
    expected_repr: str = ""
    actual_repr: str = ""


MATCHED = ComparisonOutcome(matched=True)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def identical(a: Any, b: Any) -> bool:
    """Same instance for containers and objects, same type and value for primitives."""
    if a is b:
        return True
    category = classify(a)
    if category in (Category.PRIMITIVE, Category.STRING):
        return type(a) is type(b) and a == b
    return False


def within_delta(expected: float, actual: float, delta: float) -> bool:
    """True iff ``actual`` lies in the closed interval [expected-delta, expected+delta]."""
    return expected - delta <= actual <= expected + delta


def value_equal(a: Any, b: Any) -> bool:
    return compare(a, b).matched


def nan_equal(a: Any, b: Any) -> bool:
    """As value_equal, except NaN compares equal to NaN."""
    return compare(a, b, nan_equal=True).matched


def compare(
    expected: Any,
    actual: Any,
    *,
    delta: float | None = None,
    nan_equal: bool = False,
    path: str = "$actual",
) -> ComparisonOutcome:
    """Recursively compare two values by content.

    Numbers compare across int/float; ``delta`` applies to every pair of
    numbers found at the same position. Objects of the same class compare
    by their attributes, anything else falls back to ``str()``.
    """
    return _Comparison(delta, nan_equal).run(expected, actual, path)


class _Comparison:
    def __init__(self, delta: float | None, nan_equal: bool):
        self.delta = delta
        self.nan_equal = nan_equal
        self._active: set[int] = set()

    def mismatch(self, expected: Any, actual: Any, path: str) -> ComparisonOutcome:
        return ComparisonOutcome(
            matched=False,
            path=path,
            expected_repr=repr(expected),
            actual_repr=repr(actual),
        )

    def run(self, expected: Any, actual: Any, path: str) -> ComparisonOutcome:
        if expected is actual and not _is_nan(expected):
            return MATCHED

        if _is_number(expected) and _is_number(actual):
            return self._numbers(expected, actual, path)

        expected_category = classify(expected)
        actual_category = classify(actual)

        if is_container(expected_category) and is_container(actual_category):
            key = id(expected)
            if key in self._active:
                raise InvalidArgument(f"Cyclic structure detected at {path}")
            self._active.add(key)
            try:
                return self._containers(expected, expected_category, actual, actual_category, path)
            finally:
                self._active.discard(key)

        if expected_category is Category.OBJECT and actual_category is Category.OBJECT:
            return self._objects(expected, actual, path)

        if expected == actual:
            return MATCHED
        return self.mismatch(expected, actual, path)

    def _numbers(self, expected: float, actual: float, path: str) -> ComparisonOutcome:
        if _is_nan(expected) or _is_nan(actual):
            if self.nan_equal and _is_nan(expected) and _is_nan(actual):
                return MATCHED
            return self.mismatch(expected, actual, path)
        if self.delta is not None:
            if within_delta(expected, actual, self.delta):
                return MATCHED
        elif expected == actual:
            return MATCHED
        return self.mismatch(expected, actual, path)

    def _containers(
        self,
        expected: Any,
        expected_category: Category,
        actual: Any,
        actual_category: Category,
        path: str,
    ) -> ComparisonOutcome:
        if expected_category is not actual_category:
            return self.mismatch(expected, actual, path)

        if expected_category is Category.ASSOCIATIVE_MAP:
            return self._mappings(expected, actual, path)
        if expected_category is Category.SET_LIKE:
            if set(expected) == set(actual):
                return MATCHED
            return self.mismatch(expected, actual, path)
        return self._sequences(list(expected), list(actual), path)

    def _mappings(self, expected: Mapping, actual: Mapping, path: str) -> ComparisonOutcome:
        if set(expected.keys()) != set(actual.keys()):
            return self.mismatch(expected, actual, path)
        for key, value in expected.items():
            outcome = self.run(value, actual[key], f"{path}[{key!r}]")
            if not outcome.matched:
                return outcome
        return MATCHED

    def _sequences(self, expected: list, actual: list, path: str) -> ComparisonOutcome:
        if len(expected) != len(actual):
            return self.mismatch(expected, actual, path)
        for index, (left, right) in enumerate(zip(expected, actual)):
            outcome = self.run(left, right, f"{path}[{index}]")
            if not outcome.matched:
                return outcome
        return MATCHED

    def _objects(self, expected: Any, actual: Any, path: str) -> ComparisonOutcome:
        if expected == actual:
            return MATCHED
        if type(expected) is type(actual) and has_attributes(expected):
            expected_attrs = attributes(expected)
            actual_attrs = attributes(actual)
            if expected_attrs is not None and actual_attrs is not None:
                key = id(expected)
                if key in self._active:
                    raise InvalidArgument(f"Cyclic structure detected at {path}")
                self._active.add(key)
                try:
                    if set(expected_attrs) != set(actual_attrs):
                        return self.mismatch(expected, actual, path)
                    for name, value in expected_attrs.items():
                        outcome = self.run(value, actual_attrs[name], f"{path}.{name}")
                        if not outcome.matched:
                            return outcome
                    return MATCHED
                finally:
                    self._active.discard(key)
        if str(expected) == str(actual):
            return MATCHED
        return self.mismatch(expected, actual, path)


def attributes(obj: Any) -> dict[str, Any] | None:
    try:
        attrs = dict(vars(obj))
    except TypeError:
        attrs = None
    slots = set()
    for cls in type(obj).__mro__:
        names = getattr(cls, "__slots__", ())
        if isinstance(names, str):
            names = (names,)
        slots.update(n for n in names if n not in ("__dict__", "__weakref__"))
    if slots:
        attrs = attrs if attrs is not None else {}
        for name in slots:
            if hasattr(obj, name):
                attrs[name] = getattr(obj, name)
    return attrs
