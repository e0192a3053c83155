"""Recursive structural matchers: subset inclusion and order-insensitive equality.

All recursion is guarded against cycles; a fixture that refers back to one
of its ancestors raises InvalidArgument instead of recursing forever.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterator

from fluentmatch.categories import Category, classify, has_attributes, is_iterable, print_type
from fluentmatch.config import MatcherSettings, get_settings
from fluentmatch.equality import attributes, compare, value_equal
from fluentmatch.errors import InvalidArgument
from fluentmatch.reporting import compose, export, fail, fail_comparison

logger = logging.getLogger(__name__)


class _Absent:
    def __repr__(self) -> str:
        return "<missing>"


ABSENT = _Absent()


# --- subset matching ---


def _is_branch(value: Any) -> bool:
    category = classify(value)
    if category is Category.ASSOCIATIVE_MAP:
        return True
    if category is Category.ORDERED_SEQUENCE:
        return isinstance(value, (list, tuple))
    return category is Category.OBJECT and has_attributes(value)


def _entries(expected: Any) -> Iterator[tuple[Any, Any]]:
    if isinstance(expected, Mapping):
        return iter(expected.items())
    if isinstance(expected, (list, tuple)):
        return enumerate(expected)
    attrs = attributes(expected) if has_attributes(expected) else None
    if attrs is not None:
        return iter(attrs.items())
    raise InvalidArgument(
        f"Expected subset must be a mapping, list or object, not {print_type(expected)}"
    )


def _lookup(actual: Any, key: Any) -> tuple[Any, str]:
    """Resolve ``actual[key]`` (or ``actual.key``) and the path segment for it."""
    if actual is ABSENT:
        return ABSENT, f"[{key!r}]"
    if isinstance(actual, Mapping):
        try:
            return actual.get(key, ABSENT), f"[{key!r}]"
        except TypeError:
            return ABSENT, f"[{key!r}]"
    if isinstance(actual, (list, tuple)):
        if isinstance(key, int) and -len(actual) <= key < len(actual):
            return actual[key], f"[{key!r}]"
        return ABSENT, f"[{key!r}]"
    if classify(actual) is Category.OBJECT and isinstance(key, str):
        return getattr(actual, key, ABSENT), f".{key}"
    return ABSENT, ""


def assert_subset(
    expected: Any,
    actual: Any,
    message: str = "",
    path: str = "$actual",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    """Assert every key/value pair of ``expected`` is present and equal in ``actual``.

    Extra keys in ``actual`` are allowed. Nested mappings, lists and objects
    in ``expected`` are matched recursively; the failure message names the
    path of the first differing slot.
    """
    settings = settings or get_settings()
    _subset(expected, actual, message, path, settings, set())


def _subset(
    expected: Any,
    actual: Any,
    message: str,
    path: str,
    settings: MatcherSettings,
    active: set[int],
) -> None:
    marker = id(expected)
    if marker in active:
        raise InvalidArgument(f"Cyclic structure detected at {path}")
    active.add(marker)
    try:
        if not _is_branch(expected):
            _leaf(expected, actual, message, path, "", settings)
            return
        for key, value in _entries(expected):
            actual_value, part = _lookup(actual, key)
            if _is_branch(value):
                _subset(value, actual_value, message, path + part, settings, active)
                continue
            _leaf(value, actual_value, message, path, part, settings)
    finally:
        active.discard(marker)


def _leaf(
    expected: Any,
    actual: Any,
    message: str,
    path: str,
    part: str,
    settings: MatcherSettings,
) -> None:
    if actual is not ABSENT and value_equal(expected, actual):
        return
    detail = (
        f"Failed asserting that {export(actual, settings)} "
        f"is equal to {export(expected, settings)}.\nKey: {path}{part}"
    )
    fail(compose(message, detail), expected=expected, actual=actual, settings=settings)


# --- order-insensitive equality ---


def _key_order(key: Any) -> tuple:
    """Total order over mixed keys: numbers first, then strings, then the rest."""
    if isinstance(key, (int, float)):
        return (0, key, "")
    if isinstance(key, str):
        return (1, 0, key)
    return (2, 0, f"{type(key).__qualname__}:{key!r}")


def deep_sort(value: Any) -> Any:
    """Return a copy of ``value`` with every mapping ordered by key, at any depth.

    Lists and tuples keep their element order; their children are normalized.
    """
    return _deep_sort(value, set(), "$value")


def _deep_sort(value: Any, active: set[int], path: str) -> Any:
    if isinstance(value, Mapping) or isinstance(value, (list, tuple)):
        marker = id(value)
        if marker in active:
            raise InvalidArgument(f"Cyclic structure detected at {path}")
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                return {
                    key: _deep_sort(value[key], active, f"{path}[{key!r}]")
                    for key in sorted(value.keys(), key=_key_order)
                }
            items = [_deep_sort(item, active, f"{path}[{i}]") for i, item in enumerate(value)]
            return tuple(items) if isinstance(value, tuple) else items
        finally:
            active.discard(marker)
    return value


def assert_deep_equal_ignoring_order(
    expected: Any,
    actual: Any,
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    """Assert both structures hold the same keys and values, whatever their key order."""
    normalized_expected = deep_sort(expected)
    normalized_actual = deep_sort(actual)
    outcome = compare(normalized_expected, normalized_actual)
    logger.debug(f"Shape comparison matched={outcome.matched}")
    if not outcome.matched:
        fail_comparison(
            "has the same shape as",
            normalized_expected,
            normalized_actual,
            message,
            outcome=outcome,
            settings=settings,
        )


def _value_order(value: Any) -> tuple:
    """Display order for content comparison: numbers, strings, then the rest by content."""
    if isinstance(value, (int, float)):
        return (0, value, "")
    if isinstance(value, str):
        return (1, 0, value)
    content = attributes(value) if has_attributes(value) else None
    if content is None:
        content = value
    return (2, 0, f"{type(value).__qualname__}:{export(deep_sort(content))}")


def _sorted_items(collection: Any, side: str) -> list:
    if isinstance(collection, str) or not is_iterable(collection):
        raise InvalidArgument(
            f"Content comparison needs an iterable {side}, not {print_type(collection)}"
        )
    items = collection.values() if isinstance(collection, Mapping) else collection
    return sorted(items, key=_value_order)


def _same_multiset(expected_items: list, actual_items: list) -> bool:
    if len(expected_items) != len(actual_items):
        return False
    unmatched = list(actual_items)
    for item in expected_items:
        for index, candidate in enumerate(unmatched):
            if value_equal(item, candidate):
                del unmatched[index]
                break
        else:
            return False
    return True


def assert_contents_equal(
    expected: Any,
    actual: Any,
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    """Assert two collections hold the same items, irrespective of element order.

    Each expected item consumes the first actual item equal to it by value.
    """
    expected_items = _sorted_items(expected, "expected value")
    actual_items = _sorted_items(actual, "subject")
    if _same_multiset(expected_items, actual_items):
        return
    fail_comparison(
        "has the same content as",
        expected_items,
        actual_items,
        message,
        outcome=compare(expected_items, actual_items),
        settings=settings,
    )
