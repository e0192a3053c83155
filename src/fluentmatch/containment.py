"""Needle-in-haystack checks over strings and containers."""

from __future__ import annotations

from collections.abc import Mapping, Set
from typing import Any

from fluentmatch.categories import Category, classify, is_iterable, is_keyed, print_type
from fluentmatch.equality import value_equal
from fluentmatch.errors import InvalidArgument


def _compares_by_identity(needle: Any) -> bool:
    return classify(needle) in (Category.OBJECT, Category.CALLABLE)


def contains(needle: Any, haystack: Any, case_insensitive: bool = False) -> bool:
    """Decide whether ``needle`` occurs in ``haystack``.

    - str haystack: substring search, the needle must be a str too.
    - set-like haystack: native membership test, except case-insensitive
      string searches, which scan like any other iterable.
    - any other iterable: linear scan over its values (mapping values, not
      keys); object needles compare by identity, everything else by value.
    """
    if isinstance(haystack, str):
        if not isinstance(needle, str):
            raise InvalidArgument(
                f"Cannot search for {print_type(needle)} inside a string; needle must be a string"
            )
        if case_insensitive:
            return needle.casefold() in haystack.casefold()
        return needle in haystack

    if isinstance(haystack, Set) and not (case_insensitive and isinstance(needle, str)):
        try:
            return needle in haystack
        except TypeError:
            # unhashable needles cannot be members of a hash-based set
            return False

    if not is_iterable(haystack):
        raise InvalidArgument(
            f"Containment needs a string or an iterable haystack, not {print_type(haystack)}"
        )

    elements = haystack.values() if isinstance(haystack, Mapping) else haystack
    by_identity = _compares_by_identity(needle)
    for element in elements:
        if by_identity:
            if element is needle:
                return True
        elif case_insensitive and isinstance(needle, str) and isinstance(element, str):
            if element.casefold() == needle.casefold():
                return True
        elif value_equal(needle, element):
            return True
    return False


def contains_key(key: Any, haystack: Any) -> bool:
    """Whether a keyed container has ``key``. Sets should use ``contains``."""
    if not is_keyed(haystack):
        raise InvalidArgument(
            f"Key lookup only applies to mappings, not {print_type(haystack)}"
        )
    try:
        return key in haystack
    except TypeError:
        return False
