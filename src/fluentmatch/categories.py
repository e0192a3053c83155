"""Runtime category discrimination for subject values.

A value is classified once into a closed set of categories and the
structural comparators dispatch on the result. Container support is
capability-based: anything implementing ``Mapping`` is keyed, anything
implementing ``Iterable`` is traversable.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Set
from enum import Enum
from typing import Any

PRIMITIVE_TYPES = (int, float, complex, bool, bytes, type(None))


class Category(str, Enum):
    PRIMITIVE = "primitive"
    STRING = "string"
    ORDERED_SEQUENCE = "ordered-sequence"
    ASSOCIATIVE_MAP = "associative-map"
    SET_LIKE = "set-like"
    CALLABLE = "callable"
    OBJECT = "object"


def classify(value: Any) -> Category:
    """Return the category of ``value``.

    Order matters: strings are iterable and classes are callable, so the
    narrower checks run first.
    """
    if isinstance(value, str):
        return Category.STRING
    if isinstance(value, PRIMITIVE_TYPES):
        return Category.PRIMITIVE
    if isinstance(value, Mapping):
        return Category.ASSOCIATIVE_MAP
    if isinstance(value, Set):
        return Category.SET_LIKE
    if isinstance(value, Iterable) and not isinstance(value, type):
        return Category.ORDERED_SEQUENCE
    if callable(value):
        return Category.CALLABLE
    return Category.OBJECT


def is_container(category: Category) -> bool:
    return category in (
        Category.ORDERED_SEQUENCE,
        Category.ASSOCIATIVE_MAP,
        Category.SET_LIKE,
    )


def is_keyed(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_iterable(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, type)


def has_attributes(value: Any) -> bool:
    """True for plain objects whose state lives in ``__dict__`` or slots."""
    return hasattr(value, "__dict__") or hasattr(type(value), "__slots__")


def print_type(value: Any) -> str:
    """Short type name used in InvalidArgument messages."""
    if value is None:
        return "NoneType"
    return type(value).__qualname__
