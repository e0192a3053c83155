"""Type-name tokens and the predicates they stand for.

The mapping is built once at import time and never mutated. Predicates are
pure and total: they never raise, whatever they are handed.
"""

from __future__ import annotations

import builtins
import importlib
import logging
from collections.abc import Callable, Iterable, Mapping, Set
from types import MappingProxyType
from typing import Any

from fluentmatch.errors import InvalidArgument

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_float(value: Any) -> bool:
    return isinstance(value, float)


def _is_numeric(value: Any) -> bool:
    return _is_int(value) or _is_float(value)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (int, float, str, bool))


def _is_ordered_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_object(value: Any) -> bool:
    if value is None or isinstance(value, (int, float, complex, str, bytes, list, tuple, dict, set, frozenset)):
        return False
    return not isinstance(value, type) and hasattr(value, "__class__")


def _is_resource(value: Any) -> bool:
    fileno = getattr(value, "fileno", None)
    return callable(fileno)


def _is_iterable(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, type)


_PREDICATES: dict[str, Predicate] = {
    "int": _is_int,
    "integer": _is_int,
    "float": _is_float,
    "double": _is_float,
    "numeric": _is_numeric,
    "string": lambda v: isinstance(v, str),
    "str": lambda v: isinstance(v, str),
    "bool": lambda v: isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "null": lambda v: v is None,
    "none": lambda v: v is None,
    "scalar": _is_scalar,
    "array": _is_ordered_sequence,
    "list": _is_ordered_sequence,
    "ordered-sequence": _is_ordered_sequence,
    "associative-map": lambda v: isinstance(v, Mapping),
    "set": lambda v: isinstance(v, Set),
    "set-like": lambda v: isinstance(v, Set),
    "callable": callable,
    "iterable": _is_iterable,
    "object": _is_object,
    "resource": _is_resource,
    # index-ordered, key-ordered and unique-element containers
    "vec": lambda v: isinstance(v, list),
    "dict": lambda v: isinstance(v, dict),
    "keyset": lambda v: isinstance(v, (set, frozenset)),
}

TYPE_PREDICATES: Mapping[str, Predicate] = MappingProxyType(_PREDICATES)


def is_recognized_token(token: str) -> bool:
    return token in TYPE_PREDICATES


def type_tokens() -> list[str]:
    return sorted(TYPE_PREDICATES)


def predicate_for(token: str) -> Predicate:
    """Return the predicate registered for ``token``.

    Raises InvalidArgument for unrecognized tokens.
    """
    try:
        return TYPE_PREDICATES[token]
    except KeyError:
        raise InvalidArgument(f"Unknown type token: '{token}'") from None


def resolve_class(name: str) -> type | None:
    """Resolve a builtin name or dotted ``module.Class`` path to a class.

    Returns None when nothing importable by that name is a class.
    """
    if "." not in name:
        candidate = getattr(builtins, name, None)
        return candidate if isinstance(candidate, type) else None

    module_name, _, attr = name.rpartition(".")
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        logger.debug(f"Could not import module '{module_name}' for class '{name}'")
        return None
    candidate = getattr(module, attr, None)
    return candidate if isinstance(candidate, type) else None


def matches_type(expected: str | type, value: Any) -> bool:
    """Check ``value`` against a type token, a class, or a class name.

    Type tokens win over class names, so ``"int"`` means "integer but not
    bool" rather than ``isinstance(value, int)``.
    """
    if isinstance(expected, type):
        return isinstance(value, expected)
    if not isinstance(expected, str):
        raise InvalidArgument(f"Expected a type token or class, got {expected!r}")
    if is_recognized_token(expected):
        return predicate_for(expected)(value)
    cls = resolve_class(expected)
    if cls is None:
        raise InvalidArgument(
            f"Expected a type token or class or interface name, got '{expected}'"
        )
    return isinstance(value, cls)
