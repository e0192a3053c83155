"""Sortedness checks over single-pass iterables."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from fluentmatch.categories import is_iterable, print_type
from fluentmatch.config import MatcherSettings, get_settings
from fluentmatch.errors import InvalidArgument
from fluentmatch.reporting import export, fail

logger = logging.getLogger(__name__)

T = TypeVar("T")


def assert_sorted_by(
    collection: Iterable[T],
    comparator: Callable[[T, T], bool],
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    """Check that ``comparator(prev, curr)`` holds for every consecutive pair.

    The collection is consumed once, front to back, so generators work.
    Mappings are checked by their values.
    Collections of 0 or 1 items are sorted without calling ``comparator``.
    The reported position is the 0-based index of the element that breaks
    the order.
    """
    if isinstance(collection, str) or not is_iterable(collection):
        raise InvalidArgument(
            f"Sortedness only applies to iterables, not {print_type(collection)}"
        )
    settings = settings or get_settings()
    items = collection.values() if isinstance(collection, Mapping) else collection

    window: list[T] = []
    for index, item in enumerate(items):
        if len(window) < 2:
            window.append(item)
        else:
            window[0], window[1] = window[1], item

        if len(window) == 2 and not comparator(window[0], window[1]):
            main_message = message or "Collection is not sorted"
            fail(
                "%s: at pos %d, %s and %s are in the wrong order",
                main_message,
                index,
                export(window[0], settings),
                export(window[1], settings),
                settings=settings,
            )
    logger.debug("Collection is sorted")


def assert_sorted_by_key(
    collection: Iterable[T],
    key_extractor: Callable[[T], Any],
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    """Check the keys extracted from every element are in natural, non-strict order."""
    assert_sorted_by(
        collection,
        lambda a, b: key_extractor(a) <= key_extractor(b),
        message,
        settings=settings,
    )
