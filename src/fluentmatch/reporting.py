"""Failure message formatting and raising.

Every mismatch path funnels through ``fail`` or ``fail_comparison`` so that
messages share one shape:

    <custom message>
    Failed asserting that <actual> <description> <expected>.
    <optional location / diff>
"""

from __future__ import annotations

import logging
import re
from pprint import pformat
from typing import Any, NoReturn, Sequence

from fluentmatch.config import MatcherSettings, get_settings
from fluentmatch.diff import unified_diff
from fluentmatch.equality import ComparisonOutcome
from fluentmatch.errors import AssertionFailure, InvalidArgument

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"%([sdf%])")
_MISSING = object()


def format_message(template: str, args: Sequence[Any] = ()) -> str:
    """Apply ``%s``, ``%d`` and ``%f`` substitution to ``template``.

    With no args the template is returned untouched, so literal ``%`` signs
    in plain messages survive. Surplus args are ignored.
    """
    if not args:
        return template

    remaining = list(args)

    def substitute(match: re.Match) -> str:
        spec = match.group(1)
        if spec == "%":
            return "%"
        if not remaining:
            raise InvalidArgument(
                f"Message template {template!r} needs more than {len(args)} argument(s)"
            )
        value = remaining.pop(0)
        try:
            if spec == "d":
                return "%d" % value
            if spec == "f":
                return "%f" % value
        except TypeError:
            raise InvalidArgument(
                f"Cannot format {value!r} with %{spec} in {template!r}"
            ) from None
        return str(value)

    return _PLACEHOLDER.sub(substitute, template)


def export(value: Any, settings: MatcherSettings | None = None) -> str:
    """Stable printable representation of ``value``.

    Uses repr semantics so that ``'1'`` and ``1`` never print the same.
    """
    settings = settings or get_settings()
    text = pformat(value, sort_dicts=False)
    limit = settings.max_repr_length
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


def compose(message: str, detail: str) -> str:
    if message:
        return f"{message}\n{detail}"
    return detail


def fail(
    template: str,
    *args: Any,
    expected: Any = _MISSING,
    actual: Any = _MISSING,
    diff: str | None = None,
    settings: MatcherSettings | None = None,
) -> NoReturn:
    """Format ``template`` with ``args`` and raise it as an AssertionFailure."""
    message = format_message(template, args)
    if diff:
        message = f"{message}\n{diff}"
    expected_repr = None if expected is _MISSING else export(expected, settings)
    actual_repr = None if actual is _MISSING else export(actual, settings)
    logger.debug(f"Assertion failed: {message}")
    raise AssertionFailure(
        message,
        expected_repr=expected_repr,
        actual_repr=actual_repr,
        diff=diff,
    )


def string_diff(expected: Any, actual: Any, settings: MatcherSettings) -> str | None:
    """Unified diff for multi-line string mismatches, None otherwise."""
    if not settings.show_diff:
        return None
    if not (isinstance(expected, str) and isinstance(actual, str)):
        return None
    if expected == actual or ("\n" not in expected and "\n" not in actual):
        return None
    return unified_diff(expected, actual, context=settings.diff_context_lines)


def fail_comparison(
    description: str,
    expected: Any,
    actual: Any,
    message: str = "",
    *,
    outcome: ComparisonOutcome | None = None,
    settings: MatcherSettings | None = None,
) -> NoReturn:
    """Raise a failure of the form "Failed asserting that <actual> <description> <expected>."

    ``outcome`` adds the location of the first structural mismatch when it
    lies below the root of the compared values.
    """
    settings = settings or get_settings()
    actual_repr = export(actual, settings)
    expected_repr = export(expected, settings)
    detail = f"Failed asserting that {actual_repr} {description} {expected_repr}."
    if outcome is not None and not outcome.matched and outcome.path not in ("", "$actual"):
        detail += (
            f"\nMismatch at {outcome.path}: "
            f"expected {outcome.expected_repr}, got {outcome.actual_repr}"
        )
    diff = string_diff(expected, actual, settings)
    text = compose(message, detail)
    if diff:
        text = f"{text}\n{diff}"
    logger.debug(f"Assertion failed: {detail}")
    raise AssertionFailure(
        text,
        expected_repr=expected_repr,
        actual_repr=actual_repr,
        diff=diff,
    )


def fail_predicate(
    description: str,
    actual: Any,
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> NoReturn:
    """Raise "Failed asserting that <actual> <description>." for one-operand checks."""
    settings = settings or get_settings()
    actual_repr = export(actual, settings)
    detail = f"Failed asserting that {actual_repr} {description}."
    logger.debug(f"Assertion failed: {detail}")
    raise AssertionFailure(compose(message, detail), actual_repr=actual_repr)
