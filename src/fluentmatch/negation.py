"""Inverting a matcher's pass/fail outcome.

A matcher run is turned into an explicit Outcome value, the Outcome is
swapped, and only then is the swapped result raised. Only AssertionFailure
counts as "the matcher failed"; InvalidArgument and every other exception
propagate untouched, so a malformed negated assertion is never a silent pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fluentmatch.errors import AssertionFailure

if TYPE_CHECKING:
    from fluentmatch.expect import Expectation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """Terminal result of a single matcher invocation."""

    passed: bool
    failure: AssertionFailure | None = None

    def raise_if_failed(self) -> None:
        if self.failure is not None:
            raise self.failure


PASSED = Outcome(passed=True)


def run_matcher(matcher: Callable[..., Any], *args: Any, **kwargs: Any) -> Outcome:
    """Invoke ``matcher`` and capture its pass/fail decision as a value."""
    try:
        matcher(*args, **kwargs)
    except AssertionFailure as failure:
        return Outcome(passed=False, failure=failure)
    return PASSED


def invert(outcome: Outcome, matcher_name: str) -> Outcome:
    """Swap a Passed outcome for a Failed one and vice versa."""
    if not outcome.passed:
        return PASSED
    message = f"Expected `{matcher_name}` to fail, but it did not."
    return Outcome(passed=False, failure=AssertionFailure(message))


def invert_outcome(matcher_name: str, matcher: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    """Run ``matcher`` and raise iff it passed."""
    outcome = invert(run_matcher(matcher, *args, **kwargs), matcher_name)
    logger.debug(f"Negated {matcher_name}: passed={outcome.passed}")
    outcome.raise_if_failed()


class InvertedExpectation:
    """Every matcher called through this wrapper must fail for the call to pass.

    Example::

        expect([1, 2, 3]).not_.to_contain(7)
    """

    def __init__(self, target: Expectation):
        self._target = target

    @property
    def not_(self) -> Expectation:
        return self._target

    def __getattr__(self, name: str) -> Callable[..., None]:
        if name.startswith("_"):
            raise AttributeError(name)
        matcher = getattr(self._target, name)
        if not callable(matcher):
            raise AttributeError(f"'{name}' is not a matcher")

        def negated(*args: Any, **kwargs: Any) -> None:
            invert_outcome(name, matcher, *args, **kwargs)

        negated.__name__ = name
        return negated
