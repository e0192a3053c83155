"""Error hierarchy for the matcher engine.

Two disjoint kinds:
    - InvalidArgument: the matcher was misused (programming error in the test).
    - AssertionFailure: the comparison legitimately did not hold.

Only AssertionFailure may be intercepted by the negation layer.
"""

from __future__ import annotations


class FluentMatchError(Exception):
    """Base exception for all fluentmatch errors."""


class InvalidArgument(FluentMatchError, ValueError):
    """A matcher was called with arguments it cannot work with."""


class AssertionFailure(FluentMatchError, AssertionError):
    """A matcher's comparison did not hold.

    Attributes:
        message: Fully formatted, human-readable failure message.
        expected_repr: Printable representation of the expected operand, if any.
        actual_repr: Printable representation of the subject, if any.
        diff: Unified diff embedded in the message for string mismatches.
    """

    def __init__(
        self,
        message: str,
        expected_repr: str | None = None,
        actual_repr: str | None = None,
        diff: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.expected_repr = expected_repr
        self.actual_repr = actual_repr
        self.diff = diff

    def __str__(self) -> str:
        return self.message
