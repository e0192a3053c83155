"""Base data structures for data-driven assertions."""

from dataclasses import dataclass


@dataclass
class AssertionResult:
    """Outcome of evaluating one matcher against one subject.

    Attributes:
        name: Identifier for the check (e.g. "to_contain" or "not_to_equal").
        passed: Whether the matcher (after negation, if any) passed.
        message: The failure message, or a short confirmation on success.
        score: 1.0 when passed, 0.0 otherwise.
        weight: Relative importance when computing a weighted grade.
    """

    name: str
    passed: bool
    message: str
    score: float = 0.0
    weight: float = 1.0
