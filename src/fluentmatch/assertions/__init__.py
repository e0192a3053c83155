"""Data-driven assertions: evaluate a matcher and report instead of raising."""

from fluentmatch.assertions.base import AssertionResult
from fluentmatch.assertions.dispatch import DATA_MATCHERS, evaluate_assertion, evaluate_checks

__all__ = ["AssertionResult", "DATA_MATCHERS", "evaluate_assertion", "evaluate_checks"]
