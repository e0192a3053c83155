"""Apply matchers described as plain data (YAML check files, dicts)."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from fluentmatch.assertions.base import AssertionResult
from fluentmatch.config import CheckSpec, MatcherSettings
from fluentmatch.errors import AssertionFailure, InvalidArgument
from fluentmatch.expect import expect

# Matchers whose arguments can be written as plain data. Call, exception,
# ordering-by-callback and snapshot matchers need live Python objects.
DATA_MATCHERS = frozenset(
    {
        "to_equal",
        "to_not_equal",
        "to_equal_with_delta",
        "to_almost_equal",
        "to_equal_with_nan_equal",
        "to_be_same",
        "to_not_be_same",
        "to_be_true",
        "to_be_false",
        "to_be_none",
        "to_not_be_none",
        "to_be_empty",
        "to_not_be_empty",
        "to_be_greater_than",
        "to_be_less_than",
        "to_be_greater_than_or_equal_to",
        "to_be_less_than_or_equal_to",
        "to_be_instance_of",
        "to_not_be_instance_of",
        "to_be_type",
        "to_not_be_type",
        "to_match_regexp",
        "to_not_match_regexp",
        "to_contain",
        "to_contain_case_insensitive",
        "to_not_contain",
        "to_contain_key",
        "to_not_contain_key",
        "to_include",
        "to_have_same_shape_as",
        "to_have_same_content_as",
        "to_equal_uri",
    }
)

_RESERVED_KEYS = frozenset({"name", "weight", "negate"})


def _to_check_spec(subject: Any, spec: dict[str, Any]) -> CheckSpec:
    matcher_keys = [k for k in spec if k not in _RESERVED_KEYS]
    if len(matcher_keys) != 1:
        raise InvalidArgument(f"Expected exactly one matcher key, got {matcher_keys!r}")
    matcher = matcher_keys[0]
    return CheckSpec(
        name=spec.get("name"),
        subject=subject,
        matcher=matcher,
        args=spec[matcher],
        negate=spec.get("negate", False),
        weight=spec.get("weight", 1.0),
    )


def evaluate_assertion(
    subject: Any,
    spec: dict[str, Any] | CheckSpec,
    *,
    settings: MatcherSettings | None = None,
    logger: logging.Logger | None = None,
) -> AssertionResult:
    """Run one matcher against ``subject`` and report the outcome.

    Supported formats:
        {"to_contain": "world"}
        {"to_equal_with_delta": [1.0, 0.01], "weight": 2}
        {"to_be_true": null, "negate": true}
        CheckSpec(matcher="to_be_type", args=["string"])

    A list value is taken as the positional args, so a list argument must be
    wrapped: ``{"to_equal": [[1, 2]]}``. When ``spec`` is a CheckSpec its own
    ``subject`` is ignored in favour of the ``subject`` argument.

    Raises InvalidArgument (a ValueError) for unknown matchers and malformed
    arguments; only matcher failures are turned into a failed result.
    """
    if not spec:
        raise InvalidArgument("Empty assertion spec")

    if logger is None:
        logger = logging.getLogger(__name__)

    check = spec if isinstance(spec, CheckSpec) else _to_check_spec(subject, spec)
    if check.matcher not in DATA_MATCHERS:
        raise InvalidArgument(f"Unknown matcher: '{check.matcher}'")

    expectation = expect(subject, settings=settings)
    target = expectation.not_ if check.negate else expectation
    name = check.display_name
    logger.info(f"Evaluating {name} against {type(subject).__name__} subject")

    try:
        getattr(target, check.matcher)(*check.args)
    except AssertionFailure as failure:
        logger.info(f"{name} failed")
        return AssertionResult(name=name, passed=False, message=str(failure), score=0.0, weight=check.weight)
    except TypeError as e:
        raise InvalidArgument(f"Bad arguments for {check.matcher}: {e}") from e

    logger.info(f"{name} passed")
    return AssertionResult(name=name, passed=True, message=f"{name} passed", score=1.0, weight=check.weight)


def evaluate_checks(
    checks: Iterable[CheckSpec],
    *,
    settings: MatcherSettings | None = None,
    logger: logging.Logger | None = None,
) -> list[AssertionResult]:
    """Evaluate every check against its own subject."""
    return [evaluate_assertion(c.subject, c, settings=settings, logger=logger) for c in checks]
