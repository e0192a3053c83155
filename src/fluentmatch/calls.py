"""Call-count and call-argument assertions over a call recorder.

Recording calls is not our job: any object satisfying ``CallRecorder`` can
be asserted against, and ``unittest.mock`` mocks are adapted automatically.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable
from unittest.mock import NonCallableMock

from fluentmatch.config import MatcherSettings
from fluentmatch.equality import value_equal
from fluentmatch.errors import InvalidArgument
from fluentmatch.reporting import compose, export, fail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedCall:
    args: tuple = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    def matches(self, args: Sequence[Any], kwargs: dict[str, Any] | None = None) -> bool:
        return value_equal(list(args), list(self.args)) and value_equal(kwargs or {}, self.kwargs)

    def __str__(self) -> str:
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"({', '.join(parts)})"


@runtime_checkable
class CallRecorder(Protocol):
    """Answers "how many times, and with what arguments, was X invoked"."""

    name: str

    def calls(self) -> list[RecordedCall]: ...


class MockCallRecorder:
    """CallRecorder over a ``unittest.mock`` mock, or one attribute of it."""

    def __init__(self, target: Any, method: str | None = None):
        mock = getattr(target, method) if method else target
        if not isinstance(mock, NonCallableMock):
            label = f"{type(target).__qualname__}.{method}" if method else type(target).__qualname__
            raise InvalidArgument(f"{label} is not a mock; cannot inspect its calls")
        self._mock = mock
        self.name = method or getattr(mock, "_mock_name", None) or "mock"

    def calls(self) -> list[RecordedCall]:
        return [RecordedCall(tuple(c.args), dict(c.kwargs)) for c in self._mock.call_args_list]


def recorder_for(subjects: Sequence[Any]) -> CallRecorder:
    """Build a recorder from ``expect(mock)`` or ``expect(obj, "method")`` subjects."""
    if len(subjects) == 2 and isinstance(subjects[1], str):
        return MockCallRecorder(subjects[0], subjects[1])
    if len(subjects) != 1:
        raise InvalidArgument("Call assertions take a mock, or an object and a method name")
    subject = subjects[0]
    if isinstance(subject, NonCallableMock):
        return MockCallRecorder(subject)
    if isinstance(subject, CallRecorder):
        return subject
    raise InvalidArgument(f"{type(subject).__qualname__} does not record calls")


def _format_calls(calls: Sequence[RecordedCall]) -> str:
    if not calls:
        return "no calls"
    return ", ".join(str(c) for c in calls)


def assert_called_n_times(
    recorder: CallRecorder, times: int, message: str = "", *, settings: MatcherSettings | None = None
) -> None:
    calls = recorder.calls()
    logger.debug(f"{recorder.name} was called {len(calls)} time(s), expected {times}")
    if len(calls) != times:
        detail = (
            f"Failed asserting that {recorder.name} was called {times} time(s); "
            f"it was called {len(calls)} time(s): {_format_calls(calls)}."
        )
        fail(compose(message, detail), expected=times, actual=len(calls), settings=settings)


def assert_not_called(
    recorder: CallRecorder, message: str = "", *, settings: MatcherSettings | None = None
) -> None:
    assert_called_n_times(recorder, 0, message, settings=settings)


def assert_called_once_with(
    recorder: CallRecorder,
    args: Sequence[Any],
    kwargs: dict[str, Any] | None = None,
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    assert_called_n_times(recorder, 1, message, settings=settings)
    call = recorder.calls()[0]
    if not call.matches(args, kwargs):
        expected = RecordedCall(tuple(args), kwargs or {})
        detail = f"Failed asserting that {recorder.name} was called with {expected}; got {call}."
        fail(compose(message, detail), expected=str(expected), actual=str(call), settings=settings)


def assert_called_last_with(
    recorder: CallRecorder,
    args: Sequence[Any],
    kwargs: dict[str, Any] | None = None,
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    calls = recorder.calls()
    expected = RecordedCall(tuple(args), kwargs or {})
    if not calls:
        detail = f"Failed asserting that {recorder.name} was last called with {expected}; it was never called."
        fail(compose(message, detail), settings=settings)
    last = calls[-1]
    if not last.matches(args, kwargs):
        detail = f"Failed asserting that {recorder.name} was last called with {expected}; last call was {last}."
        fail(compose(message, detail), expected=str(expected), actual=str(last), settings=settings)


def assert_calls(
    recorder: CallRecorder,
    expected_calls: Sequence[Sequence[Any]],
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    """Positional arguments of every call, in order, must equal ``expected_calls``."""
    actual_args = [list(c.args) for c in recorder.calls()]
    expected_args = [list(c) for c in expected_calls]
    if not value_equal(expected_args, actual_args):
        detail = (
            f"Failed asserting that calls to {recorder.name} "
            f"{export(actual_args, settings)} are equal to {export(expected_args, settings)}."
        )
        fail(compose(message, detail), expected=expected_args, actual=actual_args, settings=settings)


def assert_calls_pass(
    recorder: CallRecorder,
    predicate: Callable[..., bool],
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    """Every recorded call's arguments must satisfy ``predicate``; at least one call is required."""
    calls = recorder.calls()
    if not calls:
        detail = f"Failed asserting that calls to {recorder.name} pass the predicate; it was never called."
        fail(compose(message, detail), settings=settings)
    for index, call in enumerate(calls):
        if not predicate(*call.args, **call.kwargs):
            detail = (
                f"Failed asserting that call #{index} to {recorder.name} {call} passes the predicate."
            )
            fail(compose(message, detail), actual=str(call), settings=settings)
