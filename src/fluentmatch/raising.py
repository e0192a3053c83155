"""Assertions about whether a callable raises.

Callables that return an awaitable are awaited synchronously before the
outcome is judged; there is no timeout, so an awaitable that never settles
blocks the caller.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import traceback
from collections.abc import Callable, Sequence
from typing import Any

from fluentmatch.config import MatcherSettings
from fluentmatch.containment import contains
from fluentmatch.equality import compare
from fluentmatch.errors import InvalidArgument
from fluentmatch.reporting import compose, fail, fail_comparison

logger = logging.getLogger(__name__)


async def _wait(awaitable: Any) -> Any:
    return await awaitable


def resolve(returned: Any) -> Any:
    """Synchronously await ``returned`` if it is awaitable."""
    if not inspect.isawaitable(returned):
        return returned
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_wait(returned))
    if inspect.iscoroutine(returned):
        returned.close()
    raise InvalidArgument(
        "Cannot synchronously await the subject from inside a running event loop"
    )


def call_and_capture(
    fn: Callable[..., Any],
    args: Sequence[Any],
    expected_type: type[BaseException] = Exception,
) -> BaseException | None:
    """Call ``fn(*args)`` and return what it raised, or None.

    Fails if something other than ``expected_type`` is raised. SystemExit,
    KeyboardInterrupt and other non-Exception errors propagate unless they
    are ``expected_type``.
    """
    if not callable(fn):
        raise InvalidArgument(f"Expected a callable subject, got {type(fn).__qualname__}")
    try:
        resolve(fn(*args))
    except InvalidArgument:
        raise
    except BaseException as e:
        if not isinstance(e, expected_type):
            if not isinstance(e, Exception):
                raise
            fail(
                'Expected to throw "%s", but instead got <%s> with message "%s"',
                expected_type.__qualname__,
                type(e).__qualname__,
                str(e),
            )
        return e
    return None


def assert_raises(
    fn: Callable[..., Any],
    args: Sequence[Any],
    exception_class: type[BaseException],
    expected_message: str | None = None,
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> BaseException:
    """Assert ``fn(*args)`` raises ``exception_class``, optionally with a message containing ``expected_message``."""
    if not (isinstance(exception_class, type) and issubclass(exception_class, BaseException)):
        raise InvalidArgument(f"{exception_class!r} is not an exception class")

    exception = call_and_capture(fn, args, exception_class)
    if exception is None:
        detail = f"Expected exception {exception_class.__qualname__} wasn't thrown"
        fail(compose(message, detail), settings=settings)

    if expected_message is not None:
        actual_message = str(exception)
        if not contains(expected_message, actual_message):
            fail_comparison(
                "contains",
                expected_message,
                actual_message,
                message,
                settings=settings,
            )
    logger.debug(f"{exception_class.__qualname__} was raised as expected")
    return exception


_CODE_ATTRIBUTES = ("code", "errno")


def assert_raises_with_code(
    fn: Callable[..., Any],
    args: Sequence[Any],
    exception_class: type[BaseException],
    code: Any,
    data: Any = None,
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> BaseException:
    """Assert ``fn(*args)`` raises ``exception_class`` carrying the error ``code``.

    The code is read from the exception's ``code`` attribute, or ``errno``
    for OSError and friends. When ``data`` is given it must equal the
    exception's ``data`` attribute.
    """
    exception = assert_raises(fn, args, exception_class, None, message, settings=settings)
    name = type(exception).__qualname__

    attribute = next((a for a in _CODE_ATTRIBUTES if hasattr(exception, a)), None)
    if attribute is None:
        fail(compose(message, f"{name} was thrown, but it carries no error code"), settings=settings)
    actual_code = getattr(exception, attribute)
    outcome = compare(code, actual_code)
    if not outcome.matched:
        fail_comparison(
            "is equal to",
            code,
            actual_code,
            message or f"A {name} was thrown, but it didn't have the expected error code",
            outcome=outcome,
            settings=settings,
        )

    if data is not None:
        actual_data = getattr(exception, "data", None)
        outcome = compare(data, actual_data)
        if not outcome.matched:
            fail_comparison(
                "is equal to",
                data,
                actual_data,
                message or f"The {name} didn't have the expected error data",
                outcome=outcome,
                settings=settings,
            )
    logger.debug(f"{name} was raised with code {actual_code!r}")
    return exception


def assert_does_not_raise(
    fn: Callable[..., Any],
    args: Sequence[Any] = (),
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    exception = call_and_capture(fn, args)
    if exception is None:
        return
    trace = "\n  ".join(
        f"{frame.filename}: {frame.lineno}"
        for frame in traceback.extract_tb(exception.__traceback__)
    )
    fail(
        "%s was thrown: %s\n%s",
        type(exception).__qualname__,
        message or str(exception),
        trace,
        settings=settings,
    )
