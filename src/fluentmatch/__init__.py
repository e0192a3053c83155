"""Fluent expectation-style assertions.

    from fluentmatch import expect

    expect(result).to_equal({"id": 1, "tags": ["a"]})
    expect(fn).to_throw(ValueError, "bad input")
"""

from fluentmatch.errors import AssertionFailure, FluentMatchError, InvalidArgument
from fluentmatch.expect import Expectation, expect

__all__ = ["AssertionFailure", "Expectation", "FluentMatchError", "InvalidArgument", "expect"]
