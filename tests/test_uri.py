"""Tests for URI equivalence."""

import pytest

from fluentmatch import expect
from fluentmatch.errors import AssertionFailure, InvalidArgument
from fluentmatch.uri import ParsedURI, normalize_path, parse_uri


# --- parse_uri ---


def test_parse_uri():
    parsed = parse_uri("HTTPS://Example.com:8443/a//b?x=1&y=2&x=3")
    assert parsed == ParsedURI(
        scheme="https",
        host="example.com",
        port=8443,
        path="/a/b",
        query={"x": "3", "y": "2"},
    )


def test_normalize_path():
    assert normalize_path("") == "/"
    assert normalize_path("//a///b/") == "/a/b/"


def test_parse_uri_invalid_port():
    with pytest.raises(InvalidArgument, match="Invalid port"):
        parse_uri("http://example.com:notaport/")


def test_parse_uri_requires_string():
    with pytest.raises(InvalidArgument):
        parse_uri(42)


# --- to_equal_uri ---


def test_query_order_is_ignored():
    expect("http://example.com/path?b=2&a=1").to_equal_uri("http://example.com/path?a=1&b=2")


def test_empty_path_equals_root():
    expect("http://example.com").to_equal_uri("http://example.com/")


def test_different_host_fails():
    with pytest.raises(AssertionFailure, match="is equivalent to URI"):
        expect("http://example.org/").to_equal_uri("http://example.com/")


def test_different_port_fails():
    with pytest.raises(AssertionFailure):
        expect("http://example.com:81/").to_equal_uri("http://example.com/")


def test_custom_parser():
    def ignore_query(uri):
        return parse_uri(uri.split("?")[0])

    expect("http://example.com/?a=1").to_equal_uri("http://example.com/?a=2", parser=ignore_query)
