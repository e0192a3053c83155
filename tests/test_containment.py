"""Tests for needle-in-haystack checks."""

import pytest

from fluentmatch.containment import contains, contains_key
from fluentmatch.errors import InvalidArgument


class Token:
    def __init__(self, value):
        self.value = value


# --- strings ---


def test_substring_found():
    assert contains("world", "hello world") is True


def test_substring_missing():
    assert contains("world", "hello") is False


def test_substring_case_insensitive():
    assert contains("WORLD", "hello world") is False
    assert contains("WORLD", "hello world", case_insensitive=True) is True


def test_non_string_needle_in_string_raises():
    with pytest.raises(InvalidArgument, match="needle must be a string"):
        contains(1, "123")


# --- sets ---


def test_set_membership():
    assert contains(2, {1, 2, 3}) is True
    assert contains(4, frozenset({1, 2, 3})) is False


def test_unhashable_needle_in_set_is_not_contained():
    assert contains([1], {1, 2}) is False


def test_set_case_insensitive_string_search():
    assert contains("ADA", {"ada", "grace"}, case_insensitive=True) is True
    assert contains("ADA", {"ada", "grace"}) is False
    assert contains("linus", frozenset({"Ada"}), case_insensitive=True) is False


# --- sequences and mappings ---


def test_list_element_by_value():
    assert contains(2.0, [1, 2, 3]) is True
    assert contains({"a": 1}, [{"a": 1}, {"b": 2}]) is True


def test_list_does_not_coerce_strings_to_numbers():
    assert contains("1", [1, 2]) is False


def test_mapping_values_are_searched():
    assert contains("v1", {"k1": "v1"}) is True
    assert contains("k1", {"k1": "v1"}) is False


def test_generator_haystack():
    assert contains(3, (n for n in range(5))) is True


def test_object_needle_compared_by_identity():
    token = Token(1)
    assert contains(token, [Token(1), token]) is True
    assert contains(Token(1), [Token(1)]) is False


def test_case_insensitive_element_match():
    assert contains("B", ["a", "b"]) is False
    assert contains("B", ["a", "b"], case_insensitive=True) is True


def test_non_iterable_haystack_raises():
    with pytest.raises(InvalidArgument, match="iterable haystack"):
        contains(1, 42)


# --- keys ---


def test_contains_key():
    assert contains_key("a", {"a": None}) is True
    assert contains_key("b", {"a": None}) is False


def test_contains_key_unhashable():
    assert contains_key(["a"], {"a": 1}) is False


def test_contains_key_requires_mapping():
    with pytest.raises(InvalidArgument, match="mappings"):
        contains_key(0, [1, 2])
