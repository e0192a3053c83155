"""Tests for golden-value snapshots."""

import pytest

from fluentmatch import expect
from fluentmatch.errors import AssertionFailure, InvalidArgument
from fluentmatch.snapshot import NO_SNAPSHOT, InMemorySnapshotStore


def test_store_returns_no_snapshot_for_unknown_test():
    store = InMemorySnapshotStore()
    assert store.get("t") is NO_SNAPSHOT
    assert "t" not in store


def test_store_keeps_a_copy():
    store = InMemorySnapshotStore()
    value = {"items": [1]}
    store.put("t", value)
    value["items"].append(2)
    assert store.get("t") == {"items": [1]}


def test_first_use_records_and_passes():
    store = InMemorySnapshotStore()
    expect({"a": 1}).to_match_snapshot(store.snapshot_for("test_a"))
    assert "test_a" in store
    assert store.get("test_a") == {"a": 1}


def test_later_use_compares():
    store = InMemorySnapshotStore()
    snapshot = store.snapshot_for("test_a")
    expect([1, 2]).to_match_snapshot(snapshot)
    expect([1, 2]).to_match_snapshot(snapshot)
    with pytest.raises(AssertionFailure, match="matches snapshot"):
        expect([1, 3]).to_match_snapshot(snapshot)


def test_snapshots_are_per_test():
    store = InMemorySnapshotStore()
    expect("one").to_match_snapshot(store.snapshot_for("a"))
    expect("two").to_match_snapshot(store.snapshot_for("b"))
    assert store.get("a") == "one"
    assert store.get("b") == "two"


def test_missing_snapshot_raises():
    with pytest.raises(InvalidArgument, match="needs a snapshot"):
        expect(1).to_match_snapshot(None)
