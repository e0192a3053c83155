"""Golden-value snapshots.

The engine only talks to the ``Snapshot`` protocol. ``InMemorySnapshotStore``
is the bundled implementation; persisting snapshots to disk is left to
whoever owns the test run.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Protocol

from fluentmatch.config import MatcherSettings
from fluentmatch.equality import compare
from fluentmatch.errors import InvalidArgument
from fluentmatch.reporting import fail_comparison

logger = logging.getLogger(__name__)


class _NoSnapshot:
    def __repr__(self) -> str:
        return "NO_SNAPSHOT"


NO_SNAPSHOT = _NoSnapshot()


class Snapshot(Protocol):
    def recorded(self) -> Any:
        """The previously recorded value, or NO_SNAPSHOT."""
        ...

    def record(self, value: Any) -> None: ...


class _StoredSnapshot:
    def __init__(self, store: InMemorySnapshotStore, test_id: str):
        self._store = store
        self.test_id = test_id

    def recorded(self) -> Any:
        return self._store.get(self.test_id)

    def record(self, value: Any) -> None:
        self._store.put(self.test_id, value)


class InMemorySnapshotStore:
    """Snapshots keyed by test identity, held for the life of the store."""

    def __init__(self):
        self._values: dict[str, Any] = {}

    def get(self, test_id: str) -> Any:
        return self._values.get(test_id, NO_SNAPSHOT)

    def put(self, test_id: str, value: Any) -> None:
        self._values[test_id] = copy.deepcopy(value)

    def snapshot_for(self, test_id: str) -> Snapshot:
        return _StoredSnapshot(self, test_id)

    def __contains__(self, test_id: str) -> bool:
        return test_id in self._values


def assert_matches_snapshot(
    snapshot: Snapshot | None,
    value: Any,
    message: str = "",
    *,
    settings: MatcherSettings | None = None,
) -> None:
    """Record ``value`` on first use, otherwise require it to equal the recording."""
    if snapshot is None:
        raise InvalidArgument(
            "to_match_snapshot() needs a snapshot for the currently running test"
        )
    recorded = snapshot.recorded()
    if recorded is NO_SNAPSHOT:
        logger.info("No snapshot recorded yet; recording current value")
        snapshot.record(value)
        return
    outcome = compare(recorded, value)
    if not outcome.matched:
        fail_comparison(
            "matches snapshot",
            recorded,
            value,
            message,
            outcome=outcome,
            settings=settings,
        )
