import threading
from typing import Optional

from ..models.gaze import GazeSnapshot, GazeVector
from ..utils.clock import NS_PER_S


class SnapshotStore:
    """
    Holds the most recent fused gaze for any number of polling readers.

    A single writer (the listener thread) publishes immutable snapshots; readers
    only ever hold the lock for a timestamp comparison and a reference copy.
    A snapshot is fresh while ``now - captured_at < staleness threshold``.
    """

    def __init__(self, staleness_threshold_ns: int = NS_PER_S):
        if staleness_threshold_ns <= 0:
            raise ValueError("staleness_threshold_ns must be positive.")

        self._lock = threading.Lock()
        self._snapshot: Optional[GazeSnapshot] = None
        self._threshold_ns = staleness_threshold_ns

    @property
    def latest(self) -> Optional[GazeSnapshot]:
        """Last published snapshot regardless of age."""
        with self._lock:
            return self._snapshot

    def publish(self, snapshot: GazeSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot

    def is_available(self, now_ns: int) -> bool:
        with self._lock:
            return self._is_fresh(now_ns)

    def get(self, now_ns: int) -> Optional[GazeVector]:
        """Returns the fused vector if it is fresh at `now_ns`, else None."""
        with self._lock:
            if not self._is_fresh(now_ns):
                return None
            return self._snapshot.vector

    def _is_fresh(self, now_ns: int) -> bool:
        # Caller holds the lock.
        if self._snapshot is None:
            return False
        return now_ns - self._snapshot.captured_at_ns < self._threshold_ns
