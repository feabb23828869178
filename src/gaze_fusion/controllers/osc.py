import logging
from typing import Any, Optional

from .base import EyeTracker, TrackerType
from ..acquisition import ListenerStats, OscListener
from ..core import SnapshotStore
from ..models.gaze import Channel, GazeVector
from ..utils.clock import Clock

logger = logging.getLogger(__name__)


class OscGazeTracker(EyeTracker):
    """
    Eye tracker fed by EyeTrackVR-style OSC messages.

    Built by `create_osc_tracker`, which binds the socket up front so a
    tracker never exists without one. Queries without an explicit time read
    the same clock used to stamp fused snapshots.
    """

    def __init__(self, listener: OscListener, store: SnapshotStore, clock: Clock):
        self._listener = listener
        self._store = store
        self._clock = clock
        self._session: Any = None

    @property
    def tracker_type(self) -> TrackerType:
        return TrackerType.ETVR

    @property
    def session(self) -> Any:
        """Opaque handle passed to `start`."""
        return self._session

    @property
    def address(self) -> tuple[str, int]:
        return self._listener.address

    @property
    def addresses(self) -> dict[Channel, str]:
        """OSC address recognized for each channel."""
        return self._listener.addresses

    @property
    def is_listening(self) -> bool:
        return self._listener.is_listening

    @property
    def stats(self) -> ListenerStats:
        return self._listener.stats

    def start(self, session: Any = None) -> bool:
        self._session = session
        started = self._listener.start()
        if started:
            logger.info(f"{self.tracker_type.name} tracker started on {self.address[0]}:{self.address[1]}")
        return started

    def stop(self) -> None:
        self._listener.stop()
        self._session = None

    def is_gaze_available(self, time_ns: Optional[int] = None) -> bool:
        return self._store.is_available(self._now(time_ns))

    def get_gaze(self, time_ns: Optional[int] = None) -> Optional[GazeVector]:
        return self._store.get(self._now(time_ns))

    def _now(self, time_ns: Optional[int]) -> int:
        return self._clock() if time_ns is None else time_ns
