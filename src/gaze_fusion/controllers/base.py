from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from ..models.gaze import GazeVector


class TrackerType(Enum):
    """Identifies the implementation behind an EyeTracker."""
    ETVR = "etvr"


class EyeTracker(ABC):
    """
    Interface the host tracking session drives.

    `start` and `stop` bound the tracker's lifetime. The gaze queries may be
    called from any thread at any time and never raise; they only report
    whether a fresh gaze exists.
    """

    @abstractmethod
    def start(self, session: Any = None) -> bool:
        """Begins acquisition. Returns immediately."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Ends acquisition and blocks until background work has finished."""
        ...

    @abstractmethod
    def is_gaze_available(self, time_ns: Optional[int] = None) -> bool:
        ...

    @abstractmethod
    def get_gaze(self, time_ns: Optional[int] = None) -> Optional[GazeVector]:
        """Returns the current unit gaze vector, or None if unavailable."""
        ...

    @property
    @abstractmethod
    def tracker_type(self) -> TrackerType:
        ...
