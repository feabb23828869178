from .controllers import EyeTracker, OscGazeTracker, TrackerType
from .core import ResetPolicy
from .factories import create_osc_tracker
from .models import GazeSnapshot, GazeVector

__all__ = [
    "EyeTracker",
    "GazeSnapshot",
    "GazeVector",
    "OscGazeTracker",
    "ResetPolicy",
    "TrackerType",
    "create_osc_tracker",
]
