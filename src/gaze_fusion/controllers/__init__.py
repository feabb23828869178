from .base import EyeTracker, TrackerType
from .osc import OscGazeTracker

__all__ = ["EyeTracker", "OscGazeTracker", "TrackerType"]
