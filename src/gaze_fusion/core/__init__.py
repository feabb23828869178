from .fusion import FusionEngine, compute_gaze_vector
from .snapshot import SnapshotStore
from .state import FusionState, ResetPolicy

__all__ = [
    "FusionEngine",
    "FusionState",
    "ResetPolicy",
    "SnapshotStore",
    "compute_gaze_vector",
]
