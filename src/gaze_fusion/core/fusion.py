import math
import logging
from typing import Optional

from .snapshot import SnapshotStore
from .state import FusionState, ResetPolicy
from ..models.gaze import Channel, ChannelValue, GazeSnapshot, GazeVector
from ..utils.clock import Clock, monotonic_clock

logger = logging.getLogger(__name__)

# Channel values are normalized so that +-1 maps to +-45 degrees.
QUARTER_PI: float = math.pi / 4


def compute_gaze_vector(left_x: float, right_x: float, y: float) -> GazeVector:
    """
    Maps normalized eye angles to a unit gaze direction.

    The horizontal angle is the mean of both eyes, negated so that positive
    channel values look right in a -z forward frame. The result has norm 1 for
    any finite input.
    """
    angle_horizontal = -(right_x + left_x) * QUARTER_PI / 2
    angle_vertical = y * QUARTER_PI

    cos_vertical = math.cos(angle_vertical)
    return GazeVector(
        x=math.sin(angle_horizontal) * cos_vertical,
        y=math.sin(angle_vertical),
        z=-math.cos(angle_horizontal) * cos_vertical,
    )


class FusionEngine:
    """
    Latches channel readings and fuses them into a gaze snapshot once all
    three channels are pending.

    Only the listener thread calls `push`; the engine itself is not locked.
    """

    def __init__(
        self,
        store: SnapshotStore,
        clock: Clock = monotonic_clock,
        reset_policy: ResetPolicy = ResetPolicy.ALL,
    ):
        self._store = store
        self._clock = clock
        self._reset_policy = reset_policy
        self._state = FusionState()
        self.fuse_count = 0

    @property
    def state(self) -> FusionState:
        return self._state

    @property
    def reset_policy(self) -> ResetPolicy:
        return self._reset_policy

    def push(self, reading: ChannelValue) -> Optional[GazeSnapshot]:
        """
        Stores one reading and fuses if every slot is populated.

        Returns the published snapshot, or None if the state is still partial.
        """
        self._state.store(reading)
        if not self._state.is_complete:
            return None

        vector = compute_gaze_vector(
            left_x=self._state.get(Channel.LEFT_X),
            right_x=self._state.get(Channel.RIGHT_X),
            y=self._state.get(Channel.Y),
        )
        snapshot = GazeSnapshot(vector=vector, captured_at_ns=self._clock())
        self._store.publish(snapshot)
        self._state.clear(self._reset_policy.cleared_channels)
        self.fuse_count += 1

        logger.debug("Fused gaze %s", vector.as_tuple())
        return snapshot
