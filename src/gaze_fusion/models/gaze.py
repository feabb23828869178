import math
from dataclasses import dataclass
from enum import Flag, auto


class Channel(Flag):
    """
    The three named inputs carried by the OSC stream.

    Combined values describe which channels have been received since the
    last fuse, e.g. ``Channel.LEFT_X | Channel.RIGHT_X``.
    """
    NONE = 0
    Y = auto()
    LEFT_X = auto()
    RIGHT_X = auto()
    ALL = Y | LEFT_X | RIGHT_X


@dataclass(slots=True, frozen=True)
class ChannelValue:
    """A single decoded reading, consumed immediately by the fusion engine."""
    channel: Channel
    value: float


@dataclass(slots=True, frozen=True)
class GazeVector:
    """
    A unit-length 3D gaze direction.

    Uses the OpenXR view convention: +x right, +y up, -z forward.
    """
    x: float
    y: float
    z: float

    @property
    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(slots=True, frozen=True)
class GazeSnapshot:
    """
    The last fused gaze together with the clock reading taken when it was fused.

    Snapshots are immutable; the store swaps in a new one on every fuse.
    """
    vector: GazeVector
    captured_at_ns: int
