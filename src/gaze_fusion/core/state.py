from enum import Enum
from typing import Optional

from ..models.gaze import Channel, ChannelValue


class ResetPolicy(str, Enum):
    """
    Which pending slots are cleared after a fuse.

    ALL clears every slot, so each fuse needs three fresh readings.
    KEEP_VERTICAL never clears the Y slot: once a Y reading has arrived it
    stays latched and every later LeftX/RightX pair fuses with it. Kept
    selectable until the intended semantics are confirmed.
    """
    ALL = "all"
    KEEP_VERTICAL = "keep_vertical"

    @property
    def cleared_channels(self) -> Channel:
        if self is ResetPolicy.KEEP_VERTICAL:
            return Channel.LEFT_X | Channel.RIGHT_X
        return Channel.ALL


class FusionState:
    """
    Pending channel values awaiting a fuse.

    `received` is the bitmask of channels stored since their slot was last
    cleared. Slots are last-write-wins and never expire.
    """
    __slots__ = ("_values", "_received")

    def __init__(self) -> None:
        self._values: dict[Channel, float] = {}
        self._received: Channel = Channel.NONE

    @property
    def received(self) -> Channel:
        return self._received

    @property
    def is_complete(self) -> bool:
        return self._received == Channel.ALL

    def get(self, channel: Channel) -> Optional[float]:
        return self._values.get(channel)

    def store(self, reading: ChannelValue) -> None:
        self._values[reading.channel] = reading.value
        self._received |= reading.channel

    def clear(self, channels: Channel = Channel.ALL) -> None:
        for channel in (Channel.Y, Channel.LEFT_X, Channel.RIGHT_X):
            if channel in channels:
                self._values.pop(channel, None)
        self._received &= ~channels

    def __repr__(self) -> str:
        return f"<FusionState received={self._received!r} values={self._values!r}>"
