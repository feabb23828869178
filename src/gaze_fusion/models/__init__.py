from .gaze import Channel, ChannelValue, GazeSnapshot, GazeVector

__all__ = ["Channel", "ChannelValue", "GazeSnapshot", "GazeVector"]
