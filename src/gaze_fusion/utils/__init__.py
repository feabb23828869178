from .clock import Clock, monotonic_clock, seconds_to_ns
from .logging import ThrottledLogger

__all__ = ["Clock", "ThrottledLogger", "monotonic_clock", "seconds_to_ns"]
