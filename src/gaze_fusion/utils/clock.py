import time
from typing import Callable

# Any zero-argument callable returning integer nanoseconds. Fuse timestamps and
# query times must come from the same clock domain.
Clock = Callable[[], int]

NS_PER_S: int = 1_000_000_000


def monotonic_clock() -> int:
    return time.monotonic_ns()


def seconds_to_ns(seconds: float) -> int:
    return int(round(seconds * NS_PER_S))
