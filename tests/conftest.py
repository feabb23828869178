import threading
import time

import pytest
from pythonosc.osc_message_builder import OscMessageBuilder

from gaze_fusion.configs import AppSettings, ListenerSettings
from gaze_fusion.factories import create_osc_tracker
from gaze_fusion.utils.clock import NS_PER_S

PREFIX = "/avatar/parameters"
EYES_Y = f"{PREFIX}/EyesY"
LEFT_X = f"{PREFIX}/LeftEyeX"
RIGHT_X = f"{PREFIX}/RightEyeX"


def osc_message(address, *args):
    """Builds an OscMessage; floats are encoded with the 'f' type tag."""
    builder = OscMessageBuilder(address=address)
    for arg in args:
        builder.add_arg(arg)
    return builder.build()


def osc_datagram(address, *args) -> bytes:
    return osc_message(address, *args).dgram


def wait_for(predicate, timeout: float = 2.0, interval: float = 0.01) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


def listener_threads():
    return [t for t in threading.enumerate() if t.name == "OscListenerThread"]


class FakeClock:
    """Manually advanced nanosecond clock."""

    def __init__(self, start_ns: int = 0):
        self.now_ns = start_ns

    def __call__(self) -> int:
        return self.now_ns

    def advance(self, seconds: float) -> None:
        self.now_ns += int(seconds * NS_PER_S)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def local_settings():
    """Settings bound to an ephemeral localhost port."""
    return AppSettings(listener=ListenerSettings(host="127.0.0.1", port=0))


@pytest.fixture
def tracker(local_settings):
    tracker = create_osc_tracker(local_settings)
    assert tracker is not None
    yield tracker
    tracker.stop()
