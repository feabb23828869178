import asyncio
import logging
import math
import time
from asyncio import Event

from pythonosc.udp_client import SimpleUDPClient

from ..models.gaze import Channel

logger = logging.getLogger(__name__)


class DummyOscSender:
    """
    Simulates eye tracking software that streams the three gaze channels
    over OSC.

    The gaze follows a circular path in normalized channel space: both X
    channels carry the horizontal component and Y carries the vertical one.
    Channels are sent as separate datagrams in the order Y, LeftX, RightX,
    so every third datagram completes a fuse on the receiving side.
    """

    def __init__(
        self,
        host: str,
        port: int,
        addresses: dict[Channel, str],
        stop_event: Event,
        frequency: int = 60,
        radius: float = 0.5,
        speed: float = 0.25,
    ):
        """
        Args:
            host: Destination host of the tracker.
            port: Destination UDP port.
            addresses: OSC address for each channel, as exposed by the decoder.
            stop_event: Set to end `run`.
            frequency: Number of full channel triplets per second.
            radius: Radius of the circular path, in channel units (1.0 = 45 degrees).
            speed: Revolutions per second.
        """
        if frequency <= 0:
            raise ValueError("Frequency must be positive.")

        self._client = SimpleUDPClient(host, port)
        self._addresses = addresses
        self._stop_event = stop_event
        self._interval_s = 1.0 / frequency
        self._radius = radius
        self._speed = speed
        self.sent_count = 0

        logger.info(f"DummyOscSender targeting {host}:{port} at {frequency} Hz.")

    def sample(self, elapsed_s: float) -> tuple[float, float, float]:
        """Returns (left_x, right_x, y) at `elapsed_s` seconds into the path."""
        angle = elapsed_s * self._speed * 2 * math.pi
        x = self._radius * math.cos(angle)
        y = self._radius * math.sin(angle)
        return x, x, y

    def send_triplet(self, left_x: float, right_x: float, y: float) -> None:
        self._client.send_message(self._addresses[Channel.Y], float(y))
        self._client.send_message(self._addresses[Channel.LEFT_X], float(left_x))
        self._client.send_message(self._addresses[Channel.RIGHT_X], float(right_x))
        self.sent_count += 1

    async def run(self) -> None:
        """Sends channel triplets at the configured frequency until stopped."""
        start_time = time.monotonic()
        frame_counter = 0

        logger.info("Starting dummy OSC stream...")
        try:
            while not self._stop_event.is_set():
                target_time = start_time + (frame_counter * self._interval_s)

                left_x, right_x, y = self.sample(time.monotonic() - start_time)
                try:
                    self.send_triplet(left_x, right_x, y)
                except OSError as e:
                    logger.error(f"Dummy OSC send failed: {e}")

                sleep_duration = target_time + self._interval_s - time.monotonic()
                if sleep_duration > 0:
                    try:
                        await asyncio.wait_for(self._stop_event.wait(), timeout=sleep_duration)
                    except asyncio.TimeoutError:
                        pass

                frame_counter += 1

        except asyncio.CancelledError:
            logger.info("Dummy OSC sender was cancelled.")
            raise
        finally:
            logger.info(f"DummyOscSender has stopped after {self.sent_count:,} triplets.")
