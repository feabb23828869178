import math
import logging
from typing import Final, Mapping

from pythonosc.osc_message import OscMessage
from pythonosc.osc_packet import OscPacket, ParseError
from pythonosc.parsing import osc_types

from ..models.gaze import Channel, ChannelValue
from ..utils.logging import ThrottledLogger

logger = logging.getLogger(__name__)


class DecodeError(ValueError):
    """A datagram or a recognized message could not be decoded."""


class ChannelDecoder:
    """
    Turns OSC datagrams into channel readings.

    Only three addresses are recognized, each carrying exactly one float:

    - ``<prefix>/EyesY``     -> Channel.Y
    - ``<prefix>/LeftEyeX``  -> Channel.LEFT_X
    - ``<prefix>/RightEyeX`` -> Channel.RIGHT_X

    Any other address is ignored. Decode failures are logged and dropped
    here, so nothing raised by a bad datagram reaches the receive loop.
    """

    CHANNEL_NAMES: Final[Mapping[str, Channel]] = {
        "EyesY": Channel.Y,
        "LeftEyeX": Channel.LEFT_X,
        "RightEyeX": Channel.RIGHT_X,
    }

    def __init__(self, address_prefix: str = "/avatar/parameters", warning_interval_s: float = 5.0):
        prefix = address_prefix.rstrip("/")
        self._channels: dict[str, Channel] = {
            f"{prefix}/{name}": channel for name, channel in self.CHANNEL_NAMES.items()
        }
        self._warn = ThrottledLogger(logger, interval_sec=warning_interval_s)
        self.error_count = 0

    @property
    def addresses(self) -> dict[Channel, str]:
        """Recognized address for each channel."""
        return {channel: address for address, channel in self._channels.items()}

    def decode(self, datagram: bytes) -> list[ChannelValue]:
        """
        Decodes every recognized message in a datagram, in delivery order.

        Bundles are flattened. A malformed message is skipped without
        affecting the other messages of the same bundle.
        """
        try:
            messages = self.parse(datagram)
        except DecodeError as e:
            self._record_error(e)
            return []

        readings = []
        for message in messages:
            try:
                reading = self.decode_message(message)
            except DecodeError as e:
                self._record_error(e)
                continue
            if reading is not None:
                readings.append(reading)
        return readings

    @staticmethod
    def parse(datagram: bytes) -> list[OscMessage]:
        """Parses a datagram holding a message or a bundle. Raises DecodeError."""
        try:
            packet = OscPacket(datagram)
        except (ParseError, ValueError) as e:
            # Non-UTF-8 addresses and strings surface as UnicodeDecodeError.
            raise DecodeError(f"Malformed OSC packet ({len(datagram)} bytes): {e}") from e
        return [timed.message for timed in packet.messages]

    def decode_message(self, message: OscMessage) -> ChannelValue | None:
        """
        Returns the reading carried by a recognized message, None for any other
        address. Raises DecodeError if a recognized message does not carry
        exactly one finite 32-bit float (type tag ",f").
        """
        channel = self._channels.get(message.address)
        if channel is None:
            return None

        params = message.params
        if len(params) != 1:
            raise DecodeError(f"{message.address}: expected 1 argument, got {len(params)}.")

        type_tag = self._type_tag(message)
        if type_tag != ",f":
            raise DecodeError(f"{message.address}: expected a 32-bit float, got type tag {type_tag!r}.")

        value = params[0]
        if not math.isfinite(value):
            raise DecodeError(f"{message.address}: non-finite value {value!r}.")

        return ChannelValue(channel=channel, value=value)

    @staticmethod
    def _type_tag(message: OscMessage) -> str:
        # Doubles also decode to float, so the tag is the only way to tell them apart.
        _, index = osc_types.get_string(message.dgram, 0)
        type_tag, _ = osc_types.get_string(message.dgram, index)
        return type_tag

    def _record_error(self, error: DecodeError) -> None:
        self.error_count += 1
        self._warn.warning("Discarding OSC input: %s", error)
