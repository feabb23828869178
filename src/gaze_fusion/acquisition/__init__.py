from .decoder import ChannelDecoder, DecodeError
from .dummy import DummyOscSender
from .listener import ListenerStats, OscListener, bind_udp_socket

__all__ = [
    "ChannelDecoder",
    "DecodeError",
    "DummyOscSender",
    "ListenerStats",
    "OscListener",
    "bind_udp_socket",
]
