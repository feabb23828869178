import asyncio
import logging
import socket
from dataclasses import dataclass
from typing import Callable, Optional

from .decoder import ChannelDecoder
from ..app.bridge import AsyncioThreadBridge
from ..core.fusion import FusionEngine
from ..models.gaze import Channel

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ListenerStats:
    datagrams: int
    decode_errors: int
    fuses: int


def bind_udp_socket(host: str, port: int) -> socket.socket:
    """
    Binds a non-blocking UDP socket. Raises OSError if the address is in use
    or otherwise unavailable.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind((host, port))
        sock.setblocking(False)
    except OSError:
        sock.close()
        raise
    return sock


class _OscDatagramProtocol(asyncio.DatagramProtocol):
    """Forwards transport events to the owning listener, on the loop thread."""

    def __init__(
        self,
        on_datagram: Callable[[bytes], None],
        on_fatal: Callable[[], None],
        closed: asyncio.Future,
    ):
        self._on_datagram = on_datagram
        self._on_fatal = on_fatal
        self._closed = closed

    def datagram_received(self, data: bytes, addr) -> None:
        self._on_datagram(data)

    def error_received(self, exc: Exception) -> None:
        # Transient, e.g. an ICMP-triggered reset. The transport keeps reading.
        logger.warning(f"OSC socket error ignored: {exc}")

    def connection_lost(self, exc: Optional[Exception]) -> None:
        if exc is not None:
            # No reconnection: a lost transport ends listening for this instance.
            logger.error(f"OSC transport lost, listener will stop: {exc}")
            self._on_fatal()
        if not self._closed.done():
            self._closed.set_result(None)


class OscListener:
    """
    Receives OSC datagrams on a dedicated thread and feeds them through the
    decoder into the fusion engine.

    The receive loop is an asyncio datagram endpoint running on a private
    event loop. `stop` sets the stop event from the calling thread, waits for
    the endpoint to close, then joins the loop thread. After `stop` returns
    no further snapshots are published.

    A listener owns its socket and runs at most once.
    """

    def __init__(self, sock: socket.socket, decoder: ChannelDecoder, engine: FusionEngine):
        self._sock = sock
        self._address: tuple[str, int] = sock.getsockname()
        self._decoder = decoder
        self._engine = engine

        self._bridge = AsyncioThreadBridge(name="OscListenerThread")
        self._stop_event = asyncio.Event()
        self._serve_future = None
        self._listening = False
        self._datagrams = 0

    @property
    def address(self) -> tuple[str, int]:
        """The (host, port) the socket is bound to."""
        return self._address

    @property
    def addresses(self) -> dict[Channel, str]:
        return self._decoder.addresses

    @property
    def is_listening(self) -> bool:
        return self._listening

    @property
    def stats(self) -> ListenerStats:
        return ListenerStats(
            datagrams=self._datagrams,
            decode_errors=self._decoder.error_count,
            fuses=self._engine.fuse_count,
        )

    def start(self) -> bool:
        """Starts the receive loop without blocking. Returns False if already used."""
        if self._serve_future is not None:
            logger.warning("OSC listener was already started; a listener runs only once.")
            return False
        if self._sock.fileno() == -1:
            logger.warning("OSC listener socket is closed; cannot start.")
            return False

        self._bridge.start()
        self._serve_future = self._bridge.run_coro_threadsafe(self._serve())
        return True

    def stop(self) -> None:
        """Cancels the receive loop and blocks until its thread has exited."""
        if self._bridge.is_running:
            self._bridge.call_soon_threadsafe(self._stop_event.set)
            self._serve_future.result()
        self._bridge.stop()
        self._sock.close()

    async def _serve(self) -> None:
        """
        Main execution loop for the listener.

        Opens the datagram endpoint on the pre-bound socket and waits until
        the stop event is set, either by `stop` or by a lost transport.
        """
        loop = asyncio.get_running_loop()
        closed = loop.create_future()

        try:
            transport, _ = await loop.create_datagram_endpoint(
                lambda: _OscDatagramProtocol(self._handle_datagram, self._stop_event.set, closed),
                sock=self._sock,
            )
        except Exception:
            logger.exception("Failed to open the OSC datagram endpoint.")
            return

        self._listening = True
        logger.info("Listening for OSC gaze data on %s:%d", *self._address)
        try:
            await self._stop_event.wait()
        finally:
            self._listening = False
            transport.close()
            await closed
            stats = self.stats
            logger.info(
                f"OSC listener stopped. Datagrams: {stats.datagrams:,}, "
                f"Decode errors: {stats.decode_errors:,}, Fuses: {stats.fuses:,}"
            )

    def _handle_datagram(self, data: bytes) -> None:
        self._datagrams += 1
        for reading in self._decoder.decode(data):
            self._engine.push(reading)
