import logging
from typing import Optional

from pydantic import ValidationError

from .acquisition import ChannelDecoder, OscListener, bind_udp_socket
from .configs import AppSettings
from .controllers import OscGazeTracker
from .core import FusionEngine, SnapshotStore
from .utils.clock import Clock, monotonic_clock, seconds_to_ns

logger = logging.getLogger(__name__)

def create_osc_tracker(
    settings: Optional[AppSettings] = None,
    clock: Optional[Clock] = None,
) -> Optional[OscGazeTracker]:
    """
    Builds a ready-to-start OSC tracker.

    The UDP socket is bound here, so a port that is already taken fails
    construction. Returns None on any construction failure, including
    invalid settings read from the environment.
    """
    if settings is None:
        try:
            settings = AppSettings()
        except ValidationError as e:
            logger.error(f"Invalid gaze-fusion configuration: {e}")
            return None
    clock = clock or monotonic_clock
    listener_cfg = settings.listener

    try:
        sock = bind_udp_socket(listener_cfg.host, listener_cfg.port)
    except OSError as e:
        logger.error(f"Cannot bind OSC listener to {listener_cfg.host}:{listener_cfg.port}: {e}")
        return None

    try:
        store = SnapshotStore(staleness_threshold_ns=seconds_to_ns(settings.snapshot.staleness_threshold_s))
        engine = FusionEngine(store, clock=clock, reset_policy=settings.fusion.reset_policy)
        decoder = ChannelDecoder(
            address_prefix=listener_cfg.address_prefix,
            warning_interval_s=settings.logging.decode_warning_interval_s,
        )
        listener = OscListener(sock, decoder, engine)
    except Exception:
        logger.exception("Failed to assemble the OSC tracker.")
        sock.close()
        return None

    return OscGazeTracker(listener, store, clock)
