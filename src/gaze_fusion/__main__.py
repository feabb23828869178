import sys
import asyncio
import logging

from gaze_fusion.acquisition import DummyOscSender
from gaze_fusion.configs.app import AppSettings
from gaze_fusion.controllers import OscGazeTracker
from gaze_fusion.factories import create_osc_tracker

logger = logging.getLogger("main")


async def monitor(tracker: OscGazeTracker, settings: AppSettings) -> None:
    """Polls the tracker and logs the gaze until cancelled."""
    stop_event = asyncio.Event()
    sender_task = None

    if settings.dummy.enabled:
        sender = DummyOscSender(
            host=settings.dummy.target_host,
            port=tracker.address[1],
            addresses=tracker.addresses,
            stop_event=stop_event,
            frequency=settings.dummy.frequency_hz,
            radius=settings.dummy.radius,
            speed=settings.dummy.speed,
        )
        sender_task = asyncio.create_task(sender.run())

    try:
        while True:
            gaze = tracker.get_gaze()
            if gaze is None:
                logger.info("Gaze unavailable.")
            else:
                logger.info("Gaze: x=%+.3f y=%+.3f z=%+.3f", gaze.x, gaze.y, gaze.z)
            await asyncio.sleep(settings.poll_interval_s)
    finally:
        if sender_task:
            stop_event.set()
            await sender_task


def main():
    # 1. Load Configuration
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"Configuration Error: {e}")
        sys.exit(1)

    # 2. Setup Logging
    logging.basicConfig(
        level=settings.logging.level,
        format=settings.logging.format,
        stream=sys.stdout
    )
    logger.info(f"Starting Gaze Fusion v{settings.__version__}")

    # 3. Build Tracker
    tracker = create_osc_tracker(settings)
    if tracker is None:
        logger.error("Tracker could not be created. Is another application using the port?")
        sys.exit(1)

    if settings.dummy.enabled:
        logger.warning("Starting DUMMY OSC sender (Simulation Mode)")

    # 4. Run until interrupted
    tracker.start()
    try:
        asyncio.run(monitor(tracker, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    except Exception:
        logger.exception("Fatal Application Error")
    finally:
        logger.info("Shutdown sequence initiated.")
        tracker.stop()
        stats = tracker.stats
        logger.info(f"Processed {stats.datagrams:,} datagrams into {stats.fuses:,} gaze samples.")

if __name__ == "__main__":
    main()
