import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Callable, Coroutine

logger = logging.getLogger(__name__)


class AsyncioThreadBridge:
    """
    Runs a private asyncio event loop on a dedicated thread.

    Host code is synchronous and may call in from any thread; this bridge is
    the only way work reaches the loop. `stop` is deterministic: it returns
    only after the loop has stopped and its thread has been joined.
    """

    def __init__(self, name: str = "AsyncioEventLoopThread"):
        """Initializes the bridge and the asyncio event loop."""
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop,
            name=name,
            daemon=True
        )
        self._is_running = False

    def _run_loop(self) -> None:
        """The target function for the background thread."""
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.run_until_complete(self._loop.shutdown_asyncgens())
            self._loop.close()
            logger.debug("Asyncio event loop closed.")

    @property
    def is_running(self) -> bool:
        return self._is_running

    def start(self) -> None:
        """Starts the background thread and the asyncio event loop."""
        if self._is_running:
            logger.warning("Bridge is already running.")
            return

        if self._loop.is_closed():
            raise RuntimeError("Bridge cannot be restarted once stopped.")

        logger.debug("Starting event loop thread '%s'.", self._thread.name)
        self._is_running = True
        self._thread.start()

    def stop(self) -> None:
        """Signals the asyncio event loop to stop and waits for the thread."""
        if not self._is_running:
            # Never started: nothing to join, just release the loop.
            if not self._thread.is_alive() and not self._loop.is_closed():
                self._loop.close()
            return

        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._is_running = False
        logger.debug("Event loop thread '%s' joined.", self._thread.name)

    def call_soon_threadsafe(self, callback: Callable[..., Any], *args: Any) -> None:
        if not self._is_running:
            raise RuntimeError("Cannot schedule callback, the bridge is not running.")
        self._loop.call_soon_threadsafe(callback, *args)

    def run_coro_threadsafe(self, coro: Coroutine) -> concurrent.futures.Future:
        """
        Schedules a coroutine to be executed on the asyncio event loop.

        This method is safe to call from any thread.

        Returns:
            A concurrent.futures.Future that can be used to wait for the
            coroutine's result from the calling thread.
        """
        if not self._is_running:
            coro.close()
            raise RuntimeError("Cannot schedule coroutine, the bridge is not running.")
        return asyncio.run_coroutine_threadsafe(coro, self._loop)
