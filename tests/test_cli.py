"""
Tests for the command-line monitor.
"""

import asyncio
import socket

import pytest

from gaze_fusion.__main__ import main, monitor
from gaze_fusion.configs import AppSettings, DummySenderSettings, ListenerSettings

from conftest import wait_for


class TestMain:

    def test_exits_when_port_is_taken(self, monkeypatch):
        blocker = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        blocker.bind(("127.0.0.1", 0))
        try:
            monkeypatch.setenv("GAZE_FUSION__LISTENER__HOST", "127.0.0.1")
            monkeypatch.setenv("GAZE_FUSION__LISTENER__PORT", str(blocker.getsockname()[1]))
            with pytest.raises(SystemExit) as exc_info:
                main()
            assert exc_info.value.code == 1
        finally:
            blocker.close()

    def test_exits_on_invalid_configuration(self, monkeypatch):
        monkeypatch.setenv("GAZE_FUSION__POLL_INTERVAL_S", "-1")
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1


class TestMonitor:

    def test_dummy_mode_produces_gaze(self, tracker):
        settings = AppSettings(
            listener=ListenerSettings(host="127.0.0.1", port=0),
            dummy=DummySenderSettings(enabled=True, frequency_hz=100),
            poll_interval_s=0.05,
        )
        tracker.start()
        assert wait_for(lambda: tracker.is_listening)

        async def scenario():
            task = asyncio.create_task(monitor(tracker, settings))
            await asyncio.sleep(0.3)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())
        assert tracker.stats.fuses > 0
        assert tracker.is_gaze_available()
