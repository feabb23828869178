"""
Tests for the simulated OSC sender.
"""

import asyncio
import math

import pytest

from gaze_fusion.acquisition import DummyOscSender

from conftest import wait_for


def make_sender(tracker, stop_event=None, **kwargs):
    return DummyOscSender(
        host="127.0.0.1",
        port=tracker.address[1],
        addresses=tracker.addresses,
        stop_event=stop_event or asyncio.Event(),
        **kwargs,
    )


class TestDummyOscSender:

    def test_rejects_non_positive_frequency(self, tracker):
        with pytest.raises(ValueError):
            make_sender(tracker, frequency=0)

    def test_path_starts_on_the_x_axis(self, tracker):
        sender = make_sender(tracker, radius=0.5, speed=0.25)
        assert sender.sample(0.0) == pytest.approx((0.5, 0.5, 0.0))

    def test_path_stays_on_circle(self, tracker):
        sender = make_sender(tracker, radius=0.4, speed=1.0)
        left_x, right_x, y = sender.sample(0.3)
        assert left_x == right_x
        assert math.hypot(left_x, y) == pytest.approx(0.4)

    def test_triplet_fuses_on_tracker(self, tracker):
        tracker.start()
        assert wait_for(lambda: tracker.is_listening)

        make_sender(tracker).send_triplet(0.0, 0.0, 0.0)
        assert wait_for(tracker.is_gaze_available)
        assert tracker.get_gaze().as_tuple() == pytest.approx((0.0, 0.0, -1.0))

    def test_run_streams_until_stopped(self, tracker):
        tracker.start()
        assert wait_for(lambda: tracker.is_listening)

        async def scenario():
            stop_event = asyncio.Event()
            sender = make_sender(tracker, stop_event=stop_event, frequency=100)
            task = asyncio.create_task(sender.run())
            await asyncio.sleep(0.2)
            stop_event.set()
            await asyncio.wait_for(task, timeout=1.0)
            return sender.sent_count

        sent = asyncio.run(scenario())
        assert sent > 0
        assert wait_for(lambda: tracker.stats.fuses == sent)
