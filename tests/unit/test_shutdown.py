"""Tests for draining in-flight requests on shutdown."""

import asyncio
import contextlib

import pytest

from src.timetrack.core.shutdown import RequestTracker

pytestmark = pytest.mark.unit


async def _hold(tracker: RequestTracker, release: asyncio.Event) -> None:
    async with tracker.track_request():
        await release.wait()


async def test_counts_requests():
    tracker = RequestTracker()
    release = asyncio.Event()
    tasks = [asyncio.create_task(_hold(tracker, release)) for _ in range(3)]
    await asyncio.sleep(0)

    assert tracker.in_flight_count == 3
    release.set()
    await asyncio.gather(*tasks)
    assert tracker.in_flight_count == 0


async def test_idle_server_drains_immediately():
    tracker = RequestTracker()

    await tracker.start_shutdown()

    assert tracker.is_shutting_down
    assert await tracker.wait_for_drain(timeout=0.1) is True


async def test_drain_waits_for_last_request():
    tracker = RequestTracker()
    release = asyncio.Event()
    task = asyncio.create_task(_hold(tracker, release))
    await asyncio.sleep(0)

    await tracker.start_shutdown()
    waiter = asyncio.create_task(tracker.wait_for_drain(timeout=1.0))
    await asyncio.sleep(0.01)
    assert not waiter.done()

    release.set()
    assert await waiter is True
    await task


async def test_drain_times_out():
    tracker = RequestTracker()
    release = asyncio.Event()
    task = asyncio.create_task(_hold(tracker, release))
    await asyncio.sleep(0)

    await tracker.start_shutdown()

    assert await tracker.wait_for_drain(timeout=0.05) is False
    assert tracker.in_flight_count == 1
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


async def test_reset():
    tracker = RequestTracker()
    await tracker.start_shutdown()

    tracker.reset()

    assert not tracker.is_shutting_down
    assert tracker.in_flight_count == 0
