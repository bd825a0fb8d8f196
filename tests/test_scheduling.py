"""
时钟与帧调度测试
Clock and Frame Scheduling Tests
"""
import asyncio

import pytest

from janken.game.scheduling import AsyncioClock, FrameScheduler, wait_until


def test_frame_scheduler_paces_frames(clock):
    scheduler = FrameScheduler(clock, fps=10)

    async def three_frames():
        for _ in range(3):
            await scheduler.next_frame()

    asyncio.run(three_frames())
    assert clock.sleeps == pytest.approx([0.0, 0.1, 0.1])


def test_frame_scheduler_does_not_catch_up(clock):
    scheduler = FrameScheduler(clock, fps=10)
    asyncio.run(scheduler.next_frame())
    clock.advance(1.0)

    asyncio.run(scheduler.next_frame())
    assert clock.sleeps[-1] == 0.0


def test_frame_scheduler_rejects_bad_fps(clock):
    with pytest.raises(ValueError):
        FrameScheduler(clock, fps=0)


def test_wait_until_times_out(clock):
    assert asyncio.run(wait_until(lambda: False, timeout=1.0, interval=0.25, clock=clock)) is False
    assert clock.now == pytest.approx(1.0)


def test_wait_until_immediate(clock):
    assert asyncio.run(wait_until(lambda: True, timeout=1.0, interval=0.25, clock=clock)) is True
    assert clock.sleeps == []


def test_asyncio_clock_call_later():
    async def scenario():
        clock = AsyncioClock()
        fired = asyncio.Event()
        start = clock.monotonic()
        clock.call_later(0.01, fired.set)
        await asyncio.wait_for(fired.wait(), timeout=1.0)
        await clock.sleep(0)
        return clock.monotonic() - start

    assert asyncio.run(scenario()) >= 0.0
