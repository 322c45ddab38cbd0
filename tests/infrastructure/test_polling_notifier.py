import asyncio

import pytest

from infrastructure.notifier import PollingNotifier


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        PollingNotifier(interval=0)


@pytest.mark.asyncio
async def test_ticks_until_cancelled():
    ticks = []

    async def tick():
        ticks.append(1)

    handle = PollingNotifier(interval=0.02).watch("users#value", tick)
    await asyncio.sleep(0.09)
    handle.cancel()
    handle.cancel()
    count = len(ticks)
    await asyncio.sleep(0.06)

    assert count >= 2
    assert len(ticks) == count
    assert not handle.active


@pytest.mark.asyncio
async def test_first_tick_waits_one_interval():
    ticks = []

    async def tick():
        ticks.append(1)

    handle = PollingNotifier(interval=0.5).watch("users#value", tick)
    await asyncio.sleep(0.05)
    handle.cancel()

    assert ticks == []


@pytest.mark.asyncio
async def test_failing_tick_keeps_polling():
    calls = []

    async def tick():
        calls.append(1)
        raise RuntimeError("read failed")

    handle = PollingNotifier(interval=0.02).watch("users#value", tick)
    await asyncio.sleep(0.09)
    handle.cancel()

    assert len(calls) >= 2
