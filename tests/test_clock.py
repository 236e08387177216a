import asyncio
from datetime import datetime

import pytest

from closercal.clock import CurrentTimeTicker, current_position_percent


def test_position_at_14_23():
    assert current_position_percent(datetime(2025, 6, 1, 14, 23)) == pytest.approx(59.93, abs=0.01)


def test_position_range():
    assert current_position_percent(datetime(2025, 6, 1, 0, 0)) == 0
    assert current_position_percent(datetime(2025, 6, 1, 23, 59)) < 100


def test_ticker_updates_and_is_cancelled_on_exit():
    seen = []
    times = [datetime(2025, 6, 1, 9, 0), datetime(2025, 6, 1, 9, 1), datetime(2025, 6, 1, 9, 2)]

    async def scenario():
        ticker = CurrentTimeTicker(seen.append, interval=0.01, clock=lambda: times.pop(0) if len(times) > 1 else times[0])
        async with ticker:
            assert ticker.running
            while len(seen) < 3:
                await asyncio.sleep(0.005)
        return ticker

    ticker = asyncio.run(scenario())

    assert not ticker.running
    assert seen[0] == pytest.approx(9 * 60 / 1440 * 100)
    assert seen[2] == pytest.approx(542 / 1440 * 100)


def test_ticker_start_and_stop_are_idempotent():
    seen = []

    async def scenario():
        ticker = CurrentTimeTicker(seen.append, interval=60, clock=lambda: datetime(2025, 6, 1, 12, 0))
        ticker.start()
        ticker.start()
        await ticker.stop()
        await ticker.stop()
        return ticker

    ticker = asyncio.run(scenario())

    assert seen == [50.0]
    assert ticker.position == 50.0
    assert not ticker.running


def test_cancelling_the_owning_task_propagates_and_stops_ticker():
    seen = []

    async def scenario():
        ticker = CurrentTimeTicker(seen.append, interval=60, clock=lambda: datetime(2025, 6, 1, 12, 0))
        entered = asyncio.Event()

        async def view():
            async with ticker:
                entered.set()
                await asyncio.sleep(3600)

        owner = asyncio.create_task(view())
        await entered.wait()
        owner.cancel()
        with pytest.raises(asyncio.CancelledError):
            await owner
        return owner, ticker

    owner, ticker = asyncio.run(scenario())

    assert owner.cancelled()
    assert not ticker.running


def test_cancellation_during_stop_is_not_swallowed():
    async def scenario():
        ticker = CurrentTimeTicker(lambda _pos: None, interval=60, clock=lambda: datetime(2025, 6, 1, 12, 0))
        ticker.start()
        stopping = asyncio.current_task()
        # Cancel the caller while it is awaiting the tick task inside stop().
        asyncio.get_running_loop().call_soon(stopping.cancel)
        with pytest.raises(asyncio.CancelledError):
            await ticker.stop()
        return ticker

    ticker = asyncio.run(scenario())

    assert not ticker.running
