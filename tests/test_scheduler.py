"""Tests for the scheduled callback, the auto-advance driver and mount()."""

import asyncio

import pytest

from wrapped_bot.ui.scheduler import AutoAdvanceDriver, ScheduledCallback, mount
from wrapped_bot.ui.sequencer import CardSequencer

CARDS = ["a", "b", "c"]


def test_scheduled_callback_fires_once():
    async def scenario():
        fired = []
        timer = ScheduledCallback()
        timer.schedule(0.01, fired.append, "x")
        assert timer.pending
        await asyncio.sleep(0.05)
        return fired, timer.pending

    fired, pending = asyncio.run(scenario())
    assert fired == ["x"]
    assert not pending


def test_rescheduling_replaces_pending_callback():
    async def scenario():
        fired = []
        timer = ScheduledCallback()
        timer.schedule(0.01, fired.append, "first")
        timer.schedule(0.02, fired.append, "second")
        await asyncio.sleep(0.06)
        return fired

    assert asyncio.run(scenario()) == ["second"]


def test_cancelled_callback_never_fires():
    async def scenario():
        fired = []
        timer = ScheduledCallback()
        timer.schedule(0.01, fired.append, "x")
        timer.cancel()
        await asyncio.sleep(0.03)
        return fired, timer.pending

    assert asyncio.run(scenario()) == ([], False)


def test_mounted_viewer_auto_advances():
    async def scenario():
        handle = mount(CARDS, duration=0.05, refresh_interval=0.01)
        await asyncio.sleep(0.08)
        index = handle.state.current_index
        handle.dispose()
        return index

    assert asyncio.run(scenario()) >= 1


def test_mount_clamps_start_index():
    async def scenario():
        handle = mount(CARDS, start_index=10, duration=5)
        index = handle.state.current_index
        handle.dispose()
        return index

    assert asyncio.run(scenario()) == 2


def test_paused_viewer_has_no_pending_timer():
    async def scenario():
        handle = mount(CARDS, duration=0.05)
        handle.toggle_pause()
        pending = handle.driver.timer_pending
        await asyncio.sleep(0.1)
        index = handle.state.current_index
        handle.toggle_pause()
        resumed_pending = handle.driver.timer_pending
        handle.dispose()
        return pending, index, resumed_pending

    assert asyncio.run(scenario()) == (False, 0, True)


def test_dispose_cancels_everything():
    async def scenario():
        refreshed = []
        handle = mount(CARDS, duration=0.03, refresh_interval=0.01, on_refresh=refreshed.append)
        handle.dispose()
        handle.dispose()  # idempotent
        await asyncio.sleep(0.1)
        return handle, refreshed

    handle, refreshed = asyncio.run(scenario())
    assert handle.disposed
    assert not handle.driver.timer_pending
    assert handle.state.current_index == 0
    assert refreshed == []


def test_manual_transition_reschedules_and_refreshes():
    async def scenario():
        states = []
        handle = mount(CARDS, duration=10, on_refresh=states.append)
        handle.advance()
        handle.retreat()
        pending = handle.driver.timer_pending
        handle.dispose()
        return states, pending

    states, pending = asyncio.run(scenario())
    assert [s.current_index for s in states] == [1, 0]
    assert pending


def test_async_refresh_errors_are_contained():
    async def scenario():
        calls = []

        async def on_refresh(state):
            calls.append(state.current_index)
            raise RuntimeError("edit failed")

        handle = mount(CARDS, duration=10, on_refresh=on_refresh)
        handle.advance()
        await asyncio.sleep(0.01)
        still_running = handle.driver.timer_pending
        handle.dispose()
        return calls, still_running

    calls, still_running = asyncio.run(scenario())
    assert calls == [1]
    assert still_running


def test_driver_rejects_non_positive_refresh():
    with pytest.raises(ValueError):
        AutoAdvanceDriver(CardSequencer(2), refresh_interval=0)
