"""Test keyed deferred-action scheduler."""
from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from custom_components.sinricpro.scheduler import KeyedScheduler

DELAY = 0.02
SETTLE_TIME = 0.1


class TestKeyedScheduler:
    """Test KeyedScheduler."""

    @pytest.mark.asyncio
    async def test_action_runs_after_delay(self):
        """Test an armed action runs once its delay expires."""
        scheduler = KeyedScheduler()
        action = AsyncMock()

        scheduler.schedule(DELAY, "device_1", action)
        assert scheduler.is_scheduled("device_1")
        action.assert_not_called()

        await asyncio.sleep(SETTLE_TIME)

        action.assert_awaited_once()
        assert not scheduler.is_scheduled("device_1")

    @pytest.mark.asyncio
    async def test_reschedule_replaces_pending(self):
        """Test re-arming a token cancels the earlier action."""
        scheduler = KeyedScheduler()
        first = AsyncMock()
        second = AsyncMock()

        scheduler.schedule(DELAY, "device_1", first)
        scheduler.schedule(DELAY, "device_1", second)
        await asyncio.sleep(SETTLE_TIME)

        first.assert_not_called()
        second.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_tokens_are_independent(self):
        """Test tokens do not cancel each other."""
        scheduler = KeyedScheduler()
        first = AsyncMock()
        second = AsyncMock()

        scheduler.schedule(DELAY, "device_1", first)
        scheduler.schedule(DELAY, "device_2", second)
        await asyncio.sleep(SETTLE_TIME)

        first.assert_awaited_once()
        second.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cancel(self):
        """Test cancel drops the armed action."""
        scheduler = KeyedScheduler()
        action = AsyncMock()

        scheduler.schedule(DELAY, "device_1", action)
        assert scheduler.cancel("device_1") is True
        assert scheduler.cancel("device_1") is False
        await asyncio.sleep(SETTLE_TIME)

        action.assert_not_called()

    @pytest.mark.asyncio
    async def test_shutdown_cancels_in_flight(self):
        """Test shutdown cancels timers and running actions."""
        scheduler = KeyedScheduler()
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_action() -> None:
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        late = AsyncMock()
        scheduler.schedule(0, "device_1", slow_action)
        scheduler.schedule(1, "device_2", late)
        await asyncio.wait_for(started.wait(), 1)
        assert not scheduler.is_scheduled("device_1")

        await scheduler.async_shutdown()

        assert cancelled.is_set()
        assert not scheduler.is_scheduled("device_2")
        late.assert_not_called()
