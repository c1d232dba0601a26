"""Cancelable deferred actions keyed by token.

Each token owns a single slot: scheduling again replaces the armed timer.
Expired actions run as tasks on the event loop and are tracked so they
can be cancelled on teardown.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import logging

from homeassistant.core import callback

_LOGGER = logging.getLogger(__name__)

DeferredAction = Callable[[], Awaitable[None]]


class KeyedScheduler:
    """Single-slot deferred action per token.

    Usage:
        scheduler = KeyedScheduler()
        scheduler.schedule(0.1, device_id, coalescer.async_flush)
        # ... re-arming within 0.1s replaces the pending action ...
        await scheduler.async_shutdown()
    """

    def __init__(self) -> None:
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._tasks: dict[str, set[asyncio.Task[None]]] = {}

    @callback
    def schedule(self, delay: float, token: str, action: DeferredAction) -> None:
        """Arm a timer for token, cancelling any timer already armed for it."""
        self.cancel(token)
        loop = asyncio.get_running_loop()
        self._timers[token] = loop.call_later(delay, self._fire, token, action)

    @callback
    def cancel(self, token: str) -> bool:
        """Cancel the armed timer for token.

        Returns:
            True if a timer was armed.
        """
        timer = self._timers.pop(token, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def is_scheduled(self, token: str) -> bool:
        """Return True if a timer is armed for token."""
        return token in self._timers

    @callback
    def _fire(self, token: str, action: DeferredAction) -> None:
        self._timers.pop(token, None)
        task = asyncio.get_running_loop().create_task(action())
        tasks = self._tasks.setdefault(token, set())
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    async def async_cancel(self, token: str) -> None:
        """Cancel the timer and any running actions for token."""
        self.cancel(token)
        tasks = self._tasks.pop(token, set())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def async_shutdown(self) -> None:
        """Cancel every timer and running action."""
        _LOGGER.debug("Shutting down scheduler with %d armed timers", len(self._timers))
        for token in list(self._timers) + list(self._tasks):
            await self.async_cancel(token)
