"""Debounced color updates.

Hue and saturation are independent hub characteristics, but the API only
accepts a combined RGB command. Writes are coalesced: each one re-arms a
quiet-period timer, and only the settled pair is sent once it expires.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import logging

from homeassistant.core import callback

from .colorspace import hsv_to_rgb
from .const import DEFAULT_QUIET_PERIOD_MS
from .exceptions import RemoteCommandError
from .models.state import DeviceStateShadow, RGBColor
from .scheduler import KeyedScheduler

_LOGGER = logging.getLogger(__name__)

ColorSender = Callable[[RGBColor], Awaitable[None]]


@dataclass(frozen=True)
class PendingColorCommand:
    """Hue/saturation snapshot waiting for its quiet period to expire."""

    hue: float
    saturation: float
    deadline: float


class UpdateCoalescer:
    """Merge bursts of hue/saturation writes into one color command.

    At most one command is sent per burst of writes closer together than
    the quiet period, and it always carries the final settled pair.
    """

    def __init__(
        self,
        shadow: DeviceStateShadow,
        send_color: ColorSender,
        scheduler: KeyedScheduler,
        quiet_period: float = DEFAULT_QUIET_PERIOD_MS / 1000,
    ) -> None:
        self._shadow = shadow
        self._send_color = send_color
        self._scheduler = scheduler
        self._token = shadow.device_id
        self.quiet_period = quiet_period
        self._pending: PendingColorCommand | None = None

    @property
    def pending(self) -> PendingColorCommand | None:
        """Snapshot waiting to be flushed, if any."""
        return self._pending

    @callback
    def schedule(self) -> None:
        """(Re)arm the quiet-period timer for this device."""
        deadline = asyncio.get_running_loop().time() + self.quiet_period
        self._pending = PendingColorCommand(
            hue=self._shadow.hue,
            saturation=self._shadow.saturation,
            deadline=deadline,
        )
        self._scheduler.schedule(self.quiet_period, self._token, self._async_flush_deferred)

    async def _async_flush_deferred(self) -> None:
        try:
            await self.async_flush()
        except RemoteCommandError as err:
            _LOGGER.warning(
                "Deferred color update for %s failed, keeping local value: %s",
                self._token,
                err,
            )
        except Exception:  # pylint: disable=broad-except
            # Nothing awaits the timer task, so unexpected client errors end here
            _LOGGER.exception("Unexpected error sending deferred color for %s", self._token)

    async def async_flush(self) -> RGBColor | None:
        """Send the settled color now.

        Returns:
            The RGB color sent, or None if nothing was pending.

        Raises:
            RemoteCommandError: If the outbound command fails.
        """
        self._scheduler.cancel(self._token)
        if self._pending is None:
            return None
        self._pending = None

        hue = self._shadow.hue
        saturation = self._shadow.saturation
        rgb = hsv_to_rgb(hue, saturation, 100)
        # The sent pair becomes confirmed state whether or not the command succeeds
        self._shadow.commit("hue", "saturation")

        _LOGGER.debug(
            "Flushing color for %s: hue=%s saturation=%s -> %s",
            self._token,
            hue,
            saturation,
            rgb.as_tuple,
        )
        await self._send_color(rgb)
        return rgb

    @callback
    def cancel(self) -> None:
        """Drop the pending command without sending it."""
        self._pending = None
        self._scheduler.cancel(self._token)

    async def async_shutdown(self) -> None:
        """Drop the pending command and cancel any flush in flight."""
        self._pending = None
        await self._scheduler.async_cancel(self._token)
