"""API layer protocol interfaces.

Defines the contract for the Sinric Pro API client. Transport, auth and
retry policy belong to the implementation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ISinricProApiClient(Protocol):
    """Protocol for Sinric Pro API client operations.

    Implementations raise SinricProApiError (or a subclass) when a
    command is rejected or cannot be delivered.
    """

    async def set_power_state(self, device_id: str, state: str) -> None:
        """Turn a device on or off.

        Args:
            device_id: Device identifier.
            state: "On" or "Off".
        """
        ...

    async def set_brightness(self, device_id: str, brightness: float) -> None:
        """Set brightness (0-100)."""
        ...

    async def set_color(self, device_id: str, color: dict[str, int]) -> None:
        """Set color.

        Args:
            device_id: Device identifier.
            color: Dict with r, g, b keys, each 0-255.
        """
        ...

    async def set_color_temperature(self, device_id: str, kelvin: float) -> None:
        """Set color temperature in Kelvin."""
        ...

    async def set_mode(self, device_id: str, mode: str) -> None:
        """Set device mode."""
        ...

    async def set_lock_state(self, device_id: str, state: str) -> None:
        """Lock or unlock a device."""
        ...
