"""The Sinric Pro integration.

Keeps an in-memory shadow of each Sinric Pro device in sync between Home
Assistant and the Sinric Pro API: hub writes update the shadow and are sent
as API commands, remote notifications update the shadow and are pushed back
to the hub.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback

from .const import PLATFORMS
from .controller import DeviceController
from .models import ControllerConfig, SinricProDevice
from .protocols import ISinricProApiClient
from .scheduler import KeyedScheduler

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "ControllerConfig",
    "DeviceController",
    "SinricProConfigEntry",
    "SinricProDevice",
    "SinricProRuntimeData",
    "async_setup_devices",
    "async_unload_entry",
]


@dataclass
class SinricProRuntimeData:
    """Runtime data for Sinric Pro integration."""

    client: ISinricProApiClient
    controllers: dict[str, DeviceController]
    scheduler: KeyedScheduler = field(default_factory=KeyedScheduler)

    @callback
    def update_state(self, device_id: str, action: str, payload: dict[str, Any]) -> bool:
        """Route a remote notification to the device's controller."""
        controller = self.controllers.get(device_id)
        if controller is None:
            _LOGGER.debug("Ignoring %s for unknown device %s", action, device_id)
            return False
        return controller.update_state(action, payload)


type SinricProConfigEntry = ConfigEntry[SinricProRuntimeData]


async def async_setup_devices(
    hass: HomeAssistant,
    entry: SinricProConfigEntry,
    client: ISinricProApiClient,
    devices: list[dict[str, Any]],
) -> SinricProRuntimeData:
    """Create a controller per device and set up the platforms.

    Called by the account connection once it has listed the devices.

    Raises:
        vol.Invalid: If a device dict or the entry options fail validation.
    """
    config = ControllerConfig.from_options(entry.options)
    scheduler = KeyedScheduler()

    controllers: dict[str, DeviceController] = {}
    for data in devices:
        device = SinricProDevice.from_api(data)
        controllers[device.device_id] = DeviceController(device, client, config, scheduler)

    entry.runtime_data = SinricProRuntimeData(
        client=client,
        controllers=controllers,
        scheduler=scheduler,
    )

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    _LOGGER.info("Sinric Pro integration set up with %d devices", len(controllers))
    return entry.runtime_data


async def async_unload_entry(hass: HomeAssistant, entry: SinricProConfigEntry) -> bool:
    """Unload a config entry."""
    _LOGGER.debug("Unloading Sinric Pro integration")

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    if unload_ok:
        runtime_data = entry.runtime_data
        for controller in runtime_data.controllers.values():
            await controller.async_shutdown()
        # Controllers share the scheduler, so it is stopped here
        await runtime_data.scheduler.async_shutdown()

    return unload_ok
