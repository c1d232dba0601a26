"""Base entity for Sinric Pro integration."""
from __future__ import annotations

import logging
from typing import Any

from homeassistant.core import callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity

from .const import DOMAIN, MANUFACTURER
from .controller import DeviceController

_LOGGER = logging.getLogger(__name__)


class SinricProEntity(Entity):
    """Base entity for Sinric Pro devices.

    Provides common functionality:
    - Device registry integration
    - Push updates from remote notifications via the controller
    - Controller teardown when the entity is removed
    """

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(self, controller: DeviceController) -> None:
        self._controller = controller
        self._device = controller.device
        self._device_id = controller.device_id
        self._attr_unique_id = f"{DOMAIN}_{self._device_id}"

        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, self._device_id)},
            name=self._device.name,
            manufacturer=MANUFACTURER,
            model=self._device.device_type,
            serial_number=self._device_id,
        )

    async def async_added_to_hass(self) -> None:
        """Subscribe to pushed characteristics."""
        await super().async_added_to_hass()
        self.async_on_remove(self._controller.async_add_observer(self))

    async def async_will_remove_from_hass(self) -> None:
        """Cancel pending commands so nothing fires for a removed device."""
        await self._controller.async_shutdown()
        await super().async_will_remove_from_hass()

    @callback
    def on_characteristic_changed(
        self,
        device_id: str,
        characteristic: str,
        value: Any,
    ) -> None:
        """Write HA state when a remote change arrives."""
        _LOGGER.debug("Remote update for %s: %s = %s", device_id, characteristic, value)
        self.async_write_ha_state()

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return extra state attributes."""
        return {
            "device_id": self._device_id,
            "device_type": self._device.device_type,
            "state_source": self._controller.shadow.source,
        }
