"""Sinric Pro light platform."""
from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.light import (
    ATTR_BRIGHTNESS,
    ATTR_COLOR_TEMP_KELVIN,
    ATTR_HS_COLOR,
    ColorMode,
    LightEntity,
)
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import SinricProConfigEntry
from .colorspace import kelvin_to_mireds
from .const import (
    CHAR_BRIGHTNESS,
    CHAR_COLOR_TEMPERATURE,
    CHAR_HUE,
    CHAR_ON,
    CHAR_SATURATION,
    COLOR_TEMP_KELVIN_MAX,
    COLOR_TEMP_KELVIN_MIN,
)
from .controller import DeviceController
from .entity import SinricProEntity

_LOGGER = logging.getLogger(__name__)

# Brightness conversion constants
HA_BRIGHTNESS_MAX = 255
API_BRIGHTNESS_MAX = 100


async def async_setup_entry(
    hass: HomeAssistant,
    entry: SinricProConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up Sinric Pro lights from a config entry."""
    entities: list[SinricProLightEntity] = []
    for controller in entry.runtime_data.controllers.values():
        # Only devices that can be switched on and off become lights
        if CHAR_ON in controller.characteristics:
            entities.append(SinricProLightEntity(controller))

    _LOGGER.debug("Adding %d light entities", len(entities))
    async_add_entities(entities)


class SinricProLightEntity(SinricProEntity, LightEntity):
    """Sinric Pro light backed by the device shadow.

    Hue and saturation from an hs_color are written as separate
    characteristics and reach the device as one combined color command.
    """

    _attr_name = None  # Use device name from DeviceInfo
    _attr_min_color_temp_kelvin = COLOR_TEMP_KELVIN_MIN
    _attr_max_color_temp_kelvin = COLOR_TEMP_KELVIN_MAX

    def __init__(self, controller: DeviceController) -> None:
        super().__init__(controller)
        self._attr_supported_color_modes = self._determine_color_modes()
        self._active_color_mode = self._initial_color_mode()

    def _determine_color_modes(self) -> set[ColorMode]:
        """Determine supported color modes from the device characteristics."""
        characteristics = self._controller.characteristics
        modes: set[ColorMode] = set()

        if CHAR_HUE in characteristics:
            modes.add(ColorMode.HS)
        if CHAR_COLOR_TEMPERATURE in characteristics:
            modes.add(ColorMode.COLOR_TEMP)

        if not modes:
            if CHAR_BRIGHTNESS in characteristics:
                modes.add(ColorMode.BRIGHTNESS)
            else:
                modes.add(ColorMode.ONOFF)

        return modes

    def _initial_color_mode(self) -> ColorMode:
        modes = self._attr_supported_color_modes
        if ColorMode.HS in modes and self._controller.shadow.saturation > 0:
            return ColorMode.HS
        if ColorMode.COLOR_TEMP in modes:
            return ColorMode.COLOR_TEMP
        return next(iter(modes))

    @property
    def is_on(self) -> bool:
        """Return true if light is on."""
        return self._controller.get(CHAR_ON)

    @property
    def brightness(self) -> int | None:
        """Return brightness (0-255)."""
        if not self._device.supports_brightness:
            return None
        return round(self._controller.get(CHAR_BRIGHTNESS) * HA_BRIGHTNESS_MAX / API_BRIGHTNESS_MAX)

    @property
    def hs_color(self) -> tuple[float, float] | None:
        """Return hue and saturation."""
        if not self._device.supports_color:
            return None
        return (self._controller.get(CHAR_HUE), self._controller.get(CHAR_SATURATION))

    @property
    def color_temp_kelvin(self) -> int | None:
        """Return color temperature in Kelvin."""
        if not self._device.supports_color_temp:
            return None
        return round(self._controller.shadow.color_temp_kelvin)

    @property
    def color_mode(self) -> ColorMode:
        """Return current color mode."""
        return self._active_color_mode

    @callback
    def on_characteristic_changed(
        self,
        device_id: str,
        characteristic: str,
        value: Any,
    ) -> None:
        """Track the color mode implied by a remote change."""
        if characteristic in (CHAR_HUE, CHAR_SATURATION):
            self._active_color_mode = ColorMode.HS
        elif characteristic == CHAR_COLOR_TEMPERATURE:
            self._active_color_mode = ColorMode.COLOR_TEMP
        super().on_characteristic_changed(device_id, characteristic, value)

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Turn on the light.

        Color or color temperature is sent first, then brightness, then power.
        The hs_color pair is flushed right away instead of waiting for the
        quiet period.
        """
        try:
            if ATTR_HS_COLOR in kwargs:
                hue, saturation = kwargs[ATTR_HS_COLOR]
                await self._controller.async_set(CHAR_HUE, hue)
                await self._controller.async_set(CHAR_SATURATION, saturation)
                await self._controller.async_flush_color()
                self._active_color_mode = ColorMode.HS

            elif ATTR_COLOR_TEMP_KELVIN in kwargs:
                temp = kwargs[ATTR_COLOR_TEMP_KELVIN]
                temp = max(COLOR_TEMP_KELVIN_MIN, min(COLOR_TEMP_KELVIN_MAX, temp))
                await self._controller.async_set(CHAR_COLOR_TEMPERATURE, kelvin_to_mireds(temp))
                self._active_color_mode = ColorMode.COLOR_TEMP

            if ATTR_BRIGHTNESS in kwargs:
                # Convert HA 0-255 to API 0-100 (use round to avoid truncation errors)
                api_brightness = round(kwargs[ATTR_BRIGHTNESS] * API_BRIGHTNESS_MAX / HA_BRIGHTNESS_MAX)
                await self._controller.async_set(CHAR_BRIGHTNESS, api_brightness)

            if not self._controller.shadow.on or not any(
                k in kwargs for k in (ATTR_HS_COLOR, ATTR_COLOR_TEMP_KELVIN, ATTR_BRIGHTNESS)
            ):
                await self._controller.async_set(CHAR_ON, True)
        finally:
            # The shadow keeps the written values even if a command failed
            self.async_write_ha_state()

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn off the light."""
        try:
            await self._controller.async_set(CHAR_ON, False)
        finally:
            self.async_write_ha_state()
