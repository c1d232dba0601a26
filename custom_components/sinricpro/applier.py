"""Apply remote notifications to the device shadow and reflect them to the hub."""
from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any

from homeassistant.core import callback

from .colorspace import kelvin_to_hub_mireds, rgb_to_hsv
from .const import (
    ACTION_SET_BRIGHTNESS,
    ACTION_SET_COLOR,
    ACTION_SET_COLOR_TEMPERATURE,
    ACTION_SET_LOCK_STATE,
    ACTION_SET_MODE,
    ACTION_SET_POWER_STATE,
    CHAR_BRIGHTNESS,
    CHAR_COLOR_TEMPERATURE,
    CHAR_HUE,
    CHAR_LOCK_STATE,
    CHAR_MODE,
    CHAR_ON,
    CHAR_SATURATION,
)
from .models.device import Capability
from .models.state import DeviceStateShadow, RGBColor

_LOGGER = logging.getLogger(__name__)

CharacteristicPublisher = Callable[[str, Any], None]


class RemoteStateApplier:
    """Route notification actions into the shadow.

    Unknown actions, and actions for capabilities the device lacks, are
    ignored. Malformed payloads are logged and dropped.
    """

    def __init__(
        self,
        shadow: DeviceStateShadow,
        capabilities: frozenset[Capability],
        publish: CharacteristicPublisher,
    ) -> None:
        self._shadow = shadow
        self._capabilities = capabilities
        self._publish = publish
        self._handlers: dict[str, tuple[Capability, Callable[[dict[str, Any]], None]]] = {
            ACTION_SET_POWER_STATE: (Capability.POWER, self._apply_power_state),
            ACTION_SET_BRIGHTNESS: (Capability.BRIGHTNESS, self._apply_brightness),
            ACTION_SET_COLOR: (Capability.COLOR, self._apply_color),
            ACTION_SET_COLOR_TEMPERATURE: (
                Capability.COLOR_TEMPERATURE,
                self._apply_color_temperature,
            ),
            ACTION_SET_MODE: (Capability.MODE, self._apply_mode),
            ACTION_SET_LOCK_STATE: (Capability.LOCK, self._apply_lock_state),
        }

    @callback
    def update_state(self, action: str, payload: dict[str, Any]) -> bool:
        """Apply one notification.

        Returns:
            True if the notification changed the shadow.
        """
        _LOGGER.debug(
            "Notification for %s: action=%s payload=%s",
            self._shadow.device_id,
            action,
            payload,
        )

        entry = self._handlers.get(action)
        if entry is None:
            _LOGGER.debug("Ignoring unknown action %s", action)
            return False

        capability, handler = entry
        if capability not in self._capabilities:
            _LOGGER.debug(
                "Ignoring %s for %s: no %s capability",
                action,
                self._shadow.device_id,
                capability,
            )
            return False

        try:
            handler(payload)
        except (AttributeError, KeyError, TypeError, ValueError) as err:
            _LOGGER.warning(
                "Dropping malformed %s notification for %s (%s): %s",
                action,
                self._shadow.device_id,
                payload,
                err,
            )
            return False
        return True

    def _apply_power_state(self, payload: dict[str, Any]) -> None:
        on = self._shadow.apply_remote_update("on", payload["state"].upper() == "ON")
        self._publish(CHAR_ON, on)

    def _apply_brightness(self, payload: dict[str, Any]) -> None:
        brightness = self._shadow.apply_remote_update("brightness", payload["brightness"])
        self._publish(CHAR_BRIGHTNESS, brightness)

    def _apply_color(self, payload: dict[str, Any]) -> None:
        rgb = RGBColor.from_dict(payload["color"])
        hsv = rgb_to_hsv(rgb.r, rgb.g, rgb.b)
        hue = self._shadow.apply_remote_update("hue", hsv.hue)
        saturation = self._shadow.apply_remote_update("saturation", hsv.saturation)
        self._publish(CHAR_HUE, hue)
        self._publish(CHAR_SATURATION, saturation)

    def _apply_color_temperature(self, payload: dict[str, Any]) -> None:
        kelvin = payload["colorTemperature"]
        # Validates kelvin before the shadow is touched
        mireds = kelvin_to_hub_mireds(kelvin)
        self._shadow.apply_remote_update("color_temp_kelvin", kelvin)
        self._publish(CHAR_COLOR_TEMPERATURE, mireds)

    def _apply_mode(self, payload: dict[str, Any]) -> None:
        mode = self._shadow.apply_remote_update("mode", payload["mode"])
        self._publish(CHAR_MODE, mode)

    def _apply_lock_state(self, payload: dict[str, Any]) -> None:
        lock_state = self._shadow.apply_remote_update("lock_state", payload["state"])
        self._publish(CHAR_LOCK_STATE, lock_state)
