"""Device model representing a Sinric Pro device and its capabilities.

Frozen dataclass for immutability - device properties don't change at runtime.
Behavior is selected by the capability set, not by device type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import voluptuous as vol


class Capability(StrEnum):
    """Controllable features a device may expose."""

    POWER = "power"
    BRIGHTNESS = "brightness"
    COLOR = "color"
    COLOR_TEMPERATURE = "colorTemperature"
    MODE = "mode"
    LOCK = "lock"


# Device types from API
DEVICE_TYPE_LIGHT = "SMART_LIGHT_BULB"
DEVICE_TYPE_DIMMABLE_SWITCH = "DIMMABLE_SWITCH"
DEVICE_TYPE_SWITCH = "SWITCH"
DEVICE_TYPE_SMART_LOCK = "SMART_LOCK"
DEVICE_TYPE_FAN = "FAN"

DEVICE_TYPE_CAPABILITIES: dict[str, frozenset[Capability]] = {
    DEVICE_TYPE_LIGHT: frozenset(
        {
            Capability.POWER,
            Capability.BRIGHTNESS,
            Capability.COLOR,
            Capability.COLOR_TEMPERATURE,
        }
    ),
    DEVICE_TYPE_DIMMABLE_SWITCH: frozenset({Capability.POWER, Capability.BRIGHTNESS}),
    DEVICE_TYPE_SWITCH: frozenset({Capability.POWER}),
    DEVICE_TYPE_SMART_LOCK: frozenset({Capability.LOCK}),
    DEVICE_TYPE_FAN: frozenset({Capability.POWER, Capability.MODE}),
}

_PERCENT = vol.All(vol.Coerce(float), vol.Range(min=0, max=100))

DEVICE_SCHEMA = vol.Schema(
    {
        vol.Required("id"): vol.All(str, vol.Length(min=1)),
        vol.Optional("name", default=""): str,
        vol.Optional("type", default=DEVICE_TYPE_LIGHT): str,
        vol.Optional("capabilities"): [vol.Coerce(Capability)],
        vol.Optional("powerState"): vol.Any(None, str),
        vol.Optional("brightness"): vol.Any(None, _PERCENT),
        vol.Optional("hue"): vol.Any(None, vol.Coerce(float)),
        vol.Optional("saturation"): vol.Any(None, _PERCENT),
        vol.Optional("colorTemperature"): vol.Any(
            None, vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))
        ),
        vol.Optional("mode"): vol.Any(None, str),
        vol.Optional("lockState"): vol.Any(None, str),
    },
    extra=vol.ALLOW_EXTRA,
)


@dataclass(frozen=True)
class SinricProDevice:
    """A Sinric Pro device with its last-known values.

    Seed values are those persisted by the hub; color temperature is in
    Mired as the hub stores it. Missing values stay None.
    """

    device_id: str
    name: str
    device_type: str
    capabilities: frozenset[Capability]
    power_state: str | None = None
    brightness: float | None = None
    hue: float | None = None
    saturation: float | None = None
    color_temperature: float | None = None
    mode: str | None = None
    lock_state: str | None = None

    def supports(self, capability: Capability) -> bool:
        """Check if the device has a capability."""
        return capability in self.capabilities

    @property
    def supports_color(self) -> bool:
        return Capability.COLOR in self.capabilities

    @property
    def supports_color_temp(self) -> bool:
        return Capability.COLOR_TEMPERATURE in self.capabilities

    @property
    def supports_brightness(self) -> bool:
        return Capability.BRIGHTNESS in self.capabilities

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> SinricProDevice:
        """Create from a device dict.

        Raises:
            vol.Invalid: If the dict fails validation.
        """
        data = DEVICE_SCHEMA(data)
        device_type = data["type"]

        if "capabilities" in data:
            capabilities = frozenset(data["capabilities"])
        else:
            capabilities = DEVICE_TYPE_CAPABILITIES.get(device_type, frozenset())

        return cls(
            device_id=data["id"],
            name=data["name"] or data["id"],
            device_type=device_type,
            capabilities=capabilities,
            power_state=data.get("powerState"),
            brightness=data.get("brightness"),
            hue=data.get("hue"),
            saturation=data.get("saturation"),
            color_temperature=data.get("colorTemperature"),
            mode=data.get("mode"),
            lock_state=data.get("lockState"),
        )
