"""Sinric Pro models."""
from __future__ import annotations

from .config import ControllerConfig
from .device import Capability, SinricProDevice
from .state import DeviceColorState, DeviceStateShadow, HSVColor, RGBColor

__all__ = [
    "Capability",
    "ControllerConfig",
    "DeviceColorState",
    "DeviceStateShadow",
    "HSVColor",
    "RGBColor",
    "SinricProDevice",
]
