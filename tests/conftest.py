"""Shared test fixtures for Sinric Pro integration tests."""
from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from custom_components.sinricpro.controller import DeviceController
from custom_components.sinricpro.models import ControllerConfig, SinricProDevice
from custom_components.sinricpro.models.device import (
    DEVICE_TYPE_LIGHT,
    DEVICE_TYPE_SMART_LOCK,
    DEVICE_TYPE_SWITCH,
)

LIGHT_DEVICE_ID = "5dc1564130xxxxxxxxxxxxxx"
SWITCH_DEVICE_ID = "5dc1564130yyyyyyyyyyyyyy"
LOCK_DEVICE_ID = "5dc1564130zzzzzzzzzzzzzz"

# Short quiet period keeps timer-driven tests fast
QUIET_PERIOD = 0.05


# ==============================================================================
# Device Model Fixtures
# ==============================================================================


@pytest.fixture
def light_device_data() -> dict[str, Any]:
    """Raw light device as persisted by the hub."""
    return {
        "id": LIGHT_DEVICE_ID,
        "name": "Living Room Lamp",
        "type": DEVICE_TYPE_LIGHT,
        "powerState": "Off",
        "brightness": 80,
        "hue": 30,
        "saturation": 0,
        "colorTemperature": 250,
    }


@pytest.fixture
def light_device(light_device_data: dict[str, Any]) -> SinricProDevice:
    """Create an RGB+CCT light device."""
    return SinricProDevice.from_api(light_device_data)


@pytest.fixture
def switch_device() -> SinricProDevice:
    """Create a power-only switch device."""
    return SinricProDevice.from_api(
        {"id": SWITCH_DEVICE_ID, "name": "Desk Switch", "type": DEVICE_TYPE_SWITCH}
    )


@pytest.fixture
def lock_device() -> SinricProDevice:
    """Create a smart lock device."""
    return SinricProDevice.from_api(
        {
            "id": LOCK_DEVICE_ID,
            "name": "Front Door",
            "type": DEVICE_TYPE_SMART_LOCK,
            "lockState": "LOCKED",
        }
    )


# ==============================================================================
# API Client Fixtures
# ==============================================================================


@pytest.fixture
def mock_api_client() -> MagicMock:
    """Create a mock Sinric Pro API client."""
    client = MagicMock()
    client.set_power_state = AsyncMock(return_value=None)
    client.set_brightness = AsyncMock(return_value=None)
    client.set_color = AsyncMock(return_value=None)
    client.set_color_temperature = AsyncMock(return_value=None)
    client.set_mode = AsyncMock(return_value=None)
    client.set_lock_state = AsyncMock(return_value=None)
    return client


# ==============================================================================
# Controller Fixtures
# ==============================================================================


@pytest.fixture
def controller_config() -> ControllerConfig:
    """Controller config with a short quiet period."""
    return ControllerConfig(quiet_period=QUIET_PERIOD)


@pytest.fixture
def light_controller(
    light_device: SinricProDevice,
    mock_api_client: MagicMock,
    controller_config: ControllerConfig,
) -> DeviceController:
    """Create a controller for the light device."""
    return DeviceController(light_device, mock_api_client, controller_config)


@pytest.fixture
def switch_controller(
    switch_device: SinricProDevice,
    mock_api_client: MagicMock,
    controller_config: ControllerConfig,
) -> DeviceController:
    """Create a controller for the switch device."""
    return DeviceController(switch_device, mock_api_client, controller_config)


@pytest.fixture
def mock_observer() -> MagicMock:
    """Create a characteristic observer."""
    observer = MagicMock()
    observer.on_characteristic_changed = MagicMock()
    return observer
