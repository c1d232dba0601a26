"""Test Sinric Pro integration setup and unload."""
from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
import voluptuous as vol

from custom_components.sinricpro import (
    SinricProRuntimeData,
    async_setup_devices,
    async_unload_entry,
)
from custom_components.sinricpro.const import CONF_QUIET_PERIOD, PLATFORMS

LIGHT_DEVICE_ID = "light_1"
SWITCH_DEVICE_ID = "switch_1"
SETTLE_TIME = 0.2


@pytest.fixture
def mock_hass() -> MagicMock:
    """Create a mock Home Assistant instance."""
    hass = MagicMock()
    hass.config_entries.async_forward_entry_setups = AsyncMock(return_value=None)
    hass.config_entries.async_unload_platforms = AsyncMock(return_value=True)
    return hass


@pytest.fixture
def mock_entry() -> MagicMock:
    """Create a mock config entry."""
    entry = MagicMock()
    entry.options = {CONF_QUIET_PERIOD: 50}
    return entry


@pytest.fixture
def devices_data() -> list[dict]:
    return [
        {"id": LIGHT_DEVICE_ID, "name": "Hall Light", "type": "SMART_LIGHT_BULB"},
        {"id": SWITCH_DEVICE_ID, "name": "Desk Switch", "type": "SWITCH"},
    ]


class TestSetupDevices:
    """Test controller creation from a config entry."""

    @pytest.mark.asyncio
    async def test_controllers_created_and_platforms_forwarded(
        self, mock_hass, mock_entry, mock_api_client, devices_data
    ):
        """Test one controller per device and platform forwarding."""
        runtime_data = await async_setup_devices(
            mock_hass, mock_entry, mock_api_client, devices_data
        )

        assert mock_entry.runtime_data is runtime_data
        assert set(runtime_data.controllers) == {LIGHT_DEVICE_ID, SWITCH_DEVICE_ID}
        assert runtime_data.client is mock_api_client
        mock_hass.config_entries.async_forward_entry_setups.assert_awaited_once_with(
            mock_entry, PLATFORMS
        )

    @pytest.mark.asyncio
    async def test_options_applied(self, mock_hass, mock_entry, mock_api_client, devices_data):
        """Test the quiet period option reaches every controller."""
        runtime_data = await async_setup_devices(
            mock_hass, mock_entry, mock_api_client, devices_data
        )

        for controller in runtime_data.controllers.values():
            assert controller.coalescer.quiet_period == pytest.approx(0.05)

    @pytest.mark.asyncio
    async def test_invalid_device_raises(self, mock_hass, mock_entry, mock_api_client):
        """Test a device without an id is rejected."""
        with pytest.raises(vol.Invalid):
            await async_setup_devices(mock_hass, mock_entry, mock_api_client, [{"name": "x"}])

        mock_hass.config_entries.async_forward_entry_setups.assert_not_called()


class TestNotificationRouting:
    """Test notifications are routed by device id."""

    @pytest.mark.asyncio
    async def test_routed_to_device(self, mock_hass, mock_entry, mock_api_client, devices_data):
        """Test a notification updates the matching controller only."""
        runtime_data = await async_setup_devices(
            mock_hass, mock_entry, mock_api_client, devices_data
        )

        assert runtime_data.update_state(SWITCH_DEVICE_ID, "setPowerState", {"state": "On"})
        assert runtime_data.controllers[SWITCH_DEVICE_ID].shadow.on is True
        assert runtime_data.controllers[LIGHT_DEVICE_ID].shadow.on is False

    def test_unknown_device_ignored(self, mock_api_client):
        """Test a notification for an unknown device is a no-op."""
        runtime_data = SinricProRuntimeData(client=mock_api_client, controllers={})

        assert runtime_data.update_state("missing", "setPowerState", {"state": "On"}) is False


class TestUnloadEntry:
    """Test config entry unload."""

    @pytest.mark.asyncio
    async def test_unload_cancels_pending_color(
        self, mock_hass, mock_entry, mock_api_client, devices_data
    ):
        """Test unloading drops pending color commands."""
        runtime_data = await async_setup_devices(
            mock_hass, mock_entry, mock_api_client, devices_data
        )
        await runtime_data.controllers[LIGHT_DEVICE_ID].async_set("Hue", 200)

        assert await async_unload_entry(mock_hass, mock_entry) is True
        await asyncio.sleep(SETTLE_TIME)

        mock_hass.config_entries.async_unload_platforms.assert_awaited_once_with(
            mock_entry, PLATFORMS
        )
        mock_api_client.set_color.assert_not_called()
        assert not runtime_data.scheduler.is_scheduled(LIGHT_DEVICE_ID)

    @pytest.mark.asyncio
    async def test_unload_failure_keeps_controllers(
        self, mock_hass, mock_entry, mock_api_client, devices_data
    ):
        """Test controllers are left running when platforms fail to unload."""
        mock_hass.config_entries.async_unload_platforms.return_value = False
        runtime_data = await async_setup_devices(
            mock_hass, mock_entry, mock_api_client, devices_data
        )
        await runtime_data.controllers[LIGHT_DEVICE_ID].async_set("Hue", 200)

        assert await async_unload_entry(mock_hass, mock_entry) is False

        assert runtime_data.scheduler.is_scheduled(LIGHT_DEVICE_ID)
        await runtime_data.scheduler.async_shutdown()
