"""Device controller: dispatches hub characteristic calls for one device."""
from __future__ import annotations

from collections.abc import Awaitable, Callable
import logging
from typing import Any

from homeassistant.core import CALLBACK_TYPE, callback

from .api.exceptions import SinricProApiError
from .applier import RemoteStateApplier
from .coalescer import UpdateCoalescer
from .colorspace import kelvin_to_hub_mireds, mireds_to_kelvin
from .const import (
    CHAR_BRIGHTNESS,
    CHAR_COLOR_TEMPERATURE,
    CHAR_HUE,
    CHAR_LOCK_STATE,
    CHAR_MODE,
    CHAR_ON,
    CHAR_SATURATION,
    DEFAULT_BRIGHTNESS,
    DEFAULT_COLOR_TEMP_MIREDS,
    DEFAULT_HUE,
    DEFAULT_SATURATION,
    POWER_STATE_OFF,
    POWER_STATE_ON,
)
from .exceptions import RemoteCommandError, SinricProCapabilityError
from .models.config import ControllerConfig
from .models.device import Capability, SinricProDevice
from .models.state import DeviceColorState, DeviceStateShadow, RGBColor
from .protocols import ISinricProApiClient, IStateObserver
from .scheduler import KeyedScheduler

_LOGGER = logging.getLogger(__name__)

CHARACTERISTIC_CAPABILITIES: dict[str, Capability] = {
    CHAR_ON: Capability.POWER,
    CHAR_BRIGHTNESS: Capability.BRIGHTNESS,
    CHAR_HUE: Capability.COLOR,
    CHAR_SATURATION: Capability.COLOR,
    CHAR_COLOR_TEMPERATURE: Capability.COLOR_TEMPERATURE,
    CHAR_MODE: Capability.MODE,
    CHAR_LOCK_STATE: Capability.LOCK,
}


def _default(value: Any, default: Any) -> Any:
    return default if value is None else value


def seed_state(device: SinricProDevice) -> DeviceColorState:
    """Build the initial shadow state from last-known device values."""
    mireds = _default(device.color_temperature, DEFAULT_COLOR_TEMP_MIREDS)
    return DeviceColorState(
        on=(device.power_state or "").upper() == "ON",
        brightness=_default(device.brightness, DEFAULT_BRIGHTNESS),
        hue=_default(device.hue, DEFAULT_HUE),
        saturation=_default(device.saturation, DEFAULT_SATURATION),
        color_temp_kelvin=mireds_to_kelvin(mireds),
        mode=device.mode,
        lock_state=device.lock_state,
    )


class DeviceController:
    """Owns the shadow of one device and maps hub calls onto it.

    Power, brightness, color temperature, mode and lock writes are sent
    right away. Hue and saturation writes go through the coalescer and
    are sent as one combined color command.
    """

    def __init__(
        self,
        device: SinricProDevice,
        client: ISinricProApiClient,
        config: ControllerConfig | None = None,
        scheduler: KeyedScheduler | None = None,
    ) -> None:
        config = config or ControllerConfig()
        self.device = device
        self.device_id = device.device_id
        self._client = client
        self._observers: list[IStateObserver] = []
        self._owns_scheduler = scheduler is None
        self._scheduler = scheduler or KeyedScheduler()

        self.shadow = DeviceStateShadow(device.device_id, seed_state(device))
        self.coalescer = UpdateCoalescer(
            self.shadow,
            self._async_send_color,
            self._scheduler,
            quiet_period=config.quiet_period,
        )
        self._applier = RemoteStateApplier(self.shadow, device.capabilities, self._publish)

        self._setters: dict[str, Callable[[Any], Awaitable[None]]] = {
            CHAR_ON: self._async_set_power,
            CHAR_BRIGHTNESS: self._async_set_brightness,
            CHAR_HUE: self._async_set_hue,
            CHAR_SATURATION: self._async_set_saturation,
            CHAR_COLOR_TEMPERATURE: self._async_set_color_temperature,
            CHAR_MODE: self._async_set_mode,
            CHAR_LOCK_STATE: self._async_set_lock_state,
        }
        self._getters: dict[str, Callable[[], Any]] = {
            CHAR_ON: lambda: self.shadow.on,
            CHAR_BRIGHTNESS: lambda: self.shadow.brightness,
            CHAR_HUE: lambda: self.shadow.hue,
            CHAR_SATURATION: lambda: self.shadow.saturation,
            CHAR_COLOR_TEMPERATURE: lambda: kelvin_to_hub_mireds(self.shadow.color_temp_kelvin),
            CHAR_MODE: lambda: self.shadow.mode,
            CHAR_LOCK_STATE: lambda: self.shadow.lock_state,
        }

        _LOGGER.debug(
            "Adding device %s (%s) with capabilities %s",
            device.name,
            device.device_id,
            sorted(device.capabilities),
        )

    @property
    def characteristics(self) -> list[str]:
        """Hub characteristics backed by this device's capabilities."""
        return [
            name
            for name, capability in CHARACTERISTIC_CAPABILITIES.items()
            if self.device.supports(capability)
        ]

    def _require(self, characteristic: str) -> None:
        capability = CHARACTERISTIC_CAPABILITIES.get(characteristic)
        if capability is None or not self.device.supports(capability):
            raise SinricProCapabilityError(self.device_id, characteristic)

    # === Hub-facing dispatch ===

    def get(self, characteristic: str) -> Any:
        """Return the hub-facing value of a characteristic from the shadow."""
        self._require(characteristic)
        value = self._getters[characteristic]()
        _LOGGER.debug("[%s] get %s = %s", self.device.name, characteristic, value)
        return value

    async def async_set(self, characteristic: str, value: Any) -> None:
        """Handle a hub write of a characteristic.

        Raises:
            SinricProCapabilityError: Characteristic not supported.
            InvalidArgumentError: Color temperature not positive.
            RemoteCommandError: Outbound command failed.
        """
        self._require(characteristic)
        _LOGGER.debug("[%s] set %s = %s", self.device.name, characteristic, value)
        await self._setters[characteristic](value)

    @callback
    def update_state(self, action: str, payload: dict[str, Any]) -> bool:
        """Apply a remote notification."""
        return self._applier.update_state(action, payload)

    # === Observers ===

    @callback
    def async_add_observer(self, observer: IStateObserver) -> CALLBACK_TYPE:
        """Register an observer for pushed characteristics.

        Returns:
            Callable that removes the observer.
        """
        self._observers.append(observer)

        @callback
        def remove_observer() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return remove_observer

    @callback
    def _publish(self, characteristic: str, value: Any) -> None:
        for observer in list(self._observers):
            observer.on_characteristic_changed(self.device_id, characteristic, value)

    # === Setters ===

    async def _async_set_power(self, value: Any) -> None:
        on = self.shadow.write("on", value)
        await self._async_command(
            "setPowerState",
            "on",
            self._client.set_power_state,
            POWER_STATE_ON if on else POWER_STATE_OFF,
        )

    async def _async_set_brightness(self, value: Any) -> None:
        brightness = self.shadow.write("brightness", value)
        await self._async_command(
            "setBrightness", "brightness", self._client.set_brightness, brightness
        )

    async def _async_set_hue(self, value: Any) -> None:
        self.shadow.write("hue", value)
        self.coalescer.schedule()

    async def _async_set_saturation(self, value: Any) -> None:
        self.shadow.write("saturation", value)
        self.coalescer.schedule()

    async def _async_set_color_temperature(self, value: Any) -> None:
        # Hub writes Mired, the API and the shadow use Kelvin
        kelvin = mireds_to_kelvin(value)
        self.shadow.write("color_temp_kelvin", kelvin)
        await self._async_command(
            "setColorTemperature",
            "color_temp_kelvin",
            self._client.set_color_temperature,
            kelvin,
        )

    async def _async_set_mode(self, value: Any) -> None:
        mode = self.shadow.write("mode", value)
        await self._async_command("setMode", "mode", self._client.set_mode, mode)

    async def _async_set_lock_state(self, value: Any) -> None:
        lock_state = self.shadow.write("lock_state", value)
        await self._async_command(
            "setLockState", "lock_state", self._client.set_lock_state, lock_state
        )

    async def _async_command(
        self,
        action: str,
        field: str,
        call: Callable[..., Awaitable[Any]],
        value: Any,
    ) -> None:
        """Send a command, keeping the written value whatever the outcome."""
        try:
            await call(self.device_id, value)
        except SinricProApiError as err:
            _LOGGER.error(
                "Failed to %s for %s (%s = %s): %s",
                action,
                self.device_id,
                field,
                value,
                err,
            )
            raise RemoteCommandError(self.device_id, action) from err
        finally:
            self.shadow.commit(field)

        _LOGGER.debug("%s for %s sent: %s", action, self.device_id, value)

    async def _async_send_color(self, rgb: RGBColor) -> None:
        try:
            await self._client.set_color(self.device_id, rgb.as_dict())
        except SinricProApiError as err:
            raise RemoteCommandError(self.device_id, "setColor") from err
        _LOGGER.debug("setColor for %s sent: %s", self.device_id, rgb.as_dict())

    # === Lifecycle ===

    async def async_flush_color(self) -> RGBColor | None:
        """Send any pending color update immediately."""
        return await self.coalescer.async_flush()

    async def async_shutdown(self) -> None:
        """Cancel pending color updates before the device is removed."""
        _LOGGER.debug("Shutting down controller for %s", self.device_id)
        await self.coalescer.async_shutdown()
        if self._owns_scheduler:
            await self._scheduler.async_shutdown()
        self._observers.clear()
