"""Translatable exceptions for Sinric Pro integration.

This module provides Home Assistant-compatible translatable exceptions
that display user-friendly error messages in the configured language.

Exception Hierarchy:
    SinricProException (HomeAssistantError)
    ├── InvalidArgumentError - Out-of-domain value passed to a converter
    ├── RemoteCommandError - Outbound command rejected by the API client
    └── SinricProCapabilityError - Characteristic not supported by device
"""

from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError

from .const import DOMAIN


class SinricProException(HomeAssistantError):
    """Base exception for Sinric Pro integration with translation support.

    Attributes:
        translation_domain: Always set to DOMAIN ("sinricpro")
        translation_key: Key to look up in strings.json exceptions section
        translation_placeholders: Dynamic values to substitute in message
    """

    translation_domain: str = DOMAIN
    translation_key: str = "unknown_error"

    def __init__(
        self,
        translation_key: str | None = None,
        translation_placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize translatable exception.

        Args:
            translation_key: Key for exception message in strings.json
            translation_placeholders: Dynamic values for message substitution
        """
        effective_key = translation_key if translation_key is not None else type(self).translation_key
        effective_placeholders = translation_placeholders or {}

        super().__init__(
            translation_domain=type(self).translation_domain,
            translation_key=effective_key,
            translation_placeholders=effective_placeholders,
        )


class InvalidArgumentError(SinricProException, ValueError):
    """A value outside the domain of a unit conversion.

    Raised when:
    - Mired value is zero or negative
    - Kelvin value is zero or negative
    """

    translation_key = "invalid_argument"

    def __init__(self, name: str, value: float) -> None:
        """Initialize with the rejected argument.

        Args:
            name: Name of the argument (e.g. "mireds")
            value: The rejected value
        """
        super().__init__(
            translation_key=self.translation_key,
            translation_placeholders={"name": name, "value": str(value)},
        )
        self.name = name
        self.value = value

    def __str__(self) -> str:
        return f"{self.name} must be a positive value, got {self.value}"


class RemoteCommandError(SinricProException):
    """Outbound command failed in the API client.

    The local shadow keeps the optimistic value; the command is not retried.
    """

    translation_key = "command_failed"

    def __init__(self, device_id: str, action: str) -> None:
        """Initialize with command information.

        Args:
            device_id: Device identifier
            action: Outbound action that failed
        """
        super().__init__(
            translation_key=self.translation_key,
            translation_placeholders={
                "device_id": device_id,
                "action": action,
            },
        )
        self.device_id = device_id
        self.action = action


class SinricProCapabilityError(SinricProException):
    """Capability not supported error.

    Raised when a hub characteristic is read or written on a device
    that lacks the backing capability.
    """

    translation_key = "capability_not_supported"

    def __init__(self, device_id: str, capability: str) -> None:
        """Initialize with capability information.

        Args:
            device_id: Device identifier
            capability: Name of the unsupported capability or characteristic
        """
        super().__init__(
            translation_key=self.translation_key,
            translation_placeholders={
                "device_id": device_id,
                "capability": capability,
            },
        )
        self.device_id = device_id
        self.capability = capability
