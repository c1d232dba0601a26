"""Constants for the Sinric Pro integration."""
from __future__ import annotations

from homeassistant.const import Platform

DOMAIN = "sinricpro"
MANUFACTURER = "Sinric Pro"

PLATFORMS: list[Platform] = [Platform.LIGHT]

# Config entry options
CONF_QUIET_PERIOD = "quiet_period"

# Debounce window for combined color commands (milliseconds)
DEFAULT_QUIET_PERIOD_MS = 100
MAX_QUIET_PERIOD_MS = 5000

# Seed values for devices without last-known state
DEFAULT_BRIGHTNESS = 100
DEFAULT_HUE = 0
DEFAULT_SATURATION = 0
DEFAULT_COLOR_TEMP_MIREDS = 140

# Color temperature range exposed to the hub (Kelvin)
COLOR_TEMP_KELVIN_MIN = 2200
COLOR_TEMP_KELVIN_MAX = 7000

# Notification action kinds
ACTION_SET_POWER_STATE = "setPowerState"
ACTION_SET_BRIGHTNESS = "setBrightness"
ACTION_SET_COLOR = "setColor"
ACTION_SET_COLOR_TEMPERATURE = "setColorTemperature"
ACTION_SET_MODE = "setMode"
ACTION_SET_LOCK_STATE = "setLockState"

# Hub characteristics
CHAR_ON = "On"
CHAR_BRIGHTNESS = "Brightness"
CHAR_HUE = "Hue"
CHAR_SATURATION = "Saturation"
CHAR_COLOR_TEMPERATURE = "ColorTemperature"
CHAR_MODE = "Mode"
CHAR_LOCK_STATE = "LockState"

# Outbound power states
POWER_STATE_ON = "On"
POWER_STATE_OFF = "Off"
