from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from ..const import CONF_QUIET_PERIOD, DEFAULT_QUIET_PERIOD_MS, MAX_QUIET_PERIOD_MS

OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_QUIET_PERIOD, default=DEFAULT_QUIET_PERIOD_MS): vol.All(
            vol.Coerce(int), vol.Range(min=0, max=MAX_QUIET_PERIOD_MS)
        ),
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True)
class ControllerConfig:
    """Per-device controller settings."""

    quiet_period: float = DEFAULT_QUIET_PERIOD_MS / 1000

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None) -> ControllerConfig:
        """Build from config entry options (quiet period in milliseconds)."""
        validated = OPTIONS_SCHEMA(dict(options or {}))
        return cls(quiet_period=validated[CONF_QUIET_PERIOD] / 1000)
