"""Device state models.

Mutable shadow of a device's last known state, updated by local
characteristic writes and by remote notifications.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Callable

from ..exceptions import InvalidArgumentError

SOURCE_SEED = "seed"
SOURCE_LOCAL = "local"
SOURCE_REMOTE = "remote"


@dataclass(frozen=True)
class RGBColor:
    """Immutable RGB color representation."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        """Validate color values are in range."""
        # Use object.__setattr__ because dataclass is frozen
        object.__setattr__(self, "r", max(0, min(255, round(self.r))))
        object.__setattr__(self, "g", max(0, min(255, round(self.g))))
        object.__setattr__(self, "b", max(0, min(255, round(self.b))))

    @property
    def as_tuple(self) -> tuple[int, int, int]:
        """Return as (r, g, b) tuple."""
        return (self.r, self.g, self.b)

    def as_dict(self) -> dict[str, int]:
        """Return as the {r, g, b} dict used by the API."""
        return {"r": self.r, "g": self.g, "b": self.b}

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> RGBColor:
        """Create from dict with r, g, b keys."""
        return cls(
            r=data.get("r", 0),
            g=data.get("g", 0),
            b=data.get("b", 0),
        )


@dataclass(frozen=True)
class HSVColor:
    """Immutable HSV color: hue in [0, 360), saturation/value in [0, 100]."""

    hue: float
    saturation: float
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "hue", _normalize_hue(self.hue))
        object.__setattr__(self, "saturation", _clamp_percent(self.saturation))
        object.__setattr__(self, "value", _clamp_percent(self.value))


def _normalize_hue(value: float) -> float:
    hue = value % 360
    # Tiny negative inputs wrap to exactly 360.0 in floating point
    return 0.0 if hue >= 360 else hue


def _clamp_percent(value: float) -> float:
    return max(0, min(100, value))


def _positive_kelvin(value: float) -> float:
    if value <= 0:
        raise InvalidArgumentError("kelvin", value)
    return value


def _passthrough(value: Any) -> Any:
    return value


_NORMALIZERS: dict[str, Callable[[Any], Any]] = {
    "on": bool,
    "brightness": _clamp_percent,
    "hue": _normalize_hue,
    "saturation": _clamp_percent,
    "color_temp_kelvin": _positive_kelvin,
    "mode": _passthrough,
    "lock_state": _passthrough,
}


def normalize_field(name: str, value: Any) -> Any:
    """Normalize a state field value into its valid range."""
    try:
        normalizer = _NORMALIZERS[name]
    except KeyError:
        raise ValueError(f"Unknown state field: {name}") from None
    return normalizer(value)


@dataclass
class DeviceColorState:
    """Confirmed state of one light.

    Color temperature is kept in Kelvin; the hub-facing Mired value is
    derived whenever it crosses the hub boundary.
    """

    on: bool = False
    brightness: float = 100
    hue: float = 0
    saturation: float = 0
    color_temp_kelvin: float = 1_000_000 / 140
    mode: str | None = None
    lock_state: str | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            setattr(self, f.name, normalize_field(f.name, getattr(self, f.name)))


FIELD_NAMES: tuple[str, ...] = tuple(f.name for f in fields(DeviceColorState))


class DeviceStateShadow:
    """In-memory shadow of one device.

    Keeps the confirmed state apart from pending local intent. Reads
    prefer intent so local reads reflect a write before its outbound
    command completes. Remote updates are last-writer-wins by arrival
    and discard any intent for the same field.
    """

    def __init__(
        self,
        device_id: str,
        confirmed: DeviceColorState | None = None,
    ) -> None:
        self.device_id = device_id
        self.confirmed = confirmed if confirmed is not None else DeviceColorState()
        self._intent: dict[str, Any] = {}
        self._versions: dict[str, int] = dict.fromkeys(FIELD_NAMES, 0)
        self.source = SOURCE_SEED

    @property
    def intent(self) -> dict[str, Any]:
        """Locally written values not yet committed."""
        return dict(self._intent)

    def get(self, name: str) -> Any:
        """Return the effective value of a field."""
        if name in self._intent:
            return self._intent[name]
        if name not in self._versions:
            raise ValueError(f"Unknown state field: {name}")
        return getattr(self.confirmed, name)

    @property
    def on(self) -> bool:
        return self.get("on")

    @property
    def brightness(self) -> float:
        return self.get("brightness")

    @property
    def hue(self) -> float:
        return self.get("hue")

    @property
    def saturation(self) -> float:
        return self.get("saturation")

    @property
    def color_temp_kelvin(self) -> float:
        return self.get("color_temp_kelvin")

    @property
    def mode(self) -> str | None:
        return self.get("mode")

    @property
    def lock_state(self) -> str | None:
        return self.get("lock_state")

    def version(self, name: str) -> int:
        """Return the change counter of a field."""
        return self._versions[name]

    def write(self, name: str, value: Any) -> Any:
        """Record a local write as pending intent.

        Returns:
            The normalized value that was stored.
        """
        value = normalize_field(name, value)
        self._intent[name] = value
        self._versions[name] += 1
        self.source = SOURCE_LOCAL
        return value

    def commit(self, *names: str) -> None:
        """Move pending intent into confirmed state.

        With no names, every pending field is committed.
        """
        for name in names or tuple(self._intent):
            if name in self._intent:
                setattr(self.confirmed, name, self._intent.pop(name))

    def apply_remote_update(self, name: str, value: Any) -> Any:
        """Overwrite a field with a value reported by the device."""
        value = normalize_field(name, value)
        setattr(self.confirmed, name, value)
        self._intent.pop(name, None)
        self._versions[name] += 1
        self.source = SOURCE_REMOTE
        return value

    def as_dict(self) -> dict[str, Any]:
        """Return a diagnostics snapshot."""
        return {
            "device_id": self.device_id,
            "source": self.source,
            "confirmed": asdict(self.confirmed),
            "intent": dict(self._intent),
            "versions": dict(self._versions),
        }
