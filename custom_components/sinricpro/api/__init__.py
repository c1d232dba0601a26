"""Sinric Pro API client contracts."""
from __future__ import annotations

from .exceptions import (
    SinricProApiError,
    SinricProAuthError,
    SinricProConnectionError,
)

__all__ = [
    "SinricProApiError",
    "SinricProAuthError",
    "SinricProConnectionError",
]
