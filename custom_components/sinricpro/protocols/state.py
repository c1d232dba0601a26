"""State observer protocol interfaces.

Implemented by the hub-facing layer to receive characteristic pushes.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IStateObserver(Protocol):
    """Protocol for characteristic change observers."""

    def on_characteristic_changed(
        self,
        device_id: str,
        characteristic: str,
        value: Any,
    ) -> None:
        """Called when a remote change updates a hub characteristic.

        Args:
            device_id: Device that changed.
            characteristic: Hub characteristic name.
            value: New hub-facing value.
        """
        ...
