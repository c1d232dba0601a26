"""Protocol interfaces for Sinric Pro integration.

Defines contracts between the controller and its collaborators.
"""

from .api import ISinricProApiClient
from .state import IStateObserver

__all__ = [
    "ISinricProApiClient",
    "IStateObserver",
]
