"""
Registration request review service.

Re-exports the main components for convenient import.
"""

from .controller import RegisterRequestsController
from .event_bus import EventBus
from .exceptions import ReviewError, BackendError, ValidationError, RequestNotFoundError
from .models import RegistrationRequest
from .utils.http_client import BackendClient

__all__ = [
    'RegisterRequestsController',
    'EventBus',
    'ReviewError',
    'BackendError',
    'ValidationError',
    'RequestNotFoundError',
    'RegistrationRequest',
    'BackendClient',
]
