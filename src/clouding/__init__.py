"""
Clouding.io API client: resource clients, action polling and state reconciliation.
"""

from clouding.clients import CloudingClient, HTTPTransport, Transport, TransportResponse
from clouding.clients.actions import ActionPoller
from clouding.core.errors import (
    ActionAttemptsExceededError,
    ActionCancelledError,
    ActionFailedError,
    ActionTimeoutError,
    APIError,
    CloudingError,
    ConfigurationError,
    ErrorEnvelopeDecodeError,
    ResponseDecodeError,
    TransportError,
)
from clouding.domain.models import Action, ActionStatus

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "Action",
    "ActionAttemptsExceededError",
    "ActionCancelledError",
    "ActionFailedError",
    "ActionPoller",
    "ActionStatus",
    "ActionTimeoutError",
    "CloudingClient",
    "CloudingError",
    "ConfigurationError",
    "ErrorEnvelopeDecodeError",
    "HTTPTransport",
    "ResponseDecodeError",
    "Transport",
    "TransportError",
    "TransportResponse",
    "__version__",
]
