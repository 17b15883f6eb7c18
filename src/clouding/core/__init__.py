from clouding.core.errors import (
    ActionAttemptsExceededError,
    ActionCancelledError,
    ActionError,
    ActionFailedError,
    ActionTimeoutError,
    APIError,
    CloudingError,
    ConfigurationError,
    ErrorEnvelopeDecodeError,
    ExitCode,
    ResponseDecodeError,
    TransportError,
)

__all__ = [
    "APIError",
    "ActionAttemptsExceededError",
    "ActionCancelledError",
    "ActionError",
    "ActionFailedError",
    "ActionTimeoutError",
    "CloudingError",
    "ConfigurationError",
    "ErrorEnvelopeDecodeError",
    "ExitCode",
    "ResponseDecodeError",
    "TransportError",
]
