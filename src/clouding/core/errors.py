"""
Unified error handling for the Clouding client.

Every failure raised by the client derives from ``CloudingError`` and carries
enough structure (status code, title, detail, action id) to be rendered to an
end user without re-parsing response bytes.

Exit Codes:
- 0: Success
- 10: Configuration error
- 11: Transport error (no HTTP status obtained)
- 12: API error (unexpected status or undecodable body)
- 13: Action failed (provider reported an errored action)
- 14: Action polling cancelled, timed out or exhausted
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Callable, TypeVar

import structlog

if TYPE_CHECKING:
    from clouding.domain.models import Action, ErrorEnvelope

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    TRANSPORT_ERROR = 11
    API_ERROR = 12
    ACTION_FAILED = 13
    ACTION_INTERRUPTED = 14
    UNKNOWN_ERROR = 127


class CloudingError(Exception):
    """Base exception for Clouding errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CloudingError):
    """Raised for configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class TransportError(CloudingError):
    """Raised when a request fails before any HTTP status is obtained."""

    exit_code = ExitCode.TRANSPORT_ERROR


class APIError(CloudingError):
    """The provider answered with a status the operation does not accept."""

    exit_code = ExitCode.API_ERROR

    def __init__(
        self,
        operation: str,
        status_code: int,
        envelope: ErrorEnvelope,
    ) -> None:
        message = f"error {operation}, status code: {status_code}, title: {envelope.title}"
        if envelope.detail:
            message = f"{message}, detail: {envelope.detail}"
        super().__init__(
            message,
            details={"operation": operation, "status_code": status_code},
        )
        self.operation = operation
        self.status_code = status_code
        self.envelope = envelope

    @property
    def title(self) -> str | None:
        return self.envelope.title

    @property
    def detail(self) -> str | None:
        return self.envelope.detail


class ResponseDecodeError(CloudingError):
    """A response body could not be decoded into the expected record."""

    exit_code = ExitCode.API_ERROR

    def __init__(
        self,
        operation: str,
        reason: str,
        *,
        status_code: int | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message or f"error decoding response while {operation}: {reason}",
            details={"operation": operation, "status_code": status_code},
        )
        self.operation = operation
        self.reason = reason
        self.status_code = status_code


class ErrorEnvelopeDecodeError(ResponseDecodeError):
    """A failure response arrived but its error envelope was undecodable.

    Keeps the original HTTP status next to the decode failure so neither is
    lost.
    """

    def __init__(self, operation: str, status_code: int, reason: str) -> None:
        super().__init__(
            operation,
            reason,
            status_code=status_code,
            message=(
                f"error {operation}, status code: {status_code}, "
                f"error response could not be decoded: {reason}"
            ),
        )


class ActionError(CloudingError):
    """Base class for errors observed while waiting on an action."""

    exit_code = ExitCode.ACTION_FAILED

    def __init__(self, message: str, action_id: str | None, action: Action | None = None) -> None:
        super().__init__(message, details={"action_id": action_id})
        self.action_id = action_id
        self.action = action


class ActionFailedError(ActionError):
    """The provider reported the action as errored."""

    def __init__(self, action_id: str | None, action: Action | None = None) -> None:
        super().__init__(f"action id: {action_id} failed", action_id, action)


class ActionCancelledError(ActionError):
    """Polling was cancelled by the caller before or as the action finished."""

    exit_code = ExitCode.ACTION_INTERRUPTED

    def __init__(self, action_id: str | None, action: Action | None = None, *, reason: str = "cancelled") -> None:
        super().__init__(f"waiting for action id: {action_id} {reason}", action_id, action)


class ActionTimeoutError(ActionCancelledError):
    """The caller's deadline passed while polling."""

    def __init__(self, action_id: str | None, action: Action | None = None) -> None:
        super().__init__(action_id, action, reason="timed out")


class ActionAttemptsExceededError(ActionError):
    """The configured maximum number of polls ran out before a terminal state."""

    exit_code = ExitCode.ACTION_INTERRUPTED

    def __init__(self, action_id: str | None, attempts: int, action: Action | None = None) -> None:
        super().__init__(
            f"action id: {action_id} still not finished after {attempts} polls",
            action_id,
            action,
        )
        self.attempts = attempts


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI main functions that provides unified error handling.

    Catches exceptions and converts them to appropriate exit codes with
    consistent error reporting.

    Exit codes:
        - CloudingError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except CloudingError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                print_error(format_error_message(e))
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: CloudingError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    details = {k: v for k, v in error.details.items() if v is not None}
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        msg = f"{msg} ({detail_str})"
    return msg


def print_error(message: str) -> None:
    from clouding.cli.ux import error

    error(message)
