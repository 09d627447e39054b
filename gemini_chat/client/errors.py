"""Failure taxonomy for a chat turn sent through the backend proxy."""

from enum import Enum


class FailureKind(str, Enum):
    UNCONFIGURED = "Unconfigured"
    INVALID_REQUEST = "InvalidRequest"
    UNAUTHORIZED = "Unauthorized"
    REMOTE_FAILURE = "RemoteFailure"


class TransportError(Exception):
    kind = FailureKind.REMOTE_FAILURE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TransportError):
    kind = FailureKind.INVALID_REQUEST


class ConfigurationError(TransportError):
    kind = FailureKind.UNCONFIGURED


class AuthError(TransportError):
    kind = FailureKind.UNAUTHORIZED


class RemoteError(TransportError):
    kind = FailureKind.REMOTE_FAILURE


def classify_failure(status_code: int | None, message: str) -> TransportError:
    """Best-effort mapping of a failed request onto the taxonomy.

    Anything unrecognised, including network errors (no status), is a
    RemoteError.
    """
    if status_code == 400:
        return ValidationError(message)
    if status_code == 401:
        return AuthError(message)
    if "not configured" in message.lower():
        return ConfigurationError(message)
    return RemoteError(message)
