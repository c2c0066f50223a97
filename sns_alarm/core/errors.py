"""Errors raised by the alarm callback."""

from __future__ import annotations


class AlarmCallbackError(Exception):
    """Base class for alarm callback failures reported to the host."""


class ConfigurationInvalidError(AlarmCallbackError):
    """Raised when a configuration key is missing, empty or malformed."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"{key} is mandatory and must not be empty.")


class DispatchFailedError(AlarmCallbackError):
    """Raised when SNS rejects or fails a CreateTopic or Publish call.

    The underlying boto3/botocore exception is kept as ``cause``.
    """

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to publish alert to SNS: {cause}")
