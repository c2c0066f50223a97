"""Core interfaces between the alarm callback and its host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mypy_boto3_sns import SNSClient

    from sns_alarm.core.models import CheckResult, Configuration, ConfigurationRequest, Stream


@runtime_checkable
class AlarmCallback(Protocol):
    """Capabilities a host alerting pipeline drives on a notification callback."""

    def name(self) -> str:
        """Human-readable identifier of the callback."""
        ...

    def requested_configuration(self) -> ConfigurationRequest:
        """Fields the host should collect from the operator."""
        ...

    def initialize(self, configuration: Configuration) -> None:
        """Store the configuration. Must precede any other call."""
        ...

    def check_configuration(self) -> None:
        """Raise ConfigurationInvalidError if the configuration is unusable."""
        ...

    def call(self, stream: Stream, result: CheckResult) -> None:
        """Deliver one alert. Raise DispatchFailedError on delivery failure."""
        ...

    def attributes(self) -> dict[str, Any]:
        """Configuration with sensitive values redacted, for display and audit."""
        ...


class SNSClientFactory(Protocol):
    """Builds an SNS client for a configuration."""

    def __call__(self, configuration: Configuration) -> SNSClient: ...
