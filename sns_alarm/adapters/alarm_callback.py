"""SNS alarm callback service exposed to the host alerting pipeline."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from sns_alarm.adapters.sns import SNSAlarmPublisher, build_sns_client
from sns_alarm.core.configuration import (
    CK_FROM,
    CK_TO,
    check_configuration,
    redact_attributes,
    requested_configuration,
)
from sns_alarm.core.errors import DispatchFailedError

if TYPE_CHECKING:
    from mypy_boto3_sns import SNSClient

    from sns_alarm.core.interfaces import SNSClientFactory
    from sns_alarm.core.models import CheckResult, Configuration, ConfigurationRequest, Stream

logger = logging.getLogger(__name__)

NAME = "AWS SNS Alarm Callback"


class AWSSNSAlarmCallback:
    """Alarm callback that publishes alert descriptions to Amazon SNS.

    Holds no per-alert state: every ``call`` builds a fresh client and
    publishes once, so concurrent calls on one instance are independent.
    """

    def __init__(self, client_factory: SNSClientFactory | None = None) -> None:
        self.client_factory = client_factory
        self._configuration: Configuration | None = None

    @property
    def configuration(self) -> Configuration:
        if self._configuration is None:
            raise RuntimeError("initialize() must be called before using the callback")
        return self._configuration

    def name(self) -> str:
        return NAME

    def requested_configuration(self) -> ConfigurationRequest:
        return requested_configuration()

    def initialize(self, configuration: Configuration) -> None:
        self._configuration = configuration

    def check_configuration(self) -> None:
        """Raise ConfigurationInvalidError for the first missing mandatory key."""
        check_configuration(self.configuration)

    def call(self, stream: Stream, result: CheckResult, client: SNSClient | None = None) -> None:
        """Publish one alert.

        Args:
            stream: Stream the alert condition fired on
            result: The alert check result
            client: Prebuilt SNS client; built from the configuration if omitted

        Raises:
            DispatchFailedError: If the client can't be built, or SNS rejects the
                topic lookup or the publish
        """
        configuration = self.configuration
        if client is None:
            factory = self.client_factory or build_sns_client
            try:
                client = factory(configuration)
            except (ClientError, BotoCoreError) as e:
                raise DispatchFailedError(e) from e

        publisher = SNSAlarmPublisher(
            client,
            sender=configuration.get_string(CK_FROM, ""),
            recipient=configuration.get_string(CK_TO, ""),
        )
        message_id = publisher.publish(result)
        logger.debug("Published alert for stream %s as message %s", stream.id, message_id)

    def attributes(self) -> dict[str, Any]:
        return redact_attributes(self.configuration)
