"""AWS SNS adapter for alert notices (topic fan-out or direct SMS)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from sns_alarm.core.configuration import (
    CK_ACCESS_KEY,
    CK_PROXY_HOST,
    CK_PROXY_PORT,
    CK_REGION,
    CK_SECRET_KEY,
    DEFAULT_PROXY_PORT,
)
from sns_alarm.core.errors import DispatchFailedError
from sns_alarm.core.message import build_message, classify_recipient
from sns_alarm.core.models import MessageAttributeValue, PublishRequest

if TYPE_CHECKING:
    from mypy_boto3_sns import SNSClient

    from sns_alarm.core.models import CheckResult, Configuration

logger = logging.getLogger(__name__)

DISPLAY_NAME_ATTRIBUTE = "DisplayName"


def build_sns_client(configuration: Configuration) -> SNSClient:
    """Create an SNS client from static credentials, region and optional proxy.

    Each client gets its own boto3 session; the default session is not safe to
    share across threads.

    Args:
        configuration: Initialized callback configuration

    Returns:
        A boto3 SNS client
    """
    session = boto3.session.Session(
        aws_access_key_id=configuration.get_string(CK_ACCESS_KEY),
        aws_secret_access_key=configuration.get_string(CK_SECRET_KEY),
        region_name=configuration.get_string(CK_REGION),
    )

    client_config = None
    proxy_host = configuration.get_string(CK_PROXY_HOST, "")
    if proxy_host:
        proxy_port = configuration.get_int(CK_PROXY_PORT, DEFAULT_PROXY_PORT)
        proxy_url = f"http://{proxy_host}:{proxy_port}"
        client_config = Config(proxies={"http": proxy_url, "https": proxy_url})

    return session.client("sns", config=client_config)


class SNSAlarmPublisher:
    """Publishes alert check results to an SNS topic or phone number."""

    def __init__(self, client: SNSClient, sender: str, recipient: str) -> None:
        self.client = client
        self.sender = sender
        self.recipient = recipient

    def build_request(self, result: CheckResult) -> PublishRequest:
        """Assemble the Publish request for a check result.

        Topic recipients are resolved through CreateTopic, which returns the
        ARN of an existing topic or creates it.
        """
        target = classify_recipient(self.recipient)
        attributes = {DISPLAY_NAME_ATTRIBUTE: MessageAttributeValue(string_value=self.sender)}
        message = build_message(result)

        if target.is_phone:
            return PublishRequest(
                message=message,
                phone_number=target.value,
                message_attributes=attributes,
            )

        topic_arn = self.client.create_topic(Name=target.value)["TopicArn"]
        return PublishRequest(
            message=message,
            topic_arn=topic_arn,
            message_attributes=attributes,
        )

    def publish(self, result: CheckResult) -> str:
        """Send the notice for a check result.

        Args:
            result: The alert check result

        Returns:
            The message ID from SNS

        Raises:
            DispatchFailedError: If CreateTopic or Publish fails, or the message
                can't be serialized for the wire
        """
        try:
            request = self.build_request(result)
            response = self.client.publish(**request.to_boto_kwargs())
        except (ClientError, BotoCoreError, UnicodeEncodeError) as e:
            raise DispatchFailedError(e) from e

        message_id = str(response["MessageId"])
        logger.debug("Sent SMS with ID %s to %s", message_id, self.recipient)
        return message_id
