"""Lambda handler for Graylog HTTP alarm callback notifications.

Graylog posts a JSON body describing the fired alert condition. The handler
loads the callback configuration from SSM Parameter Store, validates it once
per execution environment and publishes the alert to SNS.
"""

from __future__ import annotations

import base64
import json
import os
from typing import TYPE_CHECKING, Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from sns_alarm.adapters.alarm_callback import AWSSNSAlarmCallback
from sns_alarm.adapters.ssm import load_configuration_source
from sns_alarm.core.configuration import CK_TO
from sns_alarm.core.errors import ConfigurationInvalidError, DispatchFailedError
from sns_alarm.core.models import Configuration, GraylogAlertPayload

if TYPE_CHECKING:
    from aws_lambda_powertools.utilities.typing import LambdaContext

logger = Logger(service="sns-alarm-webhook")

# Configuration from environment
SSM_CONFIG_PATH = os.environ.get("SSM_CONFIG_PATH", "/sns-alarm-callback/")
AWS_REGION = os.environ.get("AWS_REGION", "ap-southeast-2")

# Lazy initialization for cold start optimization
_callback: AWSSNSAlarmCallback | None = None


def get_callback() -> AWSSNSAlarmCallback:
    """Get or create the configured alarm callback.

    Raises:
        ConfigurationInvalidError: If a key in SSM is missing or malformed
    """
    global _callback
    if _callback is None:
        source = load_configuration_source(SSM_CONFIG_PATH, AWS_REGION)
        callback = AWSSNSAlarmCallback()
        callback.initialize(Configuration(source=source))
        callback.check_configuration()
        logger.info("Alarm callback initialized", extra={"attributes": callback.attributes()})
        _callback = callback
    return _callback


def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Publish one Graylog alert to SNS.

    Args:
        event: Lambda function URL event carrying the Graylog payload
        context: Lambda context

    Returns:
        Response with status
    """
    try:
        payload = _parse_payload(event)
    except (ValueError, ValidationError) as e:
        logger.warning("Rejected alert payload", extra={"error": str(e)})
        return _response(400, {"status": "error", "message": "Invalid alert payload"})

    try:
        callback = get_callback()
    except ConfigurationInvalidError as e:
        logger.error("Alarm callback misconfigured", extra={"key": e.key})
        return _response(500, {"status": "misconfigured", "key": e.key})

    try:
        callback.call(payload.stream, payload.check_result)
    except DispatchFailedError:
        logger.exception(
            "SNS dispatch failed",
            extra={"stream_id": payload.stream.id, "to": callback.configuration.get_string(CK_TO)},
        )
        return _response(502, {"status": "dispatch_failed"})

    logger.info(
        "Alert published",
        extra={"stream_id": payload.stream.id, "stream_title": payload.stream.title},
    )
    return _response(202, {"status": "published"})


def _parse_payload(event: dict[str, Any]) -> GraylogAlertPayload:
    """Decode the request body into a Graylog alert payload."""
    body = event.get("body")
    if not body:
        raise ValueError("Missing request body")
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return GraylogAlertPayload.model_validate(json.loads(body))


def _response(status: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }
