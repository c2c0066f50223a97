"""Configuration fields, validation and redaction for the SNS alarm callback."""

from __future__ import annotations

from typing import Any

from sns_alarm.core.errors import ConfigurationInvalidError
from sns_alarm.core.models import (
    Configuration,
    ConfigurationRequest,
    FieldAttribute,
    FieldOptionality,
    NumberField,
    TextField,
)

CK_ACCESS_KEY = "access_key"
CK_SECRET_KEY = "secret_key"
CK_REGION = "region"
CK_FROM = "from"
CK_TO = "to"
CK_PROXY_HOST = "proxy_host"
CK_PROXY_PORT = "proxy_port"

MANDATORY_CONFIGURATION_KEYS = (CK_ACCESS_KEY, CK_SECRET_KEY, CK_REGION, CK_FROM, CK_TO)
SENSITIVE_CONFIGURATION_KEYS = frozenset({CK_SECRET_KEY})

DEFAULT_REGION = "ap-southeast-2"
DEFAULT_PROXY_PORT = 3128
REDACTED = "****"


def requested_configuration() -> ConfigurationRequest:
    """Build the field declarations the host renders for this callback."""
    request = ConfigurationRequest()
    request.add_field(
        TextField(name=CK_ACCESS_KEY, human_name="AWS Access Key", description="Amazon access key")
    )
    request.add_field(
        TextField(
            name=CK_SECRET_KEY,
            human_name="AWS Secret Key",
            description="Amazon secret key",
            attributes=[FieldAttribute.IS_PASSWORD],
        )
    )
    request.add_field(
        TextField(
            name=CK_REGION,
            human_name="AWS Region",
            default_value=DEFAULT_REGION,
            description="AWS region",
        )
    )
    request.add_field(
        TextField(
            name=CK_FROM,
            human_name="Sender",
            description="Contiguous alphanumeric without whitespace",
        )
    )
    request.add_field(
        TextField(
            name=CK_TO,
            human_name="Recipient Topic or Phone Number",
            description="Predefined SNS topic or a phone number, if starting with '+'",
        )
    )
    request.add_field(
        TextField(
            name=CK_PROXY_HOST,
            human_name="Proxy Host",
            description="Optional proxy server host",
            optional=FieldOptionality.OPTIONAL,
        )
    )
    request.add_field(
        NumberField(
            name=CK_PROXY_PORT,
            human_name="Proxy Port",
            default_value=DEFAULT_PROXY_PORT,
            description="Optional proxy server port",
            optional=FieldOptionality.OPTIONAL,
        )
    )
    return request


def check_configuration(configuration: Configuration) -> None:
    """Ensure every mandatory key is set.

    Raises:
        ConfigurationInvalidError: For the first mandatory key that is absent
            or an empty string.
    """
    for key in MANDATORY_CONFIGURATION_KEYS:
        if not configuration.string_is_set(key):
            raise ConfigurationInvalidError(key)


def redact_attributes(configuration: Configuration) -> dict[str, Any]:
    """Copy the configuration source with sensitive values masked."""
    return {
        key: REDACTED if key in SENSITIVE_CONFIGURATION_KEYS else value
        for key, value in configuration.source.items()
    }
