"""AWS SSM Parameter Store adapter for callback configuration."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import boto3

from sns_alarm.core.configuration import CK_PROXY_PORT
from sns_alarm.core.errors import ConfigurationInvalidError


@lru_cache(maxsize=4)
def load_configuration_source(path: str, region: str | None = None) -> dict[str, Any]:
    """Read every parameter under an SSM path into a configuration mapping.

    Keys are the last path segment, so ``/sns-alarm-callback/secret_key``
    becomes ``secret_key``. SecureString values are decrypted. Cached per path
    so warm Lambda invocations skip the API calls.

    Args:
        path: Parameter path prefix (e.g., "/sns-alarm-callback/")
        region: AWS region of the parameters

    Returns:
        Mapping of configuration key to value

    Raises:
        botocore.exceptions.ClientError: If the path can't be read
        ConfigurationInvalidError: If proxy_port isn't an integer
    """
    client = boto3.client("ssm", region_name=region)
    paginator = client.get_paginator("get_parameters_by_path")

    source: dict[str, Any] = {}
    for page in paginator.paginate(Path=path, WithDecryption=True):
        for parameter in page["Parameters"]:
            key = parameter["Name"].rsplit("/", 1)[-1]
            source[key] = parameter["Value"]

    # Parameter Store only holds strings
    if source.get(CK_PROXY_PORT):
        try:
            source[CK_PROXY_PORT] = int(source[CK_PROXY_PORT])
        except ValueError as e:
            raise ConfigurationInvalidError(
                CK_PROXY_PORT, f"{CK_PROXY_PORT} must be an integer."
            ) from e
    return source


def clear_cache() -> None:
    """Clear the configuration cache. Useful for testing."""
    load_configuration_source.cache_clear()
