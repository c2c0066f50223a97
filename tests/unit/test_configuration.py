"""Unit tests for configuration fields, validation and redaction."""

from __future__ import annotations

from typing import Any

import pytest

from sns_alarm.core.configuration import (
    check_configuration,
    redact_attributes,
    requested_configuration,
)
from sns_alarm.core.errors import ConfigurationInvalidError
from sns_alarm.core.models import (
    Configuration,
    FieldAttribute,
    FieldOptionality,
    NumberField,
    TextField,
)


@pytest.fixture
def valid_source() -> dict[str, Any]:
    """A fully populated configuration source."""
    return {
        "access_key": "AKIAEXAMPLE",
        "secret_key": "wJalrXUtnFEMI/K7MDENG",
        "region": "ap-southeast-2",
        "from": "Graylog",
        "to": "alerts-prod",
        "proxy_host": "proxy.corp",
        "proxy_port": 8080,
    }


class TestRequestedConfiguration:
    """Tests for the configuration field descriptor."""

    def test_declares_seven_fields_in_order(self) -> None:
        """Should declare the known keys in their display order."""
        request = requested_configuration()
        names = [field.name for field in request.configuration_fields]
        assert names == [
            "access_key",
            "secret_key",
            "region",
            "from",
            "to",
            "proxy_host",
            "proxy_port",
        ]

    def test_secret_key_is_password(self) -> None:
        """Should flag only the secret key as a password."""
        request = requested_configuration()
        secret = request.get_field("secret_key")
        assert secret is not None
        assert FieldAttribute.IS_PASSWORD in secret.attributes
        others = [f for f in request.configuration_fields if f.name != "secret_key"]
        assert all(FieldAttribute.IS_PASSWORD not in f.attributes for f in others)

    def test_defaults(self) -> None:
        """Should default the region and proxy port."""
        request = requested_configuration()
        region = request.get_field("region")
        proxy_port = request.get_field("proxy_port")
        assert isinstance(region, TextField)
        assert region.default_value == "ap-southeast-2"
        assert isinstance(proxy_port, NumberField)
        assert proxy_port.default_value == 3128

    def test_optionality(self) -> None:
        """Should mark only the proxy fields optional."""
        request = requested_configuration()
        optional = {f.name for f in request.configuration_fields if f.is_optional}
        assert optional == {"proxy_host", "proxy_port"}
        assert request.get_field("to").optional is FieldOptionality.NOT_OPTIONAL  # type: ignore[union-attr]

    def test_get_field_unknown(self) -> None:
        """Should return None for unknown fields."""
        assert requested_configuration().get_field("nope") is None

    def test_as_list_is_tagged(self) -> None:
        """Should serialize each field with its kind."""
        rendered = requested_configuration().as_list()
        assert len(rendered) == 7
        assert rendered[0]["field_type"] == "text"
        assert rendered[1]["attributes"] == ["IS_PASSWORD"]
        assert rendered[6]["field_type"] == "number"
        assert rendered[6]["default_value"] == 3128


class TestCheckConfiguration:
    """Tests for check_configuration."""

    def test_valid_configuration_passes(self, valid_source: dict[str, Any]) -> None:
        """Should accept a complete configuration."""
        check_configuration(Configuration(source=valid_source))

    def test_proxy_fields_are_optional(self, valid_source: dict[str, Any]) -> None:
        """Should not require proxy settings."""
        del valid_source["proxy_host"]
        del valid_source["proxy_port"]
        check_configuration(Configuration(source=valid_source))

    @pytest.mark.parametrize("key", ["access_key", "secret_key", "region", "from", "to"])
    def test_empty_mandatory_key_fails(self, valid_source: dict[str, Any], key: str) -> None:
        """Should name the empty mandatory key."""
        valid_source[key] = ""
        with pytest.raises(ConfigurationInvalidError) as exc_info:
            check_configuration(Configuration(source=valid_source))
        assert exc_info.value.key == key
        assert str(exc_info.value) == f"{key} is mandatory and must not be empty."

    @pytest.mark.parametrize("key", ["access_key", "secret_key", "region", "from", "to"])
    def test_absent_mandatory_key_fails(self, valid_source: dict[str, Any], key: str) -> None:
        """Should name the absent mandatory key."""
        del valid_source[key]
        with pytest.raises(ConfigurationInvalidError) as exc_info:
            check_configuration(Configuration(source=valid_source))
        assert exc_info.value.key == key

    def test_reports_first_missing_key(self) -> None:
        """Should report keys in declaration order."""
        with pytest.raises(ConfigurationInvalidError) as exc_info:
            check_configuration(Configuration(source={}))
        assert exc_info.value.key == "access_key"


class TestRedactAttributes:
    """Tests for redact_attributes."""

    def test_masks_secret_key_only(self, valid_source: dict[str, Any]) -> None:
        """Should mask the secret and keep everything else."""
        attributes = redact_attributes(Configuration(source=valid_source))
        expected = dict(valid_source, secret_key="****")
        assert attributes == expected

    def test_masks_empty_secret(self) -> None:
        """Should mask the secret key whenever it is present."""
        attributes = redact_attributes(Configuration(source={"secret_key": ""}))
        assert attributes == {"secret_key": "****"}

    def test_no_secret_key(self) -> None:
        """Should not invent a secret key entry."""
        attributes = redact_attributes(Configuration(source={"region": "eu-west-1"}))
        assert attributes == {"region": "eu-west-1"}

    def test_keeps_unknown_keys(self) -> None:
        """Should pass through keys it does not know."""
        attributes = redact_attributes(Configuration(source={"extra": 1, "secret_key": "s"}))
        assert attributes == {"extra": 1, "secret_key": "****"}

    def test_does_not_mutate_source(self, valid_source: dict[str, Any]) -> None:
        """Should leave the configuration untouched."""
        configuration = Configuration(source=valid_source)
        redact_attributes(configuration)
        assert configuration.get_string("secret_key") == "wJalrXUtnFEMI/K7MDENG"
