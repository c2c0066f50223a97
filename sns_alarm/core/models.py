"""Pydantic models for the alarm callback and its SNS contract."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MAX_MSG_LENGTH = 140


def utf16_length(text: str) -> int:
    """Length of text in UTF-16 code units, the unit SMS limits are counted in."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


# === Host configuration ===


class Configuration(BaseModel):
    """Configuration handed to the callback by the host.

    Wraps the raw key/value mapping the operator entered. Treated as
    immutable once the callback is initialized.
    """

    model_config = ConfigDict(frozen=True)

    source: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("source", mode="after")
    @classmethod
    def _read_only_copy(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    def get_string(self, key: str, default: str | None = None) -> str | None:
        value = self.source.get(key)
        if value is None:
            return default
        return str(value)

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return an integer value, coercing numeric strings (SSM stores text)."""
        value = self.source.get(key)
        if value is None or value == "":
            return default
        return int(value)

    def string_is_set(self, key: str) -> bool:
        """True if the key holds a non-empty string."""
        value = self.source.get(key)
        return isinstance(value, str) and value != ""


# === Configuration field descriptors ===


class FieldOptionality(str, Enum):
    """Whether the host UI must demand a value for a field."""

    OPTIONAL = "OPTIONAL"
    NOT_OPTIONAL = "NOT_OPTIONAL"


class FieldAttribute(str, Enum):
    """Rendering hints for a field."""

    IS_PASSWORD = "IS_PASSWORD"


class _BaseField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    human_name: str
    description: str = ""
    optional: FieldOptionality = FieldOptionality.NOT_OPTIONAL
    attributes: list[FieldAttribute] = Field(default_factory=list)

    @property
    def is_optional(self) -> bool:
        return self.optional is FieldOptionality.OPTIONAL


class TextField(_BaseField):
    """Free-text configuration field."""

    field_type: Literal["text"] = "text"
    default_value: str = ""


class NumberField(_BaseField):
    """Integer configuration field."""

    field_type: Literal["number"] = "number"
    default_value: int = 0


ConfigurationField = Annotated[TextField | NumberField, Field(discriminator="field_type")]


class ConfigurationRequest(BaseModel):
    """Ordered set of fields the host renders as a configuration form."""

    configuration_fields: list[ConfigurationField] = Field(default_factory=list)

    def add_field(self, field: TextField | NumberField) -> None:
        self.configuration_fields.append(field)

    def get_field(self, name: str) -> TextField | NumberField | None:
        for field in self.configuration_fields:
            if field.name == name:
                return field
        return None

    def as_list(self) -> list[dict[str, Any]]:
        """Serialize the fields, in order, for the host UI."""
        return [field.model_dump(mode="json") for field in self.configuration_fields]


# === Alert input ===


class Stream(BaseModel):
    """The host stream an alert condition fired on."""

    id: str
    title: str = ""
    description: str | None = None


class CheckResult(BaseModel):
    """Result of an alert condition check.

    Only ``result_description`` is turned into the SNS message.
    """

    result_description: str
    triggered: bool = True
    triggered_at: datetime | None = None
    condition_id: str | None = None
    condition_title: str | None = None


class GraylogAlertPayload(BaseModel):
    """JSON body posted by Graylog's HTTP alarm callback."""

    check_result: CheckResult
    stream: Stream


# === SNS publish contract ===


class Recipient(BaseModel):
    """Where a notice goes: an SNS topic name or a single phone number."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["phone", "topic"]
    value: str

    @property
    def is_phone(self) -> bool:
        return self.kind == "phone"


class MessageAttributeValue(BaseModel):
    """Typed SNS message attribute."""

    data_type: str = "String"
    string_value: str


class PublishRequest(BaseModel):
    """A single SNS Publish call, targeting a topic ARN or a phone number."""

    message: str
    topic_arn: str | None = None
    phone_number: str | None = None
    message_attributes: dict[str, MessageAttributeValue] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_request(self) -> PublishRequest:
        if utf16_length(self.message) > MAX_MSG_LENGTH:
            raise ValueError(f"message exceeds {MAX_MSG_LENGTH} characters")
        if (self.topic_arn is None) == (self.phone_number is None):
            raise ValueError("Exactly one of topic_arn or phone_number must be set")
        return self

    def to_boto_kwargs(self) -> dict[str, Any]:
        """Render the keyword arguments for ``SNS.Client.publish``."""
        kwargs: dict[str, Any] = {"Message": self.message}
        if self.topic_arn is not None:
            kwargs["TopicArn"] = self.topic_arn
        else:
            kwargs["PhoneNumber"] = self.phone_number
        kwargs["MessageAttributes"] = {
            name: {"DataType": value.data_type, "StringValue": value.string_value}
            for name, value in self.message_attributes.items()
        }
        return kwargs
