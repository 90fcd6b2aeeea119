"""Inbound message, lookup record and columnar record models."""

from __future__ import annotations

import base64
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MessageAttribute(StrEnum):
    """SQS message attribute names set by the log producers."""

    APPLICATION_NAME = "APPLICATION_NAME"
    APPLICATION_VERSION = "APPLICATION_VERS"
    LOG_LEVEL = "LOG_LEVEL"
    TIMESTAMP = "TIMESTAMP"
    TRACKING_ID = "TRACKING_ID"


class AttributeValue(BaseModel):
    """One message attribute as the queue carries it.

    ``data_type`` is the full SQS type, custom suffix included
    (``String``, ``Number.int``, ``Binary.gzip``). Exactly one of the two
    values is set: binary types carry ``binary_value``, the rest ``string_value``.
    """

    model_config = ConfigDict(frozen=True)

    data_type: str = "String"
    string_value: str | None = None
    binary_value: bytes | None = None

    @property
    def is_binary(self) -> bool:
        return self.data_type.startswith("Binary")

    @classmethod
    def from_sqs_record(cls, raw: dict[str, Any]) -> AttributeValue:
        """Lambda event attributes use camelCase keys and base64 binary values."""
        data_type = raw.get("dataType") or "String"
        if data_type.startswith("Binary"):
            encoded = raw.get("binaryValue") or ""
            try:
                payload = base64.b64decode(encoded, validate=True)
            except ValueError:
                payload = encoded.encode()
            return cls(data_type=data_type, binary_value=payload)
        return cls(data_type=data_type, string_value=raw.get("stringValue") or "")


class InboundMessage(BaseModel):
    """A message received from the inbound queue.

    ``attributes`` is the text view used for routing. It is ``None`` when the
    message carried no attribute map at all, which is distinct from an empty
    map. ``attribute_values`` keeps every attribute with its data type, binary
    ones included, so forwarding can reproduce the map exactly.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    receipt_handle: str
    body: str = ""
    attributes: dict[str, str] | None = None
    attribute_values: dict[str, AttributeValue] | None = None

    @classmethod
    def from_sqs_record(cls, record: dict[str, Any]) -> InboundMessage:
        """Build from a Lambda SQS event record.

        Binary attributes are left out of ``attributes``; they only appear
        in ``attribute_values``.
        """
        raw = record.get("messageAttributes")
        attributes: dict[str, str] | None = None
        values: dict[str, AttributeValue] | None = None
        if raw is not None:
            values = {name: AttributeValue.from_sqs_record(value or {}) for name, value in raw.items()}
            attributes = {
                name: value.string_value or ""
                for name, value in values.items()
                if not value.is_binary
            }
        return cls(
            id=record["messageId"],
            receipt_handle=record["receiptHandle"],
            body=record.get("body") or "",
            attributes=attributes,
            attribute_values=values,
        )

    def forwardable_attributes(self) -> dict[str, AttributeValue]:
        """Every attribute with its original type, for re-sending the message."""
        if self.attribute_values is not None:
            return dict(self.attribute_values)
        return {name: AttributeValue(string_value=value) for name, value in (self.attributes or {}).items()}


class RoutingAttributes(BaseModel):
    """All attributes needed to write a columnar record, extracted fail-closed."""

    model_config = ConfigDict(frozen=True)

    application_name: str
    application_version: str
    log_level: str
    timestamp: str
    tracking_id: str


class ApplicationRecord(BaseModel):
    """A row of the application lookup table.

    The sink name is stored under ``loghandler``. An empty value means no sink
    is configured for this application version.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    application: str
    version: str
    sink_name: str = Field(default="", alias="loghandler")


COLUMNS: tuple[str, ...] = (
    "time",
    "trackingid",
    "messageid",
    "level",
    "application",
    "version",
    "message",
)


class ColumnarRecord(BaseModel):
    """One log message as written to the object store. Every column is text."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    time: str
    tracking_id: str = Field(alias="trackingid")
    message_id: str = Field(alias="messageid")
    level: str
    application: str
    version: str
    message: str

    @classmethod
    def from_message(cls, message: InboundMessage, attrs: RoutingAttributes) -> ColumnarRecord:
        return cls(
            time=attrs.timestamp,
            tracking_id=attrs.tracking_id,
            message_id=message.id,
            level=attrs.log_level,
            application=attrs.application_name,
            version=attrs.application_version,
            message=message.body,
        )

    def to_row(self) -> dict[str, str]:
        """Column name -> value, in schema order."""
        data = self.model_dump(by_alias=True)
        return {col: data[col] for col in COLUMNS}
