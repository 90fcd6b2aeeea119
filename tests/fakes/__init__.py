"""Shared test doubles: re-export memory backends, plus message/settings builders."""

from __future__ import annotations

from logrouter.core.config import DynamoDBConfig, RouterSettings, S3Config, SQSConfig
from logrouter.models.message import AttributeValue, InboundMessage
from logrouter.persistence.memory_backend import (
    MemoryApplicationTable,
    MemoryObjectStore,
    MemoryQueueClient,
)

__all__ = [
    "FULL_ATTRIBUTES",
    "MemoryApplicationTable",
    "MemoryObjectStore",
    "MemoryQueueClient",
    "make_message",
    "make_settings",
    "string_attributes",
]

INBOUND_QUEUE = "logging_queue.fifo"
BUCKET = "log-archive"
REGION = "us-east-1"

FULL_ATTRIBUTES = {
    "APPLICATION_NAME": "fred",
    "APPLICATION_VERS": "1",
    "LOG_LEVEL": "INFO",
    "TIMESTAMP": "2024-03-05T10:11:12Z",
    "TRACKING_ID": "trk-001",
}


def make_settings(**s3_overrides: str) -> RouterSettings:
    s3 = {"bucket": BUCKET, "path": "logs", "region": REGION, **s3_overrides}
    return RouterSettings(
        log_level="DEBUG",
        s3=S3Config(**s3),
        dynamodb=DynamoDBConfig(table_name="application", region=REGION),
        sqs=SQSConfig(inbound_queue_name=INBOUND_QUEUE, region=REGION),
    )


def make_message(
    message_id: str = "12345",
    attributes: dict[str, str] | None = None,
    body: str = "blah blah blah",
) -> InboundMessage:
    return InboundMessage(
        id=message_id,
        receipt_handle=f"rh-{message_id}",
        body=body,
        attributes=attributes,
    )


def string_attributes(attributes: dict[str, str]) -> dict[str, AttributeValue]:
    """The typed attribute map a queue client receives for plain string attributes."""
    return {name: AttributeValue(string_value=value) for name, value in attributes.items()}

