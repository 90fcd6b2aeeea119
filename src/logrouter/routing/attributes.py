"""Typed access to message attributes.

``extract`` raises a distinct error per failure mode so callers can choose
their own policy: the resolver falls back to the default sink, the encoder
refuses to produce a record.
"""

from __future__ import annotations

from logrouter.core.exceptions import (
    AttributeEmptyError,
    AttributeNotFoundError,
    AttributesMissingError,
)
from logrouter.models.message import InboundMessage, MessageAttribute, RoutingAttributes


def extract(message: InboundMessage, name: str) -> str:
    """Return the non-empty value of attribute ``name``.

    Raises:
        AttributesMissingError: the message has no attribute map.
        AttributeNotFoundError: ``name`` is not in the map.
        AttributeEmptyError: the value is the empty string.
    """
    attrs = message.attributes
    if attrs is None:
        raise AttributesMissingError(message.id, name)
    if name not in attrs:
        raise AttributeNotFoundError(message.id, name)
    value = attrs[name]
    if value == "":
        raise AttributeEmptyError(message.id, name)
    return value


def lookup_key(message: InboundMessage) -> tuple[str, str]:
    """(application name, application version). Both guaranteed non-empty."""
    return (
        extract(message, MessageAttribute.APPLICATION_NAME),
        extract(message, MessageAttribute.APPLICATION_VERSION),
    )


def routing_attributes(message: InboundMessage) -> RoutingAttributes:
    """Extract all five columnar attributes, raising on the first one missing."""
    return RoutingAttributes(
        application_name=extract(message, MessageAttribute.APPLICATION_NAME),
        application_version=extract(message, MessageAttribute.APPLICATION_VERSION),
        log_level=extract(message, MessageAttribute.LOG_LEVEL),
        timestamp=extract(message, MessageAttribute.TIMESTAMP),
        tracking_id=extract(message, MessageAttribute.TRACKING_ID),
    )
