"""logrouter exception hierarchy."""

from __future__ import annotations


class LogRouterError(Exception):
    """Base exception for all logrouter errors."""


class ConfigurationError(LogRouterError):
    """Required configuration is missing. Fatal for the whole invocation."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required configuration: {', '.join(missing)}")


# ---------------------------------------------------------------------------
# Message attributes
# ---------------------------------------------------------------------------

class MessageAttributeError(LogRouterError):
    """A required message attribute could not be read."""

    def __init__(self, message_id: str, attribute: str, reason: str) -> None:
        self.message_id = message_id
        self.attribute = attribute
        super().__init__(f"Message {message_id}: attribute {attribute} {reason}")


class AttributesMissingError(MessageAttributeError):
    """The message carries no attribute map at all."""

    def __init__(self, message_id: str, attribute: str) -> None:
        super().__init__(message_id, attribute, "unavailable, no message attributes provided")


class AttributeNotFoundError(MessageAttributeError):
    """The attribute map has no entry for the requested name."""

    def __init__(self, message_id: str, attribute: str) -> None:
        super().__init__(message_id, attribute, "not provided")


class AttributeEmptyError(MessageAttributeError):
    """The attribute is present but its value is empty."""

    def __init__(self, message_id: str, attribute: str) -> None:
        super().__init__(message_id, attribute, "is empty")


# ---------------------------------------------------------------------------
# Lookup / encoding
# ---------------------------------------------------------------------------

class ApplicationLookupError(LogRouterError):
    """Application table query or item deserialization failed."""


class EncodingError(LogRouterError):
    """Columnar conversion of a message failed."""


# ---------------------------------------------------------------------------
# Delivery / deletion
# ---------------------------------------------------------------------------

class QueueServiceError(LogRouterError):
    """Queue service call failed at the transport level."""


class DeliveryError(LogRouterError):
    """A message could not be delivered to its sink."""


class QueueAddressNotFoundError(DeliveryError):
    """The sink name did not resolve to a queue address."""

    def __init__(self, queue_name: str) -> None:
        self.queue_name = queue_name
        super().__init__(f"Unable to resolve queue address for {queue_name!r}")


class DeliveryFailedError(DeliveryError):
    """Sending to the downstream queue failed."""


class StorageWriteFailedError(DeliveryError):
    """Writing to the object store failed."""


class DeletionFailedError(LogRouterError):
    """Removing a delivered message from the inbound queue failed."""
