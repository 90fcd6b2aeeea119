"""Delivery of a message to its resolved sink."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable, assert_never

import structlog

from logrouter.core.config import RouterSettings
from logrouter.core.exceptions import (
    DeliveryFailedError,
    QueueAddressNotFoundError,
    QueueServiceError,
)
from logrouter.core.protocols import IObjectStore, IQueueClient
from logrouter.models.message import InboundMessage, MessageAttribute
from logrouter.models.sink import ObjectStoreSink, QueueSink, ResolvedSink
from logrouter.routing import encoder

FIFO_SUFFIX = ".fifo"
DEFAULT_GROUP_ID = "logrouter"
MAX_GROUP_ID_LENGTH = 128

# MessageGroupId allows alphanumerics and ASCII punctuation only.
_GROUP_ID_INVALID = re.compile(r"[^0-9A-Za-z!-/:-@\[-`{-~]")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def fifo_group_id(application: str | None) -> str:
    """A valid MessageGroupId derived from the application name.

    Disallowed characters become ``_`` and the result is cut to 128 characters.
    """
    if not application:
        return DEFAULT_GROUP_ID
    return _GROUP_ID_INVALID.sub("_", application)[:MAX_GROUP_ID_LENGTH]


def object_key(prefix: str, message_id: str, now: datetime) -> str:
    """``{prefix}/year=YYYY/month=M/day=D/{message_id}.parquet``, month and day unpadded."""
    partition = f"year={now.year:04d}/month={now.month}/day={now.day}"
    return f"{prefix.rstrip('/')}/{partition}/{message_id}.parquet"


class DeliveryDispatcher:
    """Sends a message to a queue or writes it to the object store. No retries."""

    def __init__(
        self,
        *,
        settings: RouterSettings,
        queues: IQueueClient,
        object_store: IObjectStore,
        logger: Any = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._settings = settings
        self._queues = queues
        self._store = object_store
        self._log = logger or structlog.get_logger(__name__)
        self._clock = clock

    def deliver(self, sink: ResolvedSink, message: InboundMessage) -> None:
        match sink:
            case QueueSink(name=name):
                self.deliver_to_queue(name, message)
            case ObjectStoreSink():
                self.deliver_to_object_store(message)
            case _:
                assert_never(sink)

    def deliver_to_queue(self, sink_name: str, message: InboundMessage) -> None:
        """Forward body and the full attribute map unchanged to ``sink_name``.

        Raises:
            QueueAddressNotFoundError: the name does not resolve to a queue.
            DeliveryFailedError: the queue service call failed.
        """
        try:
            address = self._queues.resolve_address(sink_name)
        except QueueServiceError as exc:
            raise DeliveryFailedError(f"Queue lookup for {sink_name!r} failed: {exc}") from exc
        if not address:
            raise QueueAddressNotFoundError(sink_name)

        self._log.debug("queue_address_resolved", message_id=message.id, queue_url=address)

        group_id = dedup_id = None
        if address.endswith(FIFO_SUFFIX):
            attrs = message.attributes or {}
            group_id = fifo_group_id(attrs.get(MessageAttribute.APPLICATION_NAME))
            dedup_id = message.id

        try:
            self._queues.send(
                address,
                message.body,
                message.forwardable_attributes(),
                group_id=group_id,
                deduplication_id=dedup_id,
            )
        except QueueServiceError as exc:
            raise DeliveryFailedError(f"Send to {sink_name!r} failed: {exc}") from exc

    def deliver_to_object_store(self, message: InboundMessage) -> None:
        """Encode as Parquet and write one object under today's partition.

        Encoding errors propagate before anything is written.
        StorageWriteFailedError is raised by the store on transport failure.
        """
        s3 = self._settings.s3
        key = object_key(s3.path, message.id, self._clock())
        data, size = encoder.encode(message)
        self._store.put(s3.region, s3.bucket, key, data)
        self._log.debug("object_written", message_id=message.id, bucket=s3.bucket, key=key, size=size)
