"""Batch orchestration: resolve, deliver, then delete, one message at a time."""

from __future__ import annotations

from typing import Any, Iterable

import structlog

from logrouter.core.config import RouterSettings
from logrouter.core.exceptions import DeletionFailedError, LogRouterError, QueueServiceError
from logrouter.core.protocols import IQueueClient
from logrouter.models.batch import BatchResult, MessageOutcome, MessageResult
from logrouter.models.message import InboundMessage
from logrouter.models.sink import DEFAULT_SINK
from logrouter.routing.dispatcher import DeliveryDispatcher
from logrouter.routing.resolver import DestinationResolver


def _describe(exc: Exception) -> str:
    return f"{type(exc).__name__}: {exc}"


class BatchOrchestrator:
    """Processes an inbound batch with a per-message partial-failure policy.

    A message is deleted from the inbound queue only after its delivery
    succeeded. A failure on one message is logged and recorded in the
    returned BatchResult; it never stops the rest of the batch. Messages left
    undeleted are redelivered by the inbound queue itself.
    """

    def __init__(
        self,
        *,
        settings: RouterSettings,
        resolver: DestinationResolver,
        dispatcher: DeliveryDispatcher,
        queues: IQueueClient,
        logger: Any = None,
    ) -> None:
        self._settings = settings
        self._resolver = resolver
        self._dispatcher = dispatcher
        self._queues = queues
        self._log = logger or structlog.get_logger(__name__)

    def process_batch(self, messages: Iterable[InboundMessage]) -> BatchResult:
        batch = list(messages)
        result = BatchResult(received=len(batch))
        self._log.debug("batch_received", count=len(batch))

        if not batch:
            self._log.debug("batch_completed", deleted=0, failed=0)
            return result

        for message in batch:
            result.results.append(self.process_message(message))

        self._log.info("batch_completed", received=result.received,
                       deleted=result.deleted, failed=result.failed)
        return result

    def process_message(self, message: InboundMessage) -> MessageResult:
        log = self._log.bind(message_id=message.id)
        log.debug("message_processing")

        try:
            sink = self._resolver.resolve(message)
        except Exception:
            log.exception("sink_resolution_crashed")
            sink = DEFAULT_SINK

        try:
            self._dispatcher.deliver(sink, message)
        except LogRouterError as exc:
            log.debug("error_reported", error=str(exc), error_type=type(exc).__name__)
            log.warning("message_delivery_failed", sink=str(sink),
                        detail="Unable to deliver message. Leaving it on the inbound queue")
            return MessageResult(message_id=message.id, sink=sink,
                                 outcome=MessageOutcome.DELIVERY_FAILED, error=str(exc))
        except Exception as exc:
            log.exception("message_delivery_crashed", sink=str(sink))
            return MessageResult(message_id=message.id, sink=sink,
                                 outcome=MessageOutcome.DELIVERY_FAILED, error=_describe(exc))

        try:
            self._delete(message)
        except DeletionFailedError as exc:
            log.debug("error_reported", error=str(exc), error_type=type(exc).__name__)
            log.warning("message_delete_failed", sink=str(sink),
                        detail="Message delivered but could not be deleted")
            return MessageResult(message_id=message.id, sink=sink,
                                 outcome=MessageOutcome.DELETE_FAILED, error=str(exc))
        except Exception as exc:
            log.exception("message_delete_crashed", sink=str(sink))
            return MessageResult(message_id=message.id, sink=sink,
                                 outcome=MessageOutcome.DELETE_FAILED, error=_describe(exc))

        log.debug("message_deleted", sink=str(sink))
        return MessageResult(message_id=message.id, sink=sink, outcome=MessageOutcome.DELETED)

    def _delete(self, message: InboundMessage) -> None:
        name = self._settings.sqs.inbound_queue_name
        try:
            address = self._queues.resolve_address(name)
            if not address:
                raise DeletionFailedError(f"Unable to resolve inbound queue address for {name!r}")
            self._queues.delete(address, message.receipt_handle)
        except QueueServiceError as exc:
            raise DeletionFailedError(f"Delete of message {message.id} failed: {exc}") from exc
