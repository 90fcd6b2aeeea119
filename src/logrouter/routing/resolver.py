"""Destination resolution: message -> sink, failing open to the object store."""

from __future__ import annotations

from typing import Any

import structlog

from logrouter.core.exceptions import ApplicationLookupError, MessageAttributeError
from logrouter.core.protocols import IApplicationTable
from logrouter.models.message import InboundMessage
from logrouter.models.sink import DEFAULT_SINK, OBJECT_STORE_SINK_NAME, QueueSink, ResolvedSink
from logrouter.routing.attributes import lookup_key


class DestinationResolver:
    """Looks up the configured sink for a message's application version.

    ``resolve`` never raises a domain error. Missing attributes, lookup failures
    and unconfigured applications all route to the default object-store sink so
    a message is never left without a destination.
    """

    def __init__(self, table: IApplicationTable, logger: Any = None) -> None:
        self._table = table
        self._log = logger or structlog.get_logger(__name__)

    def resolve(self, message: InboundMessage) -> ResolvedSink:
        log = self._log.bind(message_id=message.id)

        try:
            application, version = lookup_key(message)
        except MessageAttributeError as exc:
            log.debug("sink_default_used", reason="attributes", error=str(exc))
            return DEFAULT_SINK

        log.debug("attributes_retrieved", application=application, version=version)

        try:
            record = self._table.get(application, version)
        except ApplicationLookupError as exc:
            log.debug("sink_default_used", reason="lookup_failed", error=str(exc))
            return DEFAULT_SINK

        if record is None:
            log.debug("sink_default_used", reason="application_not_found",
                      application=application, version=version)
            return DEFAULT_SINK
        if record.sink_name in ("", OBJECT_STORE_SINK_NAME):
            log.debug("sink_default_used", reason="no_queue_configured",
                      application=application, version=version)
            return DEFAULT_SINK

        sink = QueueSink(name=record.sink_name)
        log.debug("sink_resolved", sink=str(sink))
        return sink
