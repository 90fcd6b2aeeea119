"""Lambda entry point: SQS batch -> route each message -> delete delivered ones."""

from __future__ import annotations

from typing import Any

import structlog

from logrouter.core.config import RouterSettings, load_settings
from logrouter.core.logging import configure_logging
from logrouter.models.batch import BatchResult
from logrouter.models.message import InboundMessage
from logrouter.persistence import create_persistence
from logrouter.routing.dispatcher import DeliveryDispatcher
from logrouter.routing.orchestrator import BatchOrchestrator
from logrouter.routing.resolver import DestinationResolver


def build_orchestrator(settings: RouterSettings, logger: Any = None) -> BatchOrchestrator:
    """Wire the routing components against the AWS backends."""
    table, queues, store = create_persistence(settings)
    return BatchOrchestrator(
        settings=settings,
        resolver=DestinationResolver(table, logger=logger),
        dispatcher=DeliveryDispatcher(
            settings=settings, queues=queues, object_store=store, logger=logger,
        ),
        queues=queues,
        logger=logger,
    )


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Process one SQS-triggered batch.

    Configuration is checked before any message is touched; a missing setting
    raises ConfigurationError and fails the invocation. Individual message
    failures are only logged and reported in the returned summary.
    """
    settings = load_settings()
    configure_logging(settings.log_level)
    logger = structlog.get_logger("logrouter")

    request_id = getattr(context, "aws_request_id", None)
    if request_id:
        logger = logger.bind(request_id=request_id)
    logger.debug("router_starting")

    messages = [InboundMessage.from_sqs_record(r) for r in event.get("Records") or []]
    if not messages:
        logger.debug("batch_completed", received=0)
        return BatchResult().summary()

    result = build_orchestrator(settings, logger=logger).process_batch(messages)
    return result.summary()
