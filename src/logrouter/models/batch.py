"""Per-message outcome and batch result models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from logrouter.models.sink import ResolvedSink


class MessageOutcome(StrEnum):
    DELETED = "DELETED"
    DELIVERY_FAILED = "DELIVERY_FAILED"  # retained on the inbound queue
    DELETE_FAILED = "DELETE_FAILED"  # delivered, may be redelivered


class MessageResult(BaseModel):
    """What happened to a single message during one batch pass."""

    message_id: str
    sink: ResolvedSink
    outcome: MessageOutcome
    error: str = ""


class BatchResult(BaseModel):
    """Observability record for a whole batch. Never used to signal failure."""

    received: int = 0
    results: list[MessageResult] = Field(default_factory=list)

    @property
    def deleted(self) -> int:
        return sum(1 for r in self.results if r.outcome is MessageOutcome.DELETED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.outcome is not MessageOutcome.DELETED)

    def outcome_for(self, message_id: str) -> MessageOutcome | None:
        for r in self.results:
            if r.message_id == message_id:
                return r.outcome
        return None

    def summary(self) -> dict[str, Any]:
        return {
            "received": self.received,
            "deleted": self.deleted,
            "failed": self.failed,
            "failures": [
                {"message_id": r.message_id, "outcome": r.outcome.value, "error": r.error}
                for r in self.results
                if r.outcome is not MessageOutcome.DELETED
            ],
        }
