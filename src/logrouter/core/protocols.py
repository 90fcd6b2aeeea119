"""Protocol interfaces for the external collaborators.

The routing layer talks to the lookup table, the queue system and the object
store only through these Protocols. Structural typing, no inheritance required.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from logrouter.models.message import ApplicationRecord, AttributeValue


# ---------------------------------------------------------------------------
# Lookup table
# ---------------------------------------------------------------------------

@runtime_checkable
class IApplicationTable(Protocol):
    """(application, version) -> configured sink name.

    Raises ApplicationLookupError on transport or deserialization failure.
    """

    def get(self, application: str, version: str) -> ApplicationRecord | None: ...


# ---------------------------------------------------------------------------
# Queue system
# ---------------------------------------------------------------------------

@runtime_checkable
class IQueueClient(Protocol):
    """SQS-compatible queue interface. Transport failures raise QueueServiceError."""

    def resolve_address(self, name: str) -> str | None: ...

    def send(
        self,
        address: str,
        body: str,
        attributes: dict[str, AttributeValue],
        *,
        group_id: str | None = None,
        deduplication_id: str | None = None,
    ) -> None: ...

    def delete(self, address: str, receipt_handle: str) -> None: ...


# ---------------------------------------------------------------------------
# Object store
# ---------------------------------------------------------------------------

@runtime_checkable
class IObjectStore(Protocol):
    """S3-compatible write interface. Failures raise StorageWriteFailedError."""

    def put(self, region: str, bucket: str, key: str, data: bytes) -> str: ...
