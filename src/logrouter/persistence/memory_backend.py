"""In-memory backends for unit tests: dict-backed fakes."""

from __future__ import annotations

from typing import Any

from logrouter.core.exceptions import (
    ApplicationLookupError,
    QueueServiceError,
    StorageWriteFailedError,
)
from logrouter.models.message import ApplicationRecord, AttributeValue


class MemoryApplicationTable:
    """Dict-backed IApplicationTable for unit tests."""

    def __init__(self, fail: bool = False) -> None:
        self._records: dict[tuple[str, str], ApplicationRecord] = {}
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    def add(self, application: str, version: str, sink_name: str = "") -> None:
        self._records[(application, version)] = ApplicationRecord(
            application=application, version=version, sink_name=sink_name,
        )

    def get(self, application: str, version: str) -> ApplicationRecord | None:
        self.calls.append((application, version))
        if self.fail:
            raise ApplicationLookupError("lookup table unreachable")
        return self._records.get((application, version))


class MemoryQueueClient:
    """Dict-backed IQueueClient for unit tests. Queues are registered by name."""

    def __init__(self) -> None:
        self._urls: dict[str, str] = {}
        self.sent: list[dict[str, Any]] = []
        self.deleted: list[tuple[str, str]] = []
        self.failing_sends: set[str] = set()
        self.failing_deletes: set[str] = set()

    def add_queue(self, name: str) -> str:
        url = f"https://sqs.us-east-1.amazonaws.com/000000000000/{name}"
        self._urls[name] = url
        return url

    def resolve_address(self, name: str) -> str | None:
        return self._urls.get(name)

    def send(
        self,
        address: str,
        body: str,
        attributes: dict[str, AttributeValue],
        *,
        group_id: str | None = None,
        deduplication_id: str | None = None,
    ) -> None:
        if address in self.failing_sends:
            raise QueueServiceError(f"send to {address} refused")
        self.sent.append({
            "address": address,
            "body": body,
            "attributes": dict(attributes),
            "group_id": group_id,
            "deduplication_id": deduplication_id,
        })

    def delete(self, address: str, receipt_handle: str) -> None:
        if receipt_handle in self.failing_deletes:
            raise QueueServiceError(f"delete of {receipt_handle} refused")
        self.deleted.append((address, receipt_handle))

    def sent_to(self, name: str) -> list[dict[str, Any]]:
        url = self._urls.get(name)
        return [m for m in self.sent if m["address"] == url]


class MemoryObjectStore:
    """Dict-backed IObjectStore for unit tests."""

    def __init__(self, fail: bool = False) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.regions: list[str] = []
        self.fail = fail

    def put(self, region: str, bucket: str, key: str, data: bytes) -> str:
        if self.fail:
            raise StorageWriteFailedError(f"write to {bucket}/{key} refused")
        self.regions.append(region)
        self.objects[(bucket, key)] = data
        return key
