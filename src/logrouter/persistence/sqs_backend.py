"""SQS backend implementing IQueueClient."""

from __future__ import annotations

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from logrouter.core.exceptions import QueueServiceError
from logrouter.models.message import AttributeValue

# Query-protocol and JSON-protocol spellings of the same error.
_MISSING_QUEUE_CODES = ("AWS.SimpleQueueService.NonExistentQueue", "QueueDoesNotExist")


def _wire_attribute(value: AttributeValue) -> dict:
    if value.is_binary:
        return {"DataType": value.data_type, "BinaryValue": value.binary_value or b""}
    return {"DataType": value.data_type, "StringValue": value.string_value or ""}


def _is_missing_queue(exc: ClientError) -> bool:
    code = exc.response.get("Error", {}).get("Code", "")
    return any(code.endswith(c) for c in _MISSING_QUEUE_CODES)


class SQSQueueClient:
    """Production IQueueClient backed by SQS."""

    def __init__(self, region: str = "us-east-1", endpoint_url: str | None = None) -> None:
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("sqs", **kwargs)

    def resolve_address(self, name: str) -> str | None:
        """Queue URL for ``name``, or None when no such queue exists."""
        try:
            resp = self._client.get_queue_url(QueueName=name)
        except ClientError as exc:
            if _is_missing_queue(exc):
                return None
            raise QueueServiceError(f"SQS GetQueueUrl failed for {name!r}: {exc}") from exc
        except BotoCoreError as exc:
            raise QueueServiceError(f"SQS GetQueueUrl failed for {name!r}: {exc}") from exc
        return resp.get("QueueUrl") or None

    def send(
        self,
        address: str,
        body: str,
        attributes: dict[str, AttributeValue],
        *,
        group_id: str | None = None,
        deduplication_id: str | None = None,
    ) -> None:
        params: dict = {
            "QueueUrl": address,
            "MessageBody": body,
            "MessageAttributes": {
                name: _wire_attribute(value) for name, value in attributes.items()
            },
        }
        if group_id:
            params["MessageGroupId"] = group_id
        if deduplication_id:
            params["MessageDeduplicationId"] = deduplication_id
        try:
            self._client.send_message(**params)
        except (ClientError, BotoCoreError) as exc:
            raise QueueServiceError(f"SQS SendMessage to {address} failed: {exc}") from exc

    def delete(self, address: str, receipt_handle: str) -> None:
        try:
            self._client.delete_message(QueueUrl=address, ReceiptHandle=receipt_handle)
        except (ClientError, BotoCoreError) as exc:
            raise QueueServiceError(f"SQS DeleteMessage on {address} failed: {exc}") from exc
