"""S3 object storage backend implementing IObjectStore."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from logrouter.core.exceptions import StorageWriteFailedError

PARQUET_CONTENT_TYPE = "application/vnd.apache.parquet"


class S3ObjectStore:
    """Production IObjectStore backed by S3. One client per region, created on first use."""

    def __init__(self, endpoint_url: str | None = None) -> None:
        self._endpoint_url = endpoint_url
        self._clients: dict[str, Any] = {}

    def _client(self, region: str):
        if region not in self._clients:
            kwargs: dict = {"region_name": region}
            if self._endpoint_url:
                kwargs["endpoint_url"] = self._endpoint_url
            self._clients[region] = boto3.client("s3", **kwargs)
        return self._clients[region]

    def put(self, region: str, bucket: str, key: str, data: bytes) -> str:
        try:
            self._client(region).put_object(
                Bucket=bucket,
                Key=key,
                Body=data,
                ACL="private",
                ContentLength=len(data),
                ContentType=PARQUET_CONTENT_TYPE,
            )
            return key
        except (ClientError, BotoCoreError) as exc:
            raise StorageWriteFailedError(f"S3 write failed for s3://{bucket}/{key}: {exc}") from exc
