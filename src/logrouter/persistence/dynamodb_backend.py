"""DynamoDB backend implementing IApplicationTable."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from logrouter.core.exceptions import ApplicationLookupError
from logrouter.models.message import ApplicationRecord


class DynamoDBApplicationTable:
    """Production IApplicationTable backed by the ``application`` DynamoDB table.

    Key schema: ``application`` (HASH) + ``version`` (RANGE).
    """

    def __init__(self, table_name: str = "application", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_name = table_name
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    def _get_item(self, application: str, version: str) -> dict[str, Any] | None:
        tbl = self._ddb.Table(self._table_name)
        resp = tbl.get_item(Key={"application": application, "version": version})
        return resp.get("Item")

    def get(self, application: str, version: str) -> ApplicationRecord | None:
        try:
            item = self._get_item(application, version)
        except (ClientError, BotoCoreError) as exc:
            raise ApplicationLookupError(
                f"DynamoDB get failed for application={application!r}, version={version!r}: {exc}"
            ) from exc
        if item is None:
            return None
        try:
            return ApplicationRecord.model_validate(item)
        except ValidationError as exc:
            raise ApplicationLookupError(
                f"Unable to unmarshal application item {application!r}/{version!r}: {exc}"
            ) from exc
