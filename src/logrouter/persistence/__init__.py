"""AWS collaborator backends behind Protocol interfaces."""

from __future__ import annotations

from logrouter.core.config import RouterSettings
from logrouter.persistence.dynamodb_backend import DynamoDBApplicationTable
from logrouter.persistence.s3_backend import S3ObjectStore
from logrouter.persistence.sqs_backend import SQSQueueClient


def create_persistence(settings: RouterSettings):
    """Create wired-up collaborator backends from settings.

    Returns:
        Tuple of (application_table, queue_client, object_store).
    """
    application_table = DynamoDBApplicationTable(
        table_name=settings.dynamodb.table_name,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
    )

    queue_client = SQSQueueClient(
        region=settings.sqs.region,
        endpoint_url=settings.sqs.endpoint_url,
    )

    object_store = S3ObjectStore(endpoint_url=settings.s3.endpoint_url)

    return application_table, queue_client, object_store
