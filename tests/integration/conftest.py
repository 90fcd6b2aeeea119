"""Integration test fixtures: LocalStack DynamoDB, SQS, S3."""

from __future__ import annotations

import os
import sys

import boto3
import pytest

# Default LocalStack endpoint
LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
TABLE = "application-inttest"
INBOUND_QUEUE = "logging-inttest"
BUCKET = "logrouter-inttest"
REGION = "us-east-1"


def _localstack_available() -> bool:
    """Check if LocalStack is reachable."""
    try:
        client = boto3.client("dynamodb", region_name=REGION, endpoint_url=LOCALSTACK_URL)
        client.list_tables()
        return True
    except Exception:
        return False


skip_no_localstack = pytest.mark.skipif(
    not _localstack_available(),
    reason="LocalStack not available",
)


@pytest.fixture(scope="session")
def localstack_ddb():
    """DynamoDB resource pointing at LocalStack."""
    return boto3.resource("dynamodb", region_name=REGION, endpoint_url=LOCALSTACK_URL)


@pytest.fixture(scope="session")
def localstack_sqs():
    """SQS client pointing at LocalStack."""
    return boto3.client("sqs", region_name=REGION, endpoint_url=LOCALSTACK_URL)


@pytest.fixture(scope="session")
def localstack_s3():
    """S3 client pointing at LocalStack."""
    client = boto3.client("s3", region_name=REGION, endpoint_url=LOCALSTACK_URL)
    client.create_bucket(Bucket=BUCKET)
    return client


@pytest.fixture(scope="session")
def seeded_table(localstack_ddb, localstack_sqs):
    """Create the lookup table and queues, and seed sample routes, via the seed script."""
    sys.path.insert(0, str(os.path.join(os.path.dirname(__file__), "..", "..", "scripts")))
    from seed_dynamodb import SAMPLE_ROUTES, create_queue, create_table, seed_routes

    create_table(localstack_ddb, TABLE)
    seed_routes(localstack_ddb, SAMPLE_ROUTES, TABLE)
    create_queue(localstack_sqs, INBOUND_QUEUE)
    create_queue(localstack_sqs, "procA")
    return TABLE
