"""Provision the application lookup table and inbound queue, then seed routing rows.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
    python scripts/seed_dynamodb.py --routes routes.json
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import boto3

DEFAULT_TABLE = "application"
DEFAULT_INBOUND_QUEUE = "logging_queue.fifo"

# (application, version) -> sink name. "S3QUEUE" routes to the object store.
SAMPLE_ROUTES: list[dict[str, str]] = [
    {"application": "fred", "version": "1", "loghandler": "procA"},
    {"application": "fred", "version": "2", "loghandler": "S3QUEUE"},
    {"application": "audit", "version": "1", "loghandler": ""},
]


def create_table(ddb: Any, name: str = DEFAULT_TABLE) -> bool:
    """Create the lookup table. Returns False if it already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])
    if name in existing:
        print(f"  Table {name} already exists, skipping")
        return False
    client.create_table(
        TableName=name,
        KeySchema=[
            {"AttributeName": "application", "KeyType": "HASH"},
            {"AttributeName": "version", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "application", "AttributeType": "S"},
            {"AttributeName": "version", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    print(f"  Created table {name}")
    return True


def create_queue(sqs: Any, name: str = DEFAULT_INBOUND_QUEUE) -> str:
    """Create a queue (FIFO when the name ends in .fifo). Idempotent; returns its URL."""
    attributes: dict[str, str] = {}
    if name.endswith(".fifo"):
        attributes = {"FifoQueue": "true", "ContentBasedDeduplication": "true"}
    url = sqs.create_queue(QueueName=name, Attributes=attributes)["QueueUrl"]
    print(f"  Queue {name} at {url}")
    return url


def load_routes(path: Path | None) -> list[dict[str, str]]:
    if path is None:
        return SAMPLE_ROUTES
    data = json.loads(path.read_text())
    return [
        {"application": r["application"], "version": str(r["version"]),
         "loghandler": r.get("loghandler", "")}
        for r in data
    ]


def seed_routes(ddb: Any, routes: list[dict[str, str]], name: str = DEFAULT_TABLE) -> int:
    tbl = ddb.Table(name)
    with tbl.batch_writer() as batch:
        for route in routes:
            batch.put_item(Item=route)
    print(f"  Seeded {len(routes)} application routes")
    return len(routes)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Provision logrouter lookup table and queues")
    parser.add_argument("--endpoint-url", default=None, help="AWS endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--table", default=DEFAULT_TABLE, help="Lookup table name")
    parser.add_argument("--inbound-queue", default=DEFAULT_INBOUND_QUEUE, help="Inbound queue name")
    parser.add_argument("--queue", action="append", default=[], help="Extra downstream queue to create")
    parser.add_argument("--routes", type=Path, default=None, help="JSON file of application routes")
    args = parser.parse_args(argv)

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)
    sqs = boto3.client("sqs", **kwargs)

    print("Creating table...")
    create_table(ddb, args.table)

    print("Creating queues...")
    for name in [args.inbound_queue, *args.queue]:
        create_queue(sqs, name)

    print("Seeding routes...")
    seed_routes(ddb, load_routes(args.routes), args.table)

    print("Done!")


if __name__ == "__main__":
    main()
