"""Tests for queue forwarding and object-store delivery."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from logrouter.core.exceptions import (
    AttributeNotFoundError,
    DeliveryFailedError,
    QueueAddressNotFoundError,
    StorageWriteFailedError,
)
from logrouter.models.message import AttributeValue, InboundMessage
from logrouter.models.sink import DEFAULT_SINK, QueueSink
from logrouter.routing.dispatcher import DeliveryDispatcher, fifo_group_id, object_key
from logrouter.routing.encoder import decode
from tests.fakes import (
    BUCKET,
    FULL_ATTRIBUTES,
    MemoryObjectStore,
    MemoryQueueClient,
    make_message,
    make_settings,
    string_attributes,
)

NOW = datetime(2024, 3, 5, 23, 59, tzinfo=timezone.utc)


@pytest.fixture
def queues():
    return MemoryQueueClient()


@pytest.fixture
def store():
    return MemoryObjectStore()


@pytest.fixture
def dispatcher(queues, store):
    return DeliveryDispatcher(
        settings=make_settings(region="eu-west-1"),
        queues=queues,
        object_store=store,
        clock=lambda: NOW,
    )


class TestObjectKey:
    def test_partitions_by_unpadded_date(self):
        assert object_key("logs", "m-1", NOW) == "logs/year=2024/month=3/day=5/m-1.parquet"

    def test_strips_trailing_slash(self):
        assert object_key("archive/logs/", "m-1", NOW) == "archive/logs/year=2024/month=3/day=5/m-1.parquet"

    def test_two_digit_month_and_day(self):
        when = datetime(2025, 12, 31, tzinfo=timezone.utc)
        assert object_key("p", "x", when) == "p/year=2025/month=12/day=31/x.parquet"


class TestDeliverToQueue:
    def test_forwards_body_and_all_attributes_unchanged(self, dispatcher, queues):
        queues.add_queue("procA")
        attrs = {**FULL_ATTRIBUTES, "CUSTOM": "kept"}
        dispatcher.deliver(QueueSink(name="procA"), make_message(attributes=attrs, body="payload"))

        [sent] = queues.sent_to("procA")
        assert sent["body"] == "payload"
        assert sent["attributes"] == string_attributes(attrs)
        assert sent["group_id"] is None

    def test_unknown_queue(self, dispatcher):
        with pytest.raises(QueueAddressNotFoundError) as info:
            dispatcher.deliver_to_queue("ghost", make_message(attributes=FULL_ATTRIBUTES))
        assert info.value.queue_name == "ghost"

    def test_send_failure(self, dispatcher, queues):
        url = queues.add_queue("procA")
        queues.failing_sends.add(url)
        with pytest.raises(DeliveryFailedError):
            dispatcher.deliver_to_queue("procA", make_message(attributes=FULL_ATTRIBUTES))

    def test_fifo_queue_gets_group_and_dedup_ids(self, dispatcher, queues):
        queues.add_queue("procB.fifo")
        dispatcher.deliver_to_queue("procB.fifo", make_message("m-9", FULL_ATTRIBUTES))
        [sent] = queues.sent
        assert sent["group_id"] == "fred"
        assert sent["deduplication_id"] == "m-9"
        assert sent["attributes"] == string_attributes(FULL_ATTRIBUTES)

    def test_fifo_group_defaults_without_application(self, dispatcher, queues):
        queues.add_queue("procB.fifo")
        dispatcher.deliver_to_queue("procB.fifo", make_message(attributes=None))
        assert queues.sent[0]["group_id"] == "logrouter"
        assert queues.sent[0]["attributes"] == {}

    def test_binary_attribute_forwarded_with_its_type(self, dispatcher, queues):
        queues.add_queue("procA")
        message = InboundMessage.from_sqs_record({
            "messageId": "m-2", "receiptHandle": "rh-2", "body": "b",
            "messageAttributes": {
                "APPLICATION_NAME": {"stringValue": "fred", "dataType": "String"},
                "PAYLOAD": {"binaryValue": "AAEC", "dataType": "Binary"},
                "RETRIES": {"stringValue": "3", "dataType": "Number"},
            },
        })
        dispatcher.deliver_to_queue("procA", message)

        [sent] = queues.sent_to("procA")
        assert sent["attributes"] == {
            "APPLICATION_NAME": AttributeValue(string_value="fred"),
            "PAYLOAD": AttributeValue(data_type="Binary", binary_value=b"\x00\x01\x02"),
            "RETRIES": AttributeValue(data_type="Number", string_value="3"),
        }

    def test_fifo_group_id_replaces_disallowed_characters(self, dispatcher, queues):
        queues.add_queue("procB.fifo")
        attrs = {**FULL_ATTRIBUTES, "APPLICATION_NAME": "order service"}
        dispatcher.deliver_to_queue("procB.fifo", make_message(attributes=attrs))
        assert queues.sent[0]["group_id"] == "order_service"

    def test_fifo_group_id_is_truncated(self, dispatcher, queues):
        queues.add_queue("procB.fifo")
        attrs = {**FULL_ATTRIBUTES, "APPLICATION_NAME": "a" * 200}
        dispatcher.deliver_to_queue("procB.fifo", make_message(attributes=attrs))
        assert queues.sent[0]["group_id"] == "a" * 128


class TestFifoGroupId:
    def test_punctuation_is_kept(self):
        assert fifo_group_id("svc-A.b/c:1") == "svc-A.b/c:1"

    def test_non_ascii_is_replaced(self):
        assert fifo_group_id("café\tlog") == "caf__log"

    def test_missing_application_uses_default(self):
        assert fifo_group_id(None) == "logrouter"
        assert fifo_group_id("") == "logrouter"


class TestDeliverToObjectStore:
    def test_writes_one_parquet_object(self, dispatcher, store):
        dispatcher.deliver(DEFAULT_SINK, make_message("m-1", FULL_ATTRIBUTES, body="oops"))

        key = "logs/year=2024/month=3/day=5/m-1.parquet"
        assert list(store.objects) == [(BUCKET, key)]
        assert store.regions == ["eu-west-1"]
        record = decode(store.objects[(BUCKET, key)])
        assert record.message_id == "m-1"
        assert record.message == "oops"

    def test_encode_failure_writes_nothing(self, dispatcher, store):
        attrs = {"APPLICATION_NAME": "fred", "APPLICATION_VERS": "1"}
        with pytest.raises(AttributeNotFoundError):
            dispatcher.deliver(DEFAULT_SINK, make_message(attributes=attrs))
        assert store.objects == {}

    def test_write_failure(self, queues):
        dispatcher = DeliveryDispatcher(
            settings=make_settings(), queues=queues,
            object_store=MemoryObjectStore(fail=True), clock=lambda: NOW,
        )
        with pytest.raises(StorageWriteFailedError):
            dispatcher.deliver_to_object_store(make_message(attributes=FULL_ATTRIBUTES))
