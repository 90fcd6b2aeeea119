"""Parquet encoding of a single log message for the object-store sink."""

from __future__ import annotations

import pyarrow as pa
import pyarrow.parquet as pq

from logrouter.core.exceptions import EncodingError
from logrouter.models.message import COLUMNS, ColumnarRecord, InboundMessage
from logrouter.routing.attributes import routing_attributes

COMPRESSION = "snappy"

SCHEMA = pa.schema([pa.field(name, pa.string(), nullable=False) for name in COLUMNS])


def encode(message: InboundMessage) -> tuple[bytes, int]:
    """Convert ``message`` into a one-row Parquet file held in memory.

    Fails closed: a missing or empty required attribute raises the matching
    MessageAttributeError before anything is written.

    Returns:
        Tuple of (buffer, size).
    """
    record = ColumnarRecord.from_message(message, routing_attributes(message))
    try:
        table = pa.Table.from_pylist([record.to_row()], schema=SCHEMA)
        sink = pa.BufferOutputStream()
        pq.write_table(table, sink, compression=COMPRESSION)
        data = sink.getvalue().to_pybytes()
    except pa.ArrowException as exc:
        raise EncodingError(f"Parquet conversion failed for message {message.id}: {exc}") from exc
    return data, len(data)


def decode(data: bytes) -> ColumnarRecord:
    """Read back a buffer produced by :func:`encode`."""
    try:
        rows = pq.read_table(pa.BufferReader(data)).to_pylist()
    except pa.ArrowException as exc:
        raise EncodingError(f"Parquet read failed: {exc}") from exc
    if len(rows) != 1:
        raise EncodingError(f"Expected exactly one record, found {len(rows)}")
    return ColumnarRecord.model_validate(rows[0])
