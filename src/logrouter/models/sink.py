"""Resolved sink: a closed two-variant choice between a named queue and the object store."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# Lookup table value that selects the object store instead of a real queue.
OBJECT_STORE_SINK_NAME = "S3QUEUE"


class QueueSink(BaseModel):
    """Forward the message to the named downstream queue."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["queue"] = "queue"
    name: str = Field(min_length=1)

    def __str__(self) -> str:
        return f"queue:{self.name}"


class ObjectStoreSink(BaseModel):
    """Convert the message to a columnar record and write it to the object store."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["object_store"] = "object_store"

    def __str__(self) -> str:
        return "object_store"


ResolvedSink = Annotated[Union[QueueSink, ObjectStoreSink], Field(discriminator="kind")]

DEFAULT_SINK = ObjectStoreSink()
