"""Router configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from logrouter.core.exceptions import ConfigurationError


class S3Config(BaseSettings):
    """Object-store fallback sink configuration. Bucket, path and region are required."""

    model_config = {"env_prefix": "LOGROUTER_S3_"}

    bucket: str = Field(min_length=1)
    path: str = Field(min_length=1)
    region: str = Field(min_length=1)
    endpoint_url: str | None = None  # LocalStack override


class DynamoDBConfig(BaseSettings):
    """Application lookup table configuration."""

    model_config = {"env_prefix": "LOGROUTER_DYNAMO_"}

    table_name: str = "application"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class SQSConfig(BaseSettings):
    """SQS configuration. ``inbound_queue_name`` is the queue messages are deleted from."""

    model_config = {"env_prefix": "LOGROUTER_SQS_"}

    inbound_queue_name: str = "logging_queue.fifo"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RouterSettings(BaseSettings):
    """Root settings aggregating all sub-configs."""

    model_config = {"env_prefix": "LOGROUTER_"}

    log_level: str = Field(min_length=1)

    s3: S3Config = Field(default_factory=S3Config)
    dynamodb: DynamoDBConfig = Field(default_factory=DynamoDBConfig)
    sqs: SQSConfig = Field(default_factory=SQSConfig)


def load_settings() -> RouterSettings:
    """Build settings from the environment.

    Raises:
        ConfigurationError: a required setting is missing or empty.
    """
    try:
        return RouterSettings()
    except ValidationError as exc:
        missing = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise ConfigurationError(missing) from exc
