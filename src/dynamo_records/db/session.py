from __future__ import annotations

from typing import Any, Dict

import boto3
from botocore.config import Config

from dynamo_records.config.settings import Settings
from dynamo_records.logging.logger import get_logger

log = get_logger("db.session")


def client_config(settings: Settings) -> Config:
    """botocore client config carrying the store retry policy.

    The executor never retries on its own; every retry is the client's.
    ``store_max_attempts=1`` disables retries entirely.
    """
    return Config(
        retries={"max_attempts": settings.store_max_attempts, "mode": settings.store_retry_mode},
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
    )


def connect(settings: Settings) -> Any:
    """Build a DynamoDB client from settings.

    The client is thread-safe and meant to be reused across invocations.
    """
    session = boto3.session.Session(
        profile_name=settings.aws_profile or None,
        region_name=settings.aws_region or None,
    )
    kwargs: Dict[str, Any] = {"config": client_config(settings)}
    if settings.dynamodb_endpoint_url:
        kwargs["endpoint_url"] = settings.dynamodb_endpoint_url

    log.info(
        "DynamoDB client created",
        extra={
            "region": settings.aws_region,
            "endpoint": settings.dynamodb_endpoint_url,
            "max_attempts": settings.store_max_attempts,
            "retry_mode": settings.store_retry_mode,
        },
    )
    return session.client("dynamodb", **kwargs)
