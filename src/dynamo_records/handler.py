from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from dynamo_records.config.settings import Settings
from dynamo_records.db.executor import QueryExecutor
from dynamo_records.exceptions.errors import NoSdkConfigError
from dynamo_records.logging.logger import get_logger
from dynamo_records.planning.planner import FilterPlanner
from dynamo_records.results.mapper import ResultMapper
from dynamo_records.schema.context import SchemaContext, SoftDeleteRule
from dynamo_records.schema.request import FilterRequest

log = get_logger("handler")


@dataclass
class RequestContext:
    """What the host hands us per call.

    ``data`` holds table_name / primary_key / index_data / token_claims;
    ``store_client`` is a boto3 DynamoDB client, or None when the host has no
    AWS session for this call.
    """

    data: Dict[str, Any] = field(default_factory=dict)
    store_client: Optional[Any] = None
    request_id: Optional[str] = None


def get_records(
    ctx: RequestContext,
    payload: Mapping[str, Any],
    *,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """Fetch one page of records matching the equality filters in ``payload``.

    Raises a HandlerError subclass for planning/precondition/validation
    failures; store and decoding errors propagate unchanged.
    """
    soft_delete = SoftDeleteRule(attribute=settings.soft_delete_attribute) if settings else None
    schema = SchemaContext.from_context_data(ctx.data, soft_delete=soft_delete)
    request = FilterRequest.from_input(payload)

    if ctx.store_client is None:
        raise NoSdkConfigError()

    plan = FilterPlanner(schema).plan(request.filter)
    page = QueryExecutor(ctx.store_client).fetch_page(
        schema.table_name, plan, request.limit, request.start_key
    )
    response = ResultMapper().to_response(page)

    log.info(
        "Records retrieved",
        extra={
            "request_id": ctx.request_id,
            "table": schema.table_name,
            "key_attribute": plan.key_attribute,
            "index": plan.index_name,
            "count": response["pagination"]["count"],
            "has_more": "last_record_keys" in response["pagination"],
        },
    )
    return response
