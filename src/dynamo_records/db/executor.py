from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from dynamo_records.db.codec import to_attribute_value, to_item
from dynamo_records.logging.logger import get_logger
from dynamo_records.planning.planner import PlannedQuery

log = get_logger("db.executor")


@dataclass(frozen=True)
class Page:
    # Items and cursor stay in DynamoDB wire form until the mapper decodes them
    items: List[Dict[str, Any]] = field(default_factory=list)
    next_cursor: Optional[Dict[str, Any]] = None


@dataclass
class QueryExecutor:
    client: Any

    def build_request(
        self,
        table_name: str,
        plan: PlannedQuery,
        limit: int,
        start_key: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        req: Dict[str, Any] = {
            "TableName": table_name,
            "KeyConditionExpression": plan.key_condition_expression,
            "FilterExpression": plan.filter_expression,
            "ExpressionAttributeNames": dict(plan.name_aliases),
            "ExpressionAttributeValues": {ph: to_attribute_value(v) for ph, v in plan.bindings.items()},
            "Limit": limit,
        }
        if plan.uses_index and plan.index_name:
            req["IndexName"] = plan.index_name
        if start_key:
            req["ExclusiveStartKey"] = to_item(start_key)
        return req

    def fetch_page(
        self,
        table_name: str,
        plan: PlannedQuery,
        limit: int,
        start_key: Optional[Mapping[str, Any]] = None,
    ) -> Page:
        """Run exactly one Query call and return that page.

        No pagination loop and no retries here; store errors propagate as-is.
        """
        req = self.build_request(table_name, plan, limit, start_key)

        log.info(
            "DynamoDB query",
            extra={
                "table": table_name,
                "index": req.get("IndexName"),
                "key_condition": req["KeyConditionExpression"],
                "filter": req["FilterExpression"],
                "limit": limit,
                "resumed": "ExclusiveStartKey" in req,
            },
        )

        resp = self.client.query(**req)
        return Page(items=list(resp.get("Items") or []), next_cursor=resp.get("LastEvaluatedKey") or None)
