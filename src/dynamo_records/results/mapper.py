from __future__ import annotations

from typing import Any, Dict, List

from dynamo_records.db.codec import from_item
from dynamo_records.db.executor import Page


class ResultMapper:
    def records(self, page: Page) -> List[Dict[str, Any]]:
        # Decode everything before building the envelope: one bad item fails the call.
        return [from_item(item) for item in page.items]

    def to_response(self, page: Page) -> Dict[str, Any]:
        records = self.records(page)
        pagination: Dict[str, Any] = {"count": len(records)}
        # Absent (not null) when there is no further page
        if page.next_cursor:
            pagination["last_record_keys"] = from_item(page.next_cursor)
        return {
            "message": f"Successfully retrieved {len(records)} records",
            "data": records,
            "pagination": pagination,
        }
