from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from dynamo_records.exceptions.errors import InvalidInputError


@dataclass(frozen=True)
class FilterRequest:
    limit: int
    filter: Dict[str, Any] = field(default_factory=dict)
    # Opaque cursor from a previous page (pagination.last_record_keys)
    start_key: Optional[Dict[str, Any]] = None

    @classmethod
    def from_input(cls, payload: Optional[Mapping[str, Any]]) -> "FilterRequest":
        if not isinstance(payload, Mapping):
            raise InvalidInputError("input must be an object")

        limit = payload.get("limit")
        # bool is an int subclass; reject it explicitly
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise InvalidInputError(f"limit must be a positive integer, got {limit!r}")

        flt = payload.get("filter")
        if flt is None:
            flt = {}
        if not isinstance(flt, Mapping):
            raise InvalidInputError("filter must map attribute names to values")

        start_key = payload.get("start_key")
        if start_key is not None:
            if not isinstance(start_key, Mapping):
                raise InvalidInputError("start_key must be an object")
            start_key = dict(start_key)

        return cls(
            limit=limit,
            filter={str(k): v for k, v in flt.items()},
            start_key=start_key or None,
        )
