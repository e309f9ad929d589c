from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from dynamo_records.exceptions.errors import InvalidContextError


@dataclass(frozen=True)
class SoftDeleteRule:
    """Marker attribute plus the value that means "not deleted".

    The sentinel defaults to ``None`` which serialises to DynamoDB ``NULL``.
    """

    attribute: str = "deleted_at"
    sentinel: Any = None


@dataclass(frozen=True)
class SchemaContext:
    table_name: str
    primary_key: str
    # attribute name -> index name
    index_map: Dict[str, str] = field(default_factory=dict)
    soft_delete: SoftDeleteRule = field(default_factory=SoftDeleteRule)

    def __post_init__(self) -> None:
        if not (self.table_name or "").strip():
            raise InvalidContextError("table_name is required in the handler context")
        if not (self.primary_key or "").strip():
            raise InvalidContextError("primary_key is required in the handler context")
        if not (self.soft_delete.attribute or "").strip():
            raise InvalidContextError("soft delete attribute must not be empty")

    @classmethod
    def from_context_data(
        cls,
        data: Optional[Mapping[str, Any]],
        soft_delete: Optional[SoftDeleteRule] = None,
    ) -> "SchemaContext":
        """Build from the host-supplied context data.

        Expected keys: table_name, primary_key, index_data, token_claims (ignored)
        and optionally soft_delete_attribute.
        """
        if not isinstance(data, Mapping):
            raise InvalidContextError("handler context data must be an object")

        index_data = data.get("index_data") or {}
        if not isinstance(index_data, Mapping):
            raise InvalidContextError("index_data must map attribute names to index names")

        index_map: Dict[str, str] = {}
        for attr, index_name in index_data.items():
            if not isinstance(index_name, str) or not index_name.strip():
                raise InvalidContextError(f"index_data[{attr!r}] must be a non-empty index name")
            index_map[str(attr)] = index_name

        rule = soft_delete or SoftDeleteRule()
        override = data.get("soft_delete_attribute")
        if override:
            rule = SoftDeleteRule(attribute=str(override), sentinel=rule.sentinel)

        return cls(
            table_name=str(data.get("table_name") or ""),
            primary_key=str(data.get("primary_key") or ""),
            index_map=index_map,
            soft_delete=rule,
        )
