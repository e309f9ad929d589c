from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from dynamo_records.exceptions.errors import AmbiguousFilterAttributeError, NoKeyConditionError
from dynamo_records.logging.logger import get_logger
from dynamo_records.planning.expressions import (
    And,
    Equals,
    Node,
    SoftDeleteExclusion,
    alias_for,
    attribute_token,
    placeholder_for,
)
from dynamo_records.schema.context import SchemaContext

log = get_logger("planning.planner")


@dataclass(frozen=True)
class PlannedQuery:
    key_attribute: str
    uses_index: bool
    index_name: Optional[str]
    key_condition: Equals
    filter_condition: Node
    # placeholder -> python value (serialised by the executor)
    bindings: Dict[str, Any] = field(default_factory=dict)
    # alias -> attribute name
    name_aliases: Dict[str, str] = field(default_factory=dict)

    @property
    def key_condition_expression(self) -> str:
        return self.key_condition.render()

    @property
    def filter_expression(self) -> str:
        return self.filter_condition.render()


class _Names:
    """Hands out alias/placeholder pairs and refuses token collisions."""

    def __init__(self) -> None:
        self._by_token: Dict[str, str] = {}
        self.aliases: Dict[str, str] = {}
        self.bindings: Dict[str, Any] = {}

    def claim(self, attribute: str) -> Tuple[str, str]:
        token = attribute_token(attribute)
        owner = self._by_token.get(token)
        if owner is not None and owner != attribute:
            raise AmbiguousFilterAttributeError(
                f"Filter attributes {owner!r} and {attribute!r} both map to placeholder "
                f"{placeholder_for(attribute)!r}; rename one of them"
            )
        self._by_token[token] = attribute
        alias = alias_for(attribute)
        self.aliases[alias] = attribute
        return alias, placeholder_for(attribute)

    def claim_reserved(self, attribute: str) -> Tuple[str, str]:
        """Claim a name the planner binds itself; any prior claim is a conflict."""
        owner = self._by_token.get(attribute_token(attribute))
        if owner is not None:
            raise AmbiguousFilterAttributeError(
                f"Filter attribute {owner!r} clashes with the soft-delete marker {attribute!r}; "
                f"it cannot be filtered on directly"
            )
        return self.claim(attribute)

    def bind(self, placeholder: str, value: Any) -> None:
        self.bindings[placeholder] = value


class FilterPlanner:
    def __init__(self, schema: SchemaContext):
        self.schema = schema

    def select_key(self, filter: Mapping[str, Any]) -> Tuple[str, Optional[str]]:
        """Return (key attribute, index name or None).

        The primary key always wins. Otherwise indexed attributes are tried in
        lexicographic order so the choice never depends on mapping order.
        """
        if self.schema.primary_key in filter:
            return self.schema.primary_key, None
        for attribute in sorted(self.schema.index_map):
            if attribute in filter:
                return attribute, self.schema.index_map[attribute]
        raise NoKeyConditionError()

    def plan(self, filter: Mapping[str, Any]) -> PlannedQuery:
        key_attribute, index_name = self.select_key(filter)

        names = _Names()
        rule = self.schema.soft_delete

        # Claim every name up front so a collision fails before anything is bound.
        key_alias, key_ph = names.claim(key_attribute)
        residual = {k: v for k, v in filter.items() if k != key_attribute}
        claimed: List[Tuple[str, str, str]] = []
        for attribute in sorted(residual):
            alias, ph = names.claim(attribute)
            claimed.append((attribute, alias, ph))
        sd_alias, sd_ph = names.claim_reserved(rule.attribute)

        names.bind(key_ph, filter[key_attribute])
        key_condition = Equals(attribute=key_attribute, alias=key_alias, placeholder=key_ph)

        parts: List[Node] = []
        for attribute, alias, ph in claimed:
            names.bind(ph, residual[attribute])
            parts.append(Equals(attribute=attribute, alias=alias, placeholder=ph))

        names.bind(sd_ph, rule.sentinel)
        parts.append(SoftDeleteExclusion(attribute=rule.attribute, alias=sd_alias, placeholder=sd_ph))

        log.debug(
            "Planned query",
            extra={
                "table": self.schema.table_name,
                "key_attribute": key_attribute,
                "index": index_name,
                "residual_filters": len(claimed),
            },
        )

        return PlannedQuery(
            key_attribute=key_attribute,
            uses_index=index_name is not None,
            index_name=index_name,
            key_condition=key_condition,
            filter_condition=And(parts=tuple(parts)),
            bindings=names.bindings,
            name_aliases=names.aliases,
        )


def plan_query(schema: SchemaContext, filter: Mapping[str, Any]) -> PlannedQuery:
    return FilterPlanner(schema).plan(filter)
