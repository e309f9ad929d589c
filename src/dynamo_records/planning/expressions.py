"""Tiny expression tree for DynamoDB condition text.

Only the shapes the planner emits are modelled: equality between an aliased
attribute and a value placeholder, the soft-delete exclusion and an AND of
those. Rendering is deterministic so the same tree always yields the same text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union
import re

_TOKEN_RE = re.compile(r"[^A-Za-z0-9_]")


def attribute_token(attribute: str) -> str:
    """Normalise an attribute name to the characters DynamoDB allows in placeholders."""
    return _TOKEN_RE.sub("_", attribute)


def alias_for(attribute: str) -> str:
    return f"#{attribute_token(attribute)}_key"


def placeholder_for(attribute: str) -> str:
    return f":{attribute_token(attribute)}_val"


@dataclass(frozen=True)
class Equals:
    attribute: str
    alias: str
    placeholder: str

    def render(self) -> str:
        return f"{self.alias} = {self.placeholder}"


@dataclass(frozen=True)
class SoftDeleteExclusion:
    """Live when the marker is absent or equal to the sentinel placeholder."""

    attribute: str
    alias: str
    placeholder: str

    def render(self) -> str:
        return f"(attribute_not_exists({self.alias}) OR {self.alias} = {self.placeholder})"


@dataclass(frozen=True)
class And:
    parts: Tuple["Node", ...]

    def render(self) -> str:
        if not self.parts:
            raise ValueError("And needs at least one operand")
        return " AND ".join(p.render() for p in self.parts)


Node = Union[Equals, SoftDeleteExclusion, And]
