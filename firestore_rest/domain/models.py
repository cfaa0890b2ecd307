from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

# Tagged wire value, e.g. {"integerValue": "3"} or {"mapValue": {"fields": {...}}}.
WireValue = Dict[str, Any]


class FieldOperator(str, Enum):
    """Comparison operators understood by the store's field filters."""

    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    ARRAY_CONTAINS = "ARRAY_CONTAINS"
    IN = "IN"
    ARRAY_CONTAINS_ANY = "ARRAY_CONTAINS_ANY"
    NOT_IN = "NOT_IN"


class Direction(str, Enum):
    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


def wire_name(token: Union[str, Enum]) -> str:
    """Return the wire spelling of an operator/direction (enum member or raw string)."""
    if isinstance(token, Enum):
        return str(token.value)
    return token


@dataclass(frozen=True)
class Document:
    """A document read from the remote store.

    Fields:
        id: Trailing segment of the resource name.
        create_time: Creation timestamp (None when absent or unparsable).
        update_time: Last update timestamp (None when absent or unparsable).
        fields: Decoded field values keyed by field name. Freshly decoded per
            read and not shared; the record is frozen, the dict is not.
    """
    id: str
    create_time: Optional[datetime]
    update_time: Optional[datetime]
    fields: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass(frozen=True)
class FieldFilter:
    """Leaf comparison. ``value`` is already in wire form."""
    field: str
    op: Union[FieldOperator, str]
    value: WireValue

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fieldFilter": {
                "field": {"fieldPath": self.field},
                "op": wire_name(self.op),
                "value": copy.deepcopy(self.value),
            }
        }


@dataclass(frozen=True)
class CompositeFilter:
    """Flat AND of leaf comparisons, in insertion order."""
    filters: Tuple[FieldFilter, ...]
    op: str = "AND"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "compositeFilter": {
                "op": self.op,
                "filters": [f.to_dict() for f in self.filters],
            }
        }


Filter = Union[FieldFilter, CompositeFilter]


@dataclass(frozen=True)
class Order:
    field: str
    direction: Union[Direction, str] = Direction.ASCENDING

    def to_dict(self) -> Dict[str, Any]:
        return {"field": {"fieldPath": self.field}, "direction": wire_name(self.direction)}


@dataclass(frozen=True)
class QueryDescriptor:
    """Accumulated structured query.

    Fields:
        collection: Collection key the query targets; None until bound.
        where: Single leaf or flat AND composite; None for no filter.
        order_by: Sort keys in call order.
        limit: Maximum result count.
        offset: Number of leading results to skip.
    """
    collection: Optional[str] = None
    where: Optional[Filter] = None
    order_by: Tuple[Order, ...] = ()
    limit: Optional[int] = None
    offset: Optional[int] = None

    def to_structured_query(self) -> Dict[str, Any]:
        """Serialize into the ``structuredQuery`` wire body."""
        body: Dict[str, Any] = {}
        if self.collection is not None:
            body["from"] = [{"collectionId": self.collection}]
        if self.where is not None:
            body["where"] = self.where.to_dict()
        if self.order_by:
            body["orderBy"] = [o.to_dict() for o in self.order_by]
        if self.limit is not None:
            body["limit"] = self.limit
        if self.offset is not None:
            body["offset"] = self.offset
        return body
