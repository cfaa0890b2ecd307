from __future__ import annotations

import copy
from typing import Any, List, Optional, Union

from . import codec
from .models import (
    CompositeFilter,
    Direction,
    FieldFilter,
    FieldOperator,
    Order,
    QueryDescriptor,
)


class StructuredQueryBuilder:
    """Incrementally accumulate a structured query.

    Filters compose as a flat AND: the first ``where`` sets a single leaf, the
    second turns it into a two-element composite, and later calls append to
    that composite. OR and nested composites cannot be expressed.

    Operators, directions and operand types are not validated; the store
    rejects what it does not accept.

    The builder is single-writer. ``build()`` returns a frozen snapshot: the
    descriptor holds its own copy of every encoded operand, so mutating the
    builder (or another descriptor) never leaks into one already handed out.
    The operand values themselves are plain dicts; treat them as read-only.
    """

    def __init__(self, collection: Optional[str] = None) -> None:
        self._collection = collection
        self._leaf: Optional[FieldFilter] = None
        self._conjuncts: Optional[List[FieldFilter]] = None
        self._order_by: List[Order] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None

    def where(self, field: str, op: Union[FieldOperator, str], value: Any) -> "StructuredQueryBuilder":
        leaf = FieldFilter(field=field, op=op, value=codec.encode(value))
        if self._conjuncts is not None:
            self._conjuncts.append(leaf)
        elif self._leaf is not None:
            self._conjuncts = [self._leaf, leaf]
            self._leaf = None
        else:
            self._leaf = leaf
        return self

    def order_by(self, field: str, direction: Union[Direction, str] = Direction.ASCENDING) -> "StructuredQueryBuilder":
        self._order_by.append(Order(field=field, direction=direction))
        return self

    def limit(self, n: int) -> "StructuredQueryBuilder":
        self._limit = n
        return self

    def set_offset(self, n: int) -> "StructuredQueryBuilder":
        self._offset = n
        return self

    def build(self) -> QueryDescriptor:
        if self._conjuncts is not None:
            where = CompositeFilter(filters=tuple(_copy_leaf(f) for f in self._conjuncts))
        else:
            where = _copy_leaf(self._leaf) if self._leaf is not None else None
        return QueryDescriptor(
            collection=self._collection,
            where=where,
            order_by=tuple(self._order_by),
            limit=self._limit,
            offset=self._offset,
        )


def _copy_leaf(leaf: FieldFilter) -> FieldFilter:
    return FieldFilter(field=leaf.field, op=leaf.op, value=copy.deepcopy(leaf.value))
