"""
Unit tests for the structured query builder and descriptor serialization.
"""

import pytest

from firestore_rest.domain.models import (
    CompositeFilter,
    Direction,
    FieldFilter,
    FieldOperator,
    Order,
    QueryDescriptor,
)
from firestore_rest.domain.query import StructuredQueryBuilder


class TestFilterComposition:
    """Test the flat AND composition rule."""

    def test_empty_builder_has_no_filter(self):
        desc = StructuredQueryBuilder().build()
        assert desc.where is None
        assert desc.to_structured_query() == {}

    def test_single_where_is_leaf(self):
        """Test one where() yields the leaf itself, not a composite."""
        desc = StructuredQueryBuilder().where("a", FieldOperator.EQUAL, 1).build()
        assert desc.where == FieldFilter(field="a", op=FieldOperator.EQUAL, value={"integerValue": "1"})

    def test_second_where_converts_to_composite(self):
        """Test the second where() wraps both leaves in an AND composite."""
        desc = (
            StructuredQueryBuilder()
            .where("a", FieldOperator.EQUAL, 1)
            .where("b", FieldOperator.EQUAL, 2)
            .build()
        )
        assert isinstance(desc.where, CompositeFilter)
        assert desc.where.op == "AND"
        assert [f.field for f in desc.where.filters] == ["a", "b"]

    def test_third_where_appends_flat(self):
        """Test further where() calls append to the same composite, never nesting."""
        desc = (
            StructuredQueryBuilder()
            .where("a", FieldOperator.EQUAL, 1)
            .where("b", FieldOperator.EQUAL, 2)
            .where("c", FieldOperator.EQUAL, 3)
            .build()
        )
        assert isinstance(desc.where, CompositeFilter)
        assert [f.field for f in desc.where.filters] == ["a", "b", "c"]
        assert all(isinstance(f, FieldFilter) for f in desc.where.filters)

    def test_operand_is_encoded(self):
        """Test filter operands are encoded with the value codec."""
        desc = StructuredQueryBuilder().where("tags", FieldOperator.ARRAY_CONTAINS_ANY, ["x", 2.5]).build()
        assert desc.where.value == {
            "arrayValue": {"values": [{"stringValue": "x"}, {"doubleValue": "2.5"}]}
        }

    def test_unknown_operator_passed_through(self):
        """Test operators are not validated."""
        desc = StructuredQueryBuilder().where("a", "SOUNDS_LIKE", "x").build()
        assert desc.to_structured_query()["where"]["fieldFilter"]["op"] == "SOUNDS_LIKE"


class TestOrderingAndPagination:
    """Test orderBy, limit and offset accumulation."""

    def test_multi_key_order_limit_offset(self):
        desc = (
            StructuredQueryBuilder()
            .order_by("x", Direction.ASCENDING)
            .order_by("y", Direction.DESCENDING)
            .limit(10)
            .set_offset(5)
            .build()
        )
        assert desc.order_by == (Order("x", Direction.ASCENDING), Order("y", Direction.DESCENDING))
        assert desc.limit == 10
        assert desc.offset == 5

    def test_limit_and_offset_overwrite(self):
        """Test the last limit/offset call wins."""
        desc = StructuredQueryBuilder().limit(10).limit(3).set_offset(1).set_offset(0).build()
        assert desc.limit == 3
        assert desc.offset == 0

    def test_order_defaults_to_ascending(self):
        desc = StructuredQueryBuilder().order_by("likes").build()
        assert desc.order_by[0].direction == Direction.ASCENDING


class TestBuildSnapshot:
    """Test build() returns an immutable snapshot."""

    def test_mutation_after_build_not_reflected(self):
        """Test later where/order/limit calls do not alter a built descriptor."""
        builder = StructuredQueryBuilder().where("a", FieldOperator.EQUAL, 1)
        first = builder.build()
        builder.where("b", FieldOperator.EQUAL, 2).order_by("a").limit(4)
        second = builder.build()

        assert isinstance(first.where, FieldFilter)
        assert first.order_by == ()
        assert first.limit is None
        assert isinstance(second.where, CompositeFilter)

    def test_composite_snapshot_not_extended(self):
        builder = (
            StructuredQueryBuilder()
            .where("a", FieldOperator.EQUAL, 1)
            .where("b", FieldOperator.EQUAL, 2)
        )
        first = builder.build()
        builder.where("c", FieldOperator.EQUAL, 3)
        assert len(first.where.filters) == 2
        assert len(builder.build().where.filters) == 3

    def test_descriptors_do_not_share_operands(self):
        """Test editing one descriptor's operand leaves the builder and later builds untouched."""
        builder = StructuredQueryBuilder().where("tags", FieldOperator.IN, ["a"])
        first = builder.build()
        first.where.value["arrayValue"]["values"].append({"stringValue": "b"})

        assert builder.build().where.value == {"arrayValue": {"values": [{"stringValue": "a"}]}}

    def test_composite_operands_copied(self):
        builder = (
            StructuredQueryBuilder()
            .where("a", FieldOperator.EQUAL, {"k": 1})
            .where("b", FieldOperator.EQUAL, 2)
        )
        first = builder.build()
        first.where.filters[0].value["mapValue"]["fields"]["k"] = {"integerValue": "9"}
        assert builder.build().where.filters[0].value == {"mapValue": {"fields": {"k": {"integerValue": "1"}}}}

    def test_descriptor_is_frozen(self):
        desc = StructuredQueryBuilder().limit(1).build()
        with pytest.raises(AttributeError):
            desc.limit = 2


class TestStructuredQuerySerialization:
    """Test the wire shape of a built descriptor."""

    def test_full_query_shape(self):
        desc = (
            StructuredQueryBuilder("meta_sets")
            .where("public", FieldOperator.EQUAL, True)
            .where("nameWords", FieldOperator.ARRAY_CONTAINS, "spanish")
            .order_by("likes", Direction.DESCENDING)
            .limit(20)
            .set_offset(40)
            .build()
        )
        assert desc.to_structured_query() == {
            "from": [{"collectionId": "meta_sets"}],
            "where": {
                "compositeFilter": {
                    "op": "AND",
                    "filters": [
                        {
                            "fieldFilter": {
                                "field": {"fieldPath": "public"},
                                "op": "EQUAL",
                                "value": {"booleanValue": True},
                            }
                        },
                        {
                            "fieldFilter": {
                                "field": {"fieldPath": "nameWords"},
                                "op": "ARRAY_CONTAINS",
                                "value": {"stringValue": "spanish"},
                            }
                        },
                    ],
                }
            },
            "orderBy": [{"field": {"fieldPath": "likes"}, "direction": "DESCENDING"}],
            "limit": 20,
            "offset": 40,
        }

    def test_zero_limit_and_offset_serialized(self):
        """Test zero values are kept rather than dropped as falsy."""
        body = QueryDescriptor(limit=0, offset=0).to_structured_query()
        assert body == {"limit": 0, "offset": 0}

    def test_serialized_value_is_a_copy(self):
        desc = StructuredQueryBuilder().where("a", FieldOperator.IN, [1]).build()
        body = desc.to_structured_query()
        body["where"]["fieldFilter"]["value"]["arrayValue"]["values"].append({"integerValue": "2"})
        assert desc.to_structured_query()["where"]["fieldFilter"]["value"] == {
            "arrayValue": {"values": [{"integerValue": "1"}]}
        }
