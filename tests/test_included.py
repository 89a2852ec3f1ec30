"""
Unit tests for relationship resolution against the included side-table.
"""
import pytest

from hitobito_client.errors import ValidationError
from hitobito_client.schemas.event import decode_event_date
from hitobito_client.schemas.jsonapi import JSONAPIRelationship, JSONAPIResource
from hitobito_client.services.included import (
    IncludedIndex,
    relationship_id,
    relationship_ids,
)

from .conftest import node


def date_node(resource_id, start_at="2024-07-01T00:00:00Z", **attributes):
    return JSONAPIResource.model_validate(
        node("event_dates", resource_id, start_at=start_at, **attributes)
    )


def relationship(*refs):
    return JSONAPIRelationship.model_validate({"data": list(refs)})


class TestIncludedIndex:
    """Test index construction and lookup."""

    def test_lookup_by_type_and_id(self):
        index = IncludedIndex([date_node("10"), date_node("11")])

        assert len(index) == 2
        assert ("event_dates", 10) in index
        assert index.get("event_dates", 11).id == 11
        assert index.get("event_dates", 12) is None

    def test_lookup_requires_exact_type(self):
        """Test that the same id under another type does not match."""
        index = IncludedIndex([date_node("10")])

        assert index.get("events", 10) is None

    def test_first_duplicate_wins(self):
        index = IncludedIndex(
            [date_node("10", label="first"), date_node("10", label="second")]
        )

        assert len(index) == 1
        assert index.get("event_dates", 10).attributes["label"] == "first"


class TestExpand:
    """Test expansion of relationships into decoded sub-records."""

    def test_follows_relationship_order(self):
        """Test that output order is the relationship's, not included's."""
        index = IncludedIndex([date_node("10"), date_node("11"), date_node("12")])
        rel = relationship(
            {"type": "event_dates", "id": "12"},
            {"type": "event_dates", "id": "10"},
        )

        dates = index.expand(rel, "event_dates", decode_event_date)

        assert [date.id for date in dates] == [12, 10]

    def test_unresolved_reference_is_dropped(self):
        index = IncludedIndex([date_node("10")])
        rel = relationship({"type": "event_dates", "id": "10"}, {"type": "event_dates", "id": "99"})

        dates = index.expand(rel, "event_dates", decode_event_date)

        assert [date.id for date in dates] == [10]

    def test_duplicates_are_kept(self):
        index = IncludedIndex([date_node("10")])
        rel = relationship({"id": "10"}, {"id": "10"})

        dates = index.expand(rel, "event_dates", decode_event_date)

        assert [date.id for date in dates] == [10, 10]

    def test_untyped_reference_assumes_expected_type(self):
        index = IncludedIndex([date_node("10")])

        dates = index.expand(relationship({"id": "10"}), "event_dates", decode_event_date)

        assert len(dates) == 1

    def test_reference_of_other_type_is_skipped(self):
        index = IncludedIndex([date_node("10")])
        rel = relationship({"type": "groups", "id": "10"})

        assert index.expand(rel, "event_dates", decode_event_date) == []

    def test_absent_relationship_yields_empty_list(self):
        assert IncludedIndex().expand(None, "event_dates", decode_event_date) == []

    def test_malformed_included_node_fails(self):
        """Test that a matched node which breaks its schema is an error."""
        broken = JSONAPIResource.model_validate(node("event_dates", "10", label="no start"))
        index = IncludedIndex([broken])

        with pytest.raises(ValidationError) as exc_info:
            index.expand(relationship({"id": "10"}), "event_dates", decode_event_date)

        assert "included event_dates 10" in str(exc_info.value)
        assert "attributes.start_at" in str(exc_info.value)


class TestPlainIds:
    """Test id extraction without consulting included."""

    def test_relationship_ids_in_order(self):
        rel = relationship({"type": "groups", "id": "5"}, {"type": "groups", "id": 3})

        assert relationship_ids(rel) == [5, 3]

    def test_relationship_ids_of_missing_relationship(self):
        assert relationship_ids(None) == []

    def test_relationship_id_for_to_one(self):
        rel = JSONAPIRelationship.model_validate({"data": {"type": "people", "id": "7"}})

        assert relationship_id(rel) == 7

    def test_relationship_id_for_empty_to_one(self):
        rel = JSONAPIRelationship.model_validate({"data": None})

        assert relationship_id(rel) is None
