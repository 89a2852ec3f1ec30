"""
Unit tests for single/list response normalization.
"""
import pytest

from hitobito_client.errors import ValidationError
from hitobito_client.resources import EVENTS, GROUPS, PEOPLE, RESOURCE_KINDS
from hitobito_client.services.decoding import decode_list, decode_single

from .conftest import node


class TestDecodeSingle:
    """Test the single-resource envelope."""

    def test_decodes_primary_node(self):
        document = {"data": node("people", "1", first_name="Max", last_name="Muster")}

        person = decode_single(document, PEOPLE)

        assert person.id == 1
        assert person.first_name == "Max"
        assert person.last_name == "Muster"

    def test_missing_data_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            decode_single({"included": []}, PEOPLE)

        assert str(exc_info.value) == "Invalid person response: data: Field required"

    def test_null_data_is_not_treated_as_empty(self):
        with pytest.raises(ValidationError):
            decode_single({"data": None}, PEOPLE)

    def test_list_data_is_rejected(self):
        document = {"data": [node("people", 1, first_name="A", last_name="B")]}

        with pytest.raises(ValidationError):
            decode_single(document, PEOPLE)

    def test_non_object_document_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            decode_single(["not", "a", "document"], PEOPLE)

        assert str(exc_info.value).startswith("Invalid person response: document:")

    def test_non_numeric_id_is_rejected(self):
        document = {"data": {"id": "abc", "type": "people", "attributes": {}}}

        with pytest.raises(ValidationError) as exc_info:
            decode_single(document, PEOPLE)

        assert "data.id" in str(exc_info.value)

    def test_boolean_id_is_rejected(self):
        document = {
            "data": {
                "id": True,
                "type": "people",
                "attributes": {"first_name": "A", "last_name": "B"},
            }
        }

        with pytest.raises(ValidationError) as exc_info:
            decode_single(document, PEOPLE)

        assert "data.id" in str(exc_info.value)

    def test_negative_id_is_rejected(self):
        document = {"data": node("people", "-1", first_name="A", last_name="B")}

        with pytest.raises(ValidationError):
            decode_single(document, PEOPLE)

    def test_type_mismatch_is_reported(self):
        document = {"data": node("groups", "1", name="Test Group", type="Group::Root")}

        with pytest.raises(ValidationError) as exc_info:
            decode_single(document, PEOPLE)

        assert "expected 'people', got 'groups'" in str(exc_info.value)

    def test_event_scenario_with_included_dates(self):
        """Test the full event example: group ids plus expanded dates."""
        event_node = node("events", "1", name="Sommerlager")
        event_node["relationships"] = {
            "dates": {"data": [{"id": "10"}]},
            "groups": {"data": [{"id": "5"}]},
        }
        document = {
            "data": event_node,
            "included": [
                node("event_dates", "10", start_at="2024-07-01T00:00:00Z"),
            ],
        }

        event = decode_single(document, EVENTS)

        assert event.id == 1
        assert event.name == "Sommerlager"
        assert event.group_ids == (5,)
        assert [(date.id, date.start_at) for date in event.dates] == [
            (10, "2024-07-01T00:00:00Z"),
        ]

    def test_missing_included_entry_does_not_fail(self):
        event_node = node("events", "1", name="Sommerlager")
        event_node["relationships"] = {"dates": {"data": [{"type": "event_dates", "id": "10"}]}}

        event = decode_single({"data": event_node, "included": []}, EVENTS)

        assert event.dates == ()


class TestDecodeList:
    """Test the list envelope."""

    def test_preserves_order_and_length(self):
        document = {
            "data": [
                node("groups", "2", name="Child 1", type="Group::Abteilung", parent_id=1),
                node("groups", "3", name="Child 2", type="Group::Abteilung", parent_id=1),
            ]
        }

        groups = decode_list(document, GROUPS)

        assert [group.id for group in groups] == [2, 3]
        assert [group.name for group in groups] == ["Child 1", "Child 2"]

    def test_empty_list(self):
        assert decode_list({"data": []}, GROUPS) == []

    def test_single_bad_entry_fails_whole_list(self):
        document = {
            "data": [
                node("people", "1", first_name="Max", last_name="Muster"),
                node("people", "2", first_name="Anna"),
                node("people", "3", first_name="Eva", last_name="Test"),
            ]
        }

        with pytest.raises(ValidationError) as exc_info:
            decode_list(document, PEOPLE)

        assert str(exc_info.value) == (
            "Invalid person response: data[1]: attributes.last_name: Field required"
        )

    def test_single_object_data_is_rejected(self):
        document = {"data": node("people", 1, first_name="A", last_name="B")}

        with pytest.raises(ValidationError):
            decode_list(document, PEOPLE)

    def test_included_is_shared_by_all_entries(self):
        first = node("events", "1", name="Lager")
        first["relationships"] = {"dates": {"data": [{"type": "event_dates", "id": "10"}]}}
        second = node("events", "2", name="Pfila")
        second["relationships"] = {
            "dates": {
                "data": [
                    {"type": "event_dates", "id": "11"},
                    {"type": "event_dates", "id": "10"},
                ]
            }
        }
        document = {
            "data": [first, second],
            "included": [
                node("event_dates", "10", start_at="2024-07-01T00:00:00Z"),
                node("event_dates", "11", start_at="2024-05-01T00:00:00Z"),
            ],
        }

        events = decode_list(document, EVENTS)

        assert [date.id for date in events[0].dates] == [10]
        assert [date.id for date in events[1].dates] == [11, 10]


class TestResourceKinds:
    """Test the registry of resource kinds."""

    def test_registry_covers_every_kind(self):
        assert sorted(RESOURCE_KINDS) == [
            "event_kind_categories",
            "event_kinds",
            "events",
            "groups",
            "invoices",
            "mailing_lists",
            "people",
            "roles",
        ]

    def test_paths_default_to_type_tag(self):
        for type_tag, kind in RESOURCE_KINDS.items():
            assert kind.type == type_tag
            assert kind.path == type_tag

    def test_only_events_side_load_by_default(self):
        defaults = {tag: kind.default_include for tag, kind in RESOURCE_KINDS.items()}

        assert defaults.pop("events") == ("dates",)
        assert set(defaults.values()) == {()}

    @pytest.mark.parametrize("type_tag", sorted(RESOURCE_KINDS))
    def test_decoder_rejects_other_type_tags(self, type_tag):
        kind = RESOURCE_KINDS[type_tag]
        document = {"data": node("unknown", "1")}

        with pytest.raises(ValidationError) as exc_info:
            decode_single(document, kind)

        assert f"expected '{type_tag}', got 'unknown'" in str(exc_info.value)
