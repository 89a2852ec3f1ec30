"""
Unit tests for list query encoding.
"""
import pydantic
import pytest

from hitobito_client.schemas.query import ListOptions, encode_query, query_params


class TestEncodeQuery:
    """Test filter, sort, pagination and include encoding."""

    def test_empty_options(self):
        assert encode_query(ListOptions()) == ""

    def test_filter_brackets_are_percent_encoded(self):
        query = encode_query(ListOptions(filters={"primary_group_id": 5}))

        assert query == "filter%5Bprimary_group_id%5D=5"

    def test_each_filter_is_its_own_param(self):
        query = encode_query(ListOptions(filters={"group_id": 1, "type": "Member"}))

        assert query.split("&") == [
            "filter%5Bgroup_id%5D=1",
            "filter%5Btype%5D=Member",
        ]

    def test_pagination(self):
        query = encode_query(ListOptions(page=2, per_page=25))

        assert "page%5Bnumber%5D=2" in query
        assert "page%5Bsize%5D=25" in query

    def test_sort_and_include(self):
        query = encode_query(ListOptions(sort="-name", include=["dates", "groups"]))

        assert query == "sort=-name&include=dates%2Cgroups"

    def test_parameter_order(self):
        params = query_params(
            filters={"parent_id": 1},
            sort="name",
            page=1,
            per_page=10,
            include=["dates"],
        )

        assert [name for name, _ in params] == [
            "filter[parent_id]",
            "sort",
            "page[number]",
            "page[size]",
            "include",
        ]

    def test_filter_value_formats(self):
        params = query_params(filters={"archived": False, "id": [1, 2], "name": None})

        assert params == [("filter[archived]", "false"), ("filter[id]", "1,2")]

    def test_page_must_be_positive(self):
        with pytest.raises(pydantic.ValidationError):
            ListOptions(page=0)
