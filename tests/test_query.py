"""
Unit tests for list query composition.
"""

import pytest

from modules.query import (
    AGENT_FILTER_ALL,
    AGENT_FILTER_MANAGER,
    CUSTOMER_OVERRIDE_QUERY,
    ListQuery,
    ORDER_FILTERS,
    ORDER_QUERY,
    OVERRIDE_FILTERS,
    OVERRIDE_QUERY,
    PRODUCT_QUERY,
)


class TestDefaults:

    def test_per_resource_defaults(self):
        assert (ORDER_QUERY.sort_by, ORDER_QUERY.sort_direction) == ("createdAt", "DESC")
        assert (PRODUCT_QUERY.sort_by, PRODUCT_QUERY.sort_direction) == ("name", "ASC")
        assert (OVERRIDE_QUERY.sort_by, OVERRIDE_QUERY.sort_direction) == ("customer_id", "ASC")
        assert (CUSTOMER_OVERRIDE_QUERY.sort_by, CUSTOMER_OVERRIDE_QUERY.sort_direction) == ("product_id", "ASC")

    def test_default_params(self):
        assert ORDER_QUERY.to_params() == {
            "page": 0,
            "size": 20,
            "sortBy": "createdAt",
            "sortDirection": "DESC",
        }


class TestValidation:

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            ListQuery(sort_by="name", sort_direction="UP")

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            ListQuery(sort_by="name", size=7)

    def test_negative_page(self):
        with pytest.raises(ValueError):
            ListQuery(sort_by="name", page=-1)

    def test_unsortable_field(self):
        with pytest.raises(ValueError):
            ORDER_QUERY.with_sort("customerName")


class TestDerivations:
    """Every change except paging resets to the first page."""

    def test_filter_resets_page(self):
        query = ORDER_QUERY.goto(3).with_filter("status", "PLACED")
        assert query.page == 0
        assert query.to_params()["status"] == "PLACED"

    def test_empty_filter_is_not_sent(self):
        query = ORDER_QUERY.with_filter("status", "PLACED").with_filter("status", "")
        assert "status" not in query.to_params()
        assert ORDER_QUERY.with_filter("status", None).filters == ()

    def test_sort_resets_page(self):
        query = ORDER_QUERY.goto(2).with_sort("totalPrice")
        assert query.page == 0
        assert query.sort_by == "totalPrice"
        assert query.sort_direction == "DESC"

    def test_toggle_direction(self):
        query = ORDER_QUERY.goto(4).toggle_direction()
        assert query.sort_direction == "ASC"
        assert query.page == 0
        assert query.toggle_direction().sort_direction == "DESC"

    def test_size_resets_page(self):
        query = PRODUCT_QUERY.goto(5).with_size(50)
        assert (query.page, query.size) == (0, 50)

    def test_goto_keeps_filters(self):
        query = PRODUCT_QUERY.with_filter("categoryId", 3).goto(2)
        assert query.page == 2
        assert query.filter_value("categoryId") == "3"

    def test_immutable(self):
        ORDER_QUERY.with_filter("status", "DONE")
        assert ORDER_QUERY.filters == ()


class TestAgentFilter:

    def test_all_means_no_filter(self):
        query = OVERRIDE_QUERY.with_filter("agentId", AGENT_FILTER_ALL)
        assert "agentId" not in query.to_params()

    def test_manager_is_sent_as_is(self):
        query = OVERRIDE_QUERY.with_filter("agentId", AGENT_FILTER_MANAGER)
        assert query.to_params()["agentId"] == "manager"

    def test_agent_id(self):
        query = OVERRIDE_QUERY.with_filter("agentId", 12).with_filter("productId", "p-9")
        params = query.to_params()
        assert params["agentId"] == "12"
        assert params["productId"] == "p-9"


class TestFromArgs:
    """Request args parse with fallbacks to the defaults."""

    def test_round_trip_through_url_args(self):
        query = ORDER_QUERY.with_filter("status", "DONE").with_sort("status", "ASC").with_size(50).goto(2)
        parsed = ListQuery.from_args(query.to_args(), ORDER_QUERY, ORDER_FILTERS)
        assert parsed == query

    def test_invalid_values_fall_back(self):
        args = {"page": "abc", "size": "7", "direction": "sideways", "sort": "bogus"}
        parsed = ListQuery.from_args(args, ORDER_QUERY, ORDER_FILTERS)
        assert parsed.page == 0
        assert parsed.size == 20
        assert parsed.sort_direction == "DESC"
        assert parsed.sort_by == "createdAt"

    def test_negative_page_clamps_to_zero(self):
        assert ListQuery.from_args({"page": "-3"}, ORDER_QUERY).page == 0

    def test_direction_is_case_insensitive(self):
        assert ListQuery.from_args({"direction": "asc"}, ORDER_QUERY).sort_direction == "ASC"

    def test_unknown_filters_are_ignored(self):
        parsed = ListQuery.from_args({"status": "DONE", "agentId": "3"}, ORDER_QUERY, ORDER_FILTERS)
        assert parsed.filter_value("status") == "DONE"
        assert parsed.filter_value("agentId") == ""

    def test_override_filters(self):
        args = {"productId": "p-1", "customerId": "c-1", "agentId": "manager"}
        parsed = ListQuery.from_args(args, OVERRIDE_QUERY, OVERRIDE_FILTERS)
        assert parsed.to_params()["customerId"] == "c-1"
        assert parsed.to_params()["agentId"] == "manager"
