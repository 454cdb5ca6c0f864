"""Integration tests for the product listing endpoint.

Covers filters, sorting and limit/offset pagination through
``GET /api/v1/products/`` and the ``meta`` block next to the results.
"""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/products/"


def _prices(response) -> list[int]:
    return [item["price"] for item in response.data["results"]]


class TestListingShape:
    def test_empty_catalog(self, api_client):
        response = api_client.get(URL)
        assert response.status_code == 200
        assert response.data["results"] == []
        assert response.data["meta"] == {"limit": 20, "offset": 0, "total": 0}

    def test_item_fields(self, api_client, make_product):
        make_product(name="Desk Lamp", tags=["lighting"])
        item = api_client.get(URL).data["results"][0]
        assert item["name"] == "Desk Lamp"
        assert item["tags"] == ["lighting"]
        assert item["condition"] == "new"


class TestPriceRangeSortAndPage:
    def test_scenario_price_desc_first_page(self, api_client, make_product):
        for price in (100, 120, 150, 180, 200):
            make_product(price=price)
        make_product(price=50)
        make_product(price=250)

        response = api_client.get(
            URL,
            {
                "min_price": 100,
                "max_price": 200,
                "sort_by": "price",
                "order_by": "desc",
                "limit": 2,
                "offset": 0,
            },
        )

        assert response.status_code == 200
        assert _prices(response) == [200, 180]
        assert response.data["meta"]["total"] == 5

    def test_dsc_alias(self, api_client, make_product):
        for price in (10, 30, 20):
            make_product(price=price)
        response = api_client.get(URL, {"sort_by": "price", "order_by": "dsc"})
        assert _prices(response) == [30, 20, 10]

    def test_offset_beyond_total(self, api_client, make_product):
        make_product()
        response = api_client.get(URL, {"offset": 10})
        assert response.data["results"] == []
        assert response.data["meta"]["total"] == 1

    def test_limit_zero_is_unbounded(self, api_client, make_product):
        for _ in range(25):
            make_product()
        response = api_client.get(URL, {"limit": 0})
        assert len(response.data["results"]) == 25
        assert response.data["meta"]["total"] == 25

    def test_min_above_max_rejected(self, api_client):
        response = api_client.get(URL, {"min_price": 10, "max_price": 5})
        assert response.status_code == 400


class TestFilters:
    def test_tags_superset_repeated_and_comma_separated(
        self, api_client, make_product
    ):
        make_product(name="Tagged abc", tags=["a", "b", "c"])
        make_product(name="Tagged ab", tags=["a", "b"])
        make_product(name="Tagged ad", tags=["a", "d"])

        repeated = api_client.get(f"{URL}?tags=a&tags=b&sort_by=date")
        commas = api_client.get(URL, {"tags": "a,b", "sort_by": "date"})

        expected = ["Tagged abc", "Tagged ab"]
        assert [p["name"] for p in repeated.data["results"]] == expected
        assert [p["name"] for p in commas.data["results"]] == expected

    def test_empty_stock_hidden_unless_requested(self, api_client, make_product):
        make_product(stock_quantity=0)
        make_product(stock_quantity=2)
        assert api_client.get(URL).data["meta"]["total"] == 1
        shown = api_client.get(URL, {"show_empty_stock": "true"})
        assert shown.data["meta"]["total"] == 2

    def test_user_only_for_authenticated_caller(
        self, buyer_client, buyer, make_product
    ):
        make_product(name="Seller item")
        make_product(name="Buyer item", owner=buyer)

        mine = buyer_client.get(URL, {"user_only": "true"})
        everyone = buyer_client.get(URL)

        assert [p["name"] for p in mine.data["results"]] == ["Buyer item"]
        assert everyone.data["meta"]["total"] == 2

    def test_user_only_ignored_for_anonymous(self, api_client, make_product):
        make_product()
        response = api_client.get(URL, {"user_only": "true"})
        assert response.data["meta"]["total"] == 1

    def test_search_and_condition(self, api_client, make_product):
        make_product(name="Used Keyboard", condition="second")
        make_product(name="New Keyboard", condition="new")
        make_product(name="Used Mouse", condition="second")

        response = api_client.get(URL, {"search": "keyboard", "condition": "second"})

        assert [p["name"] for p in response.data["results"]] == ["Used Keyboard"]

    def test_unknown_condition_rejected(self, api_client):
        assert api_client.get(URL, {"condition": "used"}).status_code == 400

    def test_total_matches_unpaged_results(self, api_client, make_product):
        for index in range(7):
            make_product(price=100 + index, tags=["x"] if index % 2 else ["y"])

        paged = api_client.get(URL, {"tags": "x", "limit": 2})
        unpaged = api_client.get(URL, {"tags": "x", "limit": 0})

        assert paged.data["meta"]["total"] == len(unpaged.data["results"]) == 3
