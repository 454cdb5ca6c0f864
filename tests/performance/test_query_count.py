"""Performance regression tests: constant query count (N+1 prevention).

Verifies that listing and detail endpoints execute a bounded number of
SQL queries regardless of the number of products and tags, proving that
``prefetch_related("tags")`` is applied.
"""

from __future__ import annotations

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

pytestmark = pytest.mark.integration


@pytest.fixture()
def tagged_products(make_product):
    return [make_product(tags=["a", "b", f"t{i}"]) for i in range(12)]


class TestListingQueryCount:
    def test_list_query_count_is_bounded(
        self, api_client, tagged_products, django_assert_max_num_queries
    ):
        """Expected: page SELECT, tags prefetch, COUNT."""
        with django_assert_max_num_queries(3):
            response = api_client.get("/api/v1/products/", {"limit": 0})

        assert response.status_code == 200
        assert response.data["meta"]["total"] == 12

    def test_list_query_count_does_not_grow(self, api_client, make_product):
        make_product(tags=["a"])
        with CaptureQueriesContext(connection) as small:
            api_client.get("/api/v1/products/", {"tags": "a"})

        for _ in range(10):
            make_product(tags=["a", "b"])
        with CaptureQueriesContext(connection) as large:
            api_client.get("/api/v1/products/", {"tags": "a"})

        assert len(large.captured_queries) == len(small.captured_queries)


class TestDetailQueryCount:
    def test_detail_query_count_is_bounded(
        self, api_client, tagged_products, bank_account, django_assert_max_num_queries
    ):
        """Expected: product + tags, sold total, seller, bank accounts."""
        product = tagged_products[0]

        with django_assert_max_num_queries(5):
            response = api_client.get(f"/api/v1/products/{product.id}/")

        assert response.status_code == 200
        assert len(response.data["product"]["tags"]) == 3
