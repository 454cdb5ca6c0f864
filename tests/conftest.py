import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.accounts.models import BankAccount
from modules.products.models import Product, ProductCondition

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Marketplace data
# ---------------------------------------------------------------------------


@pytest.fixture()
def seller():
    return User.objects.create_user(
        username="seller",
        password="sellerpass123",
        first_name="Sally",
        last_name="Seller",
    )


@pytest.fixture()
def buyer():
    return User.objects.create_user(
        username="buyer",
        password="buyerpass123",
        first_name="Bob",
        last_name="Buyer",
    )


@pytest.fixture()
def seller_client(seller):
    client = APIClient()
    client.force_authenticate(user=seller)
    return client


@pytest.fixture()
def buyer_client(buyer):
    client = APIClient()
    client.force_authenticate(user=buyer)
    return client


@pytest.fixture()
def bank_account(seller):
    return BankAccount.objects.create(
        owner=seller,
        bank_name="First Bank",
        bank_account_name="Sally Seller",
        bank_account_number="1234567890",
    )


@pytest.fixture()
def make_product(seller):
    """Factory for persisted products; defaults to an in-stock new item."""
    counter = {"n": 0}

    def _make(tags=None, **overrides) -> Product:
        counter["n"] += 1
        fields = {
            "owner": seller,
            "name": f"Product {counter['n']:03d}",
            "price": 100,
            "image_url": "https://img.example.com/p.png",
            "stock_quantity": 10,
            "condition": ProductCondition.NEW,
        }
        fields.update(overrides)
        product = Product.objects.create(**fields)
        if tags:
            product.set_tags(tags)
        return product

    return _make
