"""Unit tests for PurchaseDTO."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.payments.dtos import PurchaseDTO

pytestmark = pytest.mark.unit


def _dto(**overrides) -> PurchaseDTO:
    data = {
        "product_id": 1,
        "bank_account_id": 1,
        "quantity": 1,
        "payment_proof_image_url": "https://proofs.example.com/p.png",
    }
    data.update(overrides)
    return PurchaseDTO(**data)


class TestPurchaseDTO:
    def test_valid(self):
        assert _dto().quantity == 1

    @pytest.mark.parametrize("field", ["product_id", "bank_account_id", "quantity"])
    def test_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            _dto(**{field: 0})

    @pytest.mark.parametrize("url", ["", "proof.png", "mailto:a@example.com"])
    def test_proof_url_must_be_http(self, url):
        with pytest.raises(ValidationError):
            _dto(payment_proof_image_url=url)
