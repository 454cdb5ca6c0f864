"""Unit tests for Payment receipt immutability."""

from __future__ import annotations

import pytest

from modules.payments.dtos import PurchaseDTO
from modules.payments.exceptions import ImmutablePaymentError
from modules.payments.models import Payment

pytestmark = pytest.mark.unit


@pytest.fixture()
def payment(purchase_service, make_product, bank_account, buyer):
    product = make_product(price=250, stock_quantity=5)
    return purchase_service.buy(
        PurchaseDTO(
            product_id=product.id,
            bank_account_id=bank_account.id,
            quantity=2,
            payment_proof_image_url="https://proofs.example.com/1.png",
        ),
        buyer_id=buyer.id,
    )


class TestPaymentImmutability:
    def test_id_is_uuid7(self, payment):
        assert payment.id.version == 7

    def test_save_existing_raises(self, payment):
        payment.quantity = 1
        with pytest.raises(ImmutablePaymentError):
            payment.save()

    def test_delete_raises(self, payment):
        with pytest.raises(ImmutablePaymentError):
            payment.delete()
        assert Payment.objects.filter(id=payment.id).exists()

    def test_queryset_update_raises(self, payment):
        with pytest.raises(ImmutablePaymentError):
            Payment.objects.filter(id=payment.id).update(quantity=9)

    def test_queryset_delete_raises(self, payment):
        with pytest.raises(ImmutablePaymentError):
            Payment.objects.all().delete()

    def test_total_price(self, payment):
        assert payment.total_price == 500


class TestNameSnapshots:
    def test_longest_full_names_fit(
        self, purchase_service, make_product, bank_account, seller, buyer
    ):
        for user in (seller, buyer):
            user.first_name = "F" * 150
            user.last_name = "L" * 150
            user.save()

        payment = purchase_service.buy(
            PurchaseDTO(
                product_id=make_product().id,
                bank_account_id=bank_account.id,
                quantity=1,
                payment_proof_image_url="https://proofs.example.com/2.png",
            ),
            buyer_id=buyer.id,
        )

        assert len(payment.seller_name) == 301
        assert len(payment.buyer_name) == 301
        for field in ("seller_name", "buyer_name"):
            assert Payment._meta.get_field(field).max_length >= 301
