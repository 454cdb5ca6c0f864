"""Payment DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.payments.models import Payment


class PurchaseRequestSerializer(serializers.Serializer):
    """Body of ``POST /api/v1/products/{id}/buy/``."""

    bank_account_id = serializers.IntegerField(min_value=1)
    payment_proof_image_url = serializers.URLField(max_length=2048)
    quantity = serializers.IntegerField(min_value=1)


class PaymentSerializer(serializers.ModelSerializer):
    """Receipt representation with nested snapshots."""

    product = serializers.SerializerMethodField()
    seller = serializers.SerializerMethodField()
    buyer = serializers.SerializerMethodField()
    bank_account = serializers.SerializerMethodField()

    class Meta:
        model = Payment
        fields = [
            "id",
            "quantity",
            "payment_proof_image_url",
            "total_price",
            "product",
            "seller",
            "buyer",
            "bank_account",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_product(self, obj: Payment) -> dict:
        return {
            "id": obj.product_id,
            "name": obj.product_name,
            "image_url": obj.product_image_url,
            "price": obj.product_price,
        }

    def get_seller(self, obj: Payment) -> dict:
        return {
            "id": obj.seller_id,
            "username": obj.seller_username,
            "name": obj.seller_name,
        }

    def get_buyer(self, obj: Payment) -> dict | None:
        if obj.buyer_id is None:
            return None
        return {
            "id": obj.buyer_id,
            "username": obj.buyer_username,
            "name": obj.buyer_name,
        }

    def get_bank_account(self, obj: Payment) -> dict:
        return {
            "id": obj.bank_account_id,
            "bank_name": obj.bank_name,
            "bank_account_name": obj.bank_account_name,
            "bank_account_number": obj.bank_account_number,
        }
