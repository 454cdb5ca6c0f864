"""Product DRF serializers for API input/output.

Serializers live at the interface layer: they parse and shape HTTP data.
Business rules run in the Service Layer against Pydantic DTOs.
"""

from __future__ import annotations

from typing import Any, Dict, List

from rest_framework import serializers

from modules.products.models import Product, ProductCondition


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    tags = serializers.ListField(
        child=serializers.CharField(), source="tag_names", read_only=True
    )

    class Meta:
        model = Product
        fields = [
            "id",
            "owner_id",
            "name",
            "price",
            "image_url",
            "stock_quantity",
            "condition",
            "tags",
            "is_purchaseable",
            "purchase_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class StockUpdateSerializer(serializers.Serializer):
    stock_quantity = serializers.IntegerField(min_value=0)


class ProductListQuerySerializer(serializers.Serializer):
    """Validates listing query parameters.

    ``tags`` may be repeated (``?tags=a&tags=b``) or comma-separated.
    """

    user_only = serializers.BooleanField(required=False, default=False)
    tags = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False, default=list
    )
    condition = serializers.ChoiceField(
        choices=ProductCondition.choices, required=False
    )
    show_empty_stock = serializers.BooleanField(required=False, default=False)
    min_price = serializers.IntegerField(min_value=0, required=False)
    max_price = serializers.IntegerField(min_value=0, required=False)
    search = serializers.CharField(required=False, allow_blank=True)
    sort_by = serializers.ChoiceField(choices=["price", "date"], required=False)
    order_by = serializers.ChoiceField(
        choices=["asc", "desc", "dsc"], required=False, default="asc"
    )
    limit = serializers.IntegerField(min_value=0, required=False)
    offset = serializers.IntegerField(min_value=0, required=False, default=0)

    @classmethod
    def from_query_params(cls, query_params) -> ProductListQuerySerializer:
        data: Dict[str, Any] = {
            key: query_params.get(key) for key in query_params if key != "tags"
        }
        tags: List[str] = []
        for raw in query_params.getlist("tags"):
            tags.extend(part for part in raw.split(",") if part.strip())
        data["tags"] = tags
        return cls(data=data)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        low, high = attrs.get("min_price"), attrs.get("max_price")
        if low is not None and high is not None and low > high:
            raise serializers.ValidationError(
                {"min_price": "min_price cannot exceed max_price."}
            )
        return attrs
