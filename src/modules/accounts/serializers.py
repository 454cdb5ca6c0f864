"""Bank account DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.models import BankAccount


class BankAccountSerializer(serializers.ModelSerializer):
    class Meta:
        model = BankAccount
        fields = [
            "id",
            "bank_name",
            "bank_account_name",
            "bank_account_number",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserIdentitySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    name = serializers.CharField()
