"""Unit tests for the account repositories."""

from __future__ import annotations

import pytest

from modules.accounts.models import BankAccount
from modules.accounts.repositories.django_repository import (
    BankAccountDjangoRepository,
    UserDjangoDirectory,
)

pytestmark = pytest.mark.unit


class TestBankAccountRepository:
    def test_get_by_id(self, bank_account):
        found = BankAccountDjangoRepository().get_by_id(bank_account.id)
        assert found.owner.username == "seller"

    def test_get_by_id_skips_deleted(self, bank_account):
        bank_account.delete()
        assert BankAccountDjangoRepository().get_by_id(bank_account.id) is None

    def test_get_by_id_malformed(self):
        assert BankAccountDjangoRepository().get_by_id("abc") is None

    def test_list_by_owner_only_live(self, seller, bank_account):
        extra = BankAccount.objects.create(
            owner=seller,
            bank_name="Other Bank",
            bank_account_name="Sally Seller",
            bank_account_number="0987654321",
        )
        extra.delete()
        accounts = BankAccountDjangoRepository().list_by_owner(seller.id)
        assert [a.id for a in accounts] == [bank_account.id]

    def test_delete_is_soft(self, bank_account):
        assert BankAccountDjangoRepository().delete(bank_account.id) is True
        assert BankAccount.objects.dead().filter(id=bank_account.id).exists()


class TestUserDirectory:
    def test_returns_active_user(self, seller):
        assert UserDjangoDirectory().get_by_id(seller.id) == seller

    def test_inactive_user_is_missing(self, seller):
        seller.is_active = False
        seller.save(update_fields=["is_active"])
        assert UserDjangoDirectory().get_by_id(seller.id) is None

    def test_unknown_user(self):
        assert UserDjangoDirectory().get_by_id(123456) is None
