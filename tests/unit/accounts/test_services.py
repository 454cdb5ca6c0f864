"""Unit tests for BankAccountService."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.contrib.auth import get_user_model

from modules.accounts.dtos import BankAccountDTO, UpdateBankAccountDTO
from modules.accounts.exceptions import (
    BankAccountNotFound,
    BankAccountOwnershipError,
    UserNotFound,
)
from modules.accounts.models import BankAccount
from modules.accounts.services import BankAccountService

pytestmark = pytest.mark.unit

OWNER_ID = 11


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.save.side_effect = lambda a: a
    return repo


@pytest.fixture()
def mock_users():
    return MagicMock()


@pytest.fixture()
def service(mock_repo, mock_users):
    return BankAccountService(repository=mock_repo, user_directory=mock_users)


def _account(**overrides) -> BankAccount:
    fields = {
        "id": 5,
        "owner_id": OWNER_ID,
        "bank_name": "First Bank",
        "bank_account_name": "Sally Seller",
        "bank_account_number": "1234567890",
    }
    fields.update(overrides)
    return BankAccount(**fields)


class TestCreate:
    def test_assigns_owner(self, service, mock_repo):
        dto = BankAccountDTO(
            bank_name="First Bank",
            bank_account_name="Sally Seller",
            bank_account_number="1234567890",
        )
        account = service.create_bank_account(OWNER_ID, dto)
        assert account.owner_id == OWNER_ID
        mock_repo.save.assert_called_once()


class TestUpdate:
    def test_changes_supplied_fields(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _account()
        account = service.update_bank_account(
            5, OWNER_ID, UpdateBankAccountDTO(bank_name="Other Bank")
        )
        assert account.bank_name == "Other Bank"
        assert account.bank_account_number == "1234567890"

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(BankAccountNotFound):
            service.update_bank_account(5, OWNER_ID, UpdateBankAccountDTO())

    def test_other_owner_forbidden(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _account(owner_id=99)
        with pytest.raises(BankAccountOwnershipError):
            service.update_bank_account(5, OWNER_ID, UpdateBankAccountDTO())
        mock_repo.save.assert_not_called()


class TestDelete:
    def test_deletes_owned(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _account()
        service.delete_bank_account(5, OWNER_ID)
        mock_repo.delete.assert_called_once_with(5)

    def test_other_owner_forbidden(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _account(owner_id=99)
        with pytest.raises(BankAccountOwnershipError):
            service.delete_bank_account(5, OWNER_ID)
        mock_repo.delete.assert_not_called()


class TestSellerProfile:
    def test_builds_profile(self, service, mock_repo, mock_users):
        mock_users.get_by_id.return_value = get_user_model()(
            id=OWNER_ID, username="sally", first_name="Sally", last_name="Seller"
        )
        mock_repo.list_by_owner.return_value = [_account()]

        profile = service.get_seller_profile(OWNER_ID, product_sold_total=12)

        assert profile.name == "Sally Seller"
        assert profile.product_sold_total == 12
        assert [a.bank_account_number for a in profile.bank_accounts] == [
            "1234567890"
        ]

    def test_missing_seller(self, service, mock_users):
        mock_users.get_by_id.return_value = None
        with pytest.raises(UserNotFound):
            service.get_seller_profile(OWNER_ID, product_sold_total=0)
