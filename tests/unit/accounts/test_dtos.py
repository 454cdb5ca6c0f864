"""Unit tests for account DTOs."""

from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model
from pydantic import ValidationError

from modules.accounts.dtos import BankAccountDTO, UpdateBankAccountDTO, UserIdentityDTO

pytestmark = pytest.mark.unit


class TestBankAccountDTO:
    def test_valid(self):
        dto = BankAccountDTO(
            bank_name="First Bank",
            bank_account_name="Sally Seller",
            bank_account_number="1234567890",
        )
        assert dto.bank_name == "First Bank"

    @pytest.mark.parametrize("value", ["abcd", "x" * 16, "   abc   "])
    def test_length_bounds(self, value):
        with pytest.raises(ValidationError):
            BankAccountDTO(
                bank_name=value,
                bank_account_name="Sally Seller",
                bank_account_number="1234567890",
            )

    def test_update_accepts_partial(self):
        dto = UpdateBankAccountDTO(bank_name="Second Bank")
        assert dto.bank_account_number is None

    def test_update_still_checks_lengths(self):
        with pytest.raises(ValidationError):
            UpdateBankAccountDTO(bank_account_number="123")


class TestUserIdentityDTO:
    def test_full_name_preferred(self):
        user = get_user_model()(id=3, username="sally", first_name="Sally", last_name="Seller")
        identity = UserIdentityDTO.from_user(user)
        assert identity.name == "Sally Seller"
        assert identity.username == "sally"

    def test_falls_back_to_username(self):
        user = get_user_model()(id=4, username="anon42")
        assert UserIdentityDTO.from_user(user).name == "anon42"
