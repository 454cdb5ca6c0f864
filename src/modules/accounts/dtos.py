"""Bank account DTOs for the Service Layer.

Pydantic v2 models, immutable (``frozen=True``).  Each text field must be
5–15 characters after trimming.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.accounts.models import FIELD_MAX_LENGTH, FIELD_MIN_LENGTH

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser

    from modules.accounts.models import BankAccount


def _check_length(value: str) -> str:
    value = value.strip()
    if not FIELD_MIN_LENGTH <= len(value) <= FIELD_MAX_LENGTH:
        raise ValueError(
            f"Must be between {FIELD_MIN_LENGTH} and {FIELD_MAX_LENGTH} characters."
        )
    return value


class BankAccountDTO(BaseModel):
    """Input for creating or replacing a bank account."""

    model_config = ConfigDict(frozen=True)

    bank_name: str
    bank_account_name: str
    bank_account_number: str

    @field_validator("bank_name", "bank_account_name", "bank_account_number")
    @classmethod
    def length_within_bounds(cls, v: str) -> str:
        return _check_length(v)


class UpdateBankAccountDTO(BaseModel):
    """Partial update; only supplied fields change."""

    model_config = ConfigDict(frozen=True)

    bank_name: Optional[str] = None
    bank_account_name: Optional[str] = None
    bank_account_number: Optional[str] = None

    @field_validator("bank_name", "bank_account_name", "bank_account_number")
    @classmethod
    def length_within_bounds(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_length(v)


class BankAccountOutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    bank_name: str
    bank_account_name: str
    bank_account_number: str

    @classmethod
    def from_entity(cls, account: BankAccount) -> BankAccountOutputDTO:
        return cls(
            id=account.id,
            bank_name=account.bank_name,
            bank_account_name=account.bank_account_name,
            bank_account_number=account.bank_account_number,
        )


class UserIdentityDTO(BaseModel):
    """Identity strings of a user, as copied into receipts."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    name: str

    @classmethod
    def from_user(cls, user: AbstractBaseUser) -> UserIdentityDTO:
        full_name = user.get_full_name() if hasattr(user, "get_full_name") else ""
        username = user.get_username()
        return cls(id=user.pk, username=username, name=full_name or username)


class SellerProfileDTO(BaseModel):
    """Seller block shown next to a product."""

    model_config = ConfigDict(frozen=True)

    name: str
    product_sold_total: int
    bank_accounts: List[BankAccountOutputDTO]
