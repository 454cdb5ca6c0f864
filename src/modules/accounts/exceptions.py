"""Account domain exceptions.

Raised by the Service Layer; the API layer translates them into HTTP
responses.
"""

from __future__ import annotations


class BankAccountNotFound(Exception):
    """The bank account does not exist or has been soft-deleted."""


class BankAccountOwnershipError(Exception):
    """The caller tried to mutate a bank account owned by another user."""


class UserNotFound(Exception):
    """The referenced user does not exist."""
