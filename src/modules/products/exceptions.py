"""Product domain exceptions.

Raised by the Service Layer when catalog rules are violated.  The API
layer catches these and translates them into HTTP responses.
"""

from __future__ import annotations


class ProductAlreadyExists(Exception):
    """Another live product already uses this name."""


class ProductNotFound(Exception):
    """The requested product does not exist or has been soft-deleted."""


class ProductOwnershipError(Exception):
    """The caller tried to mutate a product owned by another seller."""
