import pytest

from modules.accounts.repositories.django_repository import (
    BankAccountDjangoRepository,
    UserDjangoDirectory,
)
from modules.payments.repositories.django_repository import PaymentDjangoRepository
from modules.payments.services import PurchaseService
from modules.products.repositories.django_repository import ProductDjangoRepository


@pytest.fixture()
def purchase_service():
    """PurchaseService wired to the Django repositories."""
    return PurchaseService(
        product_repository=ProductDjangoRepository(),
        bank_account_repository=BankAccountDjangoRepository(),
        user_directory=UserDjangoDirectory(),
        payment_repository=PaymentDjangoRepository(),
        lock_timeout_ms=1000,
    )
