from __future__ import annotations

import random

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.accounts.models import BankAccount
from modules.accounts.repositories.django_repository import (
    BankAccountDjangoRepository,
    UserDjangoDirectory,
)
from modules.payments.dtos import PurchaseDTO
from modules.payments.exceptions import InsufficientQuantity
from modules.payments.models import Payment
from modules.payments.repositories.django_repository import PaymentDjangoRepository
from modules.payments.services import PurchaseService
from modules.products.models import Product, ProductCondition
from modules.products.repositories.django_repository import ProductDjangoRepository

SELLERS = [
    ("alice", "Alice", "Walker"),
    ("bruno", "Bruno", "Costa"),
]

CATALOG = [
    ("Mechanical Keyboard", 450, ProductCondition.NEW, ["electronics", "keyboard"]),
    ("Wireless Mouse", 120, ProductCondition.NEW, ["electronics", "mouse"]),
    ("Monitor 27 inch", 1800, ProductCondition.SECOND, ["electronics", "display"]),
    ("Office Chair", 900, ProductCondition.SECOND, ["furniture"]),
    ("Standing Desk", 2500, ProductCondition.NEW, ["furniture", "desk"]),
    ("USB-C Hub", 150, ProductCondition.NEW, ["electronics", "accessory"]),
    ("Laptop Stand", 180, ProductCondition.NEW, ["accessory", "desk"]),
    ("Desk Lamp", 100, ProductCondition.SECOND, ["furniture", "lighting"]),
    ("Notebook Pack", 35, ProductCondition.NEW, ["stationery"]),
    ("Noise Headset", 600, ProductCondition.SECOND, ["electronics", "audio"]),
]


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        sellers = self._seed_users()
        accounts = self._seed_bank_accounts(sellers)
        products = self._seed_products(sellers)
        payments_created = self._seed_payments(accounts, products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"sellers={len(sellers)}, "
                f"bank_accounts={len(accounts)}, "
                f"products={len(products)}, "
                f"payments={payments_created}"
            )
        )

    def _seed_users(self) -> list:
        User = get_user_model()
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
        if not User.objects.filter(username="buyer").exists():
            User.objects.create_user("buyer", password="buyer123")

        sellers = []
        for username, first_name, last_name in SELLERS:
            seller, created = User.objects.get_or_create(
                username=username,
                defaults={"first_name": first_name, "last_name": last_name},
            )
            if created:
                seller.set_password(f"{username}123")
                seller.save(update_fields=["password"])
            sellers.append(seller)
        return sellers

    def _seed_bank_accounts(self, sellers: list) -> list[BankAccount]:
        self.stdout.write("Creating bank accounts...")
        accounts: list[BankAccount] = []
        for index, seller in enumerate(sellers, start=1):
            account, _ = BankAccount.objects.alive().get_or_create(
                owner=seller,
                bank_account_number=f"0001{index:06d}",
                defaults={
                    "bank_name": "First Bank",
                    "bank_account_name": seller.first_name[:15].ljust(5, "x"),
                },
            )
            accounts.append(account)
        self.stdout.write(self.style.SUCCESS("Creating bank accounts... Done!"))
        return accounts

    def _seed_products(self, sellers: list) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        for index, (name, price, condition, tags) in enumerate(CATALOG):
            product, created = Product.objects.alive().get_or_create(
                name=name,
                defaults={
                    "owner": sellers[index % len(sellers)],
                    "price": price,
                    "image_url": f"https://picsum.photos/seed/{index}/400",
                    "stock_quantity": random.randint(0, 50),
                    "condition": condition,
                },
            )
            if created:
                product.set_tags(tags)
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_payments(
        self, accounts: list[BankAccount], products: list[Product]
    ) -> int:
        self.stdout.write("Creating payments...")
        if Payment.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping payments (already seeded)."))
            return 0

        User = get_user_model()
        buyer = User.objects.get(username="buyer")
        accounts_by_owner = {account.owner_id: account for account in accounts}
        service = PurchaseService(
            product_repository=ProductDjangoRepository(),
            bank_account_repository=BankAccountDjangoRepository(),
            user_directory=UserDjangoDirectory(),
            payment_repository=PaymentDjangoRepository(),
            lock_timeout_ms=settings.PURCHASE_LOCK_TIMEOUT_MS,
        )

        created = 0
        for product in random.sample(products, k=min(5, len(products))):
            dto = PurchaseDTO(
                product_id=product.id,
                bank_account_id=accounts_by_owner[product.owner_id].id,
                quantity=random.randint(1, 3),
                payment_proof_image_url=f"https://proofs.example.com/{product.id}.png",
            )
            try:
                service.buy(dto, buyer_id=buyer.id)
            except InsufficientQuantity:
                continue
            created += 1

        self.stdout.write(self.style.SUCCESS("Creating payments... Done!"))
        return created
