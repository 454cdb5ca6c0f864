import django.core.validators
import django.db.models.deletion
import uuid6
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
        ("products", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("payment_proof_image_url", models.URLField(max_length=2048)),
                ("product_name", models.CharField(max_length=60)),
                ("product_image_url", models.URLField(max_length=2048)),
                ("product_price", models.PositiveIntegerField()),
                ("seller_id", models.PositiveBigIntegerField()),
                ("seller_username", models.CharField(max_length=150)),
                ("seller_name", models.CharField(max_length=300)),
                (
                    "buyer_username",
                    models.CharField(blank=True, default="", max_length=150),
                ),
                (
                    "buyer_name",
                    models.CharField(blank=True, default="", max_length=300),
                ),
                ("bank_name", models.CharField(max_length=15)),
                ("bank_account_name", models.CharField(max_length=15)),
                ("bank_account_number", models.CharField(max_length=15)),
                (
                    "bank_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="accounts.bankaccount",
                    ),
                ),
                (
                    "buyer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchases",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "db_table": "payments",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["seller_id", "created_at"], name="payments_seller_idx"
                    ),
                    models.Index(
                        fields=["buyer", "created_at"], name="payments_buyer_idx"
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)),
                        name="payments_quantity_positive",
                    )
                ],
            },
        ),
    ]
