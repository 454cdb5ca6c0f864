import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "deleted_at",
                    models.DateTimeField(
                        blank=True, db_index=True, default=None, null=True
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        max_length=60,
                        validators=[django.core.validators.MinLengthValidator(5)],
                    ),
                ),
                ("price", models.PositiveIntegerField()),
                ("image_url", models.URLField(max_length=2048)),
                ("stock_quantity", models.PositiveIntegerField(default=0)),
                (
                    "condition",
                    models.CharField(
                        choices=[("new", "New"), ("second", "Second")],
                        max_length=10,
                    ),
                ),
                ("is_purchaseable", models.BooleanField(default=True)),
                (
                    "purchase_count",
                    models.PositiveIntegerField(default=0, editable=False),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        editable=False,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="products",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "products",
                "indexes": [
                    models.Index(fields=["owner"], name="products_owner_idx"),
                    models.Index(fields=["price"], name="products_price_idx"),
                    models.Index(fields=["created_at"], name="products_created_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("deleted_at__isnull", True)),
                        fields=("name",),
                        name="products_live_name_unique",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("stock_quantity__gte", 0)),
                        name="products_stock_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("price__gte", 0)),
                        name="products_price_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductTag",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=50)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tags",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "db_table": "product_tags",
                "ordering": ["id"],
                "indexes": [
                    models.Index(
                        fields=["name", "product"], name="product_tags_name_idx"
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("product", "name"),
                        name="product_tags_product_name_unique",
                    )
                ],
            },
        ),
    ]
