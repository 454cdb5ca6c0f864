from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("payments", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="payment",
            name="seller_name",
            field=models.CharField(max_length=301),
        ),
        migrations.AlterField(
            model_name="payment",
            name="buyer_name",
            field=models.CharField(blank=True, default="", max_length=301),
        ),
    ]
