from django.db import migrations, models

import apps.configuration.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SystemSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("app_name", models.CharField(default="Ijar Pro", max_length=100)),
                ("item_name", models.CharField(default="Equipment", help_text="Singular noun for an inventory item, e.g. 'Car'.", max_length=50)),
                ("items_name", models.CharField(default="Equipment", max_length=50)),
                ("category_label", models.CharField(default="Category", max_length=50)),
                ("identifier_label", models.CharField(default="Serial number", help_text="Label for the item identifier, e.g. 'Plate number'.", max_length=50)),
                ("currency", models.CharField(default="SAR", max_length=10)),
                ("categories", models.JSONField(blank=True, default=apps.configuration.models.default_categories)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "System settings",
                "verbose_name_plural": "System settings",
            },
        ),
    ]
