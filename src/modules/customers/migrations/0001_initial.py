import re

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
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
                (
                    "name",
                    models.CharField(
                        max_length=100,
                        unique=True,
                        validators=[
                            django.core.validators.MinLengthValidator(2),
                            django.core.validators.RegexValidator(
                                re.compile("^[a-zA-ZáéíóúÁÉÍÓÚñÑ ]+\\Z"),
                                "El nombre solo puede contener letras y espacios",
                            ),
                        ],
                    ),
                ),
                (
                    "email",
                    models.EmailField(
                        blank=True, max_length=254, null=True, unique=True
                    ),
                ),
                ("phone", models.CharField(blank=True, max_length=15, null=True)),
                ("registered_at", models.DateTimeField(editable=False)),
                ("active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "clientes",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["active"], name="clientes_active_idx")
                ],
            },
        ),
    ]
