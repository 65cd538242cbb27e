from django.db import migrations, models

import translations.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("translations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Day",
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
                    "number",
                    models.PositiveSmallIntegerField(
                        help_text="1 = Monday ... 7 = Sunday.",
                        unique=True,
                        verbose_name="ISO weekday",
                    ),
                ),
                (
                    "_name",
                    translations.models.TranslationGroupField(
                        blank=True,
                        db_index=True,
                        editable=False,
                        null=True,
                        verbose_name="name",
                    ),
                ),
            ],
            options={
                "verbose_name": "day",
                "verbose_name_plural": "days",
                "ordering": ("number",),
            },
        ),
    ]
