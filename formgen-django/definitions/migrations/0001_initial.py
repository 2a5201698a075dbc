import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="FormDefinition",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(db_index=True, max_length=255, unique=True)),
                ("version", models.CharField(default="1.0.0", max_length=32)),
                ("schema", models.JSONField(blank=True, default=list, help_text="Form schema nodes")),
                ("description", models.TextField(blank=True, default="")),
                (
                    "locale",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Locale table name; empty uses FORMGEN_DEFAULT_LOCALE",
                        max_length=32,
                    ),
                ),
                ("horizontal", models.BooleanField(default=False)),
                ("initial_values", models.JSONField(blank=True, default=dict, help_text="Initial form values")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "base",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="derived_forms",
                        to="definitions.formdefinition",
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
    ]
