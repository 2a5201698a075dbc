from django.db import models


class FormDefinition(models.Model):
    """A named form schema (an ordered list of row, toolbar and field nodes)."""

    name = models.CharField(max_length=255, unique=True, db_index=True)
    version = models.CharField(max_length=32, default="1.0.0")
    schema = models.JSONField(default=list, blank=True, help_text="Form schema nodes")
    description = models.TextField(blank=True, default="")
    locale = models.CharField(
        max_length=32,
        blank=True,
        default="",
        help_text="Locale table name; empty uses FORMGEN_DEFAULT_LOCALE",
    )
    horizontal = models.BooleanField(default=False)
    initial_values = models.JSONField(default=dict, blank=True, help_text="Initial form values")
    base = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="derived_forms",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} v{self.version}"

    def effective_schema(self):
        """Own schema, or the nearest base definition's when this one has none."""
        seen = set()
        definition = self
        while definition is not None and definition.pk not in seen:
            if definition.schema:
                return definition.schema
            seen.add(definition.pk)
            definition = definition.base
        return []
