from rest_framework import serializers

from definitions.models import FormDefinition
from formgen.locales import available_locales
from formgen.validators import validate_form_schema


def _check_schema(value):
    errors = validate_form_schema(value)
    if errors:
        raise serializers.ValidationError(errors)
    return value


def _check_locale(value):
    if value is None or value == "" or isinstance(value, dict):
        return value
    if isinstance(value, str):
        if value not in available_locales():
            raise serializers.ValidationError(
                f"Unknown locale {value!r}; available: {', '.join(available_locales())}"
            )
        return value
    raise serializers.ValidationError("Locale must be a name or a string table")


class FormDefinitionSerializer(serializers.ModelSerializer):
    base = serializers.SlugRelatedField(
        slug_field="name",
        queryset=FormDefinition.objects.all(),
        required=False,
        allow_null=True,
    )

    class Meta:
        model = FormDefinition
        fields = [
            "id",
            "name",
            "version",
            "schema",
            "description",
            "locale",
            "horizontal",
            "initial_values",
            "base",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_schema(self, value):
        return _check_schema(value)

    def validate_locale(self, value):
        return _check_locale(value)

    def validate_initial_values(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Initial values must be an object")
        return value

    def validate(self, attrs):
        base = attrs.get("base")
        if base is not None and self.instance is not None:
            seen = {self.instance.pk}
            while base is not None:
                if base.pk in seen:
                    raise serializers.ValidationError({"base": "Base definitions cannot form a cycle"})
                seen.add(base.pk)
                base = base.base
        return attrs


class FormDefinitionListSerializer(serializers.ModelSerializer):
    """Lighter serializer for list views (omits the schema)."""

    base = serializers.SlugRelatedField(slug_field="name", read_only=True)

    class Meta:
        model = FormDefinition
        fields = [
            "id",
            "name",
            "version",
            "description",
            "locale",
            "horizontal",
            "base",
            "created_at",
            "updated_at",
        ]


class RenderRequestSerializer(serializers.Serializer):
    """Store snapshot and render flags posted by a client, in the store's camelCase."""

    formValues = serializers.DictField(required=False, default=dict)
    initialValues = serializers.DictField(required=False, allow_null=True, default=None)
    touched = serializers.DictField(required=False, default=dict)
    ui = serializers.DictField(required=False, default=dict)
    errors = serializers.DictField(required=False, default=dict)
    dirty = serializers.BooleanField(required=False, default=False)
    invalid = serializers.BooleanField(required=False, default=False)
    submitting = serializers.BooleanField(required=False, default=False)
    submitFailed = serializers.BooleanField(required=False, default=False)
    submitSucceeded = serializers.BooleanField(required=False, default=False)
    valid = serializers.BooleanField(required=False, default=True)
    static = serializers.BooleanField(required=False, default=False)
    horizontal = serializers.BooleanField(required=False, allow_null=True, default=None)
    locale = serializers.JSONField(required=False, allow_null=True, default=None)

    def validate_locale(self, value):
        return _check_locale(value)


class InlineRenderSerializer(RenderRequestSerializer):
    name = serializers.CharField(required=False, default="inline")
    schema = serializers.JSONField()

    def validate_schema(self, value):
        return _check_schema(value)
