from django.contrib import admin

from definitions.models import FormDefinition


@admin.register(FormDefinition)
class FormDefinitionAdmin(admin.ModelAdmin):
    list_display = ("name", "version", "locale", "horizontal", "base", "updated_at")
    list_filter = ("base", "horizontal")
    search_fields = ("name", "description")
    readonly_fields = ("created_at", "updated_at")
