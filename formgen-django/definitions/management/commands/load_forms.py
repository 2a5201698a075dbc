"""Load form definitions from JSON or YAML documents.

Usage:
    python manage.py load_forms
    python manage.py load_forms --forms-dir /path/to/forms

Each document is a mapping::

    name: contact
    version: 1.0.0          # optional
    description: ...        # optional
    locale: de_DE           # optional
    horizontal: true        # optional
    initial_values: {...}   # optional
    base: other-form        # optional, schema inherited when omitted
    schema: [...]
"""

import json
from pathlib import Path

import yaml
from django.conf import settings
from django.core.management.base import BaseCommand

from definitions.models import FormDefinition
from formgen.locales import available_locales
from formgen.validators import validate_form_schema

SUFFIXES = (".json", ".yaml", ".yml")


def _read_document(path: Path):
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def _document_errors(document) -> list:
    if not isinstance(document, dict):
        return ["(root): document must be a mapping"]
    errors = []
    if not document.get("name"):
        errors.append("name: is required")
    locale = document.get("locale")
    if locale and locale not in available_locales():
        errors.append(f"locale: unknown locale {locale!r}")
    if "schema" in document:
        errors.extend(f"schema.{e}" for e in validate_form_schema(document["schema"]))
    elif not document.get("base"):
        errors.append("schema: is required when no base is given")
    return errors


class Command(BaseCommand):
    help = "Load or update form definitions from JSON/YAML documents"

    def add_arguments(self, parser):
        parser.add_argument(
            "--forms-dir",
            type=str,
            default=None,
            help="Directory holding *.json/*.yaml form documents (default: FORMGEN_FORMS_DIR)",
        )

    def handle(self, *args, **options):
        forms_dir = Path(options["forms_dir"] or settings.FORMGEN_FORMS_DIR)

        if not forms_dir.is_dir():
            self.stderr.write(self.style.ERROR(f"Forms directory not found: {forms_dir}"))
            return

        # First pass: create/update all definitions
        loaded = []
        bases = {}
        for path in sorted(forms_dir.iterdir()):
            if path.suffix not in SUFFIXES or not path.is_file():
                continue

            try:
                document = _read_document(path)
            except (ValueError, yaml.YAMLError) as exc:
                self.stderr.write(self.style.WARNING(f"Skipping {path.name}: {exc}"))
                continue

            errors = _document_errors(document)
            if errors:
                self.stderr.write(self.style.WARNING(f"Skipping {path.name}: {'; '.join(errors)}"))
                continue

            name = document["name"]
            definition, created = FormDefinition.objects.update_or_create(
                name=name,
                defaults={
                    "version": str(document.get("version", "1.0.0")),
                    "schema": document.get("schema") or [],
                    "description": document.get("description", ""),
                    "locale": document.get("locale") or "",
                    "horizontal": bool(document.get("horizontal", False)),
                    "initial_values": document.get("initial_values") or {},
                },
            )

            action = "Created" if created else "Updated"
            self.stdout.write(f"  {action}: {name}")
            loaded.append(name)
            if document.get("base"):
                bases[name] = document["base"]

        # Second pass: link base definitions and inherit their schema
        for name, base_name in bases.items():
            definition = FormDefinition.objects.get(name=name)
            try:
                parent = FormDefinition.objects.get(name=base_name)
            except FormDefinition.DoesNotExist:
                self.stderr.write(self.style.WARNING(f"  {name}: base {base_name} not found"))
                continue
            if parent.pk == definition.pk:
                self.stderr.write(self.style.WARNING(f"  {name}: a definition cannot be its own base"))
                continue

            updated_fields = []
            if definition.base_id != parent.pk:
                definition.base = parent
                updated_fields.append("base")
                self.stdout.write(f"  Linked: {name} → {base_name}")
            if not definition.schema and parent.schema:
                definition.schema = parent.schema
                updated_fields.append("schema")
                self.stdout.write(f"  Inherited schema: {name} ← {base_name}")
            if updated_fields:
                definition.save(update_fields=updated_fields)

        self.stdout.write(self.style.SUCCESS(f"Loaded {len(loaded)} forms: {', '.join(loaded)}"))
