"""Tests for stored form definitions, the render API and the load_forms command."""

import json
import tempfile
from io import StringIO
from pathlib import Path

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from definitions.models import FormDefinition

User = get_user_model()

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

CONTACT_SCHEMA = [
    {
        "row": {
            "col": [
                {"md": 6, "children": [{"type": "text", "name": "name", "label": "Name"}]},
                {"md": 6, "children": [{"type": "email", "name": "email", "label": "Email"}]},
            ]
        }
    },
    {
        "type": "select",
        "name": "topic",
        "options": [{"value": "sales", "desc": "Sales"}, {"value": "support", "desc": "Support"}],
    },
    {"type": "success", "name": "sent"},
    {"buttonToolbar": {"hideOnStatic": True, "children": [{"type": "submit", "name": "send", "label": "Send"}]}},
]


def _find(nodes, tag):
    """Collect serialized elements with *tag* from an API payload."""
    found = []
    for node in nodes:
        if isinstance(node, dict):
            if node.get("tag") == tag:
                found.append(node)
            found.extend(_find(node.get("children", []), tag))
    return found


def _make_definition(**kwargs):
    defaults = {"name": "contact", "schema": CONTACT_SCHEMA}
    defaults.update(kwargs)
    return FormDefinition.objects.create(**defaults)


# ===================================================================
# Model
# ===================================================================


class FormDefinitionModelTest(TestCase):
    def test_effective_schema_own(self):
        definition = _make_definition()
        self.assertEqual(definition.effective_schema(), CONTACT_SCHEMA)

    def test_effective_schema_inherited_from_base(self):
        base = _make_definition()
        derived = FormDefinition.objects.create(name="contact-de", base=base)
        self.assertEqual(derived.effective_schema(), CONTACT_SCHEMA)

    def test_effective_schema_survives_cycles(self):
        first = FormDefinition.objects.create(name="a")
        second = FormDefinition.objects.create(name="b", base=first)
        first.base = second
        first.save()
        self.assertEqual(first.effective_schema(), [])

    def test_str(self):
        self.assertEqual(str(_make_definition(version="2.0.0")), "contact v2.0.0")


# ===================================================================
# Definitions CRUD
# ===================================================================


class DefinitionsAPITest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_superuser("admin", "admin@example.org", "secret")
        _make_definition(description="Contact request")

    def test_list_is_public(self):
        resp = self.client.get("/api/forms/definitions/")
        self.assertEqual(resp.status_code, 200)
        results = resp.json()["results"]
        self.assertEqual([r["name"] for r in results], ["contact"])
        self.assertNotIn("schema", results[0])

    def test_retrieve_by_name(self):
        resp = self.client.get("/api/forms/definitions/contact/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["schema"], CONTACT_SCHEMA)

    def test_search(self):
        _make_definition(name="survey", description="Yearly survey")
        resp = self.client.get("/api/forms/definitions/", {"search": "survey"})
        self.assertEqual([r["name"] for r in resp.json()["results"]], ["survey"])

    def test_create_requires_admin(self):
        resp = self.client.post(
            "/api/forms/definitions/", {"name": "other", "schema": CONTACT_SCHEMA}, format="json"
        )
        self.assertIn(resp.status_code, (401, 403))

    def test_admin_creates_definition(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post(
            "/api/forms/definitions/",
            {"name": "other", "schema": CONTACT_SCHEMA, "locale": "fr_FR", "base": "contact"},
            format="json",
        )
        self.assertEqual(resp.status_code, 201)
        created = FormDefinition.objects.get(name="other")
        self.assertEqual(created.locale, "fr_FR")
        self.assertEqual(created.base.name, "contact")

    def test_invalid_schema_rejected(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post(
            "/api/forms/definitions/",
            {"name": "bad", "schema": [{"type": "radio", "name": "r", "chunks": 0}]},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(any(e.startswith("0.chunks:") for e in resp.json()["schema"]))

    def test_duplicate_field_names_rejected(self):
        self.client.force_authenticate(self.admin)
        schema = [{"type": "text", "name": "a"}, {"type": "text", "name": "a"}]
        resp = self.client.post("/api/forms/definitions/", {"name": "dup", "schema": schema}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["schema"], ["a: field name is used 2 times"])

    def test_unknown_locale_rejected(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.patch("/api/forms/definitions/contact/", {"locale": "xx_XX"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("locale", resp.json())

    def test_base_cycle_rejected(self):
        derived = FormDefinition.objects.create(name="derived", base=FormDefinition.objects.get(name="contact"))
        self.client.force_authenticate(self.admin)
        resp = self.client.patch("/api/forms/definitions/contact/", {"base": derived.name}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_admin_deletes_definition(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.delete("/api/forms/definitions/contact/")
        self.assertEqual(resp.status_code, 204)
        self.assertFalse(FormDefinition.objects.exists())


# ===================================================================
# Render endpoints
# ===================================================================


class RenderAPITest(TestCase):
    def setUp(self):
        self.client = APIClient()
        _make_definition(initial_values={"name": "Ada"})

    def _render(self, body=None, query=""):
        return self.client.post(f"/api/forms/definitions/contact/render/{query}", body or {}, format="json")

    def test_render_returns_elements(self):
        resp = self._render({"formValues": {"email": "a@b.c"}})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["name"], "contact")
        self.assertEqual(data["diagnostics"], [])
        controls = {c["props"]["name"]: c["props"].get("value") for c in _find(data["elements"], "FormControl")}
        self.assertEqual(controls["email"], "a@b.c")
        self.assertEqual(controls["name"], "Ada")  # stored initial values

    def test_posted_initial_values_win(self):
        data = self._render({"initialValues": {"name": "Grace"}}).json()
        controls = {c["props"]["name"]: c["props"].get("value") for c in _find(data["elements"], "FormControl")}
        self.assertEqual(controls["name"], "Grace")

    def test_render_uses_stored_locale(self):
        FormDefinition.objects.filter(name="contact").update(locale="de_DE")
        data = self._render().json()
        self.assertEqual(_find(data["elements"], "option")[0]["children"], ["Bitte wählen"])

    def test_posted_locale_overrides_stored_locale(self):
        FormDefinition.objects.filter(name="contact").update(locale="de_DE")
        data = self._render({"locale": "nl_NL"}).json()
        self.assertEqual(_find(data["elements"], "option")[0]["children"], ["Maak een keuze"])

    def test_static_render_hides_toolbar(self):
        data = self._render({"static": True}).json()
        self.assertEqual(_find(data["elements"], "Button"), [])
        self.assertEqual(len(_find(data["elements"], "FormControl.Static")), 3)

    def test_posted_errors_drive_validation_state(self):
        data = self._render({"touched": {"email": True}, "errors": {"email": "Required"}}).json()
        groups = [g for g in _find(data["elements"], "FormGroup") if g["props"].get("validationState")]
        self.assertEqual([g["props"]["validationState"] for g in groups], ["error"])

    def test_submit_succeeded_shows_message(self):
        data = self._render({"submitSucceeded": True}).json()
        self.assertEqual(_find(data["elements"], "Alert")[0]["props"]["bsStyle"], "success")

    def test_html_output(self):
        resp = self._render({"formValues": {"email": "a@b.c"}}, query="?output=html")
        html = resp.json()["html"]
        self.assertTrue(html.startswith('<form method="post" name="contact">'))
        self.assertIn('value="a@b.c"', html)

    def test_derived_definition_renders_base_schema(self):
        FormDefinition.objects.create(name="contact-copy", base=FormDefinition.objects.get(name="contact"))
        resp = self.client.post("/api/forms/definitions/contact-copy/render/", {}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "contact-copy")
        self.assertTrue(_find(resp.json()["elements"], "FormControl"))

    def test_unknown_definition(self):
        resp = self.client.post("/api/forms/definitions/nope/render/", {}, format="json")
        self.assertEqual(resp.status_code, 404)

    def test_invalid_render_request(self):
        resp = self._render({"formValues": ["not", "a", "mapping"]})
        self.assertEqual(resp.status_code, 400)

    def test_inline_render(self):
        resp = self.client.post(
            "/api/forms/render/",
            {"name": "quick", "schema": [{"type": "text", "name": "q"}], "formValues": {"q": "hi"}},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "quick")
        self.assertEqual(_find(resp.json()["elements"], "FormControl")[0]["props"]["value"], "hi")

    def test_inline_render_reports_jsx_without_component(self):
        resp = self.client.post("/api/forms/render/", {"schema": [{"type": "jsx", "name": "widget"}]}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["elements"], [])
        self.assertEqual(len(resp.json()["diagnostics"]), 1)

    def test_inline_render_invalid_schema(self):
        resp = self.client.post("/api/forms/render/", {"schema": [{"name": "orphan"}]}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("schema", resp.json())

    def test_locales(self):
        resp = self.client.get("/api/forms/locales/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["locales"], ["de_DE", "en_US", "fr_FR", "nl_NL"])


# ===================================================================
# load_forms management command
# ===================================================================


class LoadFormsCommandTest(TestCase):
    def _call(self, forms_dir=None):
        stdout, stderr = StringIO(), StringIO()
        kwargs = {"stdout": stdout, "stderr": stderr}
        if forms_dir is not None:
            kwargs["forms_dir"] = str(forms_dir)
        call_command("load_forms", **kwargs)
        return stdout.getvalue(), stderr.getvalue()

    def test_loads_json_and_yaml_with_base(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "base.json").write_text(
                json.dumps({"name": "base", "schema": [{"type": "text", "name": "a"}]}), encoding="utf-8"
            )
            (root / "derived.yaml").write_text(
                "name: derived\nlocale: fr_FR\nbase: base\n", encoding="utf-8"
            )
            (root / "notes.txt").write_text("ignored", encoding="utf-8")
            out, err = self._call(root)

        self.assertIn("Loaded 2 forms", out)
        self.assertEqual(err, "")
        derived = FormDefinition.objects.get(name="derived")
        self.assertEqual(derived.base.name, "base")
        self.assertEqual(derived.schema, [{"type": "text", "name": "a"}])
        self.assertEqual(derived.locale, "fr_FR")

    def test_reload_updates(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "form.json"
            path.write_text(json.dumps({"name": "f", "version": "1.0.0", "schema": []}), encoding="utf-8")
            self._call(tmp)
            path.write_text(json.dumps({"name": "f", "version": "1.1.0", "schema": []}), encoding="utf-8")
            out, _ = self._call(tmp)
        self.assertIn("Updated: f", out)
        self.assertEqual(FormDefinition.objects.get(name="f").version, "1.1.0")

    def test_invalid_documents_skipped(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "broken.json").write_text("{not json", encoding="utf-8")
            (root / "dup.yaml").write_text(
                "name: dup\nschema:\n  - {type: text, name: a}\n  - {type: text, name: a}\n", encoding="utf-8"
            )
            (root / "noname.yaml").write_text("schema: []\n", encoding="utf-8")
            out, err = self._call(root)
        self.assertIn("Loaded 0 forms", out)
        self.assertIn("Skipping broken.json", err)
        self.assertIn("Skipping dup.yaml: schema.a: field name is used 2 times", err)
        self.assertIn("Skipping noname.yaml: name: is required", err)
        self.assertFalse(FormDefinition.objects.exists())

    def test_missing_directory(self):
        _, err = self._call("/nonexistent/forms")
        self.assertIn("Forms directory not found", err)

    def test_bundled_forms(self):
        out, err = self._call()
        self.assertEqual(err, "")
        self.assertIn("Loaded 2 forms", out)
        german = FormDefinition.objects.get(name="contact-de")
        self.assertEqual(german.base.name, "contact")
        self.assertEqual(german.schema, FormDefinition.objects.get(name="contact").schema)

    @override_settings(FORMGEN_FORMS_DIR="/nonexistent/configured")
    def test_uses_configured_directory(self):
        _, err = self._call()
        self.assertIn("/nonexistent/configured", err)
