"""Tests for schema resolution, rules, option lists, locales, layout and HTML output."""

import copy

from django.test import SimpleTestCase

from formgen.bundle import AdapterBundle
from formgen.context import FormState, RenderContext
from formgen.elements import Element, h
from formgen.exceptions import BundleError, UnsupportedRuleError
from formgen.form import FormRenderer
from formgen.html import render_html
from formgen.locales import LOCALES, LocaleResolver, section, translate
from formgen.options import chunk_options, column_width, filter_options
from formgen.predicates import MISSING, coerce_rule, evaluate, lookup
from formgen.registry import AdapterRegistry, default_registry
from formgen.resolver import field_names, resolve_schema
from formgen.validators import validate_form_schema

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _context(static=False, horizontal=False, locale=None, errors=None, **store):
    return RenderContext(
        static=static,
        horizontal=horizontal,
        locale=dict(LOCALES[locale or "en_US"]),
        state=FormState.capture(**store),
        errors=errors or {},
    )


def _resolve(schema, **kwargs):
    return resolve_schema(schema, _context(**kwargs))


def _walk(nodes):
    for node in nodes:
        if isinstance(node, Element):
            yield node
            yield from _walk(node.children)


def _tags(nodes, tag):
    return [node for node in _walk(nodes) if node.tag == tag]


def _control_names(nodes):
    return [node.props.get("name") for node in _tags(nodes, "FormControl")]


FRUITS = [
    {"value": "a", "desc": "Alpha"},
    {"value": "b", "desc": "Beta"},
    {"value": "c", "desc": "Gamma"},
    {"value": "d", "desc": "Delta"},
    {"value": "e", "desc": "Epsilon"},
]


# ===================================================================
# Static visibility pruning
# ===================================================================


class StaticVisibilityTest(SimpleTestCase):
    def test_show_on_static_field_skipped_when_editable(self):
        result = _resolve([{"type": "text", "name": "a", "showOnStatic": True}])
        self.assertEqual(result.elements, [])

    def test_show_on_static_field_rendered_when_static(self):
        result = _resolve([{"type": "text", "name": "a", "showOnStatic": True}], static=True)
        self.assertEqual(len(result.elements), 1)

    def test_hide_on_static_field_skipped_when_static(self):
        result = _resolve([{"type": "text", "name": "a", "hideOnStatic": True}], static=True)
        self.assertEqual(result.elements, [])

    def test_hidden_row_never_resolves_descendants(self):
        calls = []

        def component():
            calls.append(1)
            return h("Custom")

        schema = [
            {
                "hideOnStatic": True,
                "row": {"col": [{"children": [{"type": "jsx", "component": component}]}]},
            }
        ]
        self.assertEqual(_resolve(schema, static=True).elements, [])
        self.assertEqual(calls, [])
        self.assertEqual(len(_resolve(schema).elements), 1)
        self.assertEqual(calls, [1])

    def test_hidden_column_drops_only_that_column(self):
        schema = [
            {
                "row": {
                    "col": [
                        {"children": [{"type": "text", "name": "a"}]},
                        {"showOnStatic": True, "children": [{"type": "text", "name": "b"}]},
                    ]
                }
            }
        ]
        result = _resolve(schema)
        self.assertEqual(len(_tags(result.elements, "Col")), 2)  # one grid column + field column
        self.assertEqual(_control_names(result.elements), ["a"])

    def test_hidden_toolbar_skipped(self):
        schema = [{"buttonToolbar": {"showOnStatic": True, "children": [{"type": "submit", "name": "go"}]}}]
        self.assertEqual(_resolve(schema).elements, [])


# ===================================================================
# Name derivation
# ===================================================================


class NameDerivationTest(SimpleTestCase):
    def test_complex_prefixes_child_names(self):
        schema = [{"type": "complex", "name": "address", "children": [{"type": "text", "name": "city"}]}]
        result = _resolve(schema)
        self.assertEqual(_control_names(result.elements), ["address.city"])
        self.assertEqual(_tags(result.elements, "Fieldset")[0].props["name"], "address")

    def test_row_parent_composes_with_complex_prefix(self):
        schema = [
            {
                "type": "complex",
                "name": "person",
                "children": [
                    {"row": {"parent": "contact", "col": [{"children": [{"type": "email", "name": "email"}]}]}}
                ],
            }
        ]
        self.assertEqual(_control_names(_resolve(schema).elements), ["person.contact.email"])

    def test_schema_is_not_mutated(self):
        schema = [{"type": "complex", "name": "address", "children": [{"type": "text", "name": "city"}]}]
        before = copy.deepcopy(schema)
        _resolve(schema)
        self.assertEqual(schema, before)

    def test_nested_value_is_bound(self):
        schema = [{"type": "complex", "name": "address", "children": [{"type": "text", "name": "city"}]}]
        result = _resolve(schema, form_values={"address": {"city": "Utrecht"}})
        self.assertEqual(_tags(result.elements, "FormControl")[0].props["value"], "Utrecht")

    def test_field_names_lists_dotted_names(self):
        schema = [
            {"type": "text", "name": "title"},
            {"row": {"parent": "meta", "col": [{"children": [{"type": "text", "name": "tag"}]}]}},
            {"type": "complex", "name": "address", "children": [{"type": "text", "name": "city"}]},
            {"buttonToolbar": {"children": [{"type": "submit", "name": "save"}]}},
        ]
        self.assertEqual(field_names(schema), ["title", "meta.tag", "address.city", "save"])

    def test_field_names_descend_into_unnamed_complex(self):
        schema = [
            {"type": "complex", "children": [{"type": "text", "name": "a"}]},
            {"type": "text", "name": "a"},
        ]
        self.assertEqual(field_names(schema), ["a", "a"])
        self.assertEqual(_control_names(_resolve(schema).elements), ["a", "a"])

    def test_unnamed_complex_keeps_enclosing_prefix(self):
        schema = [
            {
                "type": "complex",
                "name": "person",
                "children": [{"type": "complex", "children": [{"type": "text", "name": "city"}]}],
            }
        ]
        self.assertEqual(field_names(schema), ["person.city"])
        self.assertEqual(_control_names(_resolve(schema).elements), ["person.city"])


# ===================================================================
# Layout sizing
# ===================================================================


class LayoutSizeTest(SimpleTestCase):
    def test_field_inherits_row_size(self):
        schema = [{"row": {"bsSize": "lg", "col": [{"children": [{"type": "text", "name": "a"}]}]}}]
        group = _tags(_resolve(schema).elements, "FormGroup")[0]
        self.assertEqual(group.props["bsSize"], "lg")

    def test_field_size_overrides_row_size(self):
        schema = [
            {"row": {"bsSize": "lg", "col": [{"children": [{"type": "text", "name": "a", "bsSize": "sm"}]}]}}
        ]
        group = _tags(_resolve(schema).elements, "FormGroup")[0]
        self.assertEqual(group.props["bsSize"], "sm")

    def test_column_size_overrides_row_size(self):
        schema = [
            {"row": {"bsSize": "lg", "col": [{"bsSize": "small", "children": [{"type": "text", "name": "a"}]}]}}
        ]
        group = _tags(_resolve(schema).elements, "FormGroup")[0]
        self.assertEqual(group.props["bsSize"], "small")

    def test_medium_size_is_not_emitted(self):
        schema = [{"type": "text", "name": "a", "bsSize": "medium"}]
        group = _tags(_resolve(schema).elements, "FormGroup")[0]
        self.assertNotIn("bsSize", group.props)

    def test_toolbar_size_propagates_to_buttons(self):
        schema = [{"buttonToolbar": {"bsSize": "sm", "children": [{"type": "submit", "name": "save", "label": "Save"}]}}]
        button = _tags(_resolve(schema).elements, "Button")[0]
        self.assertEqual(button.props["bsSize"], "sm")
        self.assertEqual(button.props["type"], "submit")
        self.assertEqual(button.props["bsStyle"], "primary")

    def test_row_columns_carry_grid_props(self):
        schema = [{"row": {"col": [{"md": 6, "smOffset": 1, "children": []}]}}]
        column = _resolve(schema).elements[0].children[0]
        self.assertEqual(column.props, {"md": 6, "smOffset": 1})

    def test_horizontal_layout_label_and_field_sizes(self):
        schema = [{"type": "text", "name": "a", "label": "A"}]
        result = _resolve(schema, horizontal=True)
        self.assertEqual(_tags(result.elements, "ControlLabel")[0].props, {"sm": 2, "htmlFor": "a"})
        self.assertEqual(_tags(result.elements, "Col")[0].props, {"sm": 10})

    def test_explicit_sizes_override_horizontal_defaults(self):
        schema = [{"type": "text", "name": "a", "label": "A", "labelSize": {"md": 4}, "fieldSize": {"md": 8}}]
        result = _resolve(schema, horizontal=True)
        self.assertEqual(_tags(result.elements, "ControlLabel")[0].props, {"md": 4, "htmlFor": "a"})
        self.assertEqual(_tags(result.elements, "Col")[0].props, {"md": 8})

    def test_stacked_layout_emits_no_sizes(self):
        result = _resolve([{"type": "text", "name": "a", "label": "A"}])
        self.assertEqual(_tags(result.elements, "ControlLabel")[0].props, {"htmlFor": "a"})
        self.assertEqual(_tags(result.elements, "Col")[0].props, {})


# ===================================================================
# Rules
# ===================================================================


class PredicateTest(SimpleTestCase):
    STATUS = {"field": "status", "value": "active"}

    def test_equals_rule(self):
        self.assertTrue(evaluate(self.STATUS, {"status": "active"}))
        self.assertFalse(evaluate(self.STATUS, {"status": "inactive"}))

    def test_equals_rule_falls_back_to_initial_values(self):
        self.assertTrue(evaluate(self.STATUS, {}, {"status": "active"}))

    def test_present_none_does_not_fall_back(self):
        self.assertFalse(evaluate("comment", {"comment": None}, {"comment": "kept"}))

    def test_non_empty_rule(self):
        self.assertTrue(evaluate("comment", {"comment": "hi"}))
        self.assertFalse(evaluate("comment", {"comment": ""}))
        self.assertFalse(evaluate("comment", {}))
        self.assertTrue(evaluate("comment", {}, {"comment": "from initial"}))
        self.assertFalse(evaluate("tags", {"tags": []}))
        self.assertTrue(evaluate("count", {"count": 0}))

    def test_bool_rule(self):
        self.assertTrue(evaluate(True))
        self.assertFalse(evaluate(False))

    def test_equality_is_strict(self):
        self.assertFalse(evaluate({"field": "n", "value": 1}, {"n": True}))
        self.assertFalse(evaluate({"field": "n", "value": "1"}, {"n": 1}))
        self.assertTrue(evaluate({"field": "n", "value": 1}, {"n": 1.0}))

    def test_dotted_field_lookup(self):
        self.assertTrue(evaluate({"field": "address.city", "value": "Paris"}, {"address": {"city": "Paris"}}))
        self.assertEqual(lookup({"a.b": 1, "a": {"b": 2}}, "a.b"), 1)
        self.assertEqual(lookup({"items": [{"x": 5}]}, "items.0.x"), 5)
        self.assertIs(lookup({}, "missing"), MISSING)

    def test_unsupported_rule_raises(self):
        for raw in (42, {"value": 1}, ["status"], None):
            with self.subTest(raw=raw):
                with self.assertRaises(UnsupportedRuleError):
                    coerce_rule(raw)


class FieldRuleTest(SimpleTestCase):
    def test_hidden_rule_hides_field(self):
        schema = [{"type": "text", "name": "reason", "hidden": {"field": "kind", "value": "simple"}}]
        self.assertEqual(_resolve(schema, form_values={"kind": "simple"}).elements, [])
        self.assertEqual(len(_resolve(schema, form_values={"kind": "other"}).elements), 1)

    def test_show_rule_requires_truthy_result(self):
        schema = [{"type": "text", "name": "details", "show": "comment"}]
        self.assertEqual(_resolve(schema, form_values={"comment": ""}).elements, [])
        self.assertEqual(len(_resolve(schema, form_values={"comment": "yes"}).elements), 1)

    def test_callable_rule(self):
        schema = [{"type": "text", "name": "a", "hidden": lambda: True}]
        self.assertEqual(_resolve(schema).elements, [])

    def test_disabled_rule(self):
        schema = [{"type": "text", "name": "a", "disabled": "locked"}]
        control = _tags(_resolve(schema, form_values={"locked": "yes"}).elements, "FormControl")[0]
        self.assertTrue(control.props["disabled"])

    def test_unsupported_rule_drops_only_that_field(self):
        schema = [{"type": "text", "name": "bad", "disabled": 42}, {"type": "text", "name": "good"}]
        with self.assertLogs("formgen.resolver", level="WARNING") as cm:
            result = _resolve(schema)
        self.assertEqual(_control_names(result.elements), ["good"])
        self.assertEqual(len(result.diagnostics), 1)
        self.assertIn("'bad'", result.diagnostics[0])
        self.assertEqual(len(cm.records), 1)

    def test_invalid_chunks_drops_only_that_field(self):
        schema = [{"type": "text", "name": "good"}, {"type": "radio", "name": "r", "options": FRUITS, "chunks": -1}]
        with self.assertLogs("formgen.resolver", level="WARNING"):
            result = _resolve(schema)
        self.assertEqual(_control_names(result.elements), ["good"])
        self.assertEqual(_tags(result.elements, "Radio"), [])
        self.assertEqual(len(result.diagnostics), 1)
        self.assertIn("'r'", result.diagnostics[0])

    def test_non_mapping_field_size_drops_only_that_field(self):
        schema = [{"type": "text", "name": "wide", "fieldSize": 6}, {"type": "text", "name": "good"}]
        with self.assertLogs("formgen.resolver", level="WARNING"):
            result = _resolve(schema, horizontal=True)
        self.assertEqual(_control_names(result.elements), ["good"])
        self.assertEqual(len(result.diagnostics), 1)
        self.assertIn("'wide'", result.diagnostics[0])


# ===================================================================
# Malformed nodes, dispatch and bundle
# ===================================================================


class DispatchTest(SimpleTestCase):
    def test_malformed_node_is_reported(self):
        schema = [{"name": "orphan"}, {"type": "text", "name": "a"}]
        with self.assertLogs("formgen.resolver", level="WARNING") as cm:
            result = _resolve(schema)
        self.assertEqual(len(result.elements), 1)
        self.assertEqual(len(result.diagnostics), 1)
        self.assertTrue(result.diagnostics[0].startswith("[0]"))
        self.assertEqual(len(cm.records), 1)

    def test_node_with_two_kinds_is_reported(self):
        result = _resolve([{"type": "text", "name": "a", "row": {"col": []}}])
        self.assertEqual(result.elements, [])
        self.assertEqual(len(result.diagnostics), 1)

    def test_unknown_type_renders_text_input(self):
        control = _tags(_resolve([{"type": "fancy", "name": "a"}]).elements, "FormControl")[0]
        self.assertEqual(control.props["type"], "text")

    def test_html_input_type_kept(self):
        control = _tags(_resolve([{"type": "email", "name": "a"}]).elements, "FormControl")[0]
        self.assertEqual(control.props["type"], "email")

    def test_hidden_input_has_no_form_group(self):
        result = _resolve([{"type": "hidden", "name": "id"}], form_values={"id": 7})
        self.assertEqual(result.elements[0].tag, "FormControl")
        self.assertEqual(result.elements[0].props["value"], "7")

    def test_jsx_component_called_directly(self):
        schema = [{"type": "jsx", "component": lambda: h("Custom", {"x": 1})}]
        self.assertEqual(_resolve(schema).elements, [h("Custom", {"x": 1})])

    def test_jsx_without_component_is_reported(self):
        result = _resolve([{"type": "react", "name": "widget"}])
        self.assertEqual(result.elements, [])
        self.assertEqual(len(result.diagnostics), 1)

    def test_resolution_is_idempotent(self):
        schema = [
            {"row": {"bsSize": "lg", "col": [{"md": 6, "children": [{"type": "radio", "name": "r", "options": FRUITS, "chunks": 2}]}]}},
            {"buttonToolbar": {"children": [{"type": "submit", "name": "save"}]}},
        ]
        context = _context(form_values={"r": "b"})
        self.assertEqual(resolve_schema(schema, context).elements, resolve_schema(schema, context).elements)

    def test_custom_adapter_registration(self):
        registry = default_registry()
        registry.register("stars", lambda bundle: h("Stars", {"name": bundle.name}, key=bundle.key))
        result = resolve_schema([{"type": "stars", "name": "rating"}], _context(), registry)
        self.assertEqual(result.elements[0].tag, "Stars")
        self.assertEqual(result.elements[0].props["name"], "rating")

    def test_reserved_tags_cannot_be_registered(self):
        with self.assertRaises(ValueError):
            AdapterRegistry().register("jsx", lambda bundle: None)

    def test_bundle_requires_fields(self):
        check = lambda rule: False  # noqa: E731
        with self.assertRaises(BundleError):
            AdapterBundle(check_disabled=None, check_hidden=check, locale={}, key=0, field={})
        with self.assertRaises(BundleError):
            AdapterBundle(check_disabled=check, check_hidden=check, locale={}, key=None, field={})
        with self.assertRaises(BundleError):
            AdapterBundle(check_disabled=check, check_hidden=check, locale=None, key=0, field={})


# ===================================================================
# Option filter / chunker
# ===================================================================


class OptionsTest(SimpleTestCase):
    def test_filter_is_case_insensitive_substring(self):
        options = [{"desc": "Alpha"}, {"desc": "Beta"}]
        self.assertEqual(filter_options(options, "al", False), [{"desc": "Alpha"}])

    def test_empty_term_keeps_everything(self):
        self.assertEqual(filter_options(FRUITS, "", False), FRUITS)

    def test_static_mode_keeps_bound_value(self):
        self.assertEqual(filter_options(FRUITS, "zzz", True, "c"), [FRUITS[2]])
        self.assertEqual(filter_options(FRUITS, "", True, ["a", "e"]), [FRUITS[0], FRUITS[4]])

    def test_static_mode_compares_strictly(self):
        options = [{"value": 1, "desc": "One"}, {"value": "1", "desc": "Str"}, {"value": None, "desc": "None"}]
        self.assertEqual(filter_options(options, "", True, 1), [options[0]])
        self.assertEqual(filter_options(options, "", True, "1"), [options[1]])
        self.assertEqual(filter_options(options, "", True, [True]), [])
        self.assertEqual(filter_options([{"value": "True"}], "", True, True), [])
        self.assertEqual(filter_options(options, "", True, None), [options[2]])

    def test_chunk_partitions_into_exactly_n_groups(self):
        for length in range(0, 8):
            options = list(range(length))
            for n in range(1, 7):
                with self.subTest(length=length, n=n):
                    groups = chunk_options(options, n)
                    self.assertEqual(len(groups), n)
                    sizes = [len(g) for g in groups]
                    self.assertLessEqual(max(sizes) - min(sizes), 1)
                    self.assertEqual([item for g in groups for item in g], options)

    def test_chunk_rejects_non_positive_count(self):
        with self.assertRaises(ValueError):
            chunk_options(FRUITS, 0)

    def test_column_width(self):
        self.assertEqual(column_width(1), 12)
        self.assertEqual(column_width(5), 2)
        self.assertEqual(column_width(13), 1)


class OptionListAdapterTest(SimpleTestCase):
    def test_chunked_radio_list(self):
        schema = [{"type": "radio", "name": "fruit", "options": FRUITS, "chunks": 3}]
        result = _resolve(schema)
        chunk_cols = [c for c in _tags(result.elements, "Col") if "md" in c.props]
        self.assertEqual(len(chunk_cols), 3)
        self.assertEqual({c.props["md"] for c in chunk_cols}, {4})
        self.assertEqual(len(_tags(result.elements, "Radio")), 5)

    def test_search_term_filters_choices(self):
        schema = [{"type": "radio", "name": "fruit", "options": FRUITS, "searchable": True}]
        result = _resolve(schema, ui={"fruit": {"search": "ta"}})
        search = _tags(result.elements, "SearchBox")[0]
        self.assertEqual(search.props["value"], "ta")
        self.assertEqual(search.props["placeholder"], "Filter")
        self.assertEqual([r.text() for r in _tags(result.elements, "Radio")], ["Beta", "Delta"])

    def test_no_results_message(self):
        schema = [{"type": "radio", "name": "fruit", "options": FRUITS, "searchable": True}]
        result = _resolve(schema, ui={"fruit": {"search": "zzz"}})
        self.assertEqual(_tags(result.elements, "Alert")[0].text(), "No results")

    def test_no_results_message_is_localized_and_overridable(self):
        schema = [{"type": "radio", "name": "fruit", "options": FRUITS, "filter": True}]
        result = _resolve(schema, locale="de_DE", ui={"fruit": {"search": "zzz"}})
        self.assertEqual(_tags(result.elements, "Alert")[0].text(), "Keine Ergebnisse")

        schema[0]["filter_norecords"] = "Nothing here"
        result = _resolve(schema, locale="de_DE", ui={"fruit": {"search": "zzz"}})
        self.assertEqual(_tags(result.elements, "Alert")[0].text(), "Nothing here")

    def test_static_radio_shows_selected_label(self):
        schema = [{"type": "radio", "name": "fruit", "options": FRUITS, "searchable": True}]
        result = _resolve(schema, static=True, form_values={"fruit": "d"})
        self.assertEqual(_tags(result.elements, "SearchBox"), [])
        self.assertEqual(_tags(result.elements, "FormControl.Static")[0].text(), "Delta")

    def test_checkbox_list_marks_selected_values(self):
        schema = [{"type": "checkbox", "name": "picks", "options": FRUITS[:3]}]
        result = _resolve(schema, form_values={"picks": ["a", "c"]})
        self.assertEqual([c.props["checked"] for c in _tags(result.elements, "Checkbox")], [True, False, True])

    def test_single_checkbox_static_text(self):
        schema = [{"type": "checkbox", "name": "agree", "label": "Agree"}]
        result = _resolve(schema, static=True, form_values={"agree": True})
        self.assertEqual(_tags(result.elements, "FormControl.Static")[0].text(), "Agree: Yes")

    def test_select_empty_option_localized(self):
        schema = [{"type": "select", "name": "fruit", "options": FRUITS}]
        result = _resolve(schema, locale="de_DE", form_values={"fruit": "b"})
        options = _tags(result.elements, "option")
        self.assertEqual(options[0].text(), "Bitte wählen")
        self.assertEqual([o.props["selected"] for o in options[1:]], [False, True, False, False, False])

    def test_required_select_has_no_empty_option(self):
        schema = [{"type": "select", "name": "fruit", "options": FRUITS, "required": True}]
        self.assertEqual(len(_tags(_resolve(schema).elements, "option")), 5)


# ===================================================================
# Locales
# ===================================================================


class LocaleResolverTest(SimpleTestCase):
    def test_none_resolves_to_baseline(self):
        self.assertEqual(LocaleResolver().resolve(None), LOCALES["en_US"])

    def test_known_name(self):
        self.assertEqual(LocaleResolver().resolve("fr_FR"), LOCALES["fr_FR"])

    def test_unknown_name_keeps_active_table_and_warns_once(self):
        resolver = LocaleResolver()
        resolver.resolve("nl_NL")
        with self.assertLogs("formgen.locales", level="WARNING") as cm:
            table = resolver.resolve("xx_XX")
        self.assertEqual(table, LOCALES["nl_NL"])
        self.assertEqual(len(cm.records), 1)

    def test_unknown_name_on_fresh_resolver_yields_baseline(self):
        with self.assertLogs("formgen.locales", level="WARNING"):
            table = LocaleResolver().resolve("xx_XX")
        self.assertEqual(table, LOCALES["en_US"])

    def test_mapping_used_directly(self):
        resolver = LocaleResolver()
        self.assertEqual(resolver.resolve({"filter.norecords": "Nada"}), {"filter.norecords": "Nada"})
        self.assertEqual(resolver.active, {"filter.norecords": "Nada"})

    def test_invalid_input_type(self):
        with self.assertRaises(TypeError):
            LocaleResolver().resolve(5)

    def test_resolvers_do_not_share_state(self):
        first, second = LocaleResolver(), LocaleResolver()
        first.resolve("de_DE")
        self.assertEqual(second.active, LOCALES["en_US"])

    def test_translate_and_section(self):
        table = LOCALES["de_DE"]
        self.assertEqual(translate(table, "missing.key", "fallback"), "fallback")
        self.assertEqual(section(table, "datetimepicker")["dateFormat"], "DD.MM.YYYY")

    def test_every_table_has_baseline_keys(self):
        for name, table in LOCALES.items():
            with self.subTest(locale=name):
                self.assertEqual(set(table), set(LOCALES["en_US"]))

    def test_datetime_conf_merges_locale(self):
        schema = [{"type": "datetime", "name": "when", "conf": {"dateFormat": "X", "viewMode": "days"}}]
        picker = _tags(_resolve(schema, locale="de_DE").elements, "DateTime")[0]
        self.assertEqual(picker.props["conf"]["dateFormat"], "DD.MM.YYYY")
        self.assertEqual(picker.props["conf"]["viewMode"], "days")


# ===================================================================
# Form renderer
# ===================================================================


CONTACT_SCHEMA = [
    {"type": "email", "name": "email", "label": "Email", "help": "We never share it"},
    {"type": "error", "name": "failed"},
    {"type": "success", "name": "saved"},
    {"buttonToolbar": {"children": [{"type": "submit", "name": "send", "label": "Send"}]}},
]


def _require_email(values):
    return {} if values.get("email") else {"email": "Required"}


class FormRendererTest(SimpleTestCase):
    def test_envelope(self):
        rendered = FormRenderer("contact", CONTACT_SCHEMA, horizontal=True).render()
        self.assertEqual(rendered.root.tag, "Form")
        self.assertEqual(rendered.root.props, {"name": "contact", "horizontal": True})
        pending = rendered.root.children[0]
        self.assertEqual(pending.tag, "Pending")
        self.assertFalse(pending.props["pending"])
        self.assertEqual(len(rendered.elements), 2)  # messages stay hidden before submit

    def test_pending_while_submitting(self):
        rendered = FormRenderer("contact", CONTACT_SCHEMA).render(FormState.capture(submitting=True))
        self.assertTrue(rendered.root.children[0].props["pending"])
        self.assertTrue(_tags(rendered.elements, "Button")[0].props["disabled"])

    def test_validation_state_from_validate_function(self):
        form = FormRenderer("contact", CONTACT_SCHEMA, validate=_require_email)
        rendered = form.render(FormState.capture(touched={"email": True}))
        group = _tags(rendered.elements, "FormGroup")[0]
        self.assertEqual(group.props["validationState"], "error")
        self.assertEqual([b.text() for b in _tags([group], "HelpBlock")], ["Required"])

        rendered = form.render(FormState.capture(touched={"email": True}, form_values={"email": "a@b.c"}))
        group = _tags(rendered.elements, "FormGroup")[0]
        self.assertEqual(group.props["validationState"], "success")
        self.assertEqual([b.text() for b in _tags([group], "HelpBlock")], ["We never share it"])

    def test_untouched_field_has_no_validation_state(self):
        form = FormRenderer("contact", CONTACT_SCHEMA, validate=_require_email)
        group = _tags(form.render().elements, "FormGroup")[0]
        self.assertNotIn("validationState", group.props)

    def test_submit_messages(self):
        form = FormRenderer("contact", CONTACT_SCHEMA)
        succeeded = form.render(FormState.capture(submit_succeeded=True))
        self.assertEqual([a.props["bsStyle"] for a in _tags(succeeded.elements, "Alert")], ["success"])
        failed = form.render(FormState.capture(submit_failed=True))
        alerts = _tags(failed.elements, "Alert")
        self.assertEqual(alerts[0].props["bsStyle"], "danger")
        self.assertEqual(alerts[0].text(), "Please correct the errors below.")

    def test_static_render_uses_initial_values(self):
        rendered = FormRenderer("contact", CONTACT_SCHEMA).render(
            FormState.capture(initial_values={"email": "x@y.z"}), static=True
        )
        self.assertEqual(_tags(rendered.elements, "FormControl.Static")[0].text(), "x@y.z")

    def test_unknown_locale_logs_and_uses_baseline(self):
        schema = [{"type": "select", "name": "s", "options": FRUITS}]
        form = FormRenderer("f", schema, locale="xx_XX")
        with self.assertLogs("formgen.locales", level="WARNING"):
            rendered = form.render()
        self.assertEqual(_tags(rendered.elements, "option")[0].text(), "Please select")

    def test_should_update(self):
        previous = {"initial_values": {"a": 1}, "static": False}
        self.assertTrue(FormRenderer.should_update(None, previous))
        self.assertFalse(FormRenderer.should_update(previous, {"initial_values": {"a": 1}, "static": False}))
        self.assertTrue(FormRenderer.should_update(previous, {"initial_values": {"a": 2}, "static": False}))
        self.assertTrue(FormRenderer.should_update(previous, {"initial_values": {"a": 1}, "static": True}))

    def test_name_required(self):
        with self.assertRaises(ValueError):
            FormRenderer("", CONTACT_SCHEMA)

    def test_capture_snapshots_store(self):
        values = {"email": "a@b.c"}
        state = FormState.capture(form_values=values, dirty=True)
        values["email"] = "changed"
        self.assertEqual(state.form_values["email"], "a@b.c")
        self.assertFalse(state.pristine)

    def test_to_dict(self):
        data = FormRenderer("contact", CONTACT_SCHEMA).render().to_dict()
        self.assertEqual(data["name"], "contact")
        self.assertEqual(data["elements"][0]["tag"], "FormGroup")
        self.assertEqual(data["diagnostics"], [])


# ===================================================================
# HTML serialization
# ===================================================================


class HtmlRenderTest(SimpleTestCase):
    def test_form_markup(self):
        html = render_html(FormRenderer("contact", CONTACT_SCHEMA, horizontal=True).render().root)
        self.assertIn('<form class="form-horizontal" method="post" name="contact">', html)
        self.assertIn('class="form-group"', html)
        self.assertIn('type="email"', html)
        self.assertIn('class="control-label col-sm-2"', html)
        self.assertIn('<button class="btn btn-primary" name="send" type="submit">Send</button>', html)

    def test_text_is_escaped(self):
        schema = [{"type": "text", "name": "a", "label": "<b>Name</b>"}]
        html = render_html(_resolve(schema).elements)
        self.assertIn("&lt;b&gt;Name&lt;/b&gt;", html)
        self.assertNotIn("<b>", html)

    def test_grid_columns(self):
        schema = [{"row": {"col": [{"md": 6, "xsHidden": True, "children": []}]}}]
        html = render_html(_resolve(schema).elements)
        self.assertEqual(html, '<div class="row"><div class="col-md-6 hidden-xs"></div></div>')

    def test_checked_checkbox(self):
        schema = [{"type": "checkbox", "name": "ok", "label": "OK"}]
        html = render_html(_resolve(schema, form_values={"ok": True}).elements)
        self.assertIn('<input name="ok" type="checkbox" checked>', html)

    def test_numbers_render_as_text(self):
        self.assertEqual(render_html(h("HelpBlock", {}, 3)), '<span class="help-block">3</span>')

    def test_unrenderable_node_rejected(self):
        with self.assertRaises(TypeError):
            render_html(_resolve([{"type": "text", "name": "a"}]))


# ===================================================================
# Schema document validation
# ===================================================================


class SchemaValidationTest(SimpleTestCase):
    def test_valid_schema(self):
        self.assertEqual(validate_form_schema(CONTACT_SCHEMA), [])

    def test_chunks_must_be_positive(self):
        errors = validate_form_schema([{"type": "radio", "name": "r", "chunks": 0}])
        self.assertTrue(any(e.startswith("0.chunks:") for e in errors))

    def test_node_needs_exactly_one_kind(self):
        errors = validate_form_schema([{"type": "text", "name": "a", "row": {"col": []}}])
        self.assertEqual(len(errors), 1)
        self.assertTrue(errors[0].startswith("0:"))

    def test_rule_shape(self):
        errors = validate_form_schema([{"type": "text", "name": "a", "hidden": 42}])
        self.assertTrue(any(e.startswith("0.hidden:") for e in errors))

    def test_duplicate_names(self):
        schema = [
            {"type": "text", "name": "a"},
            {"row": {"col": [{"children": [{"type": "text", "name": "a"}]}]}},
        ]
        self.assertEqual(validate_form_schema(schema), ["a: field name is used 2 times"])

    def test_duplicate_names_inside_unnamed_complex(self):
        schema = [
            {"type": "complex", "children": [{"type": "text", "name": "a"}]},
            {"type": "text", "name": "a"},
        ]
        self.assertEqual(validate_form_schema(schema), ["a: field name is used 2 times"])

    def test_prefixed_names_are_distinct(self):
        schema = [
            {"type": "text", "name": "city"},
            {"type": "complex", "name": "address", "children": [{"type": "text", "name": "city"}]},
        ]
        self.assertEqual(validate_form_schema(schema), [])

    def test_root_must_be_list(self):
        self.assertEqual(validate_form_schema({"type": "text"}), ["(root): {'type': 'text'} is not of type 'array'"])
