"""Render stored or inline form schemas for the API."""

import logging

from django.conf import settings

from formgen.context import FormState
from formgen.form import FormRenderer
from formgen.html import render_html

logger = logging.getLogger(__name__)


def build_state(data, initial_values=None) -> FormState:
    """Capture a store snapshot from validated render-request data."""
    initial = data.get("initialValues")
    if initial is None:
        initial = initial_values or {}
    return FormState.capture(
        form_values=data.get("formValues"),
        initial_values=initial,
        touched=data.get("touched"),
        ui=data.get("ui"),
        dirty=data.get("dirty", False),
        invalid=data.get("invalid", False),
        submitting=data.get("submitting", False),
        submit_failed=data.get("submitFailed", False),
        submit_succeeded=data.get("submitSucceeded", False),
        valid=data.get("valid", True),
    )


def render_form(name, schema, data, locale=None, horizontal=False, initial_values=None, as_html=False) -> dict:
    """Render *schema* against the posted snapshot and return the API payload.

    Errors posted by the client are what its own validation produced; they are
    handed to the form as its validation function result.
    """
    errors = dict(data.get("errors") or {})
    if data.get("horizontal") is not None:
        horizontal = data["horizontal"]
    form = FormRenderer(
        name,
        schema,
        locale=data.get("locale") or locale or settings.FORMGEN_DEFAULT_LOCALE,
        horizontal=horizontal,
        validate=lambda values: errors,
    )
    rendered = form.render(build_state(data, initial_values), static=data.get("static", False))
    if rendered.diagnostics:
        logger.warning("Form %s rendered with diagnostics: %s", name, "; ".join(rendered.diagnostics))

    payload = rendered.to_dict()
    if as_html:
        payload["html"] = str(render_html(rendered.root))
    return payload


def render_definition(definition, data, as_html=False) -> dict:
    """Render a stored :class:`~definitions.models.FormDefinition`."""
    return render_form(
        definition.name,
        definition.effective_schema(),
        data,
        locale=definition.locale,
        horizontal=definition.horizontal,
        initial_values=definition.initial_values,
        as_html=as_html,
    )
