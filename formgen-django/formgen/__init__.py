"""Declarative form schema resolution.

Typical use::

    from formgen import FormRenderer, FormState

    form = FormRenderer("contact", schema, locale="de_DE")
    rendered = form.render(FormState.capture(form_values={"email": "a@b.c"}))
"""

from formgen.context import FormState, RenderContext
from formgen.elements import Element, h
from formgen.exceptions import BundleError, FormgenError, SchemaDocumentError, UnsupportedRuleError
from formgen.form import FormRenderer, RenderedForm
from formgen.registry import AdapterRegistry, default_registry
from formgen.resolver import ResolveResult, resolve_schema

__all__ = [
    "AdapterRegistry",
    "BundleError",
    "Element",
    "FormRenderer",
    "FormState",
    "FormgenError",
    "RenderContext",
    "RenderedForm",
    "ResolveResult",
    "SchemaDocumentError",
    "UnsupportedRuleError",
    "default_registry",
    "h",
    "resolve_schema",
]
