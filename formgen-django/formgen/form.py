"""One form instance: locale, validation hook and the element envelope."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from formgen.context import FormState, RenderContext
from formgen.elements import Element, h
from formgen.locales import LocaleResolver
from formgen.resolver import resolve_schema

logger = logging.getLogger(__name__)


@dataclass
class RenderedForm:
    name: str
    root: Element
    diagnostics: List[str] = field(default_factory=list)

    @property
    def elements(self):
        """The resolved schema entries inside the form/pending envelope."""
        return self.root.children[0].children

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "elements": [e.to_dict() if isinstance(e, Element) else e for e in self.elements],
            "diagnostics": list(self.diagnostics),
        }


class FormRenderer:
    """Render a named schema against successive store snapshots.

    ``validate`` is the caller's validation function: it receives the current
    form values and returns a mapping of field name to error message.  The
    renderer does not validate anything itself.
    """

    def __init__(
        self,
        name: str,
        fields,
        locale=None,
        horizontal: bool = False,
        validate: Optional[Callable[[dict], dict]] = None,
        registry=None,
        dispatch=None,
        locale_resolver: Optional[LocaleResolver] = None,
    ):
        if not name:
            raise ValueError("A form needs a name")
        if fields is None:
            raise ValueError(f"Form {name!r} needs a list of fields")
        self.name = name
        self.fields = fields
        self.locale = locale
        self.horizontal = bool(horizontal)
        self.validate = validate
        self.registry = registry
        self.dispatch = dispatch
        self.locale_resolver = locale_resolver or LocaleResolver()

    def errors_for(self, state: FormState) -> dict:
        if self.validate is None:
            return {}
        errors = self.validate(state.form_values)
        return dict(errors or {})

    def context_for(self, state: FormState, static: bool = False, locale: Any = None) -> RenderContext:
        table = self.locale_resolver.resolve(locale if locale is not None else self.locale)
        return RenderContext(
            static=bool(static),
            horizontal=self.horizontal,
            locale=table,
            state=state,
            errors=self.errors_for(state),
            dispatch=self.dispatch,
        )

    def render(self, state: Optional[FormState] = None, static: bool = False, locale: Any = None) -> RenderedForm:
        state = state if state is not None else FormState()
        context = self.context_for(state, static=static, locale=locale)
        result = resolve_schema(self.fields, context, self.registry)
        if result.diagnostics:
            logger.info("Form %s rendered with %d skipped node(s)", self.name, len(result.diagnostics))
        root = h(
            "Form",
            {"name": self.name, "horizontal": self.horizontal},
            h("Pending", {"pending": state.submitting}, result.elements),
        )
        return RenderedForm(name=self.name, root=root, diagnostics=result.diagnostics)

    @staticmethod
    def should_update(previous: Optional[dict], current: dict) -> bool:
        """Re-render only when the initial values or the static flag changed.

        Both arguments are render-input mappings with ``initial_values`` and
        ``static`` keys; a missing previous input always renders.
        """
        if previous is None:
            return True
        if previous.get("initial_values") != current.get("initial_values"):
            return True
        return bool(previous.get("static", False)) != bool(current.get("static", False))
