"""Composite (``complex``) fields: a nested schema resolved under the field's name."""

from formgen.elements import h
from formgen.layout import effective_size, size_props


class ComplexAdapter:
    def __call__(self, bundle):
        if bundle.is_hidden():
            return None
        if bundle.resolve is None:
            raise RuntimeError("complex fields can only be rendered inside a resolution pass")
        field = bundle.field
        size = effective_size(field, bundle.size)
        children = bundle.resolve(field.get("children") or [], parent=bundle.name, size=size)
        props = dict(size_props(size))
        props["name"] = bundle.name
        props["className"] = field.get("className")
        return h(
            "Fieldset",
            props,
            h("Legend", {}, field["label"]) if field.get("label") else None,
            children,
            key=bundle.key,
        )
