"""Shared scaffolding for field adapters.

Every editable adapter renders the same frame: a ``FormGroup`` carrying the
size and validation state, an optional label column and a field column holding
the control followed by feedback and help blocks.  Subclasses only provide the
control (and its static rendering).
"""

from formgen.elements import h
from formgen.layout import effective_size, field_size, label_size, size_props

# Extra descriptor attributes forwarded to the control when present.
PASSTHROUGH_PROPS = (
    "placeholder", "maxLength", "min", "max", "step", "rows", "cols",
    "autoComplete", "autoFocus", "readOnly", "pattern", "className", "id",
)


def passthrough(field, keys=PASSTHROUGH_PROPS):
    return {key: field[key] for key in keys if key in field}


def validation_state(bundle):
    if not bundle.touched():
        return None
    if bundle.error():
        return "error"
    return "success"


def display_value(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(display_value(v) for v in value)
    return str(value)


class FieldAdapter:
    """Render a labelled form group around a control."""

    def __call__(self, bundle):
        if bundle.is_hidden():
            return None
        return self.render(bundle)

    def render(self, bundle):
        field = bundle.field
        size = effective_size(field, bundle.size)
        props = dict(size_props(size))
        props["validationState"] = validation_state(bundle)

        if bundle.is_static:
            control = self.static_control(bundle)
        else:
            control = self.control(bundle)

        return h(
            "FormGroup",
            props,
            self.label(bundle),
            h("Col", field_size(field, bundle.horizontal), control, self.feedback(bundle)),
            key=bundle.key,
        )

    def label(self, bundle):
        text = bundle.field.get("label")
        if not text:
            return None
        props = dict(label_size(bundle.field, bundle.horizontal) or {})
        props["htmlFor"] = bundle.name
        return h("ControlLabel", props, text)

    def feedback(self, bundle):
        touched = bundle.touched()
        error = bundle.error()
        help_text = bundle.field.get("help")
        blocks = []
        if touched and error:
            blocks.append(h("FormControl.Feedback"))
        if help_text and (not touched or not error):
            blocks.append(h("HelpBlock", {}, help_text))
        if touched and error:
            blocks.append(h("HelpBlock", {"error": True}, error))
        return blocks

    def control(self, bundle):
        raise NotImplementedError

    def static_control(self, bundle):
        return h("FormControl.Static", {"name": bundle.name}, display_value(bundle.value()))
