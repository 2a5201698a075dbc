"""Buttons and submit-state messages."""

from formgen.elements import h
from formgen.layout import effective_size, size_props
from formgen.locales import translate


class ButtonAdapter:
    def __call__(self, bundle):
        if bundle.is_hidden():
            return None
        field = bundle.field
        button_type = "submit" if field.get("type") == "submit" else "button"
        props = {
            "type": button_type,
            "name": field.get("name"),
            "bsStyle": field.get("bsStyle", "primary" if button_type == "submit" else "default"),
            "disabled": bundle.is_disabled() or (button_type == "submit" and bundle.state.submitting),
            "className": field.get("className"),
            "action": field.get("action"),
        }
        props.update(size_props(effective_size(field, bundle.size)))
        return h("Button", props, field.get("label", field.get("name")), key=bundle.key)


class MessageAdapter:
    """Alert shown after a submit: ``success`` once it succeeded, ``error`` once it failed."""

    def __call__(self, bundle):
        if bundle.is_hidden():
            return None
        field = bundle.field
        state = bundle.state
        kind = field.get("type")
        if kind == "success":
            if not state.submit_succeeded:
                return None
            style = "success"
        else:
            if not (state.submit_failed or (state.invalid and field.get("showWhenInvalid"))):
                return None
            style = "danger"
        text = field.get("message") or translate(
            bundle.locale,
            f"message.{kind}",
            "Saved successfully." if kind == "success" else "Please correct the errors below.",
        )
        props = {"bsStyle": style}
        props.update(size_props(effective_size(field, bundle.size)))
        return h("Alert", props, text, key=bundle.key)
