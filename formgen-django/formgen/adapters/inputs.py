"""Free-text style adapters: text input (the default), plain text, date/time, rich text."""

from formgen.adapters.base import FieldAdapter, display_value, passthrough
from formgen.elements import h
from formgen.locales import section

HTML_INPUT_TYPES = {
    "text", "email", "password", "number", "tel", "url", "search",
    "color", "date", "time", "datetime-local", "month", "week", "range",
}


class InputAdapter(FieldAdapter):
    """Generic input; also the fallback for unregistered type tags."""

    def __call__(self, bundle):
        if bundle.field.get("type") == "hidden":
            if bundle.is_hidden():
                return None
            return h(
                "FormControl",
                {"type": "hidden", "name": bundle.name, "value": display_value(bundle.value())},
                key=bundle.key,
            )
        return super().__call__(bundle)

    def control(self, bundle):
        field_type = bundle.field.get("type")
        props = {"name": bundle.name, "disabled": bundle.is_disabled()}
        if field_type == "textarea":
            props["componentClass"] = "textarea"
        else:
            props["type"] = field_type if field_type in HTML_INPUT_TYPES else "text"
        props["value"] = display_value(bundle.value(""))
        props.update(passthrough(bundle.field))
        return h("FormControl", props)


class PlainAdapter(FieldAdapter):
    """Read-only text, in both static and editable mode."""

    def control(self, bundle):
        return self.static_control(bundle)

    def static_control(self, bundle):
        value = bundle.field.get("value")
        if value is None:
            value = bundle.value()
        return h("FormControl.Static", {"name": bundle.name}, display_value(value))


class DateTimeAdapter(FieldAdapter):
    """Date/time picker configured from the field's ``conf`` and the locale."""

    def control(self, bundle):
        conf = dict(bundle.field.get("conf") or {})
        # locale settings win over the field's own configuration
        conf.update(section(bundle.locale, "datetimepicker"))
        props = {
            "name": bundle.name,
            "value": bundle.value(),
            "conf": conf,
            "disabled": bundle.is_disabled(),
        }
        props.update(passthrough(bundle.field, ("placeholder", "inputProps")))
        return h("DateTime", props)


class RichTextAdapter(FieldAdapter):
    """Rich-text editor; static mode shows the stored markup as text."""

    tag = "RichText"

    def control(self, bundle):
        props = {
            "name": bundle.name,
            "value": display_value(bundle.value("")),
            "disabled": bundle.is_disabled(),
        }
        props.update(passthrough(bundle.field, ("placeholder", "toolbar", "className")))
        return h(self.tag, props)


class ContentEditableAdapter(RichTextAdapter):
    tag = "ContentEditable"
