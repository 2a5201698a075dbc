"""Option-based adapters: checkbox, select and the filterable radio list."""

from formgen.adapters.base import FieldAdapter, display_value, validation_state
from formgen.elements import h
from formgen.exceptions import InvalidFieldError
from formgen.layout import effective_size, field_size, size_props
from formgen.locales import translate
from formgen.options import chunk_options, column_width, filter_options


def _desc_for(options, value):
    for option in options or []:
        if str(option.get("value")) == str(value):
            return option.get("desc")
    return display_value(value)


class OptionListAdapter(FieldAdapter):
    """A list of choice controls with an optional search box and column chunks.

    The search text is transient UI state owned by the store and read from
    ``state.ui[<field name>]["search"]``.
    """

    choice_tag = "Radio"

    def search_term(self, bundle):
        return bundle.state.ui_state(bundle.name, "search", "")

    def filtered(self, bundle):
        return filter_options(
            bundle.field.get("options", []),
            self.search_term(bundle),
            bundle.is_static,
            bundle.value(),
        )

    def control(self, bundle):
        return [self.search_box(bundle), self.option_groups(bundle)]

    def static_control(self, bundle):
        return self.option_groups(bundle)

    def search_box(self, bundle):
        field = bundle.field
        if not (field.get("searchable") or field.get("filter")) or bundle.is_static:
            return None
        placeholder = field.get(
            "filter_placeholder",
            translate(bundle.locale, "filter.placeholder", "Filter"),
        )
        return h(
            "SearchBox",
            {
                "name": f"{bundle.name}__search",
                "placeholder": placeholder,
                "value": self.search_term(bundle),
                "disabled": bundle.is_disabled(),
                "preventSubmit": True,
            },
        )

    def option_groups(self, bundle):
        filtered = self.filtered(bundle)
        field = bundle.field
        if not filtered:
            return h(
                "Alert",
                {},
                field.get(
                    "filter_norecords",
                    translate(bundle.locale, "filter.norecords", "No results"),
                ),
            )

        chunks = field.get("chunks")
        if chunks is not None:
            if isinstance(chunks, bool) or not isinstance(chunks, int) or chunks < 1:
                raise InvalidFieldError(f"'chunks' must be a positive integer, got {chunks!r}")
            width = column_width(chunks)
            return h(
                "Row",
                {},
                [
                    h("Col", {"md": width}, self.choice_list(bundle, group), key=index)
                    for index, group in enumerate(chunk_options(filtered, chunks))
                ],
            )
        return self.choice_list(bundle, filtered)

    def choice_list(self, bundle, options):
        if bundle.is_static:
            return [
                h("FormControl.Static", {}, option.get("desc"), key=index)
                for index, option in enumerate(options)
            ]
        disabled = bundle.is_disabled()
        return [
            self.choice(bundle, option, index, disabled)
            for index, option in enumerate(options)
        ]

    def choice(self, bundle, option, index, disabled):
        return h(
            self.choice_tag,
            {
                "name": f"{bundle.name}[{index}]",
                "value": option.get("value"),
                "checked": str(bundle.value()) == str(option.get("value")),
                "disabled": disabled,
            },
            option.get("desc"),
            key=index,
        )


class RadioAdapter(OptionListAdapter):
    choice_tag = "Radio"


class CheckboxAdapter(OptionListAdapter):
    """Single checkbox, or a multi-select checkbox list when options are given."""

    choice_tag = "Checkbox"

    def render(self, bundle):
        if bundle.field.get("options"):
            return super().render(bundle)
        props = dict(size_props(effective_size(bundle.field, bundle.size)))
        props["validationState"] = validation_state(bundle)
        return h(
            "FormGroup",
            props,
            h(
                "Col",
                field_size(bundle.field, bundle.horizontal),
                self.single(bundle),
                self.feedback(bundle),
            ),
            key=bundle.key,
        )

    def single(self, bundle):
        checked = bool(bundle.value(False))
        if bundle.is_static:
            text = translate(
                bundle.locale,
                "checkbox.checked" if checked else "checkbox.unchecked",
                "Yes" if checked else "No",
            )
            return h("FormControl.Static", {"name": bundle.name}, bundle.field.get("label"), ": ", text)
        return h(
            "Checkbox",
            {"name": bundle.name, "checked": checked, "disabled": bundle.is_disabled()},
            bundle.field.get("label"),
        )

    def choice(self, bundle, option, index, disabled):
        current = bundle.value() or []
        if not isinstance(current, (list, tuple, set)):
            current = [current]
        selected = {str(v) for v in current}
        return h(
            self.choice_tag,
            {
                "name": f"{bundle.name}[{index}]",
                "value": option.get("value"),
                "checked": str(option.get("value")) in selected,
                "disabled": disabled,
            },
            option.get("desc"),
            key=index,
        )


class SelectAdapter(FieldAdapter):
    def control(self, bundle):
        field = bundle.field
        multiple = bool(field.get("multiple"))
        children = []
        if not multiple and not field.get("required"):
            children.append(
                h(
                    "option",
                    {"value": ""},
                    field.get("placeholder", translate(bundle.locale, "select.empty", "Please select")),
                    key="empty",
                )
            )
        current = bundle.value()
        values = current if isinstance(current, (list, tuple)) else [current]
        selected = {str(v) for v in values if v is not None}
        for index, option in enumerate(field.get("options", [])):
            children.append(
                h(
                    "option",
                    {
                        "value": option.get("value"),
                        "selected": str(option.get("value")) in selected,
                    },
                    option.get("desc"),
                    key=index,
                )
            )
        return h(
            "FormControl",
            {
                "componentClass": "select",
                "name": bundle.name,
                "multiple": multiple or None,
                "disabled": bundle.is_disabled(),
            },
            children,
        )

    def static_control(self, bundle):
        options = bundle.field.get("options", [])
        current = bundle.value()
        if isinstance(current, (list, tuple)):
            text = ", ".join(str(_desc_for(options, v)) for v in current)
        elif current is None:
            text = ""
        else:
            text = _desc_for(options, current)
        return h("FormControl.Static", {"name": bundle.name}, text)
