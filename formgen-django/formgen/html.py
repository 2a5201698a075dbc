"""Serialize element trees to Bootstrap 3 markup.

The element vocabulary mirrors react-bootstrap component names; this module
is the server-side counterpart of a client renderer.  Text is escaped, props
become attributes through ``django.forms.utils.flatatt`` (``True`` renders a
bare attribute, ``False``/``None`` drop it).
"""

import json

from django.forms.utils import flatatt
from django.utils.html import conditional_escape, format_html
from django.utils.safestring import mark_safe

from formgen.elements import Element

SIZE_SUFFIXES = {"large": "lg", "lg": "lg", "small": "sm", "sm": "sm", "xsmall": "xs", "xs": "xs"}
BREAKPOINTS = ("lg", "md", "sm", "xs")


def render_html(nodes):
    """Render an element, a list of elements, or text to safe HTML."""
    if isinstance(nodes, Element) or not isinstance(nodes, (list, tuple)):
        nodes = [nodes]
    return mark_safe("".join(_render(node) for node in nodes))


def _render(node):
    if isinstance(node, Element):
        renderer = RENDERERS.get(node.tag, _generic)
        return renderer(node)
    if node is None:
        return ""
    if isinstance(node, (str, int, float)):
        return conditional_escape(node)
    raise TypeError(f"Cannot render {type(node).__name__} as HTML")


def _children(node):
    return mark_safe("".join(_render(child) for child in node.children))


def _classes(*names):
    return " ".join(n for n in names if n) or None


def _grid_classes(props):
    classes = []
    for bp in BREAKPOINTS:
        if bp in props:
            classes.append(f"col-{bp}-{props[bp]}")
        for suffix in ("Offset", "Pull", "Push"):
            key = f"{bp}{suffix}"
            if key in props:
                classes.append(f"col-{bp}-{suffix.lower()}-{props[key]}")
        if props.get(f"{bp}Hidden"):
            classes.append(f"hidden-{bp}")
    return classes


def _tag(tag, attrs, inner=""):
    return format_html("<{}{}>{}</{}>", tag, flatatt(attrs), inner, tag)


def _void(tag, attrs):
    return format_html("<{}{}>", tag, flatatt(attrs))


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def _form(node):
    attrs = {
        "name": node.props.get("name"),
        "class": "form-horizontal" if node.props.get("horizontal") else None,
        "method": "post",
    }
    return _tag("form", attrs, _children(node))


def _pending(node):
    pending = bool(node.props.get("pending"))
    attrs = {"class": _classes("pending", "is-pending" if pending else None), "aria-busy": pending}
    return _tag("div", attrs, _children(node))


def _row(node):
    return _tag("div", {"class": "row"}, _children(node))


def _col(node):
    classes = _grid_classes(node.props)
    if node.props.get("className"):
        classes.append(node.props["className"])
    return _tag("div", {"class": " ".join(classes) or None}, _children(node))


def _button_toolbar(node):
    attrs = {"class": _classes("btn-toolbar", node.props.get("className")), "role": "toolbar"}
    return _tag("div", attrs, _children(node))


def _fieldset(node):
    attrs = {"name": node.props.get("name"), "class": node.props.get("className")}
    return _tag("fieldset", attrs, _children(node))


def _legend(node):
    return _tag("legend", {}, _children(node))


# ---------------------------------------------------------------------------
# Form groups
# ---------------------------------------------------------------------------

def _form_group(node):
    size = SIZE_SUFFIXES.get(node.props.get("bsSize"))
    state = node.props.get("validationState")
    attrs = {
        "class": _classes(
            "form-group",
            f"form-group-{size}" if size else None,
            f"has-{state}" if state else None,
            "has-feedback" if state == "error" else None,
        )
    }
    return _tag("div", attrs, _children(node))


def _control_label(node):
    attrs = {
        "class": " ".join(["control-label"] + _grid_classes(node.props)),
        "for": node.props.get("htmlFor"),
    }
    return _tag("label", attrs, _children(node))


def _form_control(node):
    props = node.props
    component = props.get("componentClass")
    base = {
        "name": props.get("name"),
        "disabled": props.get("disabled") or None,
        "placeholder": props.get("placeholder"),
        "id": props.get("id"),
    }
    if component == "select":
        base.update({"class": "form-control", "multiple": props.get("multiple") or None})
        return _tag("select", base, _children(node))
    if component == "textarea":
        base.update({"class": "form-control", "rows": props.get("rows")})
        return _tag("textarea", base, props.get("value", ""))
    input_type = props.get("type", "text")
    base.update({
        "type": input_type,
        "class": None if input_type == "hidden" else _classes("form-control", props.get("className")),
        "value": props.get("value"),
        "maxlength": props.get("maxLength"),
        "min": props.get("min"),
        "max": props.get("max"),
        "step": props.get("step"),
        "readonly": props.get("readOnly") or None,
    })
    return _void("input", base)


def _option(node):
    attrs = {"value": node.props.get("value"), "selected": node.props.get("selected") or None}
    return _tag("option", attrs, _children(node))


def _static(node):
    return _tag("p", {"class": "form-control-static"}, _children(node))


def _feedback(node):
    return _tag("span", {"class": "form-control-feedback", "aria-hidden": "true"})


def _help_block(node):
    return _tag("span", {"class": "help-block"}, _children(node))


def _choice(input_type):
    def render(node):
        props = node.props
        disabled = bool(props.get("disabled"))
        control = _void(
            "input",
            {
                "type": input_type,
                "name": props.get("name"),
                "value": props.get("value"),
                "checked": props.get("checked") or None,
                "disabled": disabled or None,
            },
        )
        label = format_html("<label>{} {}</label>", control, _children(node))
        return _tag("div", {"class": _classes(input_type, "disabled" if disabled else None)}, label)

    return render


def _search_box(node):
    props = node.props
    attrs = {
        "type": "text",
        "class": "form-control",
        "name": props.get("name"),
        "placeholder": props.get("placeholder"),
        "value": props.get("value") or None,
        "disabled": props.get("disabled") or None,
        "data-prevent-submit": props.get("preventSubmit") or None,
    }
    return _void("input", attrs)


def _alert(node):
    style = node.props.get("bsStyle", "info")
    return _tag("div", {"class": f"alert alert-{style}", "role": "alert"}, _children(node))


def _button(node):
    props = node.props
    size = SIZE_SUFFIXES.get(props.get("bsSize"))
    attrs = {
        "type": props.get("type", "button"),
        "name": props.get("name"),
        "class": _classes(
            "btn",
            f"btn-{props.get('bsStyle', 'default')}",
            f"btn-{size}" if size else None,
            props.get("className"),
        ),
        "disabled": props.get("disabled") or None,
        "data-action": props.get("action"),
    }
    return _tag("button", attrs, _children(node))


# ---------------------------------------------------------------------------
# Specialised inputs
# ---------------------------------------------------------------------------

def _datetime(node):
    props = node.props
    value = props.get("value")
    attrs = {
        "type": "text",
        "class": "form-control datetime",
        "name": props.get("name"),
        "value": "" if value is None else str(value),
        "placeholder": props.get("placeholder"),
        "disabled": props.get("disabled") or None,
        "data-conf": json.dumps(props.get("conf") or {}, sort_keys=True),
    }
    return _void("input", attrs)


def _rich_text(node):
    props = node.props
    attrs = {
        "class": "form-control rte",
        "name": props.get("name"),
        "disabled": props.get("disabled") or None,
    }
    return _tag("textarea", attrs, props.get("value", ""))


def _content_editable(node):
    props = node.props
    attrs = {
        "class": "form-control content-editable",
        "data-name": props.get("name"),
        "contenteditable": "false" if props.get("disabled") else "true",
    }
    return _tag("div", attrs, props.get("value", ""))


def _upload(node):
    props = node.props
    control = _void(
        "input",
        {
            "type": "file",
            "name": props.get("name"),
            "multiple": props.get("multiple") or None,
            "accept": props.get("accept"),
            "disabled": props.get("disabled") or None,
        },
    )
    label = _tag("span", {"class": "btn btn-default"}, props.get("browseLabel", ""))
    return _tag("div", {"class": "upload"}, mark_safe(label + control + _children(node)))


def _file_list(node):
    return _tag("ul", {"class": "list-unstyled"}, _children(node))


def _file(node):
    href = node.props.get("href")
    inner = _tag("a", {"href": href}, _children(node)) if href else _children(node)
    return _tag("li", {}, inner)


def _resource(node):
    attrs = {"class": "resource", "data-name": node.props.get("name"), "data-source": node.props.get("source")}
    return _tag("div", attrs, _children(node))


def _link(node):
    return _tag("a", {"href": node.props.get("href")}, _children(node))


def _generic(node):
    return _tag("div", {"data-component": node.tag}, _children(node))


RENDERERS = {
    "Form": _form,
    "Pending": _pending,
    "Row": _row,
    "Col": _col,
    "ButtonToolbar": _button_toolbar,
    "Fieldset": _fieldset,
    "Legend": _legend,
    "FormGroup": _form_group,
    "ControlLabel": _control_label,
    "FormControl": _form_control,
    "option": _option,
    "FormControl.Static": _static,
    "FormControl.Feedback": _feedback,
    "HelpBlock": _help_block,
    "Radio": _choice("radio"),
    "Checkbox": _choice("checkbox"),
    "SearchBox": _search_box,
    "Alert": _alert,
    "Button": _button,
    "DateTime": _datetime,
    "RichText": _rich_text,
    "ContentEditable": _content_editable,
    "Upload": _upload,
    "FileList": _file_list,
    "File": _file,
    "Resource": _resource,
    "Link": _link,
}
