"""JSON Schema validation for form schema documents."""

from collections import Counter
from typing import List

from jsonschema import Draft202012Validator

from formgen.resolver import field_names

RULE = {
    "oneOf": [
        {"type": "boolean"},
        {"type": "string", "minLength": 1},
        {
            "type": "object",
            "required": ["field"],
            "properties": {"field": {"type": "string", "minLength": 1}},
        },
    ]
}

VISIBILITY = {
    "showOnStatic": {"type": "boolean"},
    "hideOnStatic": {"type": "boolean"},
}

GRID = {
    key: {"type": ["integer", "boolean"]}
    for bp in ("lg", "md", "sm", "xs")
    for key in (bp, f"{bp}Hidden", f"{bp}Offset", f"{bp}Pull", f"{bp}Push")
}

FORM_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {"$ref": "#/$defs/node"},
    "$defs": {
        "nodes": {"type": "array", "items": {"$ref": "#/$defs/node"}},
        "node": {
            "type": "object",
            "oneOf": [
                {"required": ["row"], "not": {"anyOf": [{"required": ["buttonToolbar"]}, {"required": ["type"]}]}},
                {"required": ["buttonToolbar"], "not": {"anyOf": [{"required": ["row"]}, {"required": ["type"]}]}},
                {"required": ["type"], "not": {"anyOf": [{"required": ["row"]}, {"required": ["buttonToolbar"]}]}},
            ],
            "properties": {
                **VISIBILITY,
                "row": {"$ref": "#/$defs/row"},
                "buttonToolbar": {"$ref": "#/$defs/toolbar"},
                "type": {"type": "string", "minLength": 1},
                "name": {"type": "string"},
                "bsSize": {"type": "string"},
                "disabled": RULE,
                "hidden": RULE,
                "show": RULE,
                "chunks": {"type": "integer", "minimum": 1},
                "searchable": {"type": "boolean"},
                "filter": {"type": "boolean"},
                "labelSize": {"type": "object", "properties": GRID},
                "fieldSize": {"type": "object", "properties": GRID},
                "options": {
                    "type": "array",
                    "items": {"type": "object", "required": ["value"]},
                },
                "children": {"$ref": "#/$defs/nodes"},
            },
        },
        "row": {
            "type": "object",
            "required": ["col"],
            "properties": {
                **VISIBILITY,
                "parent": {"type": "string"},
                "bsSize": {"type": "string"},
                "col": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            **VISIBILITY,
                            **GRID,
                            "bsSize": {"type": "string"},
                            "children": {"$ref": "#/$defs/nodes"},
                        },
                    },
                },
            },
        },
        "toolbar": {
            "type": "object",
            "properties": {
                **VISIBILITY,
                **GRID,
                "bsSize": {"type": "string"},
                "className": {"type": "string"},
                "children": {"$ref": "#/$defs/nodes"},
            },
        },
    },
}


def validate_form_schema(schema) -> List[str]:
    """Validate a form schema document.

    Returns human-readable ``"path: message"`` strings (empty if valid).
    Structural errors come from JSON Schema; dotted field names must also be
    unique across the whole form.
    """
    validator = Draft202012Validator(FORM_SCHEMA)
    errors = sorted(validator.iter_errors(schema), key=lambda e: [str(p) for p in e.absolute_path])
    messages = [
        f"{'.'.join(str(p) for p in e.absolute_path) or '(root)'}: {e.message}"
        for e in errors
    ]
    if messages:
        return messages

    counts = Counter(field_names(schema))
    for name, count in sorted(counts.items()):
        if count > 1:
            messages.append(f"{name}: field name is used {count} times")
    return messages
