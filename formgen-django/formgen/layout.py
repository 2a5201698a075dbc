"""Size and grid resolution shared by rows, toolbars and field adapters."""

from formgen.exceptions import InvalidFieldError

DEFAULT_SIZE = "medium"

# Label/field proportions used when a form is laid out horizontally and the
# field does not set its own.  This is the only place they are defined.
HORIZONTAL_LABEL_SIZE = {"sm": 2}
HORIZONTAL_FIELD_SIZE = {"sm": 10}

GRID_KEYS = (
    "lg", "lgHidden", "lgOffset", "lgPull", "lgPush",
    "md", "mdHidden", "mdOffset", "mdPull", "mdPush",
    "sm", "smHidden", "smOffset", "smPull", "smPush",
    "xs", "xsHidden", "xsOffset", "xsPull", "xsPush",
    "componentClass", "bsClass",
)


def effective_size(node, ambient_size=None):
    """``node.bsSize`` if set, else the size inherited from the enclosing row/toolbar."""
    size = node.get("bsSize") if isinstance(node, dict) else None
    if size is not None:
        return size
    return ambient_size


def _explicit_size(field, key):
    value = field[key]
    if value is not None and not isinstance(value, dict):
        raise InvalidFieldError(f"{key!r} must be a mapping of grid keys, got {value!r}")
    return value


def label_size(field, horizontal):
    if "labelSize" in field:
        return _explicit_size(field, "labelSize")
    if horizontal:
        return dict(HORIZONTAL_LABEL_SIZE)
    return None


def field_size(field, horizontal):
    if "fieldSize" in field:
        return _explicit_size(field, "fieldSize")
    if horizontal:
        return dict(HORIZONTAL_FIELD_SIZE)
    return None


def size_props(size):
    """Props to emit for a resolved size; the framework default is left implicit."""
    if size is None or size == DEFAULT_SIZE:
        return {}
    return {"bsSize": size}


def grid_props(descriptor):
    """Pick the responsive grid keys from a column or toolbar descriptor."""
    return {key: descriptor[key] for key in GRID_KEYS if key in descriptor}
