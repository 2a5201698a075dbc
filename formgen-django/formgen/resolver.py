"""Resolve a form schema into a positioned, conditionally rendered element tree.

A schema is an ordered list of nodes.  Each node carries exactly one of:

* ``row`` - ``{"row": {"parent": ..., "bsSize": ..., "col": [{"children": [...]}, ...]}}``
* ``buttonToolbar`` - ``{"buttonToolbar": {"bsSize": ..., "className": ..., "children": [...]}}``
* ``type`` - a leaf field rendered by the adapter registered for that tag.

Rows, toolbars, columns and fields are pruned before their descendants are
visited: a node is excluded when it is only meant for static mode and the form
is editable (``showOnStatic``), or when it is only meant for edit mode and the
form is static (``hideOnStatic``).

Names of nested fields are derived by dotted path: a row's ``parent`` prefix
and a ``complex`` field's own name are prepended to descendant names.  The
input schema is never mutated.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, List

from formgen.bundle import AdapterBundle
from formgen.elements import h
from formgen.exceptions import InvalidFieldError, UnsupportedRuleError
from formgen.layout import effective_size, grid_props
from formgen.predicates import make_checker
from formgen.registry import CUSTOM_RENDER_TYPES, default_registry

logger = logging.getLogger(__name__)

ROW = "row"
TOOLBAR = "buttonToolbar"
FIELD = "type"
NODE_KEYS = (ROW, TOOLBAR, FIELD)


@dataclass
class ResolveResult:
    elements: List[Any] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)


def node_kind(node):
    """Return ``"row"``, ``"buttonToolbar"`` or ``"type"``, or ``None`` for a malformed node."""
    if not isinstance(node, Mapping):
        return None
    present = [key for key in NODE_KEYS if key in node]
    if len(present) != 1:
        return None
    return present[0]


def join_name(parent, name):
    if not parent:
        return name
    if name is None or name == "":
        return name
    return f"{parent}.{name}"


def is_excluded(node, static):
    """True when *node* must not render in the given mode."""
    if not isinstance(node, Mapping):
        return False
    if not static and node.get("showOnStatic"):
        return True
    if static and node.get("hideOnStatic"):
        return True
    return False


def _row_prefix(node, parent):
    body = node[ROW]
    return join_name(parent, body.get("parent", node.get("parent")))


def field_names(schema, parent=None):
    """List the dotted names of every named leaf field, regardless of visibility."""
    names = []
    for node in schema or []:
        kind = node_kind(node)
        if kind == ROW and isinstance(node[ROW], Mapping):
            prefix = _row_prefix(node, parent)
            for column in node[ROW].get("col") or []:
                if isinstance(column, Mapping):
                    names.extend(field_names(column.get("children"), prefix))
        elif kind == TOOLBAR and isinstance(node[TOOLBAR], Mapping):
            names.extend(field_names(node[TOOLBAR].get("children"), parent))
        elif kind == FIELD:
            name = node.get("name")
            if node.get("type") == "complex":
                # an unnamed composite renders its children without a prefix
                prefix = join_name(parent, name) if name else parent
                names.extend(field_names(node.get("children"), prefix))
            elif name:
                names.append(join_name(parent, name))
    return names


class SchemaResolver:
    """Walk one schema against one render context.

    A resolver instance serves a single pass; its diagnostics describe the
    nodes it had to skip.
    """

    def __init__(self, context, registry=None):
        self.context = context
        self.registry = registry if registry is not None else default_registry()
        self.diagnostics = []
        state = context.state
        self._check = make_checker(state.form_values, state.initial_values)

    def resolve(self, schema) -> ResolveResult:
        elements = self.resolve_nodes(schema)
        return ResolveResult(elements=elements, diagnostics=list(self.diagnostics))

    def resolve_nodes(self, nodes, size=None, parent=None, path=""):
        resolved = []
        for index, node in enumerate(nodes or []):
            element = self.resolve_node(node, index, size, parent, f"{path}[{index}]")
            if element is not None:
                resolved.append(element)
        return resolved

    def resolve_node(self, node, key, size=None, parent=None, path=""):
        kind = node_kind(node)
        if kind == ROW:
            return self.row(node, key, size, parent, path)
        if kind == TOOLBAR:
            return self.toolbar(node, key, size, parent, path)
        if kind == FIELD:
            return self.leaf(node, key, size, parent, path)
        self._report(path, f"malformed node, expected exactly one of {', '.join(NODE_KEYS)}")
        return None

    # ------------------------------------------------------------------
    # Structural nodes
    # ------------------------------------------------------------------

    def row(self, node, key, size, parent, path):
        body = node[ROW]
        if not isinstance(body, Mapping):
            self._report(path, "malformed row, 'row' must be a mapping")
            return None
        if self._excluded(node) or self._excluded(body):
            return None

        row_size = effective_size(body, effective_size(node, size))
        prefix = _row_prefix(node, parent)
        columns = []
        for index, column in enumerate(body.get("col") or []):
            column_path = f"{path}.row.col[{index}]"
            if not isinstance(column, Mapping):
                self._report(column_path, "malformed column, expected a mapping")
                continue
            if self._excluded(column):
                continue
            column_size = effective_size(column, row_size)
            children = self.resolve_nodes(
                column.get("children"), column_size, prefix, f"{column_path}.children"
            )
            columns.append(h("Col", grid_props(column), children, key=index))
        return h("Row", {}, columns, key=key)

    def toolbar(self, node, key, size, parent, path):
        body = node[TOOLBAR]
        if not isinstance(body, Mapping):
            self._report(path, "malformed toolbar, 'buttonToolbar' must be a mapping")
            return None
        if self._excluded(node) or self._excluded(body):
            return None

        toolbar_size = effective_size(body, effective_size(node, size))
        children = self.resolve_nodes(
            body.get("children"), toolbar_size, parent, f"{path}.buttonToolbar.children"
        )
        return h(
            "Row",
            {},
            h(
                "Col",
                grid_props(body),
                h("ButtonToolbar", {"className": body.get("className")}, children),
            ),
            key=key,
        )

    # ------------------------------------------------------------------
    # Leaf fields
    # ------------------------------------------------------------------

    def leaf(self, node, key, size, parent, path):
        if self._excluded(node):
            return None

        descriptor = dict(node)
        if parent and node.get("name"):
            descriptor["name"] = join_name(parent, node["name"])
        field_type = descriptor.get("type")

        if field_type in CUSTOM_RENDER_TYPES:
            component = descriptor.get("component")
            if not callable(component):
                self._report(path, f"{field_type} field without a callable 'component'")
                return None
            return component()

        adapter = self.registry.get(field_type)
        bundle = AdapterBundle(
            check_disabled=self._check,
            check_hidden=self._check,
            locale=self.context.locale,
            key=key,
            field=descriptor,
            size=effective_size(node, size),
            dispatch=self.context.dispatch,
            static=self.context.static,
            horizontal=self.context.horizontal,
            state=self.context.state,
            errors=self.context.errors,
            resolve=self._children_resolver(parent),
        )
        try:
            return adapter(bundle)
        except (UnsupportedRuleError, InvalidFieldError) as exc:
            self._report(path, f"field {descriptor.get('name')!r} dropped: {exc}")
            return None

    def _resolve_children(self, children, parent=None, size=None):
        return self.resolve_nodes(children, size, parent, f"{parent}.children")

    def _children_resolver(self, enclosing):
        def resolve(children, parent=None, size=None):
            # an unnamed composite keeps the enclosing prefix
            return self._resolve_children(children, parent or enclosing, size)

        return resolve

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _excluded(self, node):
        return is_excluded(node, self.context.static)

    def _report(self, path, message):
        entry = f"{path or '(root)'}: {message}"
        logger.warning("Schema node skipped, %s", entry)
        self.diagnostics.append(entry)


def resolve_schema(schema, context, registry=None) -> ResolveResult:
    """Resolve *schema* against *context* and return the elements plus diagnostics."""
    return SchemaResolver(context, registry).resolve(schema)
