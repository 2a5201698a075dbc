"""Renderable element tree produced by a resolution pass.

Elements are plain data: a component tag (``Row``, ``Col``, ``FormGroup``,
``FormControl`` ...), a props mapping and ordered children.  The view layer
(``formgen.html`` or a client-side renderer fed by the API) decides how each
tag is painted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Element:
    tag: str
    props: Dict[str, Any] = field(default_factory=dict)
    children: List[Any] = field(default_factory=list)
    key: Optional[Any] = None

    def to_dict(self) -> dict:
        """Return a JSON-serialisable representation of the subtree."""
        data = {
            "tag": self.tag,
            "props": dict(self.props),
            "children": [_child_to_data(c) for c in self.children],
        }
        if self.key is not None:
            data["key"] = self.key
        return data

    def find_all(self, tag: str) -> List["Element"]:
        """Return every descendant (including self) with the given tag, depth first."""
        found = [self] if self.tag == tag else []
        for child in self.children:
            if isinstance(child, Element):
                found.extend(child.find_all(tag))
        return found

    def text(self) -> str:
        """Concatenate all text children of the subtree."""
        parts = []
        for child in self.children:
            if isinstance(child, Element):
                parts.append(child.text())
            elif child is not None:
                parts.append(str(child))
        return "".join(parts)


def _child_to_data(child):
    if isinstance(child, Element):
        return child.to_dict()
    return child


def _flatten(children, out):
    for child in children:
        if isinstance(child, (list, tuple)):
            _flatten(child, out)
        elif child is not None and child is not False:
            out.append(child)
    return out


def h(tag: str, props: Optional[dict] = None, *children, key=None) -> Element:
    """Build an element, flattening nested child lists and dropping ``None``/``False``.

    Props set to ``None`` are dropped as well, so optional attributes can be
    passed unconditionally.
    """
    clean_props = {k: v for k, v in (props or {}).items() if v is not None}
    return Element(tag=tag, props=clean_props, children=_flatten(children, []), key=key)
