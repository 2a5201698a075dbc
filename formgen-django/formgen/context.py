"""Per-pass render context and the form-state snapshot it carries."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict

from formgen.predicates import MISSING, lookup


@dataclass(frozen=True)
class FormState:
    """Read-only snapshot of the external form-state store.

    ``ui`` holds transient per-field UI state owned by the store (for example
    the current search-box text of a filterable option list, keyed by field
    name).
    """

    form_values: Dict[str, Any] = field(default_factory=dict)
    initial_values: Dict[str, Any] = field(default_factory=dict)
    touched: Dict[str, Any] = field(default_factory=dict)
    ui: Dict[str, Any] = field(default_factory=dict)
    dirty: bool = False
    pristine: bool = True
    invalid: bool = False
    submitting: bool = False
    submit_failed: bool = False
    submit_succeeded: bool = False
    valid: bool = True

    @classmethod
    def capture(cls, **store) -> "FormState":
        """Deep-copy the store's mappings so a pass sees one consistent snapshot."""
        mappings = ("form_values", "initial_values", "touched", "ui")
        kwargs = {}
        for name, value in store.items():
            if name in mappings:
                kwargs[name] = copy.deepcopy(dict(value or {}))
            else:
                kwargs[name] = bool(value)
        if "pristine" not in store and "dirty" in store:
            kwargs["pristine"] = not kwargs["dirty"]
        return cls(**kwargs)

    def value(self, name, default=None):
        """Bound value of a field: form values first, initial values when absent."""
        found = lookup(self.form_values, name)
        if found is MISSING:
            found = lookup(self.initial_values, name)
        return default if found is MISSING else found

    def is_touched(self, name) -> bool:
        found = lookup(self.touched, name)
        return bool(found) if found is not MISSING else False

    def ui_state(self, name, key, default=None):
        entry = self.ui.get(name)
        if isinstance(entry, Mapping):
            return entry.get(key, default)
        return default


@dataclass(frozen=True)
class RenderContext:
    """Ambient state threaded unchanged through one resolution pass."""

    static: bool = False
    horizontal: bool = False
    locale: Dict[str, str] = field(default_factory=dict)
    state: FormState = field(default_factory=FormState)
    errors: Dict[str, Any] = field(default_factory=dict)
    dispatch: Any = None

