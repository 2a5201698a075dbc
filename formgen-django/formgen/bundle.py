"""The uniform argument bundle every field adapter receives."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from formgen.context import FormState
from formgen.exceptions import BundleError
from formgen.predicates import MISSING, lookup, rule_from_field


@dataclass(frozen=True)
class AdapterBundle:
    check_disabled: Callable[[Any], bool]
    check_hidden: Callable[[Any], bool]
    locale: Mapping
    key: Any
    field: Mapping
    size: Optional[str] = None
    dispatch: Optional[Callable] = None
    static: bool = False
    horizontal: bool = False
    state: FormState = field(default_factory=FormState)
    errors: Dict[str, Any] = field(default_factory=dict)
    resolve: Optional[Callable] = None

    def __post_init__(self):
        missing = []
        if not callable(self.check_disabled):
            missing.append("check_disabled")
        if not callable(self.check_hidden):
            missing.append("check_hidden")
        if not isinstance(self.locale, Mapping):
            missing.append("locale")
        if self.key is None:
            missing.append("key")
        if not isinstance(self.field, Mapping):
            missing.append("field")
        if missing:
            raise BundleError(f"Adapter bundle is missing or has invalid: {', '.join(missing)}")

    @property
    def name(self):
        return self.field.get("name")

    @property
    def is_static(self) -> bool:
        return bool(self.static or self.field.get("static", False))

    def is_disabled(self) -> bool:
        rule = rule_from_field(self.field, "disabled")
        if rule is None:
            return False
        return bool(self.check_disabled(rule))

    def is_hidden(self) -> bool:
        """Apply the field's ``hidden`` rule, or its ``show`` rule when no ``hidden`` is set."""
        rule = rule_from_field(self.field, "hidden")
        if rule is not None:
            return self.check_hidden(rule) is True
        rule = rule_from_field(self.field, "show")
        if rule is not None:
            return self.check_hidden(rule) is not True
        return False

    def value(self, default=None):
        return self.state.value(self.name, default) if self.name else default

    def error(self):
        if not self.name:
            return None
        found = lookup(self.errors, self.name)
        if found is MISSING or isinstance(found, Mapping):
            return None
        return found

    def touched(self) -> bool:
        return self.state.is_touched(self.name) if self.name else False
