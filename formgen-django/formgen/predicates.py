"""Disable / hide / show rule evaluation.

A field's ``disabled``, ``hidden`` and ``show`` attributes produce one of three
rule shapes:

* ``True`` / ``False`` - returned as-is;
* ``{"field": "status", "value": "active"}`` - true when the current value of
  ``status`` strictly equals ``"active"``;
* ``"comment"`` - true when the current value of ``comment`` is non-empty.

Values are read from the form values first and from the initial values only
when the field is absent from the form values.  Hide and disable decisions go
through the same evaluation; the adapter chooses the UI effect.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from formgen.exceptions import UnsupportedRuleError

MISSING = object()


@dataclass(frozen=True)
class BoolRule:
    value: bool


@dataclass(frozen=True)
class EqualsRule:
    field: str
    value: Any


@dataclass(frozen=True)
class NonEmptyRule:
    field: str


Rule = Union[BoolRule, EqualsRule, NonEmptyRule]


def coerce_rule(raw) -> Rule:
    """Turn a raw rule value into a :data:`Rule`, rejecting anything else."""
    if isinstance(raw, (BoolRule, EqualsRule, NonEmptyRule)):
        return raw
    if isinstance(raw, bool):
        return BoolRule(raw)
    if isinstance(raw, str):
        return NonEmptyRule(raw)
    if isinstance(raw, Mapping) and isinstance(raw.get("field"), str):
        return EqualsRule(raw["field"], raw.get("value"))
    raise UnsupportedRuleError(raw)


def lookup(values, path, default=MISSING):
    """Read a dotted *path* from nested mappings/lists.

    A literal key containing dots wins over path traversal, so flat stores
    (``{"address.city": ...}``) and nested ones both work.
    """
    if not isinstance(values, Mapping):
        return default
    if path in values:
        return values[path]
    current = values
    for part in str(path).split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        elif isinstance(current, (list, tuple)) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return default
    return current


def field_value(field, form_values, initial_values):
    """Current value of *field*, falling back to its initial value when absent."""
    value = lookup(form_values, field)
    if value is MISSING:
        value = lookup(initial_values, field)
    return None if value is MISSING else value


def is_empty(value) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, Mapping, list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def strict_equals(left, right) -> bool:
    # True == 1 in Python; a bool only ever equals another bool.
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if type(left) is not type(right) and not (
        isinstance(left, (int, float)) and isinstance(right, (int, float))
    ):
        return False
    return left == right


def evaluate(rule, form_values=None, initial_values=None) -> bool:
    """Evaluate a rule (or raw rule value) against the current form state."""
    rule = coerce_rule(rule)
    if isinstance(rule, BoolRule):
        return rule.value
    if isinstance(rule, EqualsRule):
        return strict_equals(field_value(rule.field, form_values, initial_values), rule.value)
    if isinstance(rule, NonEmptyRule):
        return not is_empty(field_value(rule.field, form_values, initial_values))
    raise UnsupportedRuleError(rule)


def make_checker(form_values, initial_values):
    """Return the single check function handed to adapters as ``check_disabled``/``check_hidden``."""

    def check(rule):
        return evaluate(rule, form_values, initial_values)

    return check


def rule_from_field(field, attr):
    """Read a rule attribute from a field descriptor.

    The attribute may be a zero-argument callable producing the rule or, for
    documents loaded from JSON, the rule itself.  Returns ``None`` when unset.
    """
    raw = field.get(attr) if isinstance(field, Mapping) else None
    if raw is None:
        return None
    if callable(raw):
        return raw()
    return raw
