"""Errors raised by the form resolution engine."""


class FormgenError(Exception):
    """Base class for engine errors."""


class UnsupportedRuleError(FormgenError, TypeError):
    """Raised when a disable/hide/show rule has none of the accepted shapes."""

    def __init__(self, rule):
        self.rule = rule
        super().__init__(
            f"Unsupported rule {rule!r}: expected a bool, a field name, "
            f"or a mapping with 'field' and 'value'"
        )


class BundleError(FormgenError, ValueError):
    """Raised when an adapter bundle is built without its required fields."""


class SchemaDocumentError(FormgenError, ValueError):
    """Raised when a schema document fails validation."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid schema document")


class InvalidFieldError(FormgenError, ValueError):
    """Raised when a field descriptor carries an attribute its adapter cannot use."""
