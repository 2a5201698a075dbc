"""Dispatch table from field ``type`` tags to adapters."""

import logging

from formgen import adapters

logger = logging.getLogger(__name__)

# Tags that bypass the adapter bundle and call the field's own ``component``.
CUSTOM_RENDER_TYPES = frozenset({"jsx", "react"})


class AdapterRegistry:
    """Map type tags to adapters, falling back to a default for unknown tags."""

    def __init__(self, mapping=None, default=None):
        self._adapters = dict(mapping or {})
        self.default = default if default is not None else adapters.InputAdapter()

    def register(self, tag, adapter):
        if tag in CUSTOM_RENDER_TYPES:
            raise ValueError(f"{tag!r} is reserved for caller-supplied components")
        self._adapters[tag] = adapter
        return adapter

    def get(self, tag):
        adapter = self._adapters.get(tag)
        if adapter is None:
            logger.debug("No adapter registered for type %r, using the default", tag)
            return self.default
        return adapter

    def copy(self):
        return AdapterRegistry(self._adapters, self.default)

    def __contains__(self, tag):
        return tag in self._adapters

    def tags(self):
        return sorted(self._adapters)


def default_registry():
    button = adapters.ButtonAdapter()
    message = adapters.MessageAdapter()
    return AdapterRegistry(
        {
            "resource": adapters.ResourceAdapter(),
            "checkbox": adapters.CheckboxAdapter(),
            "plupload": adapters.UploadAdapter(),
            "select": adapters.SelectAdapter(),
            "radio": adapters.RadioAdapter(),
            "contentEditable": adapters.ContentEditableAdapter(),
            "complex": adapters.ComplexAdapter(),
            "submit": button,
            "button": button,
            "rte": adapters.RichTextAdapter(),
            "plain": adapters.PlainAdapter(),
            "success": message,
            "error": message,
            "datetime": adapters.DateTimeAdapter(),
        }
    )
