"""Leaf renderers selected by a field's ``type`` tag."""

from formgen.adapters.actions import ButtonAdapter, MessageAdapter
from formgen.adapters.base import FieldAdapter
from formgen.adapters.choices import CheckboxAdapter, RadioAdapter, SelectAdapter
from formgen.adapters.composite import ComplexAdapter
from formgen.adapters.inputs import (
    ContentEditableAdapter,
    DateTimeAdapter,
    InputAdapter,
    PlainAdapter,
    RichTextAdapter,
)
from formgen.adapters.uploads import ResourceAdapter, UploadAdapter

__all__ = [
    "ButtonAdapter",
    "CheckboxAdapter",
    "ComplexAdapter",
    "ContentEditableAdapter",
    "DateTimeAdapter",
    "FieldAdapter",
    "InputAdapter",
    "MessageAdapter",
    "PlainAdapter",
    "RadioAdapter",
    "ResourceAdapter",
    "RichTextAdapter",
    "SelectAdapter",
    "UploadAdapter",
]
