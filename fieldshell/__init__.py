"""fieldshell -- one call per form field.

Renders a field's label, core element, description, decoration and error
text from a single declarative call, instead of spelling out the wrapper
markup around every input by hand.

Quick usage::

    from fieldshell import FormBuilder

    form = FormBuilder("car", car)
    form.text_field("color", required=True, description="Exterior colour.")

Three presentation variants share the same options and differ only in the
wrapper markup:

- ``STANDARD`` (``StandardFormBuilder``) -- each field in a ``<div>``
- ``TABLE`` (``TableFormBuilder``) -- each field in a table row
- ``SIMPLE`` (``SimpleFormBuilder``) -- no containers at all
"""

from fieldshell.builder import (
    FormBuilder,
    ShellLocals,
    SimpleFormBuilder,
    StandardFormBuilder,
    TableFormBuilder,
)
from fieldshell.config import ShellConfig
from fieldshell.kinds import (
    WIDGET_KINDS,
    FieldKind,
    FieldShellError,
    MissingWidgetArgumentError,
    UnknownFieldKindError,
    UnknownVariantError,
    UnknownWidgetError,
    resolve_kind,
)
from fieldshell.labels import derive_label
from fieldshell.options import PRESENTATION_KEYS, partition_options
from fieldshell.utils import configure_logging, humanize
from fieldshell.variants import SIMPLE, STANDARD, TABLE, Variant, get_variant
from fieldshell.widgets import WidgetRenderer

__all__ = [
    "FieldKind",
    "FieldShellError",
    "FormBuilder",
    "MissingWidgetArgumentError",
    "PRESENTATION_KEYS",
    "SIMPLE",
    "STANDARD",
    "ShellConfig",
    "ShellLocals",
    "SimpleFormBuilder",
    "StandardFormBuilder",
    "TABLE",
    "TableFormBuilder",
    "UnknownFieldKindError",
    "UnknownVariantError",
    "UnknownWidgetError",
    "Variant",
    "WIDGET_KINDS",
    "WidgetRenderer",
    "configure_logging",
    "derive_label",
    "get_variant",
    "humanize",
    "partition_options",
    "resolve_kind",
]
