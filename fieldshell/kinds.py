"""Field kinds and the widget-name dispatcher.

Every widget the builder knows about is listed once in ``WIDGET_KINDS``.
Adding a widget means adding one entry here and, when its markup shape is
new, a template per variant (see ``fieldshell.variants``).
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class FieldShellError(Exception):
    """Base class for field shell errors."""

    def __init__(self, message: str, *, widget: str = "", kind: str = "", variant: str = ""):
        self.widget = widget
        self.kind = kind
        self.variant = variant
        super().__init__(message)


class UnknownWidgetError(FieldShellError, LookupError):
    """Raised when a widget name is not in the dispatcher table."""


class UnknownFieldKindError(FieldShellError, LookupError):
    """Raised when no template exists for a (variant, field kind) pair."""


class UnknownVariantError(FieldShellError, LookupError):
    """Raised when a presentation variant name is not registered."""


class MissingWidgetArgumentError(FieldShellError, TypeError):
    """Raised when a widget that needs choices or a tag value is dispatched without it."""


class FieldKind(str, Enum):
    """Rendering shape of a field."""

    PLAIN = "plain"
    CHECKBOX = "checkbox"
    SUBMIT_BUTTON = "submit_button"
    RADIO_CHOICE = "radio_choice"
    RADIO_GROUP = "radio_group"
    MULTI_CHOICE = "multi_choice"

    @property
    def forces_no_colon(self) -> bool:
        """Checkbox-like kinds sit next to their label and never get a colon."""
        return self in (FieldKind.CHECKBOX, FieldKind.RADIO_CHOICE)

    @property
    def takes_required_attribute(self) -> bool:
        """Whether ``required`` is forwarded to the element as an HTML attribute."""
        return self in (FieldKind.PLAIN, FieldKind.CHECKBOX)


WIDGET_KINDS: Mapping[str, FieldKind] = MappingProxyType({
    # plain inputs
    "text_field": FieldKind.PLAIN,
    "password_field": FieldKind.PLAIN,
    "email_field": FieldKind.PLAIN,
    "number_field": FieldKind.PLAIN,
    "telephone_field": FieldKind.PLAIN,
    "url_field": FieldKind.PLAIN,
    "search_field": FieldKind.PLAIN,
    "color_field": FieldKind.PLAIN,
    "date_field": FieldKind.PLAIN,
    "file_field": FieldKind.PLAIN,
    "text_area": FieldKind.PLAIN,
    # selects
    "select": FieldKind.PLAIN,
    "time_zone_select": FieldKind.PLAIN,
    "date_select": FieldKind.PLAIN,
    "multipart_date_select": FieldKind.PLAIN,
    # checkbox family
    "check_box": FieldKind.CHECKBOX,
    # buttons
    "submit": FieldKind.SUBMIT_BUTTON,
    # grouped helpers
    "radio_button": FieldKind.RADIO_CHOICE,
    "radio_buttons": FieldKind.RADIO_GROUP,
    "multi_check_boxes": FieldKind.MULTI_CHOICE,
})


def resolve_kind(widget: str) -> FieldKind:
    """Return the field kind for *widget*.

    Raises:
        UnknownWidgetError: If the widget is not listed in ``WIDGET_KINDS``.
    """
    try:
        return WIDGET_KINDS[widget]
    except KeyError:
        raise UnknownWidgetError(f"Unknown widget: {widget!r}", widget=widget) from None


def coerce_kind(kind: FieldKind | str, variant: str = "") -> FieldKind:
    """Return *kind* as a ``FieldKind``.

    Raises:
        UnknownFieldKindError: If *kind* names no field kind.
    """
    try:
        return FieldKind(kind)
    except ValueError:
        where = f" for variant {variant!r}" if variant else ""
        raise UnknownFieldKindError(
            f"Unknown field kind {kind!r}{where}", kind=str(kind), variant=variant
        ) from None
