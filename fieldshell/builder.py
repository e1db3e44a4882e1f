"""Field shell builder.

``FormBuilder`` renders each form field together with its label,
description, decoration and error text from a single call::

    form = FormBuilder("car", car)
    form.text_field("color", description="Exterior paint colour.")

The options consumed by the shell (``label``, ``colon``, ``description``,
``required``, ``decoration``, ``label_for``) are stripped before the core
widget is rendered; every other option becomes an HTML attribute or a
widget argument.  The wrapper markup comes from the builder's presentation
variant (Standard, Table or Simple).
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, Optional

from markupsafe import Markup, escape

from .config import ShellConfig
from .kinds import FieldKind, MissingWidgetArgumentError, coerce_kind, resolve_kind
from .labels import derive_label
from .options import PRESENTATION_KEYS, partition_options
from .utils import humanize, normalize_choices, sanitize_dom_id, sanitize_value, string_values
from .variants import SIMPLE, STANDARD, TABLE, Variant, get_renderer, get_variant
from .widgets import WidgetRenderer, content_tag

logger = logging.getLogger(__name__)

ElementProducer = Callable[[dict[str, Any]], Markup]

# Widgets rendered by builder methods rather than by the widget renderer,
# mapped to the extra argument each one takes from the options.
COMPOSITE_WIDGETS: Mapping[str, Optional[str]] = MappingProxyType({
    "select": "choices",
    "radio_button": "tag_value",
    "radio_buttons": "choices",
    "multi_check_boxes": "choices",
    "date_select": None,
    "multipart_date_select": None,
    "submit": None,
})


@dataclass(frozen=True)
class ShellLocals:
    """Everything a wrapper template can use."""

    element: Markup
    label: Markup
    container_id: str
    description: Any = None
    decoration: Optional[Markup] = None
    error: Optional[str] = None
    required: bool = False
    hidden: Optional[Markup] = None

    def as_context(self) -> dict[str, Any]:
        """Template context; absent decoration/hidden render as empty strings."""
        context = {f.name: getattr(self, f.name) for f in fields(self)}
        context["decoration"] = self.decoration or Markup("")
        context["hidden"] = self.hidden or Markup("")
        return context


class FormBuilder:
    """Renders fields of one object inside label/description shells.

    Args:
        object_name: Name used for ids (``car_color``) and input names
            (``car[color]``).
        obj: Object (or mapping) providing the current field values.
        variant: Presentation variant or its registered name.  Defaults to
            the class's ``default_variant``.
        config: Shell settings; defaults to ``ShellConfig()``.
        errors: Mapping of field name to error message(s).  When omitted,
            ``obj.errors`` is used if it is a mapping.
    """

    default_variant: Variant = STANDARD

    def __init__(
        self,
        object_name: str,
        obj: Any = None,
        *,
        variant: Variant | str | None = None,
        config: Optional[ShellConfig] = None,
        errors: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.object_name = object_name
        self.obj = obj
        self.variant = get_variant(variant) if variant is not None else self.default_variant
        self.config = config or ShellConfig()
        self.widgets = WidgetRenderer(object_name, obj)
        self.templates = get_renderer(self.config.template_dir)
        if errors is None:
            obj_errors = getattr(obj, "errors", None)
            errors = obj_errors if isinstance(obj_errors, Mapping) else {}
        self.errors = errors

    # -- shell -------------------------------------------------------------

    def build_shell(
        self,
        field: str,
        options: Optional[Mapping[str, Any]],
        kind: FieldKind | str,
        element_producer: ElementProducer,
        *,
        hidden: Optional[Markup] = None,
    ) -> Markup:
        """Wrap the element produced by *element_producer* in its shell.

        *element_producer* receives the pass-through options (presentation
        keys removed, ``required=True`` added when the kind takes the HTML
        attribute) and returns the core element markup.  Its exceptions
        propagate unchanged.
        """
        kind = coerce_kind(kind)
        parts = partition_options(options)

        label_options = dict(parts.label_options)
        if kind.forces_no_colon:
            label_options["colon"] = False
        label = derive_label(
            self.widgets,
            field,
            parts.field_options.get("label"),
            label_options,
            self.config,
        )

        passthrough = dict(parts.passthrough)
        if parts.required and self.config.required_attribute and kind.takes_required_attribute:
            passthrough["required"] = True
        element = element_producer(passthrough)

        decoration = parts.field_options.get("decoration")
        shell = ShellLocals(
            element=Markup(element),
            label=label,
            container_id=self.container_id(field),
            description=parts.field_options.get("description") or None,
            decoration=Markup(decoration) if decoration else None,
            error=self.error_text(field),
            required=parts.required,
            hidden=hidden,
        )
        logger.debug(
            "Rendering %s field %r of %r with the %s variant",
            kind.value, field, self.object_name, self.variant.name,
        )
        return self.variant.render(kind, shell.as_context(), self.templates)

    def container_id(self, field: str) -> str:
        return f"{sanitize_dom_id(self.object_name)}_{field}_field"

    def error_text(self, field: str) -> Optional[str]:
        """Return the field's error messages joined by commas, or ``None``."""
        messages = self.errors.get(field)
        if not messages:
            return None
        if isinstance(messages, str) or not isinstance(messages, Iterable):
            messages = [messages]
        return ", ".join(str(m) for m in messages)

    def field(self, widget: str, field: str, **options: Any) -> Markup:
        """Render any widget from the dispatcher table.

        Widgets the builder renders itself take their extra argument from
        *options*: ``choices`` for ``select``, ``radio_buttons`` and
        ``multi_check_boxes``, ``tag_value`` for ``radio_button``.  For
        ``submit`` the second argument is the button caption.

        Raises:
            UnknownWidgetError: If *widget* is not a known widget name.
            MissingWidgetArgumentError: If a required extra argument is
                missing from *options*.
        """
        resolve_kind(widget)
        if widget not in COMPOSITE_WIDGETS:
            return self._wrap_widget(widget, field, options)
        method = getattr(self, widget)
        argument = COMPOSITE_WIDGETS[widget]
        if argument is None:
            return method(field, **options)
        if argument not in options:
            raise MissingWidgetArgumentError(
                f"Widget {widget!r} needs a {argument!r} option", widget=widget
            )
        extra = options.pop(argument)
        return method(field, extra, **options)

    def _wrap_widget(self, widget: str, field: str, options: Mapping[str, Any]) -> Markup:
        render = getattr(self.widgets, widget)
        return self.build_shell(field, options, resolve_kind(widget), lambda attrs: render(field, **attrs))

    # -- selects -----------------------------------------------------------

    def select(self, field: str, choices: Iterable[Any] | Mapping[Any, Any], **options: Any) -> Markup:
        """``<select>`` field; accepts ``include_blank``, ``prompt``,
        ``selected`` and ``multiple`` besides the shell options."""
        return self.build_shell(
            field,
            options,
            resolve_kind("select"),
            lambda attrs: self.widgets.select(field, choices, **attrs),
        )

    def time_zone_select(self, field: str, **options: Any) -> Markup:
        return self._wrap_widget("time_zone_select", field, options)

    def date_select(self, field: str, **options: Any) -> Markup:
        """Standard three-part date select (year, month, day)."""
        options.setdefault("include_blank", False)
        options.setdefault("start_year", self.config.start_year)
        options.setdefault("end_year", dt.date.today().year)
        options["label_for"] = f"{self.widgets.dom_id(field)}_1i"
        return self._wrap_widget("date_select", field, options)

    def multipart_date_select(self, field: str, **options: Any) -> Markup:
        """Date select that submits year, month and day separately.

        The parts are stored in three attributes (``<field>_y``,
        ``<field>_m`` and ``<field>_d``) so partial dates such as "1984" or
        "October 1984" can be kept.
        """
        options.setdefault("include_blank", False)
        options.setdefault("start_year", self.config.start_year)
        options.setdefault("end_year", dt.date.today().year)
        options["label_for"] = f"{self.widgets.dom_id(field)}_y"

        def produce(attrs: dict[str, Any]) -> Markup:
            selects = []
            for suffix, select_part in (
                ("y", self.widgets.select_year),
                ("m", self.widgets.select_month),
                ("d", self.widgets.select_day),
            ):
                part_field = f"{field}_{suffix}"
                selects.append(
                    select_part(
                        self.widgets.value(part_field),
                        field_name=part_field,
                        prefix=self.object_name,
                        **attrs,
                    )
                )
            return Markup(" ").join(selects)

        return self.build_shell(field, options, resolve_kind("multipart_date_select"), produce)

    def year_select(
        self,
        field: str,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        **options: Any,
    ) -> Markup:
        first = start_year if start_year is not None else self.config.start_year
        last = end_year if end_year is not None else dt.date.today().year
        return self.integer_select(field, first, last, **options)

    def integer_select(self, field: str, first: int, last: int, **options: Any) -> Markup:
        """Select over the integers from *first* to *last* inclusive."""
        return self.select(field, range(first, last + 1), **options)

    # -- buttons -----------------------------------------------------------

    def submit(self, value: Optional[str] = None, **options: Any) -> Markup:
        """Submit button with the ``submit`` CSS class.

        Without an explicit *value* the caption is "Create" for a new record
        and "Update" otherwise.
        """
        options["class_"] = f"{options.get('class_', '')} submit".strip()
        if value is None:
            value = "Create" if self._is_new_record() else "Update"
        return self.build_shell(
            "submit",
            options,
            resolve_kind("submit"),
            lambda attrs: self.widgets.submit(value, **attrs),
        )

    def _is_new_record(self) -> bool:
        if self.obj is None:
            return True
        new_record = getattr(self.obj, "new_record", None)
        if new_record is not None:
            return bool(new_record)
        return getattr(self.obj, "id", None) is None

    # -- grouped choices ---------------------------------------------------

    def radio_button(self, field: str, tag_value: Any, **options: Any) -> Markup:
        """A single radio button with its label, without a container.

        Meant to be nested inside :meth:`radio_buttons`.  The label defaults
        to the humanised choice value and targets the button's own id.
        """
        options.setdefault("label", humanize(str(tag_value)))
        options.setdefault("label_for", self.widgets.dom_id(field, sanitize_value(tag_value)))
        return self.build_shell(
            field,
            options,
            resolve_kind("radio_button"),
            lambda attrs: self.widgets.radio_button(field, tag_value, **attrs),
        )

    def radio_buttons(self, field: str, choices: Iterable[Any] | Mapping[Any, Any], **options: Any) -> Markup:
        """Group of radio buttons, one per ``(text, value)`` choice."""
        choice_list = normalize_choices(choices)
        if choice_list:
            options.setdefault("label_for", self.widgets.dom_id(field, sanitize_value(choice_list[0][1])))

        def produce(attrs: dict[str, Any]) -> Markup:
            return Markup("\n").join(
                self.radio_button(field, value, label=text, **attrs)
                for text, value in choice_list
            )

        return self.build_shell(field, options, resolve_kind("radio_buttons"), produce)

    def multi_check_boxes(self, field: str, choices: Iterable[Any] | Mapping[Any, Any], **options: Any) -> Markup:
        """One checkbox per choice for a multi-valued field (``category_ids``).

        A single hidden empty value precedes the boxes so that unticking
        every box still submits the field.
        """
        choice_list = normalize_choices(choices)
        name = self.widgets.input_name(field, multiple=True)
        selected = string_values(self.widgets.value(field))
        if choice_list:
            options.setdefault("label_for", self.widgets.dom_id(field, sanitize_value(choice_list[0][1])))

        def produce(attrs: dict[str, Any]) -> Markup:
            pairs = []
            for text, value in choice_list:
                box_id = self.widgets.dom_id(field, sanitize_value(value))
                box = self.widgets.check_box_tag(
                    name, value, checked=value in selected, **{**attrs, "id": box_id}
                )
                pairs.append(box + Markup(" ") + self.widgets.label(field, text, for_=box_id))
            return Markup("<br />\n").join(pairs)

        return self.build_shell(
            field,
            options,
            resolve_kind("multi_check_boxes"),
            produce,
            hidden=self.widgets.hidden_tag(name, ""),
        )

    # -- unwrapped helpers -------------------------------------------------

    def hidden_field(self, field: str, **options: Any) -> Markup:
        """Hidden input; never wrapped, presentation options are dropped."""
        ignored = sorted(k for k in options if k in PRESENTATION_KEYS)
        if ignored:
            logger.warning("Ignoring presentation options %s for hidden field %r", ignored, field)
        return self.widgets.hidden_field(field, **partition_options(options).passthrough)

    def label(self, field: str, text: Any = None, **options: Any) -> Markup:
        """Bare ``<label>`` using the same derivation rules as the shells."""
        parts = partition_options(options)
        return derive_label(self.widgets, field, text, parts.label_options, self.config, **parts.passthrough)

    def field_set(
        self,
        legend: Optional[str] = None,
        content: Markup | str | Callable[["FormBuilder"], Any] = "",
        **attrs: Any,
    ) -> Markup:
        """``<fieldset>`` with an optional ``<legend>`` around *content*.

        *content* is markup, or a callable that receives this builder and
        returns markup.  Plain strings are escaped.
        """
        body = content(self) if callable(content) else content
        parts = []
        if legend:
            parts.append(content_tag("legend", legend))
        parts.append(escape(body))
        return content_tag("fieldset", Markup("\n").join(parts), **attrs)


def _field_method(widget: str) -> Callable[..., Markup]:
    def method(self: FormBuilder, field: str, **options: Any) -> Markup:
        return self.field(widget, field, **options)

    method.__name__ = widget
    method.__qualname__ = f"FormBuilder.{widget}"
    method.__doc__ = f"Render a ``{widget}`` widget inside its field shell."
    return method


# Widgets whose renderer takes just the field name and attributes.
SHELL_WIDGETS: tuple[str, ...] = (
    "text_field",
    "password_field",
    "email_field",
    "number_field",
    "telephone_field",
    "url_field",
    "search_field",
    "color_field",
    "date_field",
    "file_field",
    "text_area",
    "check_box",
)

for _widget in SHELL_WIDGETS:
    setattr(FormBuilder, _widget, _field_method(_widget))
del _widget


class StandardFormBuilder(FormBuilder):
    """Fields in a ``<div>``: label on one line, field below it."""

    default_variant = STANDARD


class TableFormBuilder(FormBuilder):
    """Fields in table rows: label in the first cell, field in the second."""

    default_variant = TABLE


class SimpleFormBuilder(FormBuilder):
    """Fields with no surrounding containers."""

    default_variant = SIMPLE
