"""Core widget markup for fields bound to a named object.

``WidgetRenderer`` produces the bare form controls (inputs, selects,
textareas, labels) that the shell builder decorates.  Controls follow the
``object[field]`` naming convention: a field ``color`` on an object named
``car`` is rendered with ``name="car[color]"`` and ``id="car_color"``.

Attributes are serialised with ``wtforms.widgets.html_params`` so keyword
arguments such as ``class_="wide"`` or ``data_role="x"`` map to ``class``
and ``data-role``; ``True`` renders as a bare attribute and ``False`` /
``None`` drop the attribute.  Every method returns ``markupsafe.Markup``.
"""

from __future__ import annotations

import calendar
import datetime as dt
import zoneinfo
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from markupsafe import Markup, escape
from wtforms.widgets import html_params

from .utils import normalize_choices, sanitize_dom_id, sanitize_value, string_values

MONTH_NAMES: tuple[str, ...] = tuple(calendar.month_name)[1:]

# Year/month/day parts of a date_select, in render order.
DATE_PARTS: tuple[tuple[str, str], ...] = (("1i", "year"), ("2i", "month"), ("3i", "day"))


# ---------------------------------------------------------------------------
# Tag helpers
# ---------------------------------------------------------------------------


def _params(attrs: Mapping[str, Any]) -> str:
    return html_params(**{k: v for k, v in attrs.items() if v is not None})


def tag(tag_name: str, **attrs: Any) -> Markup:
    """Return a void element such as ``<input ... />``."""
    params = _params(attrs)
    return Markup(f"<{tag_name} {params} />" if params else f"<{tag_name} />")


def content_tag(tag_name: str, content: Any = "", **attrs: Any) -> Markup:
    """Return ``<name attrs>content</name>``; plain-string content is escaped."""
    params = _params(attrs)
    opening = f"<{tag_name} {params}>" if params else f"<{tag_name}>"
    return Markup(opening) + escape(content) + Markup(f"</{tag_name}>")


def options_for_select(
    choices: Iterable[Any] | Mapping[Any, Any],
    selected: Any = None,
) -> Markup:
    """Return ``<option>`` tags for *choices*, marking *selected* values."""
    chosen = string_values(selected)
    return Markup("\n").join(
        content_tag("option", text, value=value, selected=value in chosen)
        for text, value in normalize_choices(choices)
    )


# ---------------------------------------------------------------------------
# WidgetRenderer
# ---------------------------------------------------------------------------


class WidgetRenderer:
    """Renders form controls for the fields of one named object.

    Args:
        object_name: Name used for element ids and ``name`` attributes.
        obj: Source of current values.  Attribute access is used for plain
            objects, item access for mappings.  ``None`` renders empty
            controls.
    """

    def __init__(self, object_name: str, obj: Any = None) -> None:
        self.object_name = object_name
        self.obj = obj

    # -- naming conventions ------------------------------------------------

    def value(self, field: str) -> Any:
        """Return the current value of *field*, or ``None``."""
        if self.obj is None:
            return None
        if isinstance(self.obj, Mapping):
            return self.obj.get(field)
        return getattr(self.obj, field, None)

    def dom_id(self, field: str, *suffixes: Any) -> str:
        base = f"{sanitize_dom_id(self.object_name)}_{field}"
        return "_".join([base, *(str(s) for s in suffixes)])

    def input_name(self, field: str, multiple: bool = False) -> str:
        name = f"{self.object_name}[{field}]"
        return name + "[]" if multiple else name

    def _attrs(self, field: str, attrs: Mapping[str, Any], **defaults: Any) -> dict[str, Any]:
        merged = {"id": self.dom_id(field), "name": self.input_name(field), **defaults}
        merged.update(attrs)
        return merged

    def _input(self, input_type: str, field: str, attrs: Mapping[str, Any], *, with_value: bool = True) -> Markup:
        defaults: dict[str, Any] = {"type": input_type}
        if with_value:
            value = self.value(field)
            if value is not None:
                defaults["value"] = value
        return tag("input", **self._attrs(field, attrs, **defaults))

    # -- text-like inputs --------------------------------------------------

    def text_field(self, field: str, **attrs: Any) -> Markup:
        return self._input("text", field, attrs)

    def password_field(self, field: str, **attrs: Any) -> Markup:
        """Password input; the current value is never echoed back."""
        return self._input("password", field, attrs, with_value=False)

    def hidden_field(self, field: str, **attrs: Any) -> Markup:
        return self._input("hidden", field, attrs)

    def email_field(self, field: str, **attrs: Any) -> Markup:
        return self._input("email", field, attrs)

    def number_field(self, field: str, **attrs: Any) -> Markup:
        return self._input("number", field, attrs)

    def telephone_field(self, field: str, **attrs: Any) -> Markup:
        return self._input("tel", field, attrs)

    def url_field(self, field: str, **attrs: Any) -> Markup:
        return self._input("url", field, attrs)

    def search_field(self, field: str, **attrs: Any) -> Markup:
        return self._input("search", field, attrs)

    def color_field(self, field: str, **attrs: Any) -> Markup:
        return self._input("color", field, attrs)

    def date_field(self, field: str, **attrs: Any) -> Markup:
        value = self.value(field)
        if isinstance(value, (dt.date, dt.datetime)) and "value" not in attrs:
            attrs = {**attrs, "value": value.strftime("%Y-%m-%d")}
        return self._input("date", field, attrs)

    def file_field(self, field: str, **attrs: Any) -> Markup:
        return self._input("file", field, attrs, with_value=False)

    def text_area(self, field: str, **attrs: Any) -> Markup:
        value = self.value(field)
        return content_tag("textarea", "" if value is None else value, **self._attrs(field, attrs))

    # -- choice inputs -----------------------------------------------------

    def check_box(
        self,
        field: str,
        checked_value: Any = "1",
        unchecked_value: Any = "0",
        **attrs: Any,
    ) -> Markup:
        """Checkbox preceded by a hidden input carrying *unchecked_value*.

        The hidden input makes an unticked box still submit a value.  Pass
        ``unchecked_value=None`` to omit it.
        """
        value = self.value(field)
        checked = value is True or (value is not None and str(value) == str(checked_value))
        box = tag(
            "input",
            **self._attrs(field, attrs, type="checkbox", value=checked_value, checked=checked),
        )
        if unchecked_value is None:
            return box
        hidden = tag("input", name=self.input_name(field), type="hidden", value=unchecked_value)
        return hidden + box

    def radio_button(self, field: str, tag_value: Any, **attrs: Any) -> Markup:
        value = self.value(field)
        checked = value is not None and str(value) == str(tag_value)
        return tag(
            "input",
            **self._attrs(
                field,
                attrs,
                id=self.dom_id(field, sanitize_value(tag_value)),
                type="radio",
                value=tag_value,
                checked=checked,
            ),
        )

    def select(
        self,
        field: str,
        choices: Iterable[Any] | Mapping[Any, Any],
        *,
        include_blank: bool | str = False,
        prompt: Optional[str] = None,
        selected: Any = None,
        multiple: bool = False,
        **attrs: Any,
    ) -> Markup:
        """``<select>`` over *choices* (``(text, value)`` pairs or bare values).

        *selected* overrides the object's current value.  *prompt* adds a
        leading empty option only while no value is set; *include_blank*
        always adds one (a string is used as its text).
        """
        current = self.value(field) if selected is None else selected
        leading: list[Markup] = []
        if include_blank:
            text = include_blank if isinstance(include_blank, str) else ""
            leading.append(content_tag("option", text, value=""))
        elif prompt and current is None:
            leading.append(content_tag("option", prompt, value=""))
        body = Markup("\n").join([*leading, options_for_select(choices, current)])
        select_attrs = self._attrs(
            field,
            attrs,
            name=self.input_name(field, multiple=multiple),
            multiple=multiple,
        )
        return content_tag("select", body, **select_attrs)

    def time_zone_select(
        self,
        field: str,
        priority_zones: Optional[Iterable[str]] = None,
        **options: Any,
    ) -> Markup:
        """Select over the IANA time zones known to ``zoneinfo``.

        *priority_zones* are listed first, followed by a disabled divider.
        """
        zones = sorted(zoneinfo.available_timezones())
        if not priority_zones:
            return self.select(field, zones, **options)

        priority = list(priority_zones)
        current = self.value(field) if options.get("selected") is None else options["selected"]
        divider = content_tag("option", "-------------", value="", disabled=True)
        body = Markup("\n").join([
            options_for_select(priority, current),
            divider,
            options_for_select([z for z in zones if z not in priority], current),
        ])
        attrs = {k: v for k, v in options.items() if k not in ("selected", "include_blank", "prompt", "multiple")}
        if options.get("include_blank"):
            body = content_tag("option", "", value="") + Markup("\n") + body
        return content_tag("select", body, **self._attrs(field, attrs))

    # -- date selects ------------------------------------------------------

    def date_select(
        self,
        field: str,
        *,
        start_year: int = 1801,
        end_year: Optional[int] = None,
        include_blank: bool = False,
        **attrs: Any,
    ) -> Markup:
        """Three selects (year, month, day) submitted as ``field(1i)`` etc.

        Without a current value and without *include_blank*, today's date is
        preselected.
        """
        value = self.value(field)
        if value is None and not include_blank:
            value = dt.date.today()
        end_year = end_year if end_year is not None else dt.date.today().year

        selects = []
        for suffix, part in DATE_PARTS:
            part_value = getattr(value, part, None) if value is not None else None
            choices = _date_part_choices(part, start_year, end_year)
            part_attrs = {
                **attrs,
                "id": f"{self.dom_id(field)}_{suffix}",
                "name": f"{self.object_name}[{field}({suffix})]",
            }
            selects.append(
                self.select(
                    field,
                    choices,
                    include_blank=include_blank,
                    selected=part_value,
                    **part_attrs,
                )
            )
        return Markup("\n").join(selects)

    def _date_part_select(
        self,
        part: str,
        value: Any,
        *,
        field_name: str,
        prefix: Optional[str] = None,
        start_year: int = 1801,
        end_year: Optional[int] = None,
        include_blank: bool = False,
        **attrs: Any,
    ) -> Markup:
        prefix = prefix or self.object_name
        end_year = end_year if end_year is not None else dt.date.today().year
        choices = _date_part_choices(part, start_year, end_year)
        body_parts: list[Markup] = []
        if include_blank:
            body_parts.append(content_tag("option", "", value=""))
        body_parts.append(options_for_select(choices, value))
        select_attrs = {
            "id": sanitize_dom_id(f"{prefix}_{field_name}"),
            "name": f"{prefix}[{field_name}]",
            **attrs,
        }
        return content_tag("select", Markup("\n").join(body_parts), **select_attrs)

    def select_year(self, value: Any, **options: Any) -> Markup:
        """Free-standing year select named ``prefix[field_name]``."""
        return self._date_part_select("year", value, **options)

    def select_month(self, value: Any, **options: Any) -> Markup:
        options.pop("start_year", None)
        options.pop("end_year", None)
        return self._date_part_select("month", value, **options)

    def select_day(self, value: Any, **options: Any) -> Markup:
        options.pop("start_year", None)
        options.pop("end_year", None)
        return self._date_part_select("day", value, **options)

    # -- buttons and labels ------------------------------------------------

    def submit(self, value: str, **attrs: Any) -> Markup:
        return tag("input", **{"name": "commit", "type": "submit", "value": value, **attrs})

    def label(self, field: str, text: Any, **attrs: Any) -> Markup:
        """``<label>`` for *field*; *text* is escaped unless it is ``Markup``."""
        attrs.setdefault("for_", self.dom_id(field))
        return content_tag("label", text, **attrs)

    def hidden_tag(self, name: str, value: Any = "", **attrs: Any) -> Markup:
        return tag("input", **{"name": name, "type": "hidden", "value": value, **attrs})

    def check_box_tag(self, name: str, value: Any, checked: bool = False, **attrs: Any) -> Markup:
        return tag("input", **{"name": name, "type": "checkbox", "value": value, "checked": checked, **attrs})


def _date_part_choices(part: str, start_year: int, end_year: int) -> list[tuple[str, str]]:
    if part == "year":
        step = 1 if end_year >= start_year else -1
        return [(str(y), str(y)) for y in range(start_year, end_year + step, step)]
    if part == "month":
        return [(name, str(i)) for i, name in enumerate(MONTH_NAMES, start=1)]
    return [(str(d), str(d)) for d in range(1, 32)]
