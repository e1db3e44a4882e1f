"""Unit tests for core widget markup (fieldshell.widgets).

Tests cover:
- object[field] naming and value lookup (objects, mappings, None)
- text-like inputs, textarea, checkbox, radio button
- selects (blank, prompt, multiple), date and time-zone selects
- attribute escaping and keyword mapping
"""

from __future__ import annotations

import datetime as dt

import pytest
from markupsafe import Markup

from fieldshell.widgets import WidgetRenderer, content_tag, options_for_select, tag

pytestmark = pytest.mark.unit


@pytest.fixture
def widgets(car) -> WidgetRenderer:
    return WidgetRenderer("car", car)


class TestTagHelpers:
    def test_void_tag(self):
        assert tag("br") == "<br />"

    def test_boolean_and_none_attributes(self):
        assert tag("input", checked=True, disabled=False, value=None) == "<input checked />"

    def test_name_attribute(self):
        assert tag("input", name="q", type="search") == '<input name="q" type="search" />'
        assert content_tag("select", "", name="q") == '<select name="q"></select>'

    def test_content_is_escaped(self):
        assert content_tag("p", "<b>") == "<p>&lt;b&gt;</p>"

    def test_markup_content_kept(self):
        assert content_tag("p", Markup("<b>x</b>"), class_="note") == '<p class="note"><b>x</b></p>'

    def test_options_for_select(self):
        html = options_for_select([("Sports", 1), ("News", 2)], selected=2)
        assert html == (
            '<option value="1">Sports</option>\n'
            '<option selected value="2">News</option>'
        )


class TestNaming:
    def test_dom_id_and_name(self, widgets):
        assert widgets.dom_id("color") == "car_color"
        assert widgets.dom_id("size", "m") == "car_size_m"
        assert widgets.input_name("color") == "car[color]"
        assert widgets.input_name("category_ids", multiple=True) == "car[category_ids][]"

    def test_nested_object_name(self):
        assert WidgetRenderer("car[engine]").dom_id("size") == "car_engine_size"

    def test_value_from_mapping(self):
        assert WidgetRenderer("car", {"color": "blue"}).value("color") == "blue"

    def test_value_without_object(self):
        assert WidgetRenderer("car").value("color") is None

    def test_missing_attribute(self, widgets):
        assert widgets.value("wheels") is None


class TestInputs:
    def test_text_field(self, widgets):
        assert widgets.text_field("color") == (
            '<input id="car_color" name="car[color]" type="text" value="red" />'
        )

    def test_text_field_without_value(self):
        assert WidgetRenderer("car").text_field("color") == (
            '<input id="car_color" name="car[color]" type="text" />'
        )

    def test_attribute_overrides(self, widgets):
        html = widgets.text_field("color", id="paint", class_="wide", data_role="picker")
        assert 'id="paint"' in html
        assert 'class="wide"' in html
        assert 'data-role="picker"' in html

    def test_value_is_escaped(self):
        html = WidgetRenderer("car", {"color": '"><script>'}).text_field("color")
        assert "<script>" not in html
        assert "&gt;&lt;script&gt;" in html

    def test_password_never_echoes_value(self):
        html = WidgetRenderer("user", {"password": "secret"}).password_field("password")
        assert "secret" not in html
        assert 'type="password"' in html

    @pytest.mark.parametrize(
        "method, input_type",
        [
            ("email_field", "email"),
            ("number_field", "number"),
            ("telephone_field", "tel"),
            ("url_field", "url"),
            ("search_field", "search"),
            ("color_field", "color"),
            ("hidden_field", "hidden"),
            ("file_field", "file"),
        ],
    )
    def test_input_types(self, widgets, method, input_type):
        assert f'type="{input_type}"' in getattr(widgets, method)("color")

    def test_date_field_formats_dates(self, person):
        html = WidgetRenderer("person", person).date_field("born")
        assert 'value="1984-10-05"' in html

    def test_text_area(self):
        html = WidgetRenderer("post", {"body": "a < b"}).text_area("body", rows=3)
        assert html == '<textarea id="post_body" name="post[body]" rows="3">a &lt; b</textarea>'


class TestCheckBox:
    def test_unchecked_with_hidden_value(self, widgets):
        assert widgets.check_box("agree") == (
            '<input name="car[agree]" type="hidden" value="0" />'
            '<input id="car_agree" name="car[agree]" type="checkbox" value="1" />'
        )

    def test_checked_when_true(self):
        html = WidgetRenderer("car", {"agree": True}).check_box("agree")
        assert "checked" in html

    def test_checked_value(self):
        html = WidgetRenderer("car", {"fuel": "diesel"}).check_box("fuel", checked_value="diesel")
        assert 'value="diesel"' in html
        assert "checked" in html

    def test_without_hidden(self, widgets):
        html = widgets.check_box("agree", unchecked_value=None)
        assert 'type="hidden"' not in html


class TestRadioButton:
    def test_checked_choice(self, widgets):
        assert widgets.radio_button("size", "m") == (
            '<input checked id="car_size_m" name="car[size]" type="radio" value="m" />'
        )

    def test_unchecked_choice_id_sanitized(self, widgets):
        html = widgets.radio_button("size", "Extra Large")
        assert 'id="car_size_extra_large"' in html
        assert "checked" not in html


class TestSelect:
    def test_selected_from_object(self, widgets):
        html = widgets.select("make", ["Saab", "Volvo"])
        assert html == (
            '<select id="car_make" name="car[make]">'
            '<option selected value="Saab">Saab</option>\n'
            '<option value="Volvo">Volvo</option>'
            "</select>"
        )

    def test_include_blank(self, widgets):
        html = widgets.select("make", ["Saab"], include_blank="None")
        assert '<option value="">None</option>' in html

    def test_prompt_only_without_value(self):
        html = WidgetRenderer("car").select("make", ["Saab"], prompt="Pick one")
        assert '<option value="">Pick one</option>' in html
        html = WidgetRenderer("car", {"make": "Saab"}).select("make", ["Saab"], prompt="Pick one")
        assert "Pick one" not in html

    def test_multiple(self):
        html = WidgetRenderer("post", {"tags": ["a", "c"]}).select(
            "tags", ["a", "b", "c"], multiple=True
        )
        assert 'name="post[tags][]"' in html
        assert "multiple" in html
        assert html.count("selected") == 2


class TestDateSelects:
    def test_date_select_parts(self, person):
        html = WidgetRenderer("person", person).date_select("born", start_year=1980, end_year=1990)
        assert 'id="person_born_1i" name="person[born(1i)]"' in html
        assert 'id="person_born_2i" name="person[born(2i)]"' in html
        assert 'id="person_born_3i" name="person[born(3i)]"' in html
        assert '<option selected value="1984">1984</option>' in html
        assert '<option selected value="10">October</option>' in html
        assert '<option selected value="5">5</option>' in html
        assert '<option value="1979">' not in html
        assert '<option value="1990">1990</option>' in html

    def test_date_select_blank(self):
        html = WidgetRenderer("person").date_select("born", include_blank=True, end_year=1990)
        assert html.count('<option value=""></option>') == 3
        assert "selected" not in html

    def test_date_select_defaults_to_today(self):
        today = dt.date.today()
        html = WidgetRenderer("person").date_select("born")
        assert f'<option selected value="{today.year}">' in html

    def test_select_year_with_prefix(self):
        html = WidgetRenderer("person").select_year(
            1984, field_name="born_y", start_year=1980, end_year=1985
        )
        assert html.startswith('<select id="person_born_y" name="person[born_y]">')
        assert '<option selected value="1984">1984</option>' in html

    def test_select_month_ignores_year_range(self):
        html = WidgetRenderer("person").select_month(
            None, field_name="born_m", start_year=1980, end_year=1985
        )
        assert html.count("<option") == 12

    def test_select_day(self):
        html = WidgetRenderer("person").select_day(31, field_name="born_d", include_blank=True)
        assert '<option selected value="31">31</option>' in html
        assert '<option value=""></option>' in html


class TestTimeZoneSelect:
    def test_priority_zones_first(self, person):
        html = WidgetRenderer("person", person).time_zone_select(
            "zone", priority_zones=["UTC", "Europe/Paris"]
        )
        assert html.startswith('<select id="person_zone" name="person[zone]">')
        assert '<option selected value="UTC">UTC</option>' in html
        assert '<option disabled value="">-------------</option>' in html
        assert html.index("Europe/Paris") < html.index("-------------")


class TestButtonsAndLabels:
    def test_submit(self, widgets):
        assert widgets.submit("Save") == '<input name="commit" type="submit" value="Save" />'

    def test_label_defaults_to_field_id(self, widgets):
        assert widgets.label("color", "Paint") == '<label for="car_color">Paint</label>'

    def test_label_escapes_text(self, widgets):
        assert widgets.label("color", "<i>") == '<label for="car_color">&lt;i&gt;</label>'

    def test_hidden_and_check_box_tags(self, widgets):
        assert widgets.hidden_tag("car[ids][]") == '<input name="car[ids][]" type="hidden" value="" />'
        assert widgets.check_box_tag("car[ids][]", "1", checked=True) == (
            '<input checked name="car[ids][]" type="checkbox" value="1" />'
        )


def test_renderer_is_stateless_between_calls(car):
    widgets = WidgetRenderer("car", car)
    assert widgets.text_field("color") == widgets.text_field("color")
    assert isinstance(widgets.text_field("color"), Markup)
