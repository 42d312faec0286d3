"""Unit tests for content type coercion."""

from __future__ import annotations

import sys
from datetime import datetime

import pytest

from opengraph.coerce import coerce_number, coerce_value, is_numeric, parse_date
from opengraph.options import ParseOptions
from opengraph.query import parse


class TestBooleans:
    def test_true(self):
        assert coerce_value("true") is True

    def test_false(self):
        assert coerce_value("false") is False

    def test_case_sensitive(self):
        assert coerce_value("True") == "True"
        assert coerce_value("FALSE") == "FALSE"


class TestNumbers:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("42", True), ("-7", True), ("+3", True), ("1.5", True), (".5", True),
         ("1e3", True), ("2E-2", True), (" 12", True),
         ("abc", False), ("1,000", False), ("0x1A", False), ("", False), ("1.2.3", False)],
    )
    def test_is_numeric(self, text, expected):
        assert is_numeric(text) is expected

    def test_integer(self):
        value = coerce_value("300")
        assert value == 300
        assert isinstance(value, int)

    def test_negative_integer(self):
        assert coerce_value("-42") == -42

    def test_decimal_is_float(self):
        value = coerce_value("8.5")
        assert value == 8.5
        assert isinstance(value, float)

    def test_exponent_is_float(self):
        assert coerce_value("1e3") == 1000.0
        assert isinstance(coerce_value("1E3"), float)

    def test_year_stays_number(self):
        assert coerce_value("2024") == 2024

    def test_max_int_becomes_float(self):
        value = coerce_number(str(sys.maxsize))
        assert isinstance(value, float)

    def test_beyond_max_int_becomes_float(self):
        value = coerce_value(str(sys.maxsize + 10))
        assert isinstance(value, float)

    def test_below_max_int_stays_int(self):
        value = coerce_value(str(sys.maxsize - 1))
        assert value == sys.maxsize - 1
        assert isinstance(value, int)

    def test_too_many_digits_becomes_float(self):
        value = coerce_value("9" * 5000)
        assert isinstance(value, float)

    def test_too_many_digits_in_page_does_not_raise(self):
        graph = parse(f'<meta property="og:views" content="{"1" * 5000}">')
        assert isinstance(graph.get("views"), float)


class TestDates:
    def test_iso_with_offset_to_utc(self):
        opts = ParseOptions(timezone="UTC")
        assert coerce_value("2024-01-15T09:30:00+00:00", opts) == "2024-01-15T09:30:00+0000"

    def test_timezone_conversion(self):
        opts = ParseOptions(timezone="America/New_York")
        assert coerce_value("2024-01-15T09:30:00+00:00", opts) == "2024-01-15T04:30:00-0500"

    def test_offset_kept_without_timezone_option(self):
        assert coerce_value("2024-01-15T09:30:00+02:00") == "2024-01-15T09:30:00+0200"

    def test_custom_format(self):
        opts = ParseOptions(date="%Y-%m-%d")
        assert coerce_value("2024-01-15", opts) == "2024-01-15"

    def test_human_readable_date(self):
        opts = ParseOptions(date="%Y-%m-%d")
        assert coerce_value("January 15, 2024", opts) == "2024-01-15"

    @pytest.mark.parametrize("mode", ["object", "datetime"])
    def test_object_mode(self, mode):
        value = coerce_value("2024-01-15T09:30:00+00:00", ParseOptions(date=mode))
        assert isinstance(value, datetime)
        assert (value.year, value.month, value.day) == (2024, 1, 15)
        assert value.tzinfo is not None

    def test_object_mode_with_timezone(self):
        opts = ParseOptions(date="object", timezone="Asia/Tokyo")
        value = coerce_value("2024-01-15T20:00:00+00:00", opts)
        assert value.day == 16
        assert value.hour == 5

    def test_naive_date_is_localised(self):
        value = coerce_value("2024-01-15", ParseOptions(date="object"))
        assert value.tzinfo is not None

    def test_unparseable_stays_string(self):
        assert coerce_value("lorem ipsum") == "lorem ipsum"

    def test_parse_date_none_for_text(self):
        assert parse_date("lorem ipsum dolor") is None

    def test_boolean_literal_never_a_date(self):
        assert coerce_value("true", ParseOptions(date="object")) is True

    def test_upper_range_edge_stays_string(self):
        text = "9999-12-31T23:00:00-05:00"
        assert coerce_value(text, ParseOptions(timezone="UTC")) == text

    def test_lower_range_edge_stays_string(self):
        text = "0001-01-01T01:00:00+00:00"
        assert coerce_value(text, ParseOptions(timezone="America/New_York")) == text

    def test_range_edge_in_page_does_not_raise(self):
        html = '<meta property="og:expires" content="9999-12-31T23:00:00-05:00">'
        graph = parse(html, {"timezone": "UTC"})
        assert graph.get("expires") == "9999-12-31T23:00:00-05:00"

    @pytest.mark.parametrize("text", ["May", "12:30"])
    def test_loose_date_words_become_dates(self, text):
        assert isinstance(coerce_value(text, ParseOptions(date="object")), datetime)


class TestPlainStrings:
    @pytest.mark.parametrize(
        "text",
        [
            "http://ex.com/r.jpg",
            "https://example.com/blog/post",
            "en_US",
            "video.movie",
            "1601 S California Ave",
            "The Rock",
            "lorem ipsum",
        ],
    )
    def test_stays_string(self, text):
        assert coerce_value(text) == text


class TestCastDisabled:
    @pytest.mark.parametrize("text", ["true", "300", "8.5", "2024-01-15T09:30:00+00:00"])
    def test_raw_string(self, text):
        assert coerce_value(text, ParseOptions(cast=False)) == text

    def test_empty_string(self):
        assert coerce_value("") == ""


class TestParseOptions:
    def test_defaults(self):
        opts = ParseOptions()
        assert opts.date == "%Y-%m-%dT%H:%M:%S%z"
        assert opts.timezone is None
        assert opts.cast is True
        assert not opts.wants_object

    def test_from_mapping(self):
        opts = ParseOptions.coerce({"cast": False})
        assert opts.cast is False
        assert opts.date == "%Y-%m-%dT%H:%M:%S%z"

    def test_coerce_passthrough(self):
        opts = ParseOptions(cast=False)
        assert ParseOptions.coerce(opts) is opts

    def test_coerce_none(self):
        assert ParseOptions.coerce(None) == ParseOptions()

    def test_unknown_option_rejected(self):
        with pytest.raises(ValueError):
            ParseOptions.coerce({"format": "x"})

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValueError):
            ParseOptions(timezone="Mars/Olympus_Mons")

    def test_empty_timezone_means_none(self):
        assert ParseOptions(timezone="").timezone is None

    def test_empty_date_rejected(self):
        with pytest.raises(ValueError):
            ParseOptions(date="")

    def test_wants_object(self):
        assert ParseOptions(date="object").wants_object
        assert ParseOptions(date="datetime").wants_object
