"""
Tests for request helpers: lenient integer parsing, page size clamping,
request body unwrapping and event payload rendering.
"""

import pytest

from listing_api.utils.pagination import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, clamp_limit, parse_int
from listing_api.utils.params import require_params
from listing_api.utils.exceptions import MissingParameterError
from listing_api.schemas.event import (
    GenericEventData,
    PriceChangedData,
    SoldData,
    decode_event_data,
    format_event_data,
)


class TestParseInt:
    """Test lenient integer parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("3", 3),
            (" 42 ", 42),
            ("-7", -7),
            (5, 5),
            ("", None),
            ("abc", None),
            ("2.5", None),
            (None, None),
            (True, None),
        ],
    )
    def test_parse_int(self, value, expected):
        assert parse_int(value) == expected

    def test_parse_int_clamps_to_column_range(self):
        assert parse_int("99999999999999999999") == INT64_MAX
        assert parse_int("-99999999999999999999") == INT64_MIN
        assert parse_int("99999999999999999999", INT32_MIN, INT32_MAX) == INT32_MAX
        assert parse_int("-5000000000", INT32_MIN, INT32_MAX) == INT32_MIN
        assert parse_int("1650000", INT32_MIN, INT32_MAX) == 1650000


class TestClampLimit:
    """Test effective page size rules."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, 25),
            ("", 25),
            ("abc", 25),
            ("0", 25),
            ("-5", 25),
            ("1", 1),
            ("50", 50),
            ("100", 100),
            ("101", 100),
            ("100000", 100),
        ],
    )
    def test_clamp_limit(self, raw, expected):
        assert clamp_limit(raw) == expected

    def test_custom_bounds(self):
        assert clamp_limit(None, default=10, maximum=20) == 10
        assert clamp_limit("30", default=10, maximum=20) == 20


class TestRequireParams:
    """Test unwrapping of write request bodies."""

    def test_wrapped_body(self):
        body = {"property": {"title": "Home", "price": 1}}
        assert require_params(body, "property", ["title", "price"]) == {"title": "Home", "price": 1}

    def test_bare_attributes(self):
        body = {"email": "a@example.com", "password": "secret"}
        assert require_params(body, "user", ["email", "password"]) == body

    def test_unpermitted_keys_are_dropped(self):
        body = {"property": {"title": "Home", "id": 99, "created_at": "2020-01-01"}}
        assert require_params(body, "property", ["title"]) == {"title": "Home"}

    @pytest.mark.parametrize(
        "body",
        [
            None,
            [],
            "property",
            {},
            {"property": {}},
            {"property": None},
            {"property": "title"},
            {"unrelated": 1},
        ],
    )
    def test_missing_root(self, body):
        with pytest.raises(MissingParameterError) as exc_info:
            require_params(body, "property", ["title"])

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "param is missing or the value is empty: property"


class TestEventPayloads:
    """Test tagged decoding and display rendering of event payloads."""

    def test_decode_price_changed(self):
        payload = decode_event_data("price_changed", {"old_price": 1, "new_price": 2})
        assert isinstance(payload, PriceChangedData)
        assert payload.kind == "price_changed"

    def test_decode_sold(self):
        payload = decode_event_data("sold", {"sold_price": 5, "sold_date": "2025-11-20"})
        assert isinstance(payload, SoldData)

    def test_decode_mismatched_shape_falls_back_to_generic(self):
        payload = decode_event_data("price_changed", {"price": "unknown"})
        assert isinstance(payload, GenericEventData)
        assert payload.raw == {"price": "unknown"}

    def test_decode_non_dict_payload(self):
        payload = decode_event_data("sold", None)
        assert isinstance(payload, GenericEventData)
        assert payload.raw == {}

    def test_format_price_changed(self):
        display = format_event_data("price_changed", {"old_price": 450000, "new_price": 500000})
        assert display.label == "Price Changed"
        assert display.details == "From $450,000 to $500,000"

    @pytest.mark.parametrize(
        "sold_date,expected",
        [
            ("2025-11-20", "Sold for $500,000 on 20 Nov 2025"),
            ("2025-11-20 00:00:00 UTC", "Sold for $500,000 on 20 Nov 2025"),
            ("2025-11-20T10:30:00Z", "Sold for $500,000 on 20 Nov 2025"),
            ("last week", "Sold for $500,000 on last week"),
        ],
    )
    def test_format_sold(self, sold_date, expected):
        display = format_event_data("sold", {"sold_price": 500000, "sold_date": sold_date})
        assert display.label == "Sold"
        assert display.details == expected

    def test_format_other_event(self):
        display = format_event_data("open_home", {"day": "Saturday", "at": "10am"})
        assert display.label == "Open Home"
        assert display.details == '{"at": "10am", "day": "Saturday"}'
