"""Tests for eagles/forms/formatting.py: coercion, currency, dates, labels."""

from datetime import date, datetime

import pytest

from eagles.forms.formatting import (
    display, event_type_text, format_currency, format_event_date,
    format_number, payment_method_label, payment_status_text, to_number,
)


# ═══════════════════════════════════════════════════════════════════════════════
# Number coercion
# ═══════════════════════════════════════════════════════════════════════════════

class TestToNumber:

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", 0, "0", float("nan"), [], {}])
    def test_falls_back_to_default(self, raw):
        assert to_number(raw, 1) == 1

    def test_numeric_string(self):
        assert to_number(" 12.5 ", 1) == 12.5

    def test_int_passthrough(self):
        assert to_number(3, 1) == 3

    def test_bool(self):
        assert to_number(True, 7) == 1
        assert to_number(False, 7) == 7

    def test_negative_kept(self):
        assert to_number("-4", 0) == -4

    @pytest.mark.parametrize("raw", ["1_000", "infinity", "-inf", "Infinity", "nan",
                                     float("inf"), float("-inf")])
    def test_non_finite_and_underscores_default(self, raw):
        assert to_number(raw, 1) == 1

    def test_infinite_quantity_line_total(self):
        qty = to_number("infinity", 1)
        assert format_currency(qty * to_number(None, 0)) == "R0.00"


class TestFormatNumber:

    def test_integral_float_has_no_decimals(self):
        assert format_number(2.0) == "2"

    def test_fraction_kept(self):
        assert format_number(2.5) == "2.5"

    def test_int(self):
        assert format_number(80) == "80"


# ═══════════════════════════════════════════════════════════════════════════════
# Currency
# ═══════════════════════════════════════════════════════════════════════════════

class TestFormatCurrency:

    def test_two_decimals(self):
        assert format_currency(500) == "R500.00"

    def test_no_grouping(self):
        assert format_currency(1234567.891) == "R1234567.89"

    def test_custom_symbol(self):
        assert format_currency(9.5, "$") == "$9.50"

    def test_exact_tie_rounds_up(self):
        # 0.125 is exactly representable
        assert format_currency(0.125) == "R0.13"

    def test_binary_value_below_tie_rounds_down(self):
        # 1.005 is stored as 1.00499999999999989...
        assert format_currency(1.005) == "R1.00"
        assert format_currency(2.675) == "R2.67"

    def test_negative_zero(self):
        assert format_currency(-0.0) == "R0.00"

    def test_line_total_product(self):
        assert format_currency(80 * 25.5) == "R2040.00"


# ═══════════════════════════════════════════════════════════════════════════════
# Dates and labels
# ═══════════════════════════════════════════════════════════════════════════════

class TestEventDate:

    def test_iso_with_z(self):
        assert format_event_date("2026-03-14T00:00:00.000Z") == "14/03/2026"

    def test_plain_date_string(self):
        assert format_event_date("2026-12-01") == "01/12/2026"

    def test_day_first_free_form(self):
        assert format_event_date("14/03/2026") == "14/03/2026"

    def test_date_object(self):
        assert format_event_date(date(2026, 7, 4)) == "04/07/2026"

    def test_datetime_object(self):
        assert format_event_date(datetime(2026, 1, 31, 18, 30)) == "31/01/2026"

    @pytest.mark.parametrize("raw", [None, "", "not a date", 12345])
    def test_unparsable(self, raw):
        assert format_event_date(raw) == "N/A"


class TestLabels:

    def test_other_event_type(self):
        assert event_type_text("other", "Baby Shower") == "other (Baby Shower)"

    def test_other_without_text(self):
        assert event_type_text("other", "") == "other"

    def test_regular_event_type(self):
        assert event_type_text("wedding", "ignored") == "wedding"

    def test_missing_event_type(self):
        assert event_type_text(None) == "N/A"

    @pytest.mark.parametrize("key,label", [
        ("card", "Credit/Debit Card"),
        ("bank_transfer", "EFT/Bank Transfer"),
        ("cash", "Cash"),
        ("mobile", "Mobile Payment"),
    ])
    def test_payment_methods(self, key, label):
        assert payment_method_label(key) == label

    def test_unmapped_payment_method_passthrough(self):
        assert payment_method_label("unknown_key") == "unknown_key"

    def test_unhashable_payment_method(self):
        assert payment_method_label(["cash"]) == "['cash']"
        assert payment_method_label({"type": "card"}) == "{'type': 'card'}"

    def test_payment_status_default(self):
        assert payment_status_text(None) == "PENDING"
        assert payment_status_text("paid") == "PAID"

    def test_display(self):
        assert display(None) == "N/A"
        assert display("  ") == "N/A"
        assert display("Soweto") == "Soweto"
