"""Tests for the customer-facing rate confirmation."""

from decimal import Decimal

from limo_rates.confirmation import (
    confirmation_lines,
    estimate_total,
    format_money,
    format_percent,
    render_confirmation,
)
from limo_rates.engine.rates import compute, initialize, set_field


def _make_breakdown(**edits):
    inputs = initialize(hours=3, passengers=2)
    for name, value in edits.items():
        inputs = set_field(inputs, name, value)
    return compute(inputs)


class TestFormatting:
    def test_money(self):
        assert format_money(Decimal("40.825")) == "$40.83"
        assert format_money(Decimal("1234.5")) == "$1,234.50"
        assert format_money(0) == "$0.00"

    def test_negative_money(self):
        assert format_money(Decimal("-384.175")) == "-$384.18"

    def test_money_beyond_default_precision(self):
        assert format_money(Decimal("1e30")) == "$1,000,000,000,000,000,000,000,000,000,000.00"
        assert format_money(Decimal("-123456789012345678901234567890.125")) == (
            "-$123,456,789,012,345,678,901,234,567,890.13"
        )

    def test_render_large_breakdown(self):
        text = render_confirmation(_make_breakdown(flatRate="1e30"), confirmation_number="BIG")
        assert "Grand Total" in text
        assert "$1,000,000,000,000,000,000,000,000,000,000.00" in text

    def test_percent(self):
        assert format_percent(Decimal("8.875")) == "8.875"
        assert format_percent(Decimal("20")) == "20"
        assert format_percent(Decimal("20.0")) == "20"
        assert format_percent(Decimal("0")) == "0"


class TestLines:
    def test_zero_charge_lines_hidden(self):
        keys = [line.key for line in confirmation_lines(_make_breakdown())]
        assert keys == ["hourly", "sanitizing_fee", "gratuity", "surcharge", "tax", "grand_total", "total_due"]

    def test_zero_lines_kept_when_requested(self):
        keys = [line.key for line in confirmation_lines(_make_breakdown(), hide_zero=False)]
        assert "flat_rate" in keys
        assert "child_seats" in keys
        assert "farm_out" in keys

    def test_percentage_lines_always_shown(self):
        b = _make_breakdown(stdGratPercent=0, stcSurchPercent=0, stdTaxPercent=0)
        keys = [line.key for line in confirmation_lines(b)]
        assert {"gratuity", "surcharge", "tax"} <= set(keys)

    def test_deposit_shown_negative_when_paid(self):
        lines = {line.key: line for line in confirmation_lines(_make_breakdown(deposit=200))}
        assert lines["deposit"].amount == Decimal("-200")
        assert lines["total_due"].amount == Decimal("415.825")

    def test_hourly_detail(self):
        lines = {line.key: line for line in confirmation_lines(_make_breakdown())}
        assert lines["hourly"].detail == "3h @ $150.00"
        assert lines["gratuity"].detail == "20%"
        assert lines["tax"].text == "Tax (8.875%)"

    def test_label_override_and_blank_fallback(self):
        b = _make_breakdown(hourlyRateLabel="Charter", sanitizingFeeLabel="   ")
        lines = {line.key: line for line in confirmation_lines(b)}
        assert lines["hourly"].label == "Charter"
        assert lines["sanitizing_fee"].label == "Sanitizing Fee"
        # the stored label itself is untouched
        assert b.labels.sanitizing_fee == "   "

    def test_farm_out_line(self):
        lines = {line.key: line for line in confirmation_lines(_make_breakdown(farmOutBaseRate=300))}
        assert lines["farm_out"].amount == Decimal("360")
        assert lines["farm_out"].detail == "$300.00 + 20%"


class TestRender:
    def test_itemized(self):
        text = render_confirmation(_make_breakdown(deposit=200), confirmation_number="RES-ABC123")
        assert "Reservation Summary #RES-ABC123" in text
        assert "Rate Breakdown" in text
        assert "$615.83" in text
        assert "Paid / Deposit" in text
        assert "$415.83" in text

    def test_rates_hidden(self):
        text = render_confirmation(_make_breakdown(), show_rates=False)
        assert "Estimated Cost" in text
        assert "$615.83" in text
        assert "Rate Breakdown" not in text

    def test_no_breakdown_uses_estimate(self):
        text = render_confirmation(None, hours=4)
        assert "$600.00" in text
        assert "(Breakdown unavailable)" in text

    def test_estimate_total(self):
        assert estimate_total(3) == Decimal("450")
