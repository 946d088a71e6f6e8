"""Tests for advisory review of charge inputs."""

import pytest

from limo_rates.engine.rates import initialize, set_field
from limo_rates.models import StrictValidationError
from limo_rates.validation import enforce_review, review_inputs


def _make_inputs(**edits):
    inputs = initialize(hours=3, passengers=2)
    for name, value in edits.items():
        inputs = set_field(inputs, name, value)
    return inputs


class TestReview:
    def test_defaults_are_clean(self):
        assert review_inputs(_make_inputs()) == []

    def test_negative_amount_flagged(self):
        warnings = review_inputs(_make_inputs(otWaitTime=-5))
        assert any("otWaitTime is negative" in w for w in warnings)

    def test_percent_over_100_flagged(self):
        warnings = review_inputs(_make_inputs(stdGratPercent=150))
        assert any("stdGratPercent is above 100%" in w for w in warnings)

    def test_fractional_count_flagged(self):
        warnings = review_inputs(_make_inputs(extraStopCount="1.5"))
        assert any("extraStopCount is not a whole number" in w for w in warnings)

    def test_fractional_hours_allowed(self):
        assert review_inputs(_make_inputs(hourlyHours="2.5")) == []

    def test_overpayment_flagged(self):
        warnings = review_inputs(_make_inputs(deposit=5000))
        assert any("exceeds grand total" in w for w in warnings)


class TestEnforce:
    def test_clean_inputs_returned(self):
        inputs = _make_inputs()
        assert enforce_review(inputs) is inputs

    def test_warnings_raise(self):
        with pytest.raises(StrictValidationError, match="above 100%") as exc_info:
            enforce_review(_make_inputs(stdTaxPercent=101, deposit=-1))
        assert len(exc_info.value.errors) == 2
