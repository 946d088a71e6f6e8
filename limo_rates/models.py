"""Canonical data model for the rate engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ChargeLabels:
    """Display names for each line item. Free text, never used in arithmetic."""
    flat_rate: str = "Flat Rate"
    hourly_rate: str = "Hourly Rate"
    extra_stop: str = "Extra Stops"
    sanitizing_fee: str = "Sanitizing Fee"
    ot_wait_time: str = "OT/Wait Time"
    std_grat: str = "Std Grat"
    stc_surch: str = "STC Surch"
    tax: str = "Tax"
    per_pass: str = "Per Passenger"
    per_mile: str = "Per Mile"
    child_seat: str = "Child Seats"
    extra_grat: str = "Extra Gratuity"
    farm_out: str = "Farm-out"

    def display(self, name: str) -> str:
        """Label for presentation; a blank override shows the default name."""
        value = getattr(self, name)
        if value.strip():
            return value
        return getattr(DEFAULT_LABELS, name)


DEFAULT_LABELS = ChargeLabels()


@dataclass(frozen=True)
class ChargeInputs:
    """Editable billing fields for one reservation.

    Percent fields hold whole-number percentages (20 means 20%).
    """
    flat_rate: Decimal = ZERO
    hourly_rate: Decimal = Decimal("150")
    hourly_hours: Decimal = ZERO
    extra_stop_rate: Decimal = Decimal("50")
    extra_stop_count: Decimal = ZERO
    sanitizing_fee: Decimal = Decimal("10")
    ot_wait_time: Decimal = ZERO
    std_grat_percent: Decimal = Decimal("20")
    extra_grat: Decimal = ZERO
    stc_surch_percent: Decimal = Decimal("5")
    per_pass_rate: Decimal = ZERO
    per_pass_count: Decimal = ZERO
    per_mile_rate: Decimal = ZERO
    per_mile_count: Decimal = ZERO
    std_tax_percent: Decimal = Decimal("8.875")
    child_seat_rate: Decimal = Decimal("20")
    child_seat_count: Decimal = ZERO
    farm_out_base_rate: Decimal = ZERO
    farm_out_gratuity_percent: Decimal = Decimal("20")
    deposit: Decimal = ZERO
    # Recorded on the breakdown but not part of any total
    fuel_surcharge: Decimal = ZERO
    swg: Decimal = ZERO
    labels: ChargeLabels = field(default_factory=ChargeLabels)


@dataclass(frozen=True)
class ChargeBreakdown:
    """Fully computed, itemized result of one rate computation."""
    inputs: ChargeInputs
    hourly_total: Decimal
    extra_stops_total: Decimal
    per_pass_total: Decimal
    per_mile_total: Decimal
    child_seat_total: Decimal
    primary_subtotal: Decimal
    primary_grat_total: Decimal
    stc_surch_total: Decimal
    primary_tax_total: Decimal
    farm_out_gratuity_total: Decimal
    farm_out_total: Decimal
    grand_total: Decimal
    total_due: Decimal

    @property
    def labels(self) -> ChargeLabels:
        return self.inputs.labels


# attribute name -> wire key (the camelCase keys stored on a reservation)
INPUT_WIRE_KEYS: dict[str, str] = {
    "flat_rate": "flatRate",
    "hourly_rate": "hourlyRate",
    "hourly_hours": "hourlyHours",
    "extra_stop_rate": "extraStopRate",
    "extra_stop_count": "extraStopCount",
    "sanitizing_fee": "sanitizingFee",
    "ot_wait_time": "otWaitTime",
    "std_grat_percent": "stdGratPercent",
    "extra_grat": "extraGrat",
    "stc_surch_percent": "stcSurchPercent",
    "per_pass_rate": "perPassRate",
    "per_pass_count": "perPassCount",
    "per_mile_rate": "perMileRate",
    "per_mile_count": "perMileCount",
    "std_tax_percent": "stdTaxPercent",
    "child_seat_rate": "childSeatRate",
    "child_seat_count": "childSeatCount",
    "farm_out_base_rate": "farmOutBaseRate",
    "farm_out_gratuity_percent": "farmOutGratuityPercent",
    "deposit": "deposit",
    "fuel_surcharge": "fuelSurcharge",
    "swg": "swg",
}

LABEL_WIRE_KEYS: dict[str, str] = {
    "flat_rate": "flatRateLabel",
    "hourly_rate": "hourlyRateLabel",
    "extra_stop": "extraStopLabel",
    "sanitizing_fee": "sanitizingFeeLabel",
    "ot_wait_time": "otWaitTimeLabel",
    "std_grat": "stdGratLabel",
    "stc_surch": "stcSurchLabel",
    "tax": "taxLabel",
    "per_pass": "perPassLabel",
    "per_mile": "perMileLabel",
    "child_seat": "childSeatLabel",
    "extra_grat": "extraGratLabel",
    "farm_out": "farmOutLabel",
}

TOTAL_WIRE_KEYS: dict[str, str] = {
    "hourly_total": "hourlyTotal",
    "extra_stops_total": "extraStopsTotal",
    "per_pass_total": "perPassTotal",
    "per_mile_total": "perMileTotal",
    "child_seat_total": "childSeatTotal",
    "primary_subtotal": "primarySubtotal",
    "primary_grat_total": "primaryGratTotal",
    "stc_surch_total": "stcSurchTotal",
    "primary_tax_total": "primaryTaxTotal",
    "farm_out_gratuity_total": "farmOutGratuityTotal",
    "farm_out_total": "farmOutTotal",
    "grand_total": "grandTotal",
    "total_due": "totalDue",
}

COUNT_FIELDS = ("hourly_hours", "extra_stop_count", "per_pass_count", "per_mile_count", "child_seat_count")
PERCENT_FIELDS = ("std_grat_percent", "stc_surch_percent", "std_tax_percent", "farm_out_gratuity_percent")

NUMERIC_FIELDS = tuple(f.name for f in fields(ChargeInputs) if f.name != "labels")


class UnknownFieldError(KeyError):
    """Raised when a field name does not name an editable charge field."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' is not an editable charge field")


class StrictValidationError(Exception):
    """Raised when strict review of charge inputs fails."""
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Strict validation failed with {len(errors)} error(s):\n" +
                         "\n".join(f"  - {e}" for e in errors))
