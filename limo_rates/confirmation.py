"""Customer-facing itemization of a breakdown.

This is where amounts are rounded to cents, for display only. Charge lines
that come to zero are dropped on request; gratuity, surcharge and tax are
always listed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Optional

from limo_rates.engine.rates import coerce_number
from limo_rates.models import ZERO, ChargeBreakdown

CENTS = Decimal("0.01")
# Hourly estimate shown when a reservation has no breakdown yet
FALLBACK_HOURLY_RATE = Decimal("150")

LINE_WIDTH = 48
AMOUNT_WIDTH = 14


@dataclass(frozen=True)
class ConfirmationLine:
    key: str
    label: str
    detail: str
    amount: Decimal
    kind: str = "charge"  # charge | percent | total | payment

    @property
    def text(self) -> str:
        return f"{self.label} ({self.detail})" if self.detail else self.label


def format_money(value: Any) -> str:
    """Dollars and cents, rounded half up. Decimals are shown as given."""
    amount = value if isinstance(value, Decimal) and value.is_finite() else coerce_number(value)
    with localcontext() as ctx:
        # Enough digits to hold every integer place plus the cents
        ctx.prec = max(28, amount.adjusted() + 3)
        amount = amount.quantize(CENTS, ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}${amount.copy_abs():,.2f}"


def format_number(value: Any) -> str:
    """Plain decimal text without trailing zeros: 8.875, 20, 2.5."""
    number = coerce_number(value).normalize()
    if number == 0:
        return "0"
    return format(number, "f")


format_percent = format_number


def estimate_total(hours: Any) -> Decimal:
    return coerce_number(hours) * FALLBACK_HOURLY_RATE


def confirmation_lines(breakdown: ChargeBreakdown, hide_zero: bool = True) -> list[ConfirmationLine]:
    inputs = breakdown.inputs
    labels = breakdown.labels

    charges = [
        ConfirmationLine("flat_rate", labels.display("flat_rate"), "", inputs.flat_rate),
        ConfirmationLine(
            "hourly",
            labels.display("hourly_rate"),
            f"{format_number(inputs.hourly_hours)}h @ {format_money(inputs.hourly_rate)}",
            breakdown.hourly_total,
        ),
        ConfirmationLine(
            "extra_stops",
            labels.display("extra_stop"),
            format_number(inputs.extra_stop_count),
            breakdown.extra_stops_total,
        ),
        ConfirmationLine("sanitizing_fee", labels.display("sanitizing_fee"), "", inputs.sanitizing_fee),
        ConfirmationLine("ot_wait_time", labels.display("ot_wait_time"), "", inputs.ot_wait_time),
        ConfirmationLine(
            "per_pass",
            labels.display("per_pass"),
            f"{format_number(inputs.per_pass_count)} @ {format_money(inputs.per_pass_rate)}",
            breakdown.per_pass_total,
        ),
        ConfirmationLine(
            "per_mile",
            labels.display("per_mile"),
            f"{format_number(inputs.per_mile_count)} mi @ {format_money(inputs.per_mile_rate)}",
            breakdown.per_mile_total,
        ),
        ConfirmationLine(
            "child_seats",
            labels.display("child_seat"),
            f"{format_number(inputs.child_seat_count)} @ {format_money(inputs.child_seat_rate)}",
            breakdown.child_seat_total,
        ),
        ConfirmationLine("extra_grat", labels.display("extra_grat"), "", inputs.extra_grat),
    ]
    if hide_zero:
        charges = [line for line in charges if line.amount != ZERO]

    derived = [
        ConfirmationLine(
            "gratuity", labels.display("std_grat"),
            f"{format_percent(inputs.std_grat_percent)}%", breakdown.primary_grat_total, "percent",
        ),
        ConfirmationLine(
            "surcharge", labels.display("stc_surch"),
            f"{format_percent(inputs.stc_surch_percent)}%", breakdown.stc_surch_total, "percent",
        ),
        ConfirmationLine(
            "tax", labels.display("tax"),
            f"{format_percent(inputs.std_tax_percent)}%", breakdown.primary_tax_total, "percent",
        ),
    ]

    farm_out = ConfirmationLine(
        "farm_out",
        labels.display("farm_out"),
        f"{format_money(inputs.farm_out_base_rate)} + {format_percent(inputs.farm_out_gratuity_percent)}%",
        breakdown.farm_out_total,
    )
    if not hide_zero or farm_out.amount != ZERO:
        derived.append(farm_out)

    lines = charges + derived
    lines.append(ConfirmationLine("grand_total", "Grand Total", "", breakdown.grand_total, "total"))
    if inputs.deposit > ZERO:
        lines.append(ConfirmationLine("deposit", "Paid / Deposit", "", -inputs.deposit, "payment"))
    lines.append(ConfirmationLine("total_due", "Total Due", "", breakdown.total_due, "total"))
    return lines


def _row(text: str, amount: str) -> str:
    room = LINE_WIDTH - AMOUNT_WIDTH
    if len(text) > room:
        text = text[: room - 3] + "..."
    return f"{text:<{room}}{amount:>{AMOUNT_WIDTH}}"


def render_confirmation(
    breakdown: Optional[ChargeBreakdown],
    hours: Any = 0,
    confirmation_number: str = "NEW",
    show_rates: bool = True,
    hide_zero: bool = True,
) -> str:
    """Plain-text rate section of a reservation confirmation."""
    out = [f"Reservation Summary #{confirmation_number}", "=" * LINE_WIDTH]

    if breakdown is None or not show_rates:
        estimated = breakdown.grand_total if breakdown is not None else estimate_total(hours)
        out.append(_row("Estimated Cost", format_money(estimated)))
        if breakdown is None and show_rates:
            out.append("(Breakdown unavailable)")
        return "\n".join(out)

    out.append("Rate Breakdown")
    for line in confirmation_lines(breakdown, hide_zero=hide_zero):
        if line.key == "grand_total":
            out.append("-" * LINE_WIDTH)
        out.append(_row(line.text, format_money(line.amount)))
    return "\n".join(out)
