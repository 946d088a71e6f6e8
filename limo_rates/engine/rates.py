"""Rate engine: charge inputs to itemized breakdown.

All arithmetic is done with Decimal at full precision. Nothing here rounds
to cents; formatting for display belongs to the confirmation renderer.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from decimal import Context, Decimal, localcontext
from typing import Any, Mapping, Optional, Union

from limo_rates.models import (
    HUNDRED,
    INPUT_WIRE_KEYS,
    LABEL_WIRE_KEYS,
    TOTAL_WIRE_KEYS,
    ZERO,
    ChargeBreakdown,
    ChargeInputs,
    UnknownFieldError,
)

logger = logging.getLogger(__name__)

# Leading numeric prefix, the way a browser parses a number field ("12abc" -> 12)
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_CONTEXT = Context(prec=28)

# Largest accepted field magnitude; every total (at most three factors deep)
# then still fits in a JSON float
MAX_MAGNITUDE = Decimal("1e100")

_INPUT_NAMES: dict[str, str] = {}
for _attr, _wire in INPUT_WIRE_KEYS.items():
    _INPUT_NAMES[_attr] = _attr
    _INPUT_NAMES[_wire] = _attr

_LABEL_NAMES: dict[str, str] = {}
for _attr, _wire in LABEL_WIRE_KEYS.items():
    _LABEL_NAMES[_wire] = _attr
    _LABEL_NAMES[f"{_attr}_label"] = _attr

_COMPUTED_NAMES = set(TOTAL_WIRE_KEYS) | set(TOTAL_WIRE_KEYS.values())

BreakdownSource = Union[ChargeBreakdown, ChargeInputs, Mapping[str, Any]]


def coerce_number(value: Any) -> Decimal:
    """Coerce a raw field value to a finite Decimal; anything unparseable is 0."""
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(repr(value))
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if not match:
            logger.debug("Unparseable charge value %r, using 0", value)
            return ZERO
        number = Decimal(match.group(1))

    if not number.is_finite() or abs(number) > MAX_MAGNITUDE:
        logger.debug("Non-finite or out of range charge value %r, using 0", value)
        return ZERO

    # Held to float precision so a saved breakdown reloads to the same inputs
    as_float = Decimal(repr(float(number)))
    if as_float != number:
        number = as_float
    return number


def resolve_field(name: str) -> tuple[str, str]:
    """Map an attribute name or wire key to ("input" | "label", attribute)."""
    if name in _INPUT_NAMES:
        return "input", _INPUT_NAMES[name]
    if name in _LABEL_NAMES:
        return "label", _LABEL_NAMES[name]
    raise UnknownFieldError(name)


def _merge(inputs: ChargeInputs, values: Mapping[str, Any], *, ignore_unknown: bool) -> ChargeInputs:
    """Apply a mapping of field overrides on top of `inputs`."""
    changes: dict[str, Any] = {}
    labels: dict[str, str] = {}

    for name, value in values.items():
        if name in _COMPUTED_NAMES:
            # Stored totals are always re-derived
            continue
        try:
            kind, attr = resolve_field(name)
        except UnknownFieldError:
            if ignore_unknown:
                continue
            raise

        if value is None:
            continue
        if kind == "label":
            labels[attr] = str(value)
        else:
            changes[attr] = coerce_number(value)

    if labels:
        changes["labels"] = replace(inputs.labels, **labels)
    return replace(inputs, **changes)


def initialize(
    defaults: Optional[Mapping[str, Any]] = None,
    hours: Any = 0,
    passengers: Any = 0,
) -> ChargeInputs:
    """Fresh inputs for a new reservation.

    Built-in defaults apply first, then `defaults` overrides, then the trip's
    hours and passenger count seed the hourly and per-passenger quantities.
    """
    inputs = ChargeInputs()
    if defaults:
        inputs = _merge(inputs, defaults, ignore_unknown=False)
    return replace(
        inputs,
        hourly_hours=coerce_number(hours),
        per_pass_count=coerce_number(passengers),
    )


def hydrate(existing: BreakdownSource) -> ChargeInputs:
    """Inputs recovered from a previously computed breakdown.

    A mapping is read as the persisted wire format; fields it lacks take their
    default values (0 for the trip-derived quantities) and stored totals are
    ignored.
    """
    if isinstance(existing, ChargeBreakdown):
        return existing.inputs
    if isinstance(existing, ChargeInputs):
        return existing
    return _merge(ChargeInputs(), existing, ignore_unknown=True)


def set_field(inputs: ChargeInputs, name: str, value: Any) -> ChargeInputs:
    """Return new inputs with one field changed.

    Numeric fields go through `coerce_number`; label fields keep the text
    verbatim.
    """
    kind, attr = resolve_field(name)
    if kind == "label":
        text = "" if value is None else str(value)
        return replace(inputs, labels=replace(inputs.labels, **{attr: text}))
    return replace(inputs, **{attr: coerce_number(value)})


def compute(inputs: ChargeInputs) -> ChargeBreakdown:
    """Derive every line total, the percentage base, grand total and balance."""
    with localcontext(_CONTEXT):
        hourly_total = inputs.hourly_rate * inputs.hourly_hours
        extra_stops_total = inputs.extra_stop_rate * inputs.extra_stop_count
        per_pass_total = inputs.per_pass_rate * inputs.per_pass_count
        per_mile_total = inputs.per_mile_rate * inputs.per_mile_count
        child_seat_total = inputs.child_seat_rate * inputs.child_seat_count

        # Percentage base; farm-out never enters it
        primary_subtotal = (
            inputs.flat_rate
            + hourly_total
            + extra_stops_total
            + inputs.sanitizing_fee
            + inputs.ot_wait_time
            + inputs.extra_grat
            + per_pass_total
            + per_mile_total
            + child_seat_total
        )

        primary_grat_total = primary_subtotal * inputs.std_grat_percent / HUNDRED
        stc_surch_total = primary_subtotal * inputs.stc_surch_percent / HUNDRED
        primary_tax_total = primary_subtotal * inputs.std_tax_percent / HUNDRED

        farm_out_gratuity_total = inputs.farm_out_base_rate * inputs.farm_out_gratuity_percent / HUNDRED
        farm_out_total = inputs.farm_out_base_rate + farm_out_gratuity_total

        grand_total = (
            primary_subtotal
            + primary_grat_total
            + stc_surch_total
            + primary_tax_total
            + farm_out_total
        )
        total_due = grand_total - inputs.deposit

    return ChargeBreakdown(
        inputs=inputs,
        hourly_total=hourly_total,
        extra_stops_total=extra_stops_total,
        per_pass_total=per_pass_total,
        per_mile_total=per_mile_total,
        child_seat_total=child_seat_total,
        primary_subtotal=primary_subtotal,
        primary_grat_total=primary_grat_total,
        stc_surch_total=stc_surch_total,
        primary_tax_total=primary_tax_total,
        farm_out_gratuity_total=farm_out_gratuity_total,
        farm_out_total=farm_out_total,
        grand_total=grand_total,
        total_due=total_due,
    )
