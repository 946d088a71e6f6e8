"""Advisory review of charge inputs.

The rate engine accepts any numbers it is given. These checks flag values an
operator probably did not mean; callers decide whether to show them as
warnings or, in strict mode, refuse the breakdown.
"""

from __future__ import annotations

from limo_rates.engine.rates import compute
from limo_rates.models import (
    COUNT_FIELDS,
    HUNDRED,
    INPUT_WIRE_KEYS,
    NUMERIC_FIELDS,
    PERCENT_FIELDS,
    ZERO,
    ChargeInputs,
    StrictValidationError,
)


def review_inputs(inputs: ChargeInputs) -> list[str]:
    """Return human-readable warnings for suspicious charge inputs."""
    warnings: list[str] = []

    # --- Per-field checks ---
    for name in NUMERIC_FIELDS:
        value = getattr(inputs, name)
        key = INPUT_WIRE_KEYS[name]
        if value < ZERO:
            warnings.append(f"{key} is negative ({value})")

    for name in PERCENT_FIELDS:
        value = getattr(inputs, name)
        if value > HUNDRED:
            warnings.append(f"{INPUT_WIRE_KEYS[name]} is above 100% ({value}%)")

    for name in COUNT_FIELDS:
        if name == "hourly_hours":
            # Partial hours are billed routinely
            continue
        value = getattr(inputs, name)
        if value != value.to_integral_value():
            warnings.append(f"{INPUT_WIRE_KEYS[name]} is not a whole number ({value})")

    # --- Balance check ---
    breakdown = compute(inputs)
    if breakdown.total_due < ZERO:
        warnings.append(
            f"deposit ({inputs.deposit}) exceeds grand total ({breakdown.grand_total}); "
            f"customer is owed {-breakdown.total_due}"
        )

    return warnings


def enforce_review(inputs: ChargeInputs) -> ChargeInputs:
    """Raise StrictValidationError if review finds anything; else return inputs."""
    warnings = review_inputs(inputs)
    if warnings:
        raise StrictValidationError(warnings)
    return inputs
