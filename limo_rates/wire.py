"""Persisted breakdown format.

A reservation record embeds its breakdown as a flat camelCase object: every
input, every label and every computed total. Reading one back re-derives the
totals from the inputs rather than trusting the stored numbers.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping

from limo_rates.engine.rates import compute, hydrate
from limo_rates.models import (
    INPUT_WIRE_KEYS,
    LABEL_WIRE_KEYS,
    TOTAL_WIRE_KEYS,
    ChargeBreakdown,
    ChargeInputs,
)


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal values."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        return super().default(obj)


def breakdown_to_dict(breakdown: ChargeBreakdown) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for attr, key in INPUT_WIRE_KEYS.items():
        data[key] = float(getattr(breakdown.inputs, attr))
    for attr, key in LABEL_WIRE_KEYS.items():
        data[key] = getattr(breakdown.labels, attr)
    for attr, key in TOTAL_WIRE_KEYS.items():
        data[key] = float(getattr(breakdown, attr))
    return data


def inputs_from_dict(data: Mapping[str, Any]) -> ChargeInputs:
    return hydrate(data)


def breakdown_from_dict(data: Mapping[str, Any]) -> ChargeBreakdown:
    return compute(hydrate(data))


def save_breakdown(breakdown: ChargeBreakdown, output_path: str | Path) -> Path:
    output_path = Path(output_path)
    output_path.write_text(json.dumps(breakdown_to_dict(breakdown), indent=2), encoding='utf-8')
    return output_path


def load_breakdown(path: str | Path) -> ChargeBreakdown:
    data = json.loads(Path(path).read_text(encoding='utf-8'))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return breakdown_from_dict(data)
