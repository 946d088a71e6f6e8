"""Audit output: traceability JSON for one computed breakdown."""

from __future__ import annotations

import json
from pathlib import Path

from limo_rates.confirmation import confirmation_lines, format_money
from limo_rates.models import ChargeBreakdown
from limo_rates.validation import review_inputs
from limo_rates.wire import DecimalEncoder, breakdown_to_dict


def generate_audit_dict(breakdown: ChargeBreakdown) -> dict:
    """Build audit dictionary from a computed breakdown (no file I/O)."""
    return {
        "breakdown": breakdown_to_dict(breakdown),
        "lines": [
            {
                "key": line.key,
                "label": line.label,
                "detail": line.detail,
                "kind": line.kind,
                "amount": float(line.amount),
                "display": format_money(line.amount),
            }
            for line in confirmation_lines(breakdown, hide_zero=False)
        ],
        "summary": {
            "percentage_base": float(breakdown.primary_subtotal),
            "gratuity": float(breakdown.primary_grat_total),
            "surcharge": float(breakdown.stc_surch_total),
            "tax": float(breakdown.primary_tax_total),
            "farm_out": float(breakdown.farm_out_total),
            "grand_total": float(breakdown.grand_total),
            "deposit": float(breakdown.inputs.deposit),
            "total_due": float(breakdown.total_due),
        },
        "warnings": review_inputs(breakdown.inputs),
    }


def generate_audit(breakdown: ChargeBreakdown, output_path: str | Path) -> Path:
    """Generate audit JSON file from a computed breakdown."""
    output_path = Path(output_path)
    audit = generate_audit_dict(breakdown)
    output_path.write_text(json.dumps(audit, indent=2, cls=DecimalEncoder), encoding='utf-8')
    return output_path
