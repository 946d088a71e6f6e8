"""CLI entry point.

Usage:
    python -m limo_rates \
        --hours 3 --passengers 4 \
        --set extraStopCount=2 --set deposit=200 \
        --out "Breakdown.json" \
        --audit-out "Audit.json" \
        --xlsx "Invoice.xlsx"

    python -m limo_rates --existing "Breakdown.json" --set stdGratPercent=18
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from limo_rates.models import StrictValidationError, UnknownFieldError
from limo_rates.settings import settings


def _parse_assignment(text: str) -> tuple[str, str]:
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise typer.BadParameter(f"expected name=value, got '{text}'", param_hint="--set")
    return name.strip(), value


def generate(
    hours: float = typer.Option(0, "--hours", help="Trip hours (seeds the hourly quantity)"),
    passengers: int = typer.Option(0, "--passengers", help="Passenger count (seeds the per-passenger quantity)"),
    inputs_file: Optional[str] = typer.Option(None, "--inputs", help="JSON file of field overrides for a new breakdown"),
    existing: Optional[str] = typer.Option(None, "--existing", help="Previously saved breakdown JSON to edit"),
    assignments: Optional[List[str]] = typer.Option(None, "--set", help="Field edit as name=value (repeatable)"),
    confirmation_number: str = typer.Option("NEW", "--confirmation", help="Confirmation number shown on outputs"),
    out: Optional[str] = typer.Option(None, "--out", help="Output breakdown JSON file path"),
    audit_out: Optional[str] = typer.Option(None, "--audit-out", help="Output audit JSON file path"),
    xlsx: Optional[str] = typer.Option(None, "--xlsx", help="Output Excel invoice path"),
    hide_rates: bool = typer.Option(False, "--hide-rates", help="Print only the estimated cost"),
    strict: bool = typer.Option(False, "--strict/--no-strict", help="Refuse inputs that review flags"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Compute an itemized rate breakdown and write it out."""
    from limo_rates.audit import generate_audit
    from limo_rates.confirmation import render_confirmation
    from limo_rates.engine import RateSession
    from limo_rates.excel import generate_invoice_workbook
    from limo_rates.validation import enforce_review, review_inputs
    from limo_rates.wire import save_breakdown

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("limo_rates.cli")

    try:
        edits = [_parse_assignment(a) for a in assignments or []]

        # Step 1: Start the session
        if existing:
            typer.echo(f"Loading breakdown: {existing}")
            data = json.loads(Path(existing).read_text(encoding='utf-8'))
            session = RateSession(existing=data)
        else:
            defaults = None
            if inputs_file:
                defaults = json.loads(Path(inputs_file).read_text(encoding='utf-8'))
            session = RateSession(hours=hours, passengers=passengers, defaults=defaults)

        # Step 2: Apply edits
        for name, value in edits:
            session.edit(name, value)
            logger.debug("Applied %s=%r", name, value)

        breakdown = session.breakdown

        # Step 3: Review
        warnings = review_inputs(breakdown.inputs)
        if strict:
            enforce_review(breakdown.inputs)
        for warning in warnings:
            typer.echo(f"  WARNING: {warning}", err=True)

        # Step 4: Print confirmation
        typer.echo("")
        typer.echo(render_confirmation(
            breakdown,
            confirmation_number=confirmation_number,
            show_rates=not hide_rates,
        ))

        # Step 5: Write outputs
        if out:
            save_breakdown(breakdown, out)
            typer.echo(f"\nBreakdown saved to: {out}")
        if audit_out:
            generate_audit(breakdown, audit_out)
            typer.echo(f"Audit file saved to: {audit_out}")
        if xlsx:
            generate_invoice_workbook(breakdown, xlsx, confirmation_number=confirmation_number)
            typer.echo(f"Excel invoice saved to: {xlsx}")

    except StrictValidationError as e:
        typer.echo("\nSTRICT VALIDATION FAILED:", err=True)
        for error in e.errors:
            typer.echo(f"  ERROR: {error}", err=True)
        typer.echo("\nBreakdown NOT written (strict mode).", err=True)
        raise typer.Exit(1)

    except UnknownFieldError as e:
        typer.echo(f"\nUNKNOWN FIELD: {e.name}", err=True)
        raise typer.Exit(1)

    except typer.BadParameter:
        raise

    except Exception as e:
        logger.debug("Rate computation failed", exc_info=True)
        typer.echo(f"\nFATAL ERROR: {e}", err=True)
        raise typer.Exit(1)


def main() -> None:
    typer.run(generate)


if __name__ == "__main__":
    main()
