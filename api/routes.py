"""API routes wrapping the rate engine."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from limo_rates.confirmation import confirmation_lines, format_money, render_confirmation
from limo_rates.engine import RateSession, compute, initialize
from limo_rates.models import ChargeBreakdown, StrictValidationError, UnknownFieldError
from limo_rates.validation import enforce_review, review_inputs
from limo_rates.wire import breakdown_from_dict, breakdown_to_dict

from api.schemas import (
    ComputeRequest,
    ConfirmationRequest,
    ConfirmationResponse,
    RateLine,
    RateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1")


def _rate_response(breakdown: ChargeBreakdown, warnings: list[str]) -> RateResponse:
    return RateResponse(
        success=True,
        breakdown=breakdown_to_dict(breakdown),
        lines=[
            RateLine(
                key=line.key,
                label=line.label,
                detail=line.detail,
                kind=line.kind,
                amount=float(line.amount),
                display=format_money(line.amount),
            )
            for line in confirmation_lines(breakdown)
        ],
        warnings=warnings,
    )


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/rates/defaults", response_model=RateResponse)
async def defaults(hours: float = 0, passengers: float = 0):
    """Breakdown for a new reservation with every field at its default."""
    breakdown = compute(initialize(hours=hours, passengers=passengers))
    return _rate_response(breakdown, review_inputs(breakdown.inputs))


@router.post("/rates/compute", response_model=RateResponse)
async def compute_rates(request: ComputeRequest):
    """Apply edits to a new or saved breakdown and return the recomputed result.

    Invalid numeric text in `edits` is treated as 0. Unknown field names and,
    when `strict` is set, review warnings are reported as errors.
    """
    try:
        if request.existing is not None:
            session = RateSession(existing=request.existing)
        else:
            session = RateSession(
                hours=request.hours,
                passengers=request.passengers,
                defaults=request.defaults,
            )

        for name, value in request.edits.items():
            session.edit(name, value)

        breakdown = session.breakdown
        if request.strict:
            enforce_review(breakdown.inputs)

        return _rate_response(breakdown, review_inputs(breakdown.inputs))

    except StrictValidationError as e:
        return RateResponse(
            success=False,
            error_type="validation_error",
            errors=e.errors,
        )
    except UnknownFieldError as e:
        return RateResponse(
            success=False,
            error_type="field_error",
            errors=[f"'{e.name}' is not an editable charge field"],
        )
    except Exception as e:
        logger.exception("Rate computation failed")
        return RateResponse(
            success=False,
            error_type="processing_error",
            errors=[str(e)],
        )


@router.post("/rates/confirmation", response_model=ConfirmationResponse)
async def confirmation(request: ConfirmationRequest):
    """Plain-text rate section for a reservation confirmation."""
    breakdown = breakdown_from_dict(request.breakdown) if request.breakdown is not None else None
    text = render_confirmation(
        breakdown,
        hours=request.hours,
        confirmation_number=request.confirmation_number,
        show_rates=request.show_rates,
        hide_zero=request.hide_zero,
    )
    return ConfirmationResponse(text=text)
