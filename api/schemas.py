"""Pydantic request/response models for the Rates API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ComputeRequest(BaseModel):
    hours: float = 0
    passengers: float = 0
    existing: dict[str, Any] | None = None
    defaults: dict[str, Any] | None = None
    edits: dict[str, Any] = Field(default_factory=dict)
    strict: bool = False


class ConfirmationRequest(BaseModel):
    breakdown: dict[str, Any] | None = None
    hours: float = 0
    confirmation_number: str = "NEW"
    show_rates: bool = True
    hide_zero: bool = True


class RateLine(BaseModel):
    key: str
    label: str
    detail: str
    kind: str
    amount: float
    display: str


class RateResponse(BaseModel):
    success: bool
    breakdown: dict[str, Any] | None = None
    lines: list[RateLine] | None = None
    warnings: list[str] | None = None
    error_type: str | None = None
    errors: list[str] | None = None


class ConfirmationResponse(BaseModel):
    text: str
