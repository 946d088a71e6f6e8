"""Interactive rate editing session.

Owns the single ChargeInputs value being edited, keeps the hourly and
per-passenger quantities in step with the trip until they are overridden,
and hands each new breakdown to the caller through a debouncer.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from limo_rates.engine.debounce import Debouncer
from limo_rates.engine.rates import (
    BreakdownSource,
    coerce_number,
    compute,
    hydrate,
    initialize,
    resolve_field,
    set_field,
)
from limo_rates.models import ChargeBreakdown, ChargeInputs
from limo_rates.settings import settings

logger = logging.getLogger(__name__)


class RateSession:
    """Editable rate inputs for one reservation.

    Building a session computes the first breakdown but sends no notification;
    read `breakdown` for the initial value. `on_change` fires only after edits,
    loads and trip changes.
    """

    def __init__(
        self,
        hours: Any = 0,
        passengers: Any = 0,
        existing: Optional[BreakdownSource] = None,
        on_change: Optional[Callable[[ChargeBreakdown], None]] = None,
        debouncer: Optional[Debouncer] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if debouncer is None and on_change is not None:
            debouncer = Debouncer(on_change, wait=settings.debounce_seconds)
        self._debouncer = debouncer

        self._loaded_from_existing = False
        self._hours_overridden = False
        self._passengers_overridden = False

        if existing is not None:
            self._loaded_from_existing = True
            self._inputs = hydrate(existing)
        else:
            self._inputs = initialize(defaults, hours=hours, passengers=passengers)
        self._breakdown = compute(self._inputs)

    @property
    def inputs(self) -> ChargeInputs:
        return self._inputs

    @property
    def breakdown(self) -> ChargeBreakdown:
        return self._breakdown

    @property
    def loaded_from_existing(self) -> bool:
        return self._loaded_from_existing

    def load(self, existing: BreakdownSource) -> ChargeBreakdown:
        """Replace the inputs with a saved breakdown and stop trip auto-sync."""
        self._loaded_from_existing = True
        return self._update(hydrate(existing))

    def sync_trip(self, hours: Any = None, passengers: Any = None) -> ChargeBreakdown:
        """Follow a change to the trip's hours or passenger count.

        Ignored for a loaded breakdown, and per quantity once the operator has
        edited it directly.
        """
        if self._loaded_from_existing:
            logger.debug("Trip sync skipped: inputs loaded from existing breakdown")
            return self._breakdown

        inputs = self._inputs
        if hours is not None and not self._hours_overridden:
            inputs = set_field(inputs, "hourly_hours", coerce_number(hours))
        if passengers is not None and not self._passengers_overridden:
            inputs = set_field(inputs, "per_pass_count", coerce_number(passengers))

        if inputs == self._inputs:
            return self._breakdown
        return self._update(inputs)

    def edit(self, name: str, value: Any) -> ChargeBreakdown:
        _, attr = resolve_field(name)
        if attr == "hourly_hours":
            self._hours_overridden = True
        elif attr == "per_pass_count":
            self._passengers_overridden = True
        return self._update(set_field(self._inputs, name, value))

    def flush(self) -> None:
        if self._debouncer is not None:
            self._debouncer.flush()

    def _update(self, inputs: ChargeInputs) -> ChargeBreakdown:
        self._inputs = inputs
        self._breakdown = compute(inputs)
        if self._debouncer is not None:
            self._debouncer.submit(self._breakdown)
        return self._breakdown
