"""Rate calculation engine and editing session."""
from limo_rates.engine.rates import coerce_number, compute, hydrate, initialize, set_field
from limo_rates.engine.session import RateSession
from limo_rates.engine.debounce import Debouncer

__all__ = [
    "coerce_number",
    "compute",
    "hydrate",
    "initialize",
    "set_field",
    "RateSession",
    "Debouncer",
]
