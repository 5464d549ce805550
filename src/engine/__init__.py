"""Projection engine package: tolerant parsing, state rates, and the pure projection."""

from src.engine.parsing import (
    count_season_days,
    is_blank,
    is_parsable_amount,
    parse_amount,
    parse_moment,
)
from src.engine.projection import (
    ProjectionEngine,
    calculate_federal_tax,
    calculate_fica_tax,
    calculate_job_income,
    calculate_state_tax,
    compute_projection,
)
from src.engine.state_taxes import (
    US_STATE_TAX_RATES,
    UnknownStateError,
    canonical_state_name,
    format_rate,
    lookup_state_rate,
    state_names,
)

__all__ = [
    "ProjectionEngine",
    "UnknownStateError",
    "US_STATE_TAX_RATES",
    "calculate_federal_tax",
    "calculate_fica_tax",
    "calculate_job_income",
    "calculate_state_tax",
    "canonical_state_name",
    "compute_projection",
    "count_season_days",
    "format_rate",
    "is_blank",
    "is_parsable_amount",
    "lookup_state_rate",
    "parse_amount",
    "parse_moment",
    "state_names",
]
