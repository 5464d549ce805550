"""
Display helpers for projection numbers.

The page shows whole dollars only. The detailed breakdown walks from
the season gross down to the final balance so each subtotal can be
checked by hand.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import NamedTuple

from src.models.projection import ProjectionResult


# Wide enough for any finite float
_WIDE = Context(prec=400)


class BreakdownRow(NamedTuple):
    label: str
    amount: float
    is_subtotal: bool = False


def format_currency(value: float) -> str:
    """Whole dollars with thousands separators: 1234.5 -> '$1,235', -812.1 -> '-$812'."""
    if not math.isfinite(value):
        return "n/a"

    dollars = Decimal(repr(abs(value))).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP, context=_WIDE
    )
    sign = "-" if value < 0 and dollars != 0 else ""
    return f"{sign}${dollars:,}"


def format_weeks(weeks: float) -> str:
    return f"{weeks:.1f} weeks"


def build_breakdown(result: ProjectionResult) -> list[BreakdownRow]:
    """Season gross down to the balance after travel and purchases."""
    if not result.is_valid:
        return []

    return [
        BreakdownRow("Season gross income", result.total_season_gross),
        BreakdownRow("Federal tax", -result.federal_tax),
        BreakdownRow("State tax", -result.state_tax),
        BreakdownRow("FICA", -result.fica_tax),
        BreakdownRow("Rent & lifestyle", -result.total_living_cost),
        BreakdownRow("Operational cash", result.total_operational_cash, True),
        BreakdownRow("Upfront cost", -result.upfront_cost),
        BreakdownRow("Season Kasa (net)", result.total_season_profit, True),
        BreakdownRow("Travel", -result.travel_cost),
        BreakdownRow("Tech & shopping", -result.purchase_cost),
        BreakdownRow("After travel & purchases", result.total_after_splurge, True),
    ]
