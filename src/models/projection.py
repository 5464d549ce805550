"""
Core Data Models for the Season Projector

These models define the two records that cross the engine boundary:

- ProjectionInput: raw form text exactly as the user typed it
- ProjectionResult: a flat record of derived numbers

DESIGN DECISION: Input numeric fields stay strings.
The user may be half-way through typing "15.5" when we recompute,
so parsing is tolerant and happens inside the engine, not here.
Both records are frozen; a new one is built for every computation.
"""

import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# INPUT MODELS
# =============================================================================

def _as_raw_text(value: Any) -> Any:
    """Keep user text as typed; render typed values the way a form would."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return value


class JobInput(BaseModel):
    """One job: hourly wage and weekly hours, both as raw text."""
    model_config = ConfigDict(frozen=True)

    wage: str = Field(default="", description="Hourly wage (USD)")
    hours: str = Field(default="", description="Hours per week")

    @field_validator("wage", "hours", mode="before")
    @classmethod
    def keep_raw_text(cls, v: Any) -> Any:
        return _as_raw_text(v)


class ProjectionInput(BaseModel):
    """
    Snapshot of the season form.

    All numeric fields are raw strings; malformed or blank text is read
    as zero by the engine. job2 is optional and may be left blank.
    """
    model_config = ConfigDict(frozen=True)

    # Logistics
    start_date: str = Field(default="", description="Program start (ISO date)")
    end_date: str = Field(default="", description="Program end (ISO date)")
    upfront_cost: str = Field(
        default="",
        description="One-time cost: program fee + flight + visa"
    )

    # Recurring weekly costs
    housing_cost: str = Field(default="", description="Weekly rent")
    weekly_living_cost: str = Field(
        default="",
        description="Weekly food, transport and entertainment"
    )

    # One-time end-of-season costs (final balance only)
    travel_cost: str = Field(default="", description="End of summer trip")
    purchase_cost: str = Field(default="", description="Tech, shopping, gifts")

    # Taxes
    state_tax_rate: str = Field(default="", description="Flat state rate, percent")
    is_fica_exempt: bool = Field(
        default=False,
        description="No Social Security/Medicare withholding"
    )
    include_overtime: bool = Field(
        default=False,
        description="Pay 1.5x for hours over 40 per week"
    )

    # Income
    job1: JobInput = Field(default_factory=JobInput)
    job2: JobInput = Field(default_factory=JobInput)

    @field_validator(
        "start_date",
        "end_date",
        "upfront_cost",
        "housing_cost",
        "weekly_living_cost",
        "travel_cost",
        "purchase_cost",
        "state_tax_rate",
        mode="before",
    )
    @classmethod
    def keep_raw_text(cls, v: Any) -> Any:
        return _as_raw_text(v)


DEFAULT_SEASON_INPUT = ProjectionInput(
    start_date="2025-06-17",
    end_date="2025-09-20",
    upfront_cost="4000",
    housing_cost="100",
    weekly_living_cost="100",
    travel_cost="1000",
    purchase_cost="",
    state_tax_rate="3.5",
    is_fica_exempt=True,
    include_overtime=True,
    job1=JobInput(wage="15", hours="40"),
    job2=JobInput(wage="", hours=""),
)


# =============================================================================
# RESULT MODEL
# =============================================================================

class ProjectionResult(BaseModel):
    """
    Projected cash flow for one season.

    When is_valid is False every numeric field is zero. There are no
    optional fields: the UI can always render every number.

    Profit policy: the upfront cost is deducted once, in full, from the
    season total. weekly_program_cost is shown to the user but is not
    part of weekly_net_profit.
    """
    model_config = ConfigDict(frozen=True)

    is_valid: bool = Field(
        default=False,
        description="Was the date range usable?"
    )

    # Duration
    total_days: int = Field(default=0, ge=0)
    total_weeks: float = Field(default=0.0, ge=0.0)

    # Parsed one-time costs
    upfront_cost: float = 0.0
    travel_cost: float = 0.0
    purchase_cost: float = 0.0

    # Expenses
    weekly_program_cost: float = Field(
        default=0.0,
        description="Upfront cost spread over the season (display only)"
    )
    weekly_operational_expense: float = Field(
        default=0.0,
        description="Rent + lifestyle per week"
    )

    # Income & tax
    job1_weekly_income: float = 0.0
    job2_weekly_income: float = 0.0
    gross_weekly_income: float = 0.0
    total_season_gross: float = 0.0
    federal_tax: float = 0.0
    state_tax: float = 0.0
    fica_tax: float = 0.0
    total_season_tax: float = 0.0
    weekly_tax: float = 0.0
    net_weekly_income: float = 0.0

    # Profit
    weekly_net_profit: float = Field(
        default=0.0,
        description="Net income minus weekly operational expense"
    )
    monthly_net_profit: float = 0.0
    total_season_profit: float = Field(
        default=0.0,
        description="Season cash after taxes, living costs and the upfront cost"
    )
    total_after_splurge: float = Field(
        default=0.0,
        description="Season profit after travel and purchases"
    )

    # Breakdown
    total_living_cost: float = 0.0
    total_operational_cash: float = Field(
        default=0.0,
        description="Season gross minus taxes minus living costs"
    )

    @classmethod
    def invalid(cls) -> "ProjectionResult":
        """The all-zero result for an unusable date range."""
        return cls(is_valid=False)

    @property
    def is_profitable(self) -> bool:
        return self.total_season_profit >= 0

    @property
    def is_final_profitable(self) -> bool:
        return self.total_after_splurge >= 0

    def reconciles(self, rel_tol: float = 1e-9) -> bool:
        """
        Check the breakdown identities:

            total_operational_cash - upfront_cost == total_season_profit
            total_season_profit - travel - purchase == total_after_splurge
        """
        scale = max(
            1.0,
            abs(self.total_season_gross),
            abs(self.total_operational_cash),
            abs(self.upfront_cost),
        )
        abs_tol = rel_tol * scale
        season_ok = math.isclose(
            self.total_operational_cash - self.upfront_cost,
            self.total_season_profit,
            rel_tol=rel_tol,
            abs_tol=abs_tol,
        )
        final_ok = math.isclose(
            self.total_season_profit - self.travel_cost - self.purchase_cost,
            self.total_after_splurge,
            rel_tol=rel_tol,
            abs_tol=abs_tol,
        )
        return season_ok and final_ok


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in the form."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of checking a ProjectionInput.

    Errors mean the projection will come back invalid.
    Warnings mean a value was read differently than it looks.
    """

    validated_at: datetime = Field(
        default_factory=datetime.utcnow
    )
    is_valid: bool = Field(
        ...,
        description="True when no error-level issues were found"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All issues found"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warning messages"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
