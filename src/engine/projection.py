"""
Season Projection Engine

DESIGN DECISION: The engine is a pure function of its input.
It does not log, read files, or keep state between calls; the
session layer around it does all of that. Given the same
ProjectionInput and settings it always returns the same result,
and it never raises on user input.

Taxes are computed once on the season total and then spread evenly
over the weeks. They are not withheld week by week.

Profit policy (cash in pocket):
- weekly_net_profit = net weekly income - rent - lifestyle
- total_season_profit = weekly_net_profit * weeks - upfront cost
The upfront cost is deducted exactly once. weekly_program_cost only
shows what the upfront cost amounts to per week.
"""

from typing import Optional

from src.config import ProjectionSettings, TaxSettings, get_settings
from src.engine.parsing import count_season_days, parse_amount, parse_moment
from src.models.projection import JobInput, ProjectionInput, ProjectionResult


DAYS_PER_WEEK = 7


def calculate_job_income(
    wage: float,
    hours: float,
    include_overtime: bool,
    overtime_threshold: float = 40.0,
    overtime_multiplier: float = 1.5,
) -> float:
    """Weekly pay for one job, with time-and-a-half past the threshold."""
    if include_overtime and hours > overtime_threshold:
        regular_pay = overtime_threshold * wage
        overtime_pay = (hours - overtime_threshold) * (wage * overtime_multiplier)
        return regular_pay + overtime_pay
    return wage * hours


def calculate_federal_tax(
    season_gross: float,
    threshold: float = 11600.0,
    lower_rate: float = 0.10,
    upper_rate: float = 0.12,
) -> float:
    """Two-bracket federal estimate on the season total."""
    if season_gross <= threshold:
        return season_gross * lower_rate
    return threshold * lower_rate + (season_gross - threshold) * upper_rate


def calculate_state_tax(season_gross: float, rate_percent: float) -> float:
    """Flat state tax; rate is a percentage (3.5 means 3.5%)."""
    return season_gross * (rate_percent / 100)


def calculate_fica_tax(
    season_gross: float,
    is_exempt: bool,
    rate: float = 0.0765,
) -> float:
    """Social Security + Medicare, zero when exempt."""
    if is_exempt:
        return 0.0
    return season_gross * rate


def _per_week(total: float, weeks: float) -> float:
    return total / weeks if weeks > 0 else 0.0


class ProjectionEngine:
    """
    Computes a ProjectionResult from a ProjectionInput.

    Settings are read once at construction. Pass explicit settings to
    pin the tax year or payroll rules (tests do this).
    """

    def __init__(
        self,
        tax_settings: Optional[TaxSettings] = None,
        projection_settings: Optional[ProjectionSettings] = None,
    ):
        settings = None
        if tax_settings is None or projection_settings is None:
            settings = get_settings()
        self._tax = tax_settings or settings.tax
        self._rules = projection_settings or settings.projection

    @property
    def tax_settings(self) -> TaxSettings:
        return self._tax

    @property
    def projection_settings(self) -> ProjectionSettings:
        return self._rules

    def job_income(self, job: JobInput, include_overtime: bool) -> float:
        return calculate_job_income(
            wage=parse_amount(job.wage),
            hours=parse_amount(job.hours),
            include_overtime=include_overtime,
            overtime_threshold=self._rules.overtime_threshold_hours,
            overtime_multiplier=self._rules.overtime_multiplier,
        )

    def compute(self, projection_input: ProjectionInput) -> ProjectionResult:
        """Project the season. Never raises on user input."""
        # 1. Dates
        start = parse_moment(projection_input.start_date)
        end = parse_moment(projection_input.end_date)
        if start is None or end is None or not end > start:
            return ProjectionResult.invalid()

        # 2. Duration
        total_days = count_season_days(start, end)
        total_weeks = total_days / DAYS_PER_WEEK

        # 3. Expenses
        upfront_cost = parse_amount(projection_input.upfront_cost)
        housing_cost = parse_amount(projection_input.housing_cost)
        living_cost = parse_amount(projection_input.weekly_living_cost)

        weekly_program_cost = _per_week(upfront_cost, total_weeks)
        weekly_operational_expense = housing_cost + living_cost

        # 4. Gross income
        include_overtime = projection_input.include_overtime
        job1_income = self.job_income(projection_input.job1, include_overtime)
        job2_income = self.job_income(projection_input.job2, include_overtime)
        gross_weekly_income = job1_income + job2_income
        total_season_gross = gross_weekly_income * total_weeks

        # 5. Taxes on the season total
        federal_tax = calculate_federal_tax(
            total_season_gross,
            threshold=self._tax.federal_bracket_threshold,
            lower_rate=self._tax.federal_lower_rate,
            upper_rate=self._tax.federal_upper_rate,
        )
        state_tax = calculate_state_tax(
            total_season_gross,
            parse_amount(projection_input.state_tax_rate),
        )
        fica_tax = calculate_fica_tax(
            total_season_gross,
            projection_input.is_fica_exempt,
            rate=self._tax.fica_rate,
        )
        total_season_tax = federal_tax + state_tax + fica_tax
        weekly_tax = _per_week(total_season_tax, total_weeks)

        # 6. Net income
        net_weekly_income = gross_weekly_income - weekly_tax

        # 7. Profit
        weekly_net_profit = net_weekly_income - weekly_operational_expense
        monthly_net_profit = weekly_net_profit * self._rules.weeks_per_month
        total_season_profit = weekly_net_profit * total_weeks - upfront_cost

        # 8. Post-season splurges
        travel_cost = parse_amount(projection_input.travel_cost)
        purchase_cost = parse_amount(projection_input.purchase_cost)
        total_after_splurge = total_season_profit - travel_cost - purchase_cost

        total_living_cost = weekly_operational_expense * total_weeks
        total_operational_cash = (
            total_season_gross - total_season_tax - total_living_cost
        )

        return ProjectionResult(
            is_valid=True,
            total_days=total_days,
            total_weeks=total_weeks,
            upfront_cost=upfront_cost,
            travel_cost=travel_cost,
            purchase_cost=purchase_cost,
            weekly_program_cost=weekly_program_cost,
            weekly_operational_expense=weekly_operational_expense,
            job1_weekly_income=job1_income,
            job2_weekly_income=job2_income,
            gross_weekly_income=gross_weekly_income,
            total_season_gross=total_season_gross,
            federal_tax=federal_tax,
            state_tax=state_tax,
            fica_tax=fica_tax,
            total_season_tax=total_season_tax,
            weekly_tax=weekly_tax,
            net_weekly_income=net_weekly_income,
            weekly_net_profit=weekly_net_profit,
            monthly_net_profit=monthly_net_profit,
            total_season_profit=total_season_profit,
            total_after_splurge=total_after_splurge,
            total_living_cost=total_living_cost,
            total_operational_cash=total_operational_cash,
        )


def compute_projection(
    projection_input: ProjectionInput,
    engine: Optional[ProjectionEngine] = None,
) -> ProjectionResult:
    """Compute with the given engine, or one built from current settings."""
    return (engine or ProjectionEngine()).compute(projection_input)
