"""
Two-Stage Form Check

The engine never rejects input: blank or malformed numbers read as zero
and a bad date range gives an all-zero projection. That keeps the page
responsive while the user types, but it can also hide mistakes. This
validator reports them next to the numbers.

STAGE 1 - DATE CHECKS:
- Start and end present
- Both readable as dates
- End strictly after start
Any failure here means the projection will be invalid.

STAGE 2 - AMOUNT CHECKS (warnings only):
- Text that is not entirely a number
- Negative amounts
- Impossible weekly hours
- State rate above 100%
- Half-filled jobs, no income at all

IMPORTANT: Validation NEVER fixes anything. It only reports.
"""

from typing import Optional

from src.config import ProjectionSettings, get_settings
from src.engine.parsing import is_blank, is_parsable_amount, parse_amount, parse_moment
from src.models.projection import (
    JobInput,
    ProjectionInput,
    ValidationIssue,
    ValidationResult,
)


AMOUNT_FIELDS = {
    "upfront_cost": "Upfront cost",
    "housing_cost": "Weekly rent",
    "weekly_living_cost": "Weekly lifestyle",
    "travel_cost": "Travel budget",
    "purchase_cost": "Tech & shopping",
    "state_tax_rate": "State tax rate",
}


class ProjectionInputValidator:
    """
    Checks a ProjectionInput and explains what the engine will do with it.
    """

    def __init__(
        self,
        projection_settings: Optional[ProjectionSettings] = None,
    ):
        self._settings = projection_settings or get_settings().projection

    def _validate_dates(
        self,
        projection_input: ProjectionInput,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: date range.

        Returns: (is_valid, list_of_issues)
        """
        issues = []
        moments = {}

        for field, label in (("start_date", "Start date"), ("end_date", "End date")):
            raw = getattr(projection_input, field)
            if is_blank(raw):
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="missing",
                    message=f"{label} is required",
                    severity="error",
                    suggested_fix="Enter dates to see the projection",
                ))
                continue

            moment = parse_moment(raw)
            if moment is None:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="invalid_format",
                    message=f"{label} ({raw}) is not a valid date",
                    severity="error",
                    suggested_fix="Use the YYYY-MM-DD format",
                ))
                continue
            moments[field] = moment

        start = moments.get("start_date")
        end = moments.get("end_date")
        if start is not None and end is not None and not end > start:
            issues.append(ValidationIssue(
                field="end_date",
                issue_type="inconsistent",
                message="End date must be after the start date",
                severity="error",
                suggested_fix="Check that the dates are not swapped",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _check_amount(self, field: str, label: str, raw: str) -> list[ValidationIssue]:
        issues = []
        if is_blank(raw):
            return issues

        if not is_parsable_amount(raw):
            read_as = parse_amount(raw)
            issues.append(ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=f"{label} ({raw}) is not a number and is read as {read_as:g}",
                severity="warning",
                suggested_fix="Use digits only, e.g. 1500 or 12.5",
            ))
        elif parse_amount(raw) < 0:
            issues.append(ValidationIssue(
                field=field,
                issue_type="suspicious_value",
                message=f"{label} is negative",
                severity="warning",
                suggested_fix="Amounts are normally zero or more",
            ))
        return issues

    def _check_job(self, slot: str, job: JobInput) -> list[ValidationIssue]:
        issues = []
        label = "Job 1" if slot == "job1" else "Job 2"

        issues.extend(self._check_amount(f"{slot}.wage", f"{label} wage", job.wage))
        issues.extend(self._check_amount(f"{slot}.hours", f"{label} hours", job.hours))

        hours = parse_amount(job.hours)
        if hours > self._settings.max_weekly_hours:
            issues.append(ValidationIssue(
                field=f"{slot}.hours",
                issue_type="suspicious_value",
                message=(
                    f"{label} hours ({hours:g}) exceed "
                    f"{self._settings.max_weekly_hours:g} hours in a week"
                ),
                severity="warning",
                suggested_fix="Enter hours per week, not per season",
            ))

        wage = parse_amount(job.wage)
        if wage > 0 and hours == 0:
            issues.append(ValidationIssue(
                field=f"{slot}.hours",
                issue_type="missing",
                message=f"{label} has a wage but no hours",
                severity="warning",
            ))
        elif hours > 0 and wage == 0:
            issues.append(ValidationIssue(
                field=f"{slot}.wage",
                issue_type="missing",
                message=f"{label} has hours but no wage",
                severity="warning",
            ))
        return issues

    def _validate_amounts(
        self,
        projection_input: ProjectionInput,
    ) -> list[ValidationIssue]:
        """
        Stage 2: amounts. Produces warnings only.
        """
        issues = []

        for field, label in AMOUNT_FIELDS.items():
            issues.extend(
                self._check_amount(field, label, getattr(projection_input, field))
            )

        if parse_amount(projection_input.state_tax_rate) > 100:
            issues.append(ValidationIssue(
                field="state_tax_rate",
                issue_type="suspicious_value",
                message="State tax rate is above 100%",
                severity="warning",
                suggested_fix="Enter a percentage, e.g. 3.5",
            ))

        issues.extend(self._check_job("job1", projection_input.job1))
        issues.extend(self._check_job("job2", projection_input.job2))

        no_income = all(
            parse_amount(job.wage) * parse_amount(job.hours) == 0
            for job in (projection_input.job1, projection_input.job2)
        )
        if no_income:
            issues.append(ValidationIssue(
                field="job1",
                issue_type="missing",
                message="No income entered",
                severity="warning",
                suggested_fix="Enter a wage and weekly hours for at least one job",
            ))

        return issues

    def validate(self, projection_input: ProjectionInput) -> ValidationResult:
        """
        Run both stages.

        Amount checks run even when the dates fail, so the user sees
        everything at once.
        """
        dates_valid, all_issues = self._validate_dates(projection_input)
        all_issues.extend(self._validate_amounts(projection_input))

        warnings = [
            issue.message for issue in all_issues if issue.severity == "warning"
        ]

        return ValidationResult(
            is_valid=dates_valid,
            issues=all_issues,
            warnings=warnings,
        )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Short summary shown above the projection.
        """
        if result.is_valid and not result.warnings:
            return "✅ All inputs look good."

        lines = []

        if not result.is_valid:
            lines.append("❌ The projection cannot be calculated yet:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please double-check:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
