"""
Main Orchestrator for the Season Projector

This module ties together the engine, the validator and the audit log,
and owns the only mutable state in the system: the form.

DESIGN DECISION: Mutable shell, pure core.
- SeasonForm is edited in place as the user types
- Every computation takes a frozen ProjectionInput snapshot
- The engine never sees (or changes) the form itself

The page recomputes on every edit; nothing is cached between calls.
"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.audit import AuditLogger, create_correlation_id
from src.config import validate_all_settings
from src.engine.projection import ProjectionEngine
from src.engine.state_taxes import (
    UnknownStateError,
    canonical_state_name,
    format_rate,
    lookup_state_rate,
)
from src.models.projection import (
    DEFAULT_SEASON_INPUT,
    JobInput,
    ProjectionInput,
    ProjectionResult,
    ValidationResult,
)
from src.validation import ProjectionInputValidator


JOB_SLOTS = ("job1", "job2")
JOB_FIELDS = ("wage", "hours")


class SeasonJob(BaseModel):
    """Editable job fields."""
    model_config = ConfigDict(validate_assignment=True)

    wage: str = ""
    hours: str = ""


class SeasonForm(BaseModel):
    """
    The editable form behind the page.

    Same fields as ProjectionInput plus the selected state, but mutable.
    """
    model_config = ConfigDict(validate_assignment=True)

    start_date: str = ""
    end_date: str = ""
    upfront_cost: str = ""
    housing_cost: str = ""
    weekly_living_cost: str = ""
    travel_cost: str = ""
    purchase_cost: str = ""
    state_tax_rate: str = ""
    selected_state: Optional[str] = None
    is_fica_exempt: bool = False
    include_overtime: bool = False
    job1: SeasonJob = Field(default_factory=SeasonJob)
    job2: SeasonJob = Field(default_factory=SeasonJob)

    @classmethod
    def from_input(
        cls,
        projection_input: ProjectionInput,
        selected_state: Optional[str] = None,
    ) -> "SeasonForm":
        return cls(
            **projection_input.model_dump(),
            selected_state=selected_state,
        )

    def snapshot(self) -> ProjectionInput:
        """Frozen copy for the engine."""
        data = self.model_dump(exclude={"selected_state", "job1", "job2"})
        return ProjectionInput(
            **data,
            job1=JobInput(**self.job1.model_dump()),
            job2=JobInput(**self.job2.model_dump()),
        )


EDITABLE_FIELDS = tuple(
    name for name in SeasonForm.model_fields
    if name not in ("selected_state",) + JOB_SLOTS
)


class ProjectionSession:
    """
    One user's editing session.

    Flow:
    1. Edit → update_field / update_job / select_state / reset
    2. Compute → snapshot the form, run the engine, audit the outcome
    3. Validate → report anything the engine silently read as zero
    """

    def __init__(
        self,
        engine: Optional[ProjectionEngine] = None,
        validator: Optional[ProjectionInputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        initial: Optional[ProjectionInput] = None,
        correlation_id: Optional[UUID] = None,
    ):
        self._engine = engine or ProjectionEngine()
        self._validator = validator or ProjectionInputValidator(
            self._engine.projection_settings
        )
        self._audit_logger = audit_logger
        self._initial = initial or DEFAULT_SEASON_INPUT
        self._form = SeasonForm.from_input(self._initial)
        self.correlation_id = correlation_id or create_correlation_id()

    @property
    def form(self) -> SeasonForm:
        """A copy of the current form; edit through the session methods."""
        return self._form.model_copy(deep=True)

    def snapshot(self) -> ProjectionInput:
        return self._form.snapshot()

    def update_field(self, name: str, value: Any) -> None:
        """
        Set one top-level form field.

        Raises ValueError for names that are not form fields.
        Typing a rate by hand clears the selected state.
        """
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown form field: {name}")

        setattr(self._form, name, _form_value(name, value))
        if name == "state_tax_rate":
            self._form.selected_state = None

        if self._audit_logger:
            self._audit_logger.log_input_updated(
                field=name,
                correlation_id=self.correlation_id,
            )

    def update_job(self, job: str, field: str, value: Any) -> None:
        """Set wage or hours for job1/job2."""
        if job not in JOB_SLOTS:
            raise ValueError(f"Unknown job: {job}")
        if field not in JOB_FIELDS:
            raise ValueError(f"Unknown job field: {field}")

        setattr(getattr(self._form, job), field, _form_value(field, value))

        if self._audit_logger:
            self._audit_logger.log_input_updated(
                field=f"{job}.{field}",
                correlation_id=self.correlation_id,
            )

    def select_state(self, name: str) -> bool:
        """
        Fill the state tax rate from the rate table.

        Returns False (and leaves the form alone) for unknown states.
        """
        try:
            state = canonical_state_name(name)
        except UnknownStateError:
            if self._audit_logger:
                self._audit_logger.log_state_not_found(
                    state=str(name),
                    correlation_id=self.correlation_id,
                )
            return False

        rate = lookup_state_rate(state)
        self._form.state_tax_rate = format_rate(rate)
        self._form.selected_state = state

        if self._audit_logger:
            self._audit_logger.log_state_selected(
                state=state,
                rate=rate,
                correlation_id=self.correlation_id,
            )
        return True

    def reset(self) -> None:
        """Back to the starting form."""
        self._form = SeasonForm.from_input(self._initial)

        if self._audit_logger:
            self._audit_logger.log_input_reset(correlation_id=self.correlation_id)

    def compute(self) -> ProjectionResult:
        """Project the current form."""
        projection_input = self.snapshot()
        result = self._engine.compute(projection_input)

        if self._audit_logger:
            if result.is_valid:
                self._audit_logger.log_projection_computed(
                    total_weeks=result.total_weeks,
                    total_season_profit=result.total_season_profit,
                    total_after_splurge=result.total_after_splurge,
                    correlation_id=self.correlation_id,
                )
            else:
                self._audit_logger.log_invalid_dates(
                    start_date=projection_input.start_date,
                    end_date=projection_input.end_date,
                    correlation_id=self.correlation_id,
                )

        return result

    def validate(self) -> ValidationResult:
        """Check the current form."""
        result = self._validator.validate(self.snapshot())

        if self._audit_logger and result.issues:
            self._audit_logger.log_validation_warnings(
                issues=[issue.model_dump() for issue in result.issues],
                correlation_id=self.correlation_id,
            )

        return result

    def summarize(self, result: ValidationResult) -> str:
        return self._validator.get_user_friendly_summary(result)


def _form_value(name: str, value: Any) -> Any:
    if name in ("is_fica_exempt", "include_overtime"):
        return bool(value)
    # Same text rules as the engine's input record
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def check_configuration(audit_logger: Optional[AuditLogger] = None) -> list[str]:
    """
    Load every settings section and report the ones that fail.

    Each failure is logged as a system error. Returns one message per
    broken section, empty when the configuration is usable.
    """
    results = validate_all_settings()
    problems = []
    for name in ("tax", "projection", "app"):
        if results.get(name):
            continue
        message = results.get(f"{name}_error", "unknown error")
        problems.append(f"{name} settings: {message}")
        if audit_logger is not None:
            audit_logger.log_error(
                "settings_invalid",
                message,
                details={"section": name},
            )
    return problems


def create_app_components(
    audit: bool = True,
) -> tuple[ProjectionSession, Optional[AuditLogger]]:
    """
    Create the session and its audit logger.

    Args:
        audit: Whether to attach an audit logger.

    Returns:
        (session, audit_logger)
    """
    audit_logger = AuditLogger() if audit else None
    session = ProjectionSession(audit_logger=audit_logger)
    return session, audit_logger
