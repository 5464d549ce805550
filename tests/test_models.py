"""
Tests for the Season Projector

Test strategy:
1. Unit tests for individual components (models, parsing, engine, validator)
2. Session tests with a fake structured logger
3. No network, no files
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from src.models.projection import (
    DEFAULT_SEASON_INPUT,
    JobInput,
    ProjectionInput,
    ProjectionResult,
    ValidationIssue,
    ValidationResult,
)
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


NUMERIC_RESULT_FIELDS = [
    name for name, value in ProjectionResult().model_dump().items()
    if name != "is_valid"
]


class TestProjectionInput:
    """Tests for the raw form snapshot."""

    def test_defaults_are_blank(self):
        """Test that an empty input is all blank text and flags off."""
        projection_input = ProjectionInput()
        assert projection_input.start_date == ""
        assert projection_input.upfront_cost == ""
        assert projection_input.job2 == JobInput()
        assert projection_input.is_fica_exempt is False
        assert projection_input.include_overtime is False

    def test_keeps_text_as_typed(self):
        """Test that malformed numeric text is preserved, not rejected."""
        projection_input = ProjectionInput(upfront_cost="12abc", housing_cost="  ")
        assert projection_input.upfront_cost == "12abc"
        assert projection_input.housing_cost == "  "

    def test_typed_values_become_text(self):
        """Test that numbers, dates and None are stored as form text."""
        projection_input = ProjectionInput(
            start_date=date(2025, 6, 17),
            upfront_cost=4000,
            housing_cost=Decimal("99.50"),
            travel_cost=None,
            job1=JobInput(wage=15.5, hours=None),
        )
        assert projection_input.start_date == "2025-06-17"
        assert projection_input.upfront_cost == "4000"
        assert projection_input.housing_cost == "99.50"
        assert projection_input.travel_cost == ""
        assert projection_input.job1.wage == "15.5"
        assert projection_input.job1.hours == ""

    def test_is_frozen(self):
        """Test that the snapshot cannot be mutated."""
        projection_input = ProjectionInput()
        with pytest.raises(ValidationError):
            projection_input.upfront_cost = "1"

    def test_default_season(self):
        """Test the default form matches the stock example season."""
        assert DEFAULT_SEASON_INPUT.start_date == "2025-06-17"
        assert DEFAULT_SEASON_INPUT.end_date == "2025-09-20"
        assert DEFAULT_SEASON_INPUT.upfront_cost == "4000"
        assert DEFAULT_SEASON_INPUT.travel_cost == "1000"
        assert DEFAULT_SEASON_INPUT.purchase_cost == ""
        assert DEFAULT_SEASON_INPUT.state_tax_rate == "3.5"
        assert DEFAULT_SEASON_INPUT.is_fica_exempt is True
        assert DEFAULT_SEASON_INPUT.include_overtime is True
        assert DEFAULT_SEASON_INPUT.job1 == JobInput(wage="15", hours="40")


class TestProjectionResult:
    """Tests for the result record."""

    def test_invalid_is_all_zero(self):
        """Test that the invalid result defines every number as zero."""
        result = ProjectionResult.invalid()
        assert result.is_valid is False
        for name in NUMERIC_RESULT_FIELDS:
            assert getattr(result, name) == 0, name

    def test_profit_flags(self):
        """Test the sign helpers used for colouring."""
        result = ProjectionResult(
            is_valid=True,
            total_season_profit=10.0,
            total_after_splurge=-5.0,
        )
        assert result.is_profitable is True
        assert result.is_final_profitable is False

    def test_reconciles(self):
        """Test the breakdown identity check."""
        result = ProjectionResult(
            is_valid=True,
            upfront_cost=1000.0,
            travel_cost=200.0,
            purchase_cost=50.0,
            total_operational_cash=3000.0,
            total_season_profit=2000.0,
            total_after_splurge=1750.0,
        )
        assert result.reconciles()

    def test_reconciles_detects_mismatch(self):
        """Test that a broken identity is reported."""
        result = ProjectionResult(
            is_valid=True,
            upfront_cost=1000.0,
            total_operational_cash=3000.0,
            total_season_profit=2500.0,
            total_after_splurge=2500.0,
        )
        assert not result.reconciles()

    def test_is_frozen(self):
        """Test that results cannot be edited after the fact."""
        result = ProjectionResult.invalid()
        with pytest.raises(ValidationError):
            result.total_weeks = 3.0


class TestValidationModels:
    """Tests for ValidationIssue and ValidationResult."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="start_date",
                    issue_type="missing",
                    message="Start date is required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="housing_cost",
                    issue_type="suspicious_value",
                    message="Weekly rent is negative",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_issue_severity_is_restricted(self):
        """Test that unknown severities are rejected."""
        with pytest.raises(ValueError):
            ValidationIssue(
                field="x",
                issue_type="missing",
                message="x",
                severity="fatal",
            )


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.INPUT_RESET,
            description="Form reset to defaults",
        )
        assert event.event_type == AuditEventType.INPUT_RESET
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.STATE_SELECTED,
            description="State selected",
            details={"state": "Oregon", "rate": 8.75},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "state_selected"
        assert log_dict["details"]["state"] == "Oregon"
        assert log_dict["correlation_id"] is None

    def test_builder_projection_computed(self):
        """Test AuditEventBuilder.projection_computed."""
        correlation_id = uuid4()
        event = AuditEventBuilder.projection_computed(
            total_weeks=13.571428,
            total_season_profit=329.2857,
            total_after_splurge=-670.7143,
            correlation_id=correlation_id,
        )
        assert event.event_type == AuditEventType.PROJECTION_COMPUTED
        assert event.severity == AuditSeverity.DEBUG
        assert event.correlation_id == correlation_id
        assert event.details["total_season_profit"] == 329.29
        assert "13.6 weeks" in event.description

    def test_builder_state_not_found(self):
        """Test AuditEventBuilder.state_not_found."""
        event = AuditEventBuilder.state_not_found("Atlantis")
        assert event.event_type == AuditEventType.STATE_NOT_FOUND
        assert event.severity == AuditSeverity.WARNING
        assert event.is_user_action is True

    def test_builder_input_updated_omits_value(self):
        """Test that form edits only record the field name."""
        event = AuditEventBuilder.input_updated("job1.wage")
        assert event.details == {"field": "job1.wage"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
