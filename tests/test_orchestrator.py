"""
Tests for the projection session (mutable form, pure engine).
"""

import pytest
from datetime import date

from pydantic import ValidationError

from src.audit import AuditLogger
from src.config import ProjectionSettings, TaxSettings, get_settings
from src.engine.projection import ProjectionEngine
from src.models.projection import DEFAULT_SEASON_INPUT, ProjectionInput
from src.orchestrator import (
    ProjectionSession,
    SeasonForm,
    check_configuration,
    create_app_components,
)


class RecordingLogger:
    """Stands in for a structlog logger and records calls."""

    def __init__(self):
        self.calls = []

    def _record(self, level):
        def method(event, **kwargs):
            self.calls.append((level, event, kwargs))
        return method

    def __getattr__(self, level):
        if level in ("debug", "info", "warning", "error", "critical"):
            return self._record(level)
        raise AttributeError(level)

    def event_types(self):
        return [kwargs.get("event_type") for _, _, kwargs in self.calls]


@pytest.fixture
def recorder():
    return RecordingLogger()


@pytest.fixture
def session(recorder):
    return ProjectionSession(
        engine=ProjectionEngine(TaxSettings(), ProjectionSettings()),
        audit_logger=AuditLogger(enabled=True, logger=recorder),
    )


class TestSeasonForm:
    """Tests for the mutable form."""

    def test_round_trip_with_input(self):
        form = SeasonForm.from_input(DEFAULT_SEASON_INPUT)
        assert form.snapshot() == DEFAULT_SEASON_INPUT

    def test_form_is_mutable_snapshot_is_not(self):
        form = SeasonForm.from_input(DEFAULT_SEASON_INPUT)
        form.upfront_cost = "1"
        snapshot = form.snapshot()
        assert snapshot.upfront_cost == "1"
        with pytest.raises(ValidationError):
            snapshot.upfront_cost = "2"


class TestSessionEditing:
    """Form edits through the session."""

    def test_starts_from_defaults(self, session):
        assert session.snapshot() == DEFAULT_SEASON_INPUT
        assert session.compute().total_days == 95

    def test_update_field(self, session):
        before = session.compute()
        session.update_field("purchase_cost", "500")
        after = session.compute()
        assert after.total_after_splurge == pytest.approx(before.total_after_splurge - 500)
        assert after.total_season_profit == before.total_season_profit

    def test_update_field_converts_typed_values(self, session):
        session.update_field("start_date", date(2025, 6, 1))
        session.update_field("upfront_cost", 3500)
        session.update_field("travel_cost", None)
        form = session.form
        assert form.start_date == "2025-06-01"
        assert form.upfront_cost == "3500"
        assert form.travel_cost == ""

    def test_update_toggle(self, session):
        session.update_field("is_fica_exempt", False)
        result = session.compute()
        assert result.fica_tax == pytest.approx(0.0765 * result.total_season_gross)

    def test_update_job(self, session):
        session.update_job("job2", "wage", 12.5)
        session.update_job("job2", "hours", "10")
        assert session.snapshot().job2.wage == "12.5"
        assert session.compute().gross_weekly_income == pytest.approx(600 + 125)

    @pytest.mark.parametrize("name", ["bogus", "job1", "selected_state"])
    def test_unknown_field(self, session, name):
        with pytest.raises(ValueError):
            session.update_field(name, "1")

    def test_unknown_job(self, session):
        with pytest.raises(ValueError):
            session.update_job("job3", "wage", "1")
        with pytest.raises(ValueError):
            session.update_job("job1", "tips", "1")

    def test_form_property_is_a_copy(self, session):
        form = session.form
        form.upfront_cost = "999999"
        form.job1.wage = "0"
        assert session.snapshot() == DEFAULT_SEASON_INPUT

    def test_snapshots_are_independent(self, session):
        first = session.snapshot()
        session.update_field("housing_cost", "250")
        assert first.housing_cost == "100"
        assert session.snapshot().housing_cost == "250"

    def test_reset(self, session):
        session.update_field("upfront_cost", "0")
        session.select_state("Oregon")
        session.reset()
        assert session.snapshot() == DEFAULT_SEASON_INPUT
        assert session.form.selected_state is None

    def test_custom_initial_form(self):
        initial = ProjectionInput(start_date="2025-01-01", end_date="2025-01-08")
        session = ProjectionSession(
            engine=ProjectionEngine(TaxSettings(), ProjectionSettings()),
            initial=initial,
        )
        assert session.compute().total_weeks == pytest.approx(1.0)
        session.update_field("end_date", "")
        session.reset()
        assert session.snapshot() == initial


class TestStateSelection:
    """select_state fills the rate from the table."""

    def test_select_known_state(self, session):
        assert session.select_state("oregon") is True
        form = session.form
        assert form.selected_state == "Oregon"
        assert form.state_tax_rate == "8.75"
        result = session.compute()
        assert result.state_tax == pytest.approx(0.0875 * result.total_season_gross)

    def test_select_whole_number_rate(self, session):
        session.select_state("California")
        assert session.form.state_tax_rate == "3"

    def test_unknown_state_leaves_form_alone(self, session, recorder):
        assert session.select_state("Atlantis") is False
        assert session.form.state_tax_rate == "3.5"
        assert session.form.selected_state is None
        level, _, kwargs = recorder.calls[-1]
        assert level == "warning"
        assert kwargs["event_type"] == "state_not_found"

    def test_typing_rate_clears_selection(self, session):
        session.select_state("Texas")
        session.update_field("state_tax_rate", "5")
        assert session.form.selected_state is None
        assert session.form.state_tax_rate == "5"


class TestSessionAudit:
    """Every action lands in the structured log."""

    def test_compute_logs_projection(self, session, recorder):
        session.compute()
        level, event, kwargs = recorder.calls[-1]
        assert level == "debug"
        assert event == "audit_event"
        assert kwargs["event_type"] == "projection_computed"
        assert kwargs["correlation_id"] == str(session.correlation_id)

    def test_invalid_dates_logged(self, session, recorder):
        session.update_field("end_date", "")
        result = session.compute()
        assert result.is_valid is False
        assert recorder.event_types()[-1] == "projection_invalid_dates"

    def test_edits_logged_without_values(self, session, recorder):
        session.update_job("job1", "wage", "22")
        _, _, kwargs = recorder.calls[-1]
        assert kwargs["event_type"] == "input_updated"
        assert kwargs["details"] == {"field": "job1.wage"}

    def test_validate_logs_issues(self, session, recorder):
        session.update_field("housing_cost", "-1")
        result = session.validate()
        assert result.is_valid is True
        assert recorder.event_types()[-1] == "validation_warnings"
        assert "⚠️" in session.summarize(result)

    def test_clean_validation_not_logged(self, session, recorder):
        session.validate()
        assert "validation_warnings" not in recorder.event_types()

    def test_works_without_audit_logger(self):
        session, audit_logger = create_app_components(audit=False)
        assert audit_logger is None
        assert session.compute().is_valid is True


class TestConfigurationCheck:
    """Broken settings are reported before the page renders."""

    @pytest.fixture(autouse=True)
    def fresh_settings(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_stock_settings_pass(self, recorder):
        audit_logger = AuditLogger(enabled=True, logger=recorder)
        assert check_configuration(audit_logger) == []
        assert recorder.calls == []

    def test_broken_section_is_reported_and_logged(self, monkeypatch, recorder):
        monkeypatch.setenv("TAX_FICA_RATE", "-1")
        audit_logger = AuditLogger(enabled=True, logger=recorder)

        problems = check_configuration(audit_logger)

        assert len(problems) == 1
        assert problems[0].startswith("tax settings:")
        [(level, _, kwargs)] = recorder.calls
        assert level == "error"
        assert kwargs["event_type"] == "system_error"
        assert kwargs["details"] == {"section": "tax"}
        assert kwargs["description"] == "System error: settings_invalid"

    def test_without_audit_logger(self, monkeypatch):
        monkeypatch.setenv("PROJECTION_OVERTIME_MULTIPLIER", "abc")
        problems = check_configuration()
        assert [p.split(":")[0] for p in problems] == ["projection settings"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
