"""
Audit Models for the Season Projector

Every user-visible action on the projection form is described by an
AuditEvent. Events are written to the structured log only; there is
no persistence layer.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Computation
    PROJECTION_COMPUTED = "projection_computed"
    PROJECTION_INVALID_DATES = "projection_invalid_dates"

    # Form edits
    INPUT_UPDATED = "input_updated"
    INPUT_RESET = "input_reset"
    STATE_SELECTED = "state_selected"
    STATE_NOT_FOUND = "state_not_found"

    # Validation
    VALIDATION_WARNINGS = "validation_warnings"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Related events (one editing session) share a correlation_id.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one projection session"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.projection_computed(weeks, profit, final, correlation_id)
        event = AuditEventBuilder.state_selected("Oregon", 8.75, correlation_id)
    """

    @staticmethod
    def projection_computed(
        total_weeks: float,
        total_season_profit: float,
        total_after_splurge: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECTION_COMPUTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Projection computed over {total_weeks:.1f} weeks",
            details={
                "total_weeks": round(total_weeks, 4),
                "total_season_profit": round(total_season_profit, 2),
                "total_after_splurge": round(total_after_splurge, 2),
            },
        )

    @staticmethod
    def projection_invalid_dates(
        start_date: str,
        end_date: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECTION_INVALID_DATES,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description="Projection skipped: date range is not usable",
            details={
                "start_date": start_date,
                "end_date": end_date,
            },
        )

    @staticmethod
    def input_updated(
        field: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        # The typed value is not recorded, only which field changed
        return AuditEvent(
            event_type=AuditEventType.INPUT_UPDATED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Form field updated: {field}",
            details={"field": field},
            is_user_action=True,
        )

    @staticmethod
    def input_reset(
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_RESET,
            correlation_id=correlation_id,
            description="Form reset to defaults",
            is_user_action=True,
        )

    @staticmethod
    def state_selected(
        state: str,
        rate: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_SELECTED,
            correlation_id=correlation_id,
            description=f"State selected: {state} ({rate:.2f}%)",
            details={
                "state": state,
                "rate": rate,
            },
            is_user_action=True,
        )

    @staticmethod
    def state_not_found(
        state: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Unknown state: {state}",
            details={"state": state},
            is_user_action=True,
        )

    @staticmethod
    def validation_warnings(
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_WARNINGS,
            severity=AuditSeverity.INFO,
            correlation_id=correlation_id,
            description=f"Form check found {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
