"""
Audit Logger

Every form action and every projection is written to a structured log.
This provides:
1. Traceability of how a number on screen came about
2. Debugging capability

The audit logger:
- Is local only (no storage backend)
- Gracefully handles failures (a logging error never breaks a projection)
- Supports correlation IDs to group the events of one session
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from src.config import get_settings
from src.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def _renderer():
    if get_settings().app.debug_mode:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _renderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


_LEVELS = {
    AuditSeverity.DEBUG: "debug",
    AuditSeverity.INFO: "info",
    AuditSeverity.WARNING: "warning",
    AuditSeverity.ERROR: "error",
    AuditSeverity.CRITICAL: "critical",
}


class AuditLogger:
    """
    Central audit logging service.

    Writes each AuditEvent to the structured log at the level that
    matches its severity.
    """

    def __init__(
        self,
        enabled: Optional[bool] = None,
        logger=None,
    ):
        """
        Initialize audit logger.

        Args:
            enabled: Override the audit_enabled setting.
            logger: structlog logger to write to (default: module logger).
        """
        if enabled is None:
            enabled = get_settings().app.audit_enabled
        self._enabled = enabled
        self._logger = logger or structlog.get_logger("season_projector.audit")

    @property
    def enabled(self) -> bool:
        return self._enabled

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written.
        """
        if not self._enabled:
            return False

        log_dict = event.to_log_dict()
        method = getattr(self._logger, _LEVELS[event.severity])

        try:
            method("audit_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_log_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

        return True

    def log_projection_computed(
        self,
        total_weeks: float,
        total_season_profit: float,
        total_after_splurge: float,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log a successful projection."""
        event = AuditEventBuilder.projection_computed(
            total_weeks=total_weeks,
            total_season_profit=total_season_profit,
            total_after_splurge=total_after_splurge,
            correlation_id=correlation_id,
        )
        return self.log(event)

    def log_invalid_dates(
        self,
        start_date: str,
        end_date: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log a projection that came back invalid."""
        event = AuditEventBuilder.projection_invalid_dates(
            start_date=start_date,
            end_date=end_date,
            correlation_id=correlation_id,
        )
        return self.log(event)

    def log_input_updated(
        self,
        field: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log a form edit."""
        event = AuditEventBuilder.input_updated(
            field=field,
            correlation_id=correlation_id,
        )
        return self.log(event)

    def log_input_reset(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log a reset to defaults."""
        return self.log(AuditEventBuilder.input_reset(correlation_id=correlation_id))

    def log_state_selected(
        self,
        state: str,
        rate: float,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log a state selection."""
        event = AuditEventBuilder.state_selected(
            state=state,
            rate=rate,
            correlation_id=correlation_id,
        )
        return self.log(event)

    def log_state_not_found(
        self,
        state: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log an unknown state name."""
        event = AuditEventBuilder.state_not_found(
            state=state,
            correlation_id=correlation_id,
        )
        return self.log(event)

    def log_validation_warnings(
        self,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log form issues."""
        event = AuditEventBuilder.validation_warnings(
            issues=issues,
            correlation_id=correlation_id,
        )
        return self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        return self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per editing session and pass it to every log call.
    """
    return uuid4()
