"""
Data Models Package

This package contains all Pydantic models used by the season projector.
Everything that crosses the engine boundary conforms to these schemas.
"""

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

__all__ = [
    # Projection models
    "DEFAULT_SEASON_INPUT",
    "JobInput",
    "ProjectionInput",
    "ProjectionResult",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
