"""Form validation package."""

from src.validation.validator import ProjectionInputValidator

__all__ = ["ProjectionInputValidator"]
