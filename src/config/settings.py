"""
Configuration Management for the Season Projector

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All tunable numbers live here, not in the engine.
Tax rates are single-year estimates (2024, single filer / non-resident),
so they are the first thing someone will want to adjust without
touching code.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TaxSettings(BaseSettings):
    """Federal and payroll tax estimates."""
    
    model_config = SettingsConfigDict(
        env_prefix="TAX_",
        extra="ignore"
    )
    
    federal_bracket_threshold: float = Field(
        default=11600.0,
        ge=0.0,
        description="Upper bound of the lowest federal bracket (USD per season)"
    )
    federal_lower_rate: float = Field(
        default=0.10,
        ge=0.0,
        le=1.0,
        description="Federal rate up to the bracket threshold"
    )
    federal_upper_rate: float = Field(
        default=0.12,
        ge=0.0,
        le=1.0,
        description="Federal rate above the bracket threshold"
    )
    fica_rate: float = Field(
        default=0.0765,
        ge=0.0,
        le=1.0,
        description="Social Security + Medicare combined rate"
    )


class ProjectionSettings(BaseSettings):
    """Payroll and calendar conventions used by the projection."""
    
    model_config = SettingsConfigDict(
        env_prefix="PROJECTION_",
        extra="ignore"
    )
    
    overtime_threshold_hours: float = Field(
        default=40.0,
        ge=0.0,
        description="Weekly hours after which overtime applies"
    )
    overtime_multiplier: float = Field(
        default=1.5,
        ge=1.0,
        description="Wage multiplier for overtime hours"
    )
    weeks_per_month: float = Field(
        default=4.0,
        gt=0.0,
        description="Weeks in a 'month' for the monthly profit figure"
    )
    # Only used for advisory validation, never by the engine
    max_weekly_hours: float = Field(
        default=168.0,
        gt=0.0,
        description="Hours above this per job are flagged as suspicious"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (human-readable console logs)"
    )
    audit_enabled: bool = Field(
        default=True,
        description="Write audit events to the structured log"
    )


class Settings(BaseSettings):
    """
    Root settings container.
    
    Aggregates all sub-settings for easy access.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    @property
    def tax(self) -> TaxSettings:
        return TaxSettings()
    
    @property
    def projection(self) -> ProjectionSettings:
        return ProjectionSettings()
    
    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.
    
    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for failures.
    """
    results = {}
    
    settings = get_settings()
    
    for name in ("tax", "projection", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)
    
    return results
