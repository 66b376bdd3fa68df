"""
Centralized Configuration System for KUALITAS

Type-safe engine defaults using Pydantic Settings.

Features:
- Environment variable binding with defaults (KUALITAS_* prefixes)
- Hierarchical configuration structure
- Test-friendly reload via reload_settings()
"""

import os
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


def _config(prefix: str = "") -> SettingsConfigDict:
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=".env" if not os.getenv("DOCKER_CONTAINER") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class AnalysisSettings(BaseSettings):
    """Analyzer defaults"""

    model_config = _config("KUALITAS_ANALYSIS_")

    tax_rate: float = Field(default=0.11, ge=0.0, le=1.0, description="PPN rate")
    outlier_threshold: float = Field(default=1.5, gt=0.0, description="IQR multiplier")
    similarity_threshold: float = Field(
        default=0.85, ge=0.0, le=1.0, description="Typo similarity threshold"
    )
    max_rows_analyze: int = Field(default=10000, ge=1, description="Row cap for analysis")
    typo_max_unique_values: int = Field(
        default=500, ge=3, description="Skip typo detection above this many distinct values"
    )
    max_issue_details: int = Field(
        default=100, ge=0, description="Issue details kept in the analysis result"
    )
    deep_analysis: bool = Field(default=True, description="Run the insight pass")
    detect_outliers: bool = Field(default=True, description="Run the outlier check")
    check_calculations: bool = Field(default=True, description="Run calculation checks")
    strict_email: bool = Field(
        default=False, description="Also validate emails with email-validator"
    )


class CleaningSettings(BaseSettings):
    """Cleaner defaults"""

    model_config = _config("KUALITAS_CLEANING_")

    tax_rate: float = Field(default=0.11, ge=0.0, le=1.0, description="PPN rate")
    date_format: str = Field(default="dd/MM/yyyy", description="Target date pattern")
    phone_format: str = Field(default="+62", description="+62 | e164 | international | national")
    case_type: str = Field(default="title", description="title | upper | lower")
    similarity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)

    @field_validator("case_type", "phone_format", mode="before")
    @classmethod
    def lower_choice(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class CacheSettings(BaseSettings):
    """Analysis result cache settings"""

    model_config = _config("KUALITAS_CACHE_")

    analysis_ttl_seconds: float = Field(
        default=1800, gt=0, description="How long a cached analysis stays valid"
    )


class LoggingSettings(BaseSettings):
    """Logging settings"""

    model_config = _config("KUALITAS_LOG_")

    level: str = Field(default="INFO", description="Root log level")

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class ApplicationSettings(BaseSettings):
    """Main application settings - aggregates all other settings"""

    model_config = _config("KUALITAS_")

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Nested settings
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    cleaning: CleaningSettings = Field(default_factory=CleaningSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def is_test(self) -> bool:
        """Check if running in test mode"""
        return self.environment == Environment.TEST


settings = ApplicationSettings()


def get_settings() -> ApplicationSettings:
    """
    Get the global settings instance

    Returns:
        ApplicationSettings: The global settings instance
    """
    return settings


def reload_settings() -> ApplicationSettings:
    """
    Reload settings from environment (useful for testing)

    Returns:
        ApplicationSettings: New settings instance with reloaded values
    """
    global settings
    settings = ApplicationSettings()
    return settings
