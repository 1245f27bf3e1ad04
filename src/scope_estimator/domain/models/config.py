"""
Scope Estimator - Configuration Models (Pydantic v2)

Validated configuration classes for engine settings.
"""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EstimationConfig(BaseModel):
    """Feature estimation configuration."""

    model_config = ConfigDict(frozen=True)

    default_hourly_rate: float = Field(default=100.0, gt=0, description="Hourly rate (USD) when none is given")
    rounding_increment: float = Field(default=0.5, gt=0, description="Hours rounding increment")
    generic_optimistic: float = Field(default=4.0, ge=0, description="Generic baseline optimistic hours")
    generic_most_likely: float = Field(default=8.0, ge=0, description="Generic baseline most-likely hours")
    generic_pessimistic: float = Field(default=16.0, ge=0, description="Generic baseline pessimistic hours")
    analogy_strategy: Literal["edit_distance", "keyword"] = Field(
        default="edit_distance", description="Matcher used for unknown features"
    )
    analogy_min_score: float = Field(default=60.0, ge=0, le=100, description="Min analogy score (0-100)")

    @model_validator(mode="after")
    def validate_generic_baseline(self) -> "EstimationConfig":
        if not (self.generic_optimistic <= self.generic_most_likely <= self.generic_pessimistic):
            raise ValueError("Generic baseline must satisfy optimistic <= most_likely <= pessimistic")
        return self


class BufferConfig(BaseModel):
    """Project-level buffer configuration."""

    model_config = ConfigDict(frozen=True)

    discovery_hours: float = Field(default=8.0, ge=0, description="Discovery & Requirements flat hours")
    qa_ratio: float = Field(default=0.20, ge=0, le=1, description="QA & Testing share of feature hours")
    pm_ratio: float = Field(default=0.10, ge=0, le=1, description="Project Management share of feature hours")
    deployment_hours: float = Field(default=8.0, ge=0, description="Deployment & Launch flat hours")
    contingency_ratio: float = Field(default=0.10, ge=0, le=1, description="Contingency share of feature hours")


class RiskConfig(BaseModel):
    """Keyword tables for deriving risk signals from questionnaire text."""

    model_config = ConfigDict(frozen=True)

    ambiguity_keywords: tuple[str, ...] = (
        "tbd", "unclear", "not sure", "unsure", "undecided", "maybe",
        "to be defined", "to be determined", "vague", "open question",
    )
    new_technology_keywords: tuple[str, ...] = (
        "new technology", "new tech", "never used", "first time", "experimental",
        "blockchain", "machine learning", "ai", "llm", "ar", "vr", "iot",
    )
    external_dependency_keywords: tuple[str, ...] = (
        "third-party", "third party", "3rd party", "external api", "api",
        "integration", "integrations", "webhook", "stripe", "paypal", "vendor",
    )
    low_availability_keywords: tuple[str, ...] = (
        "limited availability", "hard to reach", "rarely available", "unavailable",
        "busy", "slow to respond", "out of office", "travelling", "traveling",
    )
    rush_keywords: tuple[str, ...] = ("asap", "urgent", "rush", "immediately", "yesterday")
    flexible_keywords: tuple[str, ...] = ("flexible", "no deadline", "no rush", "whenever")
    tight_max_weeks: float = Field(default=3.0, gt=0, description="Upper bound (weeks) treated as tight")
    flexible_min_weeks: float = Field(default=8.0, gt=0, description="Lower bound (weeks) treated as flexible")

    @field_validator(
        "ambiguity_keywords",
        "new_technology_keywords",
        "external_dependency_keywords",
        "low_availability_keywords",
        "rush_keywords",
        "flexible_keywords",
    )
    @classmethod
    def normalize_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Lowercase, trim and drop empty keywords."""
        return tuple(k.strip().lower() for k in v if k and k.strip())


class RuntimeConfig(BaseModel):
    """Batch execution configuration."""

    model_config = ConfigDict(frozen=True)

    max_workers: int = Field(default=4, ge=1, le=32, description="Max parallel workers for batch generation")


class AppConfig(BaseSettings):
    """
    Complete engine configuration.

    Can be loaded from environment variables or .env file
    (e.g. ESTIMATION__DEFAULT_HOURLY_RATE=120).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    estimation: EstimationConfig = Field(default_factory=EstimationConfig)
    buffers: BufferConfig = Field(default_factory=BufferConfig)
    risk: RiskConfig = Field(default_factory=RiskConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables."""
        return cls()

    @classmethod
    def for_testing(cls) -> "AppConfig":
        """
        Create configuration for testing.

        Ignores any .env file so tests see the documented defaults.
        """
        return cls(_env_file=None, runtime=RuntimeConfig(max_workers=2))
