"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

from snowtrack.shared.constants import (
    AggregationStrategy,
    RUN_START_DROP_M,
    RUN_EXIT_CLIMB_M,
    RUN_IDLE_SAMPLES,
    RUN_MIN_VERTICAL_DROP_M,
    MIN_SESSION_SAMPLES,
)


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./snowtrack.db",
        description="Database connection URL for completed sessions"
    )

    # === Live stats ===
    aggregation_strategy: AggregationStrategy = Field(
        default=AggregationStrategy.RECOMPUTE,
        description="How distance/elevation totals are produced per sample"
    )

    # === Run detection ===
    run_start_drop_m: float = Field(default=RUN_START_DROP_M, gt=0)
    run_exit_climb_m: float = Field(default=RUN_EXIT_CLIMB_M, gt=0)
    run_idle_samples: int = Field(default=RUN_IDLE_SAMPLES, gt=0)
    run_min_vertical_drop_m: float = Field(default=RUN_MIN_VERTICAL_DROP_M, ge=0)

    # === Session ===
    min_session_samples: int = Field(
        default=MIN_SESSION_SAMPLES,
        ge=1,
        description="Routes shorter than this are rejected on stop"
    )

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
