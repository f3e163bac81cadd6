# hootspot/config.py
"""
Centralized configuration with validation.

Uses pydantic-settings to load and validate environment variables.
Every field has a default so the highlighting engine can run without
any environment set up.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hootspot.constants import BubbleDefaults, ColorDefaults


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )
    CORS_ORIGINS: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)",
    )
    LOG_JSON: bool = Field(
        default=True,
        description="Emit single-line JSON logs instead of human-readable lines",
    )

    # Colors
    COLOR_SATURATION: float = Field(
        default=ColorDefaults.SATURATION,
        description="Saturation (0-1) for golden-angle pattern colors",
    )
    COLOR_LIGHTNESS: float = Field(
        default=ColorDefaults.LIGHTNESS,
        description="Lightness (0-1) for golden-angle pattern colors",
    )

    # Bubble chart
    BUBBLE_BASELINE_WIDTH: int = Field(
        default=BubbleDefaults.BASELINE_WIDTH,
        gt=0,
        description="Container width (px) at which bubbles are drawn unscaled",
    )
    LAYOUT_ITERATIONS: int = Field(
        default=BubbleDefaults.ITERATIONS,
        description="Number of force relaxation ticks",
    )
    COLLISION_BUFFER: float = Field(
        default=BubbleDefaults.COLLISION_BUFFER,
        ge=0,
        description="Extra px added to each radius for collision avoidance",
    )
    HULL_PADDING: float = Field(
        default=BubbleDefaults.HULL_PADDING,
        ge=0,
        description="Padding (px) between bubbles and their category hull",
    )
    HULL_SAMPLES: int = Field(
        default=BubbleDefaults.HULL_SAMPLES,
        ge=3,
        description="Points sampled around each bubble when building hulls",
    )
    LAYOUT_SEED: int | None = Field(
        default=None,
        description="Fixed seed for reproducible layouts. Empty = random per call.",
    )

    @field_validator("COLOR_SATURATION", "COLOR_LIGHTNESS")
    @classmethod
    def check_unit_interval(cls, v: float) -> float:
        """HSL components are expressed as fractions."""
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"must be between 0 and 1, got {v}")
        return v

    @field_validator("LAYOUT_ITERATIONS")
    @classmethod
    def check_iterations(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"LAYOUT_ITERATIONS must be positive, got {v}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{v}'")
        return level

    @property
    def debug_checks(self) -> bool:
        """Internal invariant checks run outside production or at DEBUG level."""
        return self.ENVIRONMENT != "production" or self.LOG_LEVEL == "DEBUG"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
