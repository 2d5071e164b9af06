"""Configuration management for ZONEWATCH.

Loads runtime settings from environment variables using Pydantic.
Every variable is prefixed with ``ZONEWATCH_`` and may also live in a
local ``.env`` file.

Usage:
    from zonewatch.config import settings

    print(settings.log_level)
    print(settings.degenerate_policy)
"""

import math

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEGENERATE_POLICIES = {"zone_c", "raise"}


class Settings(BaseSettings):
    """ZONEWATCH configuration from environment variables.

    Loads from .env file automatically. Validates on instantiation.
    Nothing is required: every field has a default matching the
    conventional control-chart setup.

    Attributes:
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR)
        collapse: Collapse rule hits into contiguous ranges by default (CLI)
        degenerate_policy: What to do when σ = 0 ('zone_c' or 'raise')
        zscore_threshold: |z| above which a point is a z-score outlier
        modified_zscore_threshold: |0.6745·(x − median)/MAD| cut-off
        iqr_factor: Multiplier on the interquartile range for the IQR fence
        normality_alpha: Significance level for normality tests
    """

    model_config = SettingsConfigDict(
        env_prefix="ZONEWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars
    )

    # System Settings
    log_level: str = Field(default="INFO", description="Logging level")
    collapse: bool = Field(
        default=False,
        description="Collapse overlapping rule hits into ranges by default",
    )
    degenerate_policy: str = Field(
        default="zone_c",
        description="Zero-variance handling: 'zone_c' labels every point C, 'raise' fails",
    )

    # Outlier filters
    zscore_threshold: float = Field(default=3.0, gt=0, description="Z-score cut-off")
    modified_zscore_threshold: float = Field(
        default=3.5,
        gt=0,
        description="Modified z-score cut-off (Iglewicz & Hoaglin)",
    )
    iqr_factor: float = Field(default=1.5, gt=0, description="IQR fence multiplier")

    # Normality tests
    normality_alpha: float = Field(
        default=0.05,
        gt=0,
        lt=1,
        description="Significance level for normality tests",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid:
            raise ValueError(f"log_level must be one of {valid}, got {v}")
        return v_upper

    @field_validator("degenerate_policy")
    @classmethod
    def validate_degenerate_policy(cls, v: str) -> str:
        """Ensure degenerate-sample policy is known."""
        v_lower = v.lower()
        if v_lower not in DEGENERATE_POLICIES:
            raise ValueError(
                f"degenerate_policy must be 'zone_c' or 'raise', got '{v}'"
            )
        return v_lower

    @field_validator("zscore_threshold", "modified_zscore_threshold", "iqr_factor")
    @classmethod
    def validate_finite(cls, v: float, info) -> float:
        """Reject inf thresholds (pydantic already rejects NaN via gt=0)."""
        if not math.isfinite(v):
            raise ValueError(f"{info.field_name} must be finite, got {v}")
        return v


# Global settings instance, loaded once at import
settings = Settings()
