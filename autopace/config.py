"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
Every value can be overridden with an AUTOPACE_* environment variable
or a .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Historical blending ===
    historical_blend_weight: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Weight of the pace observed at the same miles of the reference run"
    )
    similar_gradient_blend_weight: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Weight of the pace observed on similar-gradient windows"
    )

    # === Power zones ===
    ftp_estimation_multiplier: float = Field(
        default=1.45,
        gt=0.0,
        description="FTP = average race power x multiplier (race run at ~69% FTP)"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept 'debug', 'Info', ... as well as 'DEBUG'."""
        return v.strip().upper()

    model_config = SettingsConfigDict(
        env_prefix="AUTOPACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
