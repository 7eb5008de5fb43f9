"""
dimstep Configuration Management
"""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="DIMSTEP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Device Configuration
    sysfs_root: Path = Field(
        default=Path("/sys/class"),
        description="Directory holding the backlight and leds device classes",
    )

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level when --verbose is not given"
    )
    json_logs: bool = Field(default=False, description="Emit JSON formatted logs")
    log_file: Optional[Path] = Field(default=None, description="Also log JSON to this file")

    # Stepping Configuration
    min_brightness: int = Field(default=0, ge=0, description="Default brightness floor")
    default_exponent: float = Field(
        default=2.0, gt=0, description="Parabolic exponent used when no mode is selected"
    )
    max_bisection_iterations: int = Field(
        default=64, ge=1, description="Iteration cap for the blend curve search"
    )

    # Batch Configuration
    batch_policy: Literal["continue", "abort"] = Field(
        default="continue",
        description="What --all does when one device fails",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
