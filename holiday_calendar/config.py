"""Configuration management using Pydantic Settings."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HOLIDAY_CALENDAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Reference data
    data_dir: Path = DEFAULT_DATA_DIR
    supported_countries: list[str] = Field(default_factory=lambda: ["de", "at", "ch"])

    # Engine
    weekday_locale: Literal["de", "en", "fr", "it"] = "de"
    # Upper bound on the inclusive day span of a business-day query; None means unbounded
    max_business_day_span: Optional[int] = Field(default=None, gt=0)

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("supported_countries")
    @classmethod
    def _lowercase_countries(cls, value: list[str]) -> list[str]:
        return [code.strip().lower() for code in value if code.strip()]


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
