"""
Settings and configuration for the Availability Service.
"""

from services.common.logging_config import setup_service_logging
from services.common.settings import BaseSettings, Field, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    maximize_optional_attendees: bool = Field(
        False,
        description=(
            "When no slot suits every attendee, try the largest group of "
            "optional attendees before falling back to mandatory attendees only"
        ),
        env="AVAILABILITY_MAXIMIZE_OPTIONAL_ATTENDEES",
    )

    # Logging configuration
    log_level: str = Field(
        "INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        env="LOG_LEVEL",
    )
    log_format: str = Field(
        "json",
        description="Log format (json or text)",
        env="LOG_FORMAT",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_logging(settings: Settings | None = None) -> None:
    """Set up centralized logging for processes embedding the availability service."""
    settings = settings or get_settings()
    setup_service_logging(
        service_name="availability",
        log_level=settings.log_level,
        log_format=settings.log_format,
    )
