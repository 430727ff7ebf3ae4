"""
Configuration module for the booking availability service.
Loads environment variables and provides typed configuration.
"""

from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Constraint table hours are interpreted in this zone
    timezone: str = "America/Los_Angeles"

    # Availability engine
    slot_duration_minutes: int = 30
    max_range_days: int = 92
    default_min_duration: Optional[int] = None

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "development"  # development, staging, production

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def get_timezone(self) -> ZoneInfo:
        """
        Resolve the configured local timezone.

        Returns:
            ZoneInfo for the configured timezone name

        Raises:
            ValueError: If the timezone name is unknown
        """
        try:
            return ZoneInfo(self.timezone)
        except (KeyError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {self.timezone}") from e

    def validate_all_required(self) -> None:
        """
        Validate settings that cannot be checked by type alone.

        Raises:
            ValueError: If any setting is out of range
        """
        problems = []

        if self.slot_duration_minutes <= 0 or 1440 % self.slot_duration_minutes:
            problems.append("slot_duration_minutes must evenly divide a day")

        if self.max_range_days < 1:
            problems.append("max_range_days must be at least 1")

        if self.default_min_duration is not None and self.default_min_duration < 1:
            problems.append("default_min_duration must be positive")

        try:
            self.get_timezone()
        except ValueError as e:
            problems.append(str(e))

        if problems:
            raise ValueError(
                f"Invalid configuration: {'; '.join(problems)}. "
                f"Please check your .env file."
            )


# Global settings instance
settings = Settings()
