"""
Configuration management for the time-tracking system.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timebudget.calculators.budget_calculator import BudgetThresholds


class TimeBudgetConfig(BaseSettings):
    """Configuration settings for the time-tracking system."""

    # Backend API Configuration
    api_base_url: str = Field(default="http://localhost:3000", alias="API_BASE_URL")
    api_token: Optional[str] = Field(default=None, alias="API_TOKEN")
    request_timeout: float = Field(default=30.0, gt=0, alias="REQUEST_TIMEOUT")

    # Import Configuration
    calendar_phase_code: str = Field(default="agenda", alias="CALENDAR_PHASE_CODE")

    # Budget status thresholds (fraction of budget spent)
    budget_under_threshold: float = Field(default=0.75, alias="BUDGET_UNDER_THRESHOLD")
    budget_on_track_threshold: float = Field(
        default=0.90, alias="BUDGET_ON_TRACK_THRESHOLD"
    )
    budget_over_threshold: float = Field(default=1.00, alias="BUDGET_OVER_THRESHOLD")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="standard", alias="LOG_FORMAT")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v):
        """Ensure the base URL is absolute and has no trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("calendar_phase_code")
    @classmethod
    def validate_calendar_phase_code(cls, v):
        if not v.strip():
            raise ValueError("Calendar phase code cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        valid_formats = ["standard", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @model_validator(mode="after")
    def validate_thresholds(self):
        """Ensure budget thresholds are ascending."""
        self.get_budget_thresholds()
        return self

    def get_budget_thresholds(self) -> BudgetThresholds:
        """Get the budget status bands as a ``BudgetThresholds`` value."""
        return BudgetThresholds(
            under_budget=self.budget_under_threshold,
            on_track=self.budget_on_track_threshold,
            over_budget=self.budget_over_threshold,
        )


def load_config(env_file: Optional[str] = None) -> TimeBudgetConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return TimeBudgetConfig()


# Global configuration instance
_config: Optional[TimeBudgetConfig] = None


def get_config() -> TimeBudgetConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> TimeBudgetConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
