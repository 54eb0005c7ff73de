"""
Application configuration using Pydantic Settings.

Loads configuration from VERIFY_SONAR_* environment variables and .env file.
"""

from typing import Any

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from verify_sonar.shared.domain.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="VERIFY_SONAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="production", description="Environment (development/production)")
    log_level: str = Field(default="WARNING", description="Logging level")

    # IDE bridge discovery
    host: str = Field(default="localhost", description="Host the IDE bridge listens on")
    port_start: int = Field(default=64120, ge=1, le=65535, description="First candidate bridge port")
    port_end: int = Field(default=64130, ge=1, le=65535, description="Last candidate bridge port (inclusive)")

    # Timeouts (seconds)
    status_timeout: float = Field(default=0.5, description="Status check timeout per port")
    request_timeout: float = Field(default=60.0, description="Analysis request timeout")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @property
    def port_range(self) -> range:
        """Candidate ports, inclusive of port_end."""
        return range(self.port_start, self.port_end + 1)

    @model_validator(mode="after")
    def _validate_bridge_settings(self) -> "Settings":
        """Fail fast on an unusable port range or timeout."""
        if self.port_start > self.port_end:
            raise ValueError(
                f"port_start ({self.port_start}) must not be greater than port_end ({self.port_end})"
            )
        if self.status_timeout <= 0 or self.request_timeout <= 0:
            raise ValueError("Timeouts must be positive")
        return self


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings from the environment, with explicit overrides on top.

    None-valued overrides are ignored so CLI options left unset fall back to
    the environment.

    Raises:
        ConfigurationError: If the resulting settings are invalid
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        messages = "; ".join(error["msg"] for error in e.errors())
        raise ConfigurationError(f"Invalid configuration: {messages}") from e

