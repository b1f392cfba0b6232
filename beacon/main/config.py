"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
Settings are resolved once at startup from environment variables, a .env
file and default values.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from beacon.domain.entities.errors import ConfigError
from beacon.shared import EnumEnvironment, EnumLogLevel


class ServiceSettings(BaseSettings):
    """Identity and address the service advertises to the registry."""

    name: str = Field(
        default="beacon-service",
        min_length=1,
        description="Service name, unique per registry",
    )
    host: str = Field(
        default="localhost", min_length=1, description="Host the service listens on"
    )
    port: int = Field(
        default=8080, ge=1, le=65535, description="Port the service listens on"
    )
    operations: List[str] = Field(
        default_factory=list, description="Operation names advertised to the registry"
    )
    metadata: Dict[str, Any] = Field(
        default_factory=dict, description="Free-form annotations for the registry"
    )
    framework: str = Field(default="FastAPI", description="Runtime framework")
    version: str = Field(default="1.0.0", description="Service version")

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_", case_sensitive=False, extra="ignore"
    )


class RegistrySettings(BaseSettings):
    """Registry server connection settings."""

    url: str = Field(
        default="http://localhost:8085",
        description="Registry server base URL",
    )
    request_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout for a single registry call"
    )

    model_config = SettingsConfigDict(
        env_prefix="REGISTRY_", case_sensitive=False, extra="ignore"
    )

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        parsed = urlsplit(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Malformed registry URL: {value!r}")
        return value


class RegistrationSettings(BaseSettings):
    """Registration and heartbeat behaviour."""

    enabled: bool = Field(
        default=True, description="Master switch for registration and heartbeats"
    )
    heartbeat_interval_seconds: int = Field(
        default=30,
        gt=0,
        description="Fixed rate at which heartbeats are sent",
        validation_alias=AliasChoices(
            "REGISTRATION_HEARTBEAT_INTERVAL_SECONDS", "HEARTBEAT_INTERVAL_SECONDS"
        ),
    )
    initial_heartbeat_delay_seconds: Optional[float] = Field(
        default=None,
        ge=0,
        description="Delay before the first heartbeat (defaults to one interval)",
    )
    shutdown_grace_seconds: float = Field(
        default=5.0,
        ge=0,
        description="How long stop waits for an in-flight heartbeat",
    )

    model_config = SettingsConfigDict(
        env_prefix="REGISTRATION_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    registration: RegistrationSettings = Field(default_factory=RegistrationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Resolve application settings.

    Raises:
        ConfigError: If any option is invalid. Defaults are never substituted
            for invalid values.
    """
    try:
        return AppSettings()
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid configuration: {exc.error_count()} error(s)",
            {"errors": exc.errors(include_url=False)},
        ) from exc
