"""Diagnostics configuration for driver error handling."""

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiagnosticsConfig(BaseSettings):
    """Settings for error normalization, metrics and retries."""

    model_config = SettingsConfigDict(
        env_prefix="DBCOMMON_",
        env_file=".env",
        extra="ignore",
    )

    # Message settings
    include_params: bool = Field(
        default=True,
        description="Render bound parameter values into exception messages",
    )

    # Metrics settings
    metrics_enabled: bool = Field(
        default=True,
        description="Send exception and retry metrics to DogStatsD",
    )
    statsd_host: str = Field(
        default="localhost",
        description="DogStatsD agent host",
    )
    statsd_port: int = Field(
        default=8125,
        ge=1,
        le=65535,
        description="DogStatsD agent port",
    )
    metrics_namespace: str = Field(
        default="dbcommon",
        description="Namespace prefixed to every metric name",
    )

    # Retry settings
    retry_max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for retryable driver errors",
    )
    retry_min_wait: float = Field(
        default=0.1,
        ge=0,
        description="Minimum wait between attempts in seconds",
    )
    retry_max_wait: float = Field(
        default=2.0,
        gt=0,
        description="Maximum wait between attempts in seconds",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Environment name for metrics tagging",
    )
    service_name: str = Field(
        default="unknown",
        description="Service name for metrics tagging",
    )

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() in ("production", "prod")


# Global instance
_diagnostics_config: DiagnosticsConfig | None = None


def get_diagnostics_config() -> DiagnosticsConfig:
    """Get or create diagnostics configuration."""
    global _diagnostics_config
    if _diagnostics_config is None:
        _diagnostics_config = DiagnosticsConfig()
    return _diagnostics_config
