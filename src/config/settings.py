"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataSettings(BaseSettings):
    """Data provider configuration."""

    model_config = SettingsConfigDict(env_prefix="DATA_")

    mode: Literal["demo", "remote"] = "demo"
    api_url: str = "https://inventario.pcmejia.com/api"
    timeout: float = 15.0

    # Snapshot refresh (remote mode only)
    poll_interval_seconds: float = 10.0

    # Demo dataset
    demo_seed: int = 42

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class KPISettings(BaseSettings):
    """Thresholds used by the analytics engine."""

    model_config = SettingsConfigDict(env_prefix="KPI_")

    window_days: int = Field(default=30, gt=0)
    dead_stock_days: int = 90
    stagnant_days: int = 30
    stockout_quantity: float = 5
    itr_target: float = Field(default=0.5, gt=0)
    weeks_of_supply_cap: float = 52
    site_risk_limit: int = 5

    # Inventory listing thresholds
    low_stock_quantity: float = 50

    # Tool alerts
    maintenance_soon_days: int = 15
    warranty_expiring_days: int = 30


class LLMSettings(BaseSettings):
    """LLM provider configuration."""

    model_config = SettingsConfigDict(env_prefix="LLM_")

    provider: Literal["ollama"] = "ollama"
    model_name: str = "llama3.1:8b"
    host: str = "http://localhost:11434"
    timeout: int = 120
    max_tokens: int = 2048
    temperature: float = 0.2

    # Circuit breaker settings
    failure_threshold: int = 3
    cooldown_seconds: int = 60

    # Retry settings
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_multiplier: float = 2.0

    # Startup settings
    warmup_on_start: bool = False


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Obra Inventory Analytics"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # Per-logger overrides, e.g. LOG_LEVELS='{"src.infrastructure.providers": "DEBUG"}'
    log_levels: dict[str, str] = Field(
        default_factory=lambda: {
            "httpx": "WARNING",
            "httpcore": "WARNING",
            "uvicorn.access": "WARNING",
        }
    )

    # Sub-settings
    data: DataSettings = Field(default_factory=DataSettings)
    kpi: KPISettings = Field(default_factory=KPISettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    api: APISettings = Field(default_factory=APISettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
