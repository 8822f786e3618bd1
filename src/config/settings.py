"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    """Tax and pricing configuration."""

    model_config = SettingsConfigDict(env_prefix="PRICING_")

    default_tax_rate: float = Field(default=20.0, ge=0)  # percent
    currency: str = "EUR"


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "orderdesk.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class CartSettings(BaseSettings):
    """Cart persistence configuration."""

    model_config = SettingsConfigDict(env_prefix="CART_")

    key_prefix: str = "cart"

    def slot_key(self, user_id: str) -> str:
        return f"{self.key_prefix}:{user_id}"


class ProvisioningSettings(BaseSettings):
    """User-provisioning endpoint configuration."""

    model_config = SettingsConfigDict(env_prefix="PROVISIONING_")

    endpoint_url: str = "http://localhost:5001/createTeamMember"
    api_key: str | None = None
    timeout: float = 30.0
    min_password_length: int = 6
    max_retries: int = Field(default=3, ge=1)  # connection failures only
    retry_delay: float = 0.5  # seconds


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Header carrying the signed-in user id from the auth gateway
    user_header: str = "X-User-Id"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "OrderDesk"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    cart: CartSettings = Field(default_factory=CartSettings)
    provisioning: ProvisioningSettings = Field(default_factory=ProvisioningSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


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
