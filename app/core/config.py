"""Application configuration using pydantic-settings."""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = "local"
    app_name: str = "vatcheck-api"
    allowed_origins: str = "*"
    log_level: str = "INFO"

    # VAT validation
    vat_default_eu_mode: bool = Field(False, validation_alias="VAT_DEFAULT_EU_MODE")
    # Company registry (VIES) lookup is not wired in; these fill vat_details on success
    vat_registry_placeholder_name: Optional[str] = Field(
        None, validation_alias="VAT_REGISTRY_PLACEHOLDER_NAME"
    )
    vat_registry_placeholder_address: Optional[str] = Field(
        None, validation_alias="VAT_REGISTRY_PLACEHOLDER_ADDRESS"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Uppercase LOG_LEVEL and reject unknown level names."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v!r}")
        return level

    @property
    def allowed_origins_list(self) -> list[str]:
        """Get allowed origins as a list."""
        if self.allowed_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",")]


settings = Settings()
