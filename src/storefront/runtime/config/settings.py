from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.storefront.runtime.config.config_data import (
    AppConfig,
    CORSConfig,
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
    SessionConfig,
)


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files.

    Used to build the configuration when no config.yaml is present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = Field(
        default="development", validation_alias="APP_ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    port: int = Field(default=5000, validation_alias="PORT")

    database_url: str = Field(
        default="sqlite:///./storefront.db", validation_alias="DATABASE_URL"
    )
    session_signing_secret: str | None = Field(
        default=None, validation_alias="SESSION_SIGNING_SECRET"
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"], validation_alias="CORS_ORIGINS"
    )

    def to_config(self) -> ConfigData:
        """Build a full configuration, keeping defaults for everything not set here."""
        return ConfigData(
            app=AppConfig(
                environment=self.environment,
                port=self.port,
                cors=CORSConfig(origins=self.cors_origins),
            ),
            logging=LoggingConfig(level=self.log_level),
            database=DatabaseConfig(url=self.database_url),
            session=SessionConfig(signing_secret=self.session_signing_secret),
        )
