"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(default=["http://localhost:3000"])
    allow_credentials: bool = True
    allow_methods: list[str] = Field(default=["GET", "POST", "PUT", "DELETE"])
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path (disabled when unset)")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )

    @field_validator("file", mode="before")
    @classmethod
    def _empty_file_is_none(cls, value):
        return value or None


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./storefront.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class SessionConfig(BaseModel):
    """Session token and session cookie configuration."""

    signing_secret: str | None = Field(
        default=None, description="Secret for signing session tokens"
    )
    algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256", description="Session token signing algorithm"
    )
    issuer: str = Field(default="storefront-api", description="Token issuer claim")
    ttl_seconds: int = Field(
        default=7 * 24 * 3600, gt=0, description="Token and cookie lifetime (7 days)"
    )
    clock_skew: int = Field(
        default=0, ge=0, description="Expiry tolerance in seconds"
    )
    cookie_name: str = Field(default="token", description="Session cookie name")
    cookie_secure: bool = Field(default=True, description="Send cookie over HTTPS only")
    cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="none", description="SameSite cookie attribute"
    )
    cookie_domain: str | None = Field(default=None, description="Cookie domain")
    cookie_path: str = Field(default="/", description="Cookie path")

    @field_validator("signing_secret", "cookie_domain", mode="before")
    @classmethod
    def _empty_is_none(cls, value):
        return value or None

    @model_validator(mode="after")
    def _samesite_none_requires_secure(self) -> SessionConfig:
        if self.cookie_samesite == "none" and not self.cookie_secure:
            raise ValueError("cookie_samesite 'none' requires cookie_secure")
        return self


class PasswordConfig(BaseModel):
    """Password hashing configuration."""

    bcrypt_rounds: int = Field(
        default=10, ge=4, le=31, description="bcrypt cost factor (log2 rounds)"
    )


class CatalogConfig(BaseModel):
    """Product listing and seeding configuration."""

    default_page_size: int = Field(default=8, gt=0, description="Default page limit")
    max_page_size: int = Field(default=100, gt=0, description="Largest accepted limit")
    latest_default_limit: int = Field(
        default=10, gt=0, description="Default size of the latest-products list"
    )
    max_search_length: int = Field(
        default=100, gt=0, description="Longest accepted search string"
    )
    seed_count: int = Field(default=50, ge=0, description="Products generated by a reseed")
    seed_on_startup: bool = Field(
        default=True, description="Seed the catalog at startup when it is empty"
    )
    seed_file: str | None = Field(
        default=None, description="JSON file with products for the startup seed"
    )

    @field_validator("seed_file", mode="before")
    @classmethod
    def _empty_seed_file_is_none(cls, value):
        return value or None

    @model_validator(mode="after")
    def _defaults_within_bounds(self) -> CatalogConfig:
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        if self.latest_default_limit > self.max_page_size:
            raise ValueError("latest_default_limit cannot exceed max_page_size")
        return self


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=5000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    session: SessionConfig = Field(
        default_factory=SessionConfig, description="Session token configuration"
    )
    password: PasswordConfig = Field(
        default_factory=PasswordConfig, description="Password hashing configuration"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog configuration"
    )
