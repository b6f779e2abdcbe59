"""Application settings and configuration.

This module defines all configuration options for the Mingle API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a `.env` file.
    """

    # Application metadata
    app_name: str = Field(default="Mingle API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Token signing
    secret_key: str = Field(alias="TOKEN_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    # Tokens carry no expiry unless this is set.
    token_expire_minutes: int | None = Field(default=None, alias="TOKEN_EXPIRE_MINUTES")

    # Database configuration
    database_url: str = Field(default="sqlite:///./mingle.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    create_tables_on_startup: bool = Field(default=True, alias="CREATE_TABLES_ON_STARTUP")

    # Routing
    api_prefix: str = Field(default="/api", alias="API_PREFIX")

    # Post lifecycle
    default_expiration_hours: float = Field(default=24.0, gt=0, alias="DEFAULT_EXPIRATION_HOURS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]
