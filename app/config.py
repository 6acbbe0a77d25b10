"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="AppSuite", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/appsuite",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="/api", description="API route prefix")
    api_title: str = Field(
        default="AppSuite API", description="API documentation title"
    )
    api_description: str = Field(
        default="Scheduling, invoicing, marketplace, finance, journaling, "
        "shopping and recipe services behind one REST API",
        description="API documentation description",
    )

    # Auth settings
    jwt_secret: str = Field(
        default="dev-change-this-secret", description="Secret used to sign JWTs"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=15, ge=1, description="Access token lifetime in minutes"
    )
    refresh_token_expire_days: int = Field(
        default=30, ge=1, description="Refresh token lifetime in days"
    )
    bcrypt_rounds: int = Field(
        default=12, ge=4, le=31, description="bcrypt work factor"
    )

    # Marketplace
    default_currency: str = Field(
        default="usd", min_length=3, max_length=3, description="Payment currency"
    )

    # Invoicing
    invoice_prefix: str = Field(default="INV", description="Invoice number prefix")
    invoice_separator: str = Field(default="-", description="Invoice number separator")
    invoice_number_padding: int = Field(
        default=4, ge=1, le=10, description="Zero padding of the invoice sequence"
    )
    invoice_include_year: bool = Field(
        default=True, description="Include the issue year in invoice numbers"
    )
    invoice_due_days: int = Field(
        default=30, ge=0, description="Default payment term in days"
    )
    invoice_reminder_days: int = Field(
        default=7, ge=0, description="Days before due date to raise a reminder"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()
