"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, validator
from pathlib import Path

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")

    # API Configuration
    api_title: str = Field(default="SponsiWise Sponsorship Platform")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api/v1")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    frontend_base_url: str = Field(default="http://localhost:3000", description="Base URL for deep links")

    # Database
    database_url: str = Field(
        default=f"sqlite:///{BASE_DIR / 'sponsiwise.db'}",
        description="SQLAlchemy database URL"
    )

    # JWT Configuration
    jwt_secret_key: str = Field(default="development-secret-key-change-in-production", description="JWT secret key")
    jwt_algorithm: str = Field(default="HS256")
    jwt_access_token_expire_minutes: int = Field(default=30)

    # CORS
    cors_origins: str | List[str] = Field(
        default="http://localhost:3000,http://localhost:5173"
    )
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Pagination
    default_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    # Job queue
    queue_backend: str = Field(default="database", description="memory or database")
    job_attempts: int = Field(default=3, ge=1)
    job_backoff_delay_ms: int = Field(default=1000, ge=0)
    job_keep_completed: int = Field(default=100, ge=0)
    job_keep_failed: int = Field(default=200, ge=0)
    worker_poll_interval_seconds: float = Field(default=1.0, gt=0)
    job_timeout_seconds: float = Field(default=60.0, gt=0)
    # Active jobs whose lease is older than this were abandoned by a dead worker
    job_stall_timeout_seconds: float = Field(default=300.0, gt=0)
    run_workers_in_process: bool = Field(default=True)

    # Domain event bus
    event_bus_mode: str = Field(default="channel", description="channel or inline")

    # List view cache
    list_cache_ttl_seconds: int = Field(default=300)

    # Sentry (Optional)
    sentry_dsn: Optional[str] = Field(default=None)
    sentry_traces_sample_rate: float = Field(default=0.1)

    # Email Configuration
    email_transport: str = Field(default="smtp", description="smtp or log")
    smtp_host: Optional[str] = Field(default=None)
    smtp_port: int = Field(default=587)
    smtp_secure: bool = Field(default=False, description="Use implicit TLS (SMTPS)")
    smtp_user: Optional[str] = Field(default=None)
    smtp_password: Optional[str] = Field(default=None)
    email_from_name: str = Field(default="SponsiWise")
    email_from_address: str = Field(default="noreply@sponsiwise.com")

    @validator("cors_origins", pre=True)
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            if not v or v.strip() == "":
                return ["http://localhost:3000", "http://localhost:5173"]
            return [origin.strip() for origin in v.split(",")]
        elif v is None:
            return ["http://localhost:3000", "http://localhost:5173"]
        return v

    @validator("queue_backend")
    def validate_queue_backend(cls, v):
        """Only the in-memory and database backends exist."""
        if v not in ("memory", "database"):
            raise ValueError("queue_backend must be 'memory' or 'database'")
        return v

    @validator("event_bus_mode")
    def validate_event_bus_mode(cls, v):
        if v not in ("channel", "inline"):
            raise ValueError("event_bus_mode must be 'channel' or 'inline'")
        return v

    @validator("email_transport")
    def validate_email_transport(cls, v):
        if v not in ("smtp", "log"):
            raise ValueError("email_transport must be 'smtp' or 'log'")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def validate_environment(self) -> None:
        """Validate that all required environment variables are set."""
        required_vars = ["database_url", "jwt_secret_key"]
        if self.email_transport == "smtp":
            required_vars.append("smtp_host")

        missing_vars = []
        for var in required_vars:
            if not getattr(self, var, None):
                missing_vars.append(var.upper())

        if missing_vars:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing_vars)}"
            )

        if self.job_timeout_seconds >= self.job_stall_timeout_seconds:
            raise ValueError("JOB_TIMEOUT_SECONDS must be lower than JOB_STALL_TIMEOUT_SECONDS")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the application.
    """
    settings = Settings()

    # Validate environment in production
    if settings.is_production:
        settings.validate_environment()

    return settings


# Create a global settings instance
settings = get_settings()
