"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - siri_proxy_url has no default: an unset proxy is a reportable state, not an error at startup

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://cashbus:cashbus@db:5432/cashbus"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Identity service (hosted auth)
    identity_url: str = "http://localhost:54321"
    identity_service_key: str = "service-key-placeholder"
    identity_timeout_seconds: float = 10.0

    # SIRI real-time API (Ministry of Transportation)
    siri_proxy_url: str | None = None
    siri_api_url: str = "https://siri.motrealtime.co.il:8443/siri/sm/r"
    siri_requestor_ref: str = "CashBus"
    siri_timeout_seconds: float = 30.0

    # Stride open bus API
    stride_api_url: str = "https://open-bus-stride-api.hasadna.org.il"
    stride_timeout_seconds: float = 15.0

    # Notifications
    notification_webhook_url: str | None = None
    notification_timeout_seconds: float = 10.0
    admin_email: str = "admin@cashbus.co.il"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
