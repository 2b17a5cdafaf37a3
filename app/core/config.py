"""
Application configuration.
Values come from environment variables or a local .env file. An empty
DATABASE_URL selects the in-memory storage backend, an empty
STRIPE_API_KEY disables the payment bridge.
"""
import logging
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Storage backend; leave empty to run on the in-memory store
    DATABASE_URL: str = ""

    # Auth
    JWT_SECRET_KEY: str = ""
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 1 day

    # Stripe Payments
    STRIPE_API_KEY: str = ""
    STRIPE_PUBLISHABLE_KEY: str = ""
    PAYMENT_CURRENCY: str = "zar"

    # Default accounts seeded on startup
    SEED_DEFAULT_USERS: bool = True
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    class Config:
        env_file = ".env"

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL rewritten for the async drivers SQLAlchemy expects."""
        url = self.DATABASE_URL
        # Hosting providers hand out postgres:// but SQLAlchemy wants an explicit driver
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("sqlite:///"):
            url = url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return url


settings = Settings()

# Validate critical security settings
if not settings.JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY is not set. Export it or add it to the .env file. "
        "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
    )
