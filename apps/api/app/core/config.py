"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Variables the session/OAuth layer needs before anyone can sign in
REQUIRED_AUTH_ENV = (
    "NEXTAUTH_URL",
    "NEXTAUTH_SECRET",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True

    # API
    api_prefix: str = "/api"
    project_name: str = "Storefront API"
    version: str = "0.1.0"

    # Database
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/storefront",
        pattern=r"^mongodb(\+srv)?://",
    )
    mongodb_db_name: str = "storefront"
    mongodb_timeout_ms: int = 5000

    # Authentication (NextAuth sessions + Google OAuth)
    nextauth_url: str = ""
    nextauth_secret: str = ""
    google_client_id: str = ""
    google_client_secret: str = ""

    # Public storefront URL (robots.txt, sitemap)
    next_public_app_url: str = "https://www.nirvaanaa.com"

    # Admin uploads
    invoice_upload_dir: str = "uploads/invoices"

    # Observability
    sentry_dsn: str = ""

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",  # Next.js storefront
    ]

    def missing_auth_env(self) -> list[str]:
        """Names of required auth variables that are unset or empty."""
        return [name for name in REQUIRED_AUTH_ENV if not getattr(self, name.lower())]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
