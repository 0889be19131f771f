"""
Centralized configuration for the Storefront backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., JWT_*, SUPABASE_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront API"
    app_version: str = "0.1.0"
    environment: str = "production"  # "development" discloses stack traces
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Frontend URL (added to CORS origins)
    frontend_url: str = "http://localhost:5173"

    # Auth
    jwt_secret: str = ""
    jwt_expire_days: int = 7
    auth_cookie_secure: bool = False
    bcrypt_rounds: int = 12

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # Direct Postgres URL, used by run_migrations.py

    # Product images (Supabase Storage)
    product_image_bucket: str = "product-images"
    max_image_bytes: int = 5 * 1024 * 1024
    max_images_per_request: int = 5

    @property
    def is_development(self) -> bool:
        """Whether stack traces may be disclosed in error responses."""
        return self.environment.lower() == "development"

    @property
    def allowed_origins(self) -> list[str]:
        """CORS origins including the configured frontend URL."""
        origins = list(self.cors_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url)
        return origins


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
