"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from explicit settings.

The container lives on ``app.state.container``; tests replace individual
services through ``app.dependency_overrides``.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from fastapi import Request

from shared.config import Settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.auth.passwords import PasswordHasher
    from modules.auth.tokens import TokenIssuer
    from modules.products.interfaces import IProductService, IImageStore
    from modules.products.repository import ProductRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access, so an app
    whose services are all overridden never opens a database client.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._db: "Client | None" = None
        self._password_hasher: "PasswordHasher | None" = None
        self._user_repository: "IUserRepository | None" = None
        self._token_issuer: "TokenIssuer | None" = None
        self._auth_service: "IAuthService | None" = None
        self._product_repository: "ProductRepository | None" = None
        self._image_store: "IImageStore | None" = None
        self._product_service: "IProductService | None" = None

    @property
    def db(self) -> "Client":
        """Get the Supabase service-role client."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client(self.settings)
        return self._db

    @property
    def password_hasher(self) -> "PasswordHasher":
        """Get the password hasher."""
        if self._password_hasher is None:
            from modules.auth.passwords import PasswordHasher
            self._password_hasher = PasswordHasher(rounds=self.settings.bcrypt_rounds)
        return self._password_hasher

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            self._user_repository = UserRepository(self.db, self.password_hasher)
        return self._user_repository

    @property
    def token_issuer(self) -> "TokenIssuer":
        """Get the token issuer."""
        if self._token_issuer is None:
            from modules.auth.tokens import TokenIssuer
            self._token_issuer = TokenIssuer(
                secret=self.settings.jwt_secret,
                expires_in=timedelta(days=self.settings.jwt_expire_days),
                cookie_secure=self.settings.auth_cookie_secure,
            )
        return self._token_issuer

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.user_repository, self.password_hasher)
        return self._auth_service

    @property
    def product_repository(self) -> "ProductRepository":
        """Get the product repository instance."""
        if self._product_repository is None:
            from modules.products.repository import ProductRepository
            self._product_repository = ProductRepository(self.db)
        return self._product_repository

    @property
    def image_store(self) -> "IImageStore":
        """Get the hosted image store."""
        if self._image_store is None:
            from modules.products.storage import SupabaseImageStore
            self._image_store = SupabaseImageStore(
                self.db,
                bucket=self.settings.product_image_bucket,
            )
        return self._image_store

    @property
    def products(self) -> "IProductService":
        """Get the product service instance."""
        if self._product_service is None:
            from modules.products.service import ProductService
            self._product_service = ProductService(
                repository=self.product_repository,
                images=self.image_store,
                max_image_bytes=self.settings.max_image_bytes,
                max_images=self.settings.max_images_per_request,
            )
        return self._product_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._db = None
        self._password_hasher = None
        self._user_repository = None
        self._token_issuer = None
        self._auth_service = None
        self._product_repository = None
        self._image_store = None
        self._product_service = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_container(request: Request) -> ServiceContainer:
    """Get the container of the application serving this request."""
    return request.app.state.container


def get_auth_service(request: Request) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container(request).auth


def get_token_issuer(request: Request) -> "TokenIssuer":
    """FastAPI dependency for the token issuer."""
    return get_container(request).token_issuer


def get_product_service(request: Request) -> "IProductService":
    """FastAPI dependency for product service."""
    return get_container(request).products
