"""
Shared test fixtures.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service
from modules.auth.passwords import PasswordHasher
from modules.auth.service import AuthService
from shared.config import Settings

from tests.helpers import InMemoryUserRepository, create_test_token, make_settings


@pytest.fixture
def settings() -> Settings:
    """Production-like settings with a test signing secret."""
    return make_settings()


@pytest.fixture
def app(settings):
    """Create a fresh app for each test."""
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    """In-memory stand-in for the users table."""
    return InMemoryUserRepository()


@pytest.fixture
def auth_app(app, user_repository):
    """App whose auth service runs against the in-memory repository."""
    service = AuthService(user_repository, PasswordHasher(rounds=4))
    app.dependency_overrides[get_auth_service] = lambda: service
    return app


@pytest.fixture
def client(auth_app) -> TestClient:
    """Test client for the auth-enabled app."""
    return TestClient(auth_app)


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
