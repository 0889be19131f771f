"""End-to-end tests for the auth endpoints."""

import pytest
from fastapi.testclient import TestClient

REGISTER_URL = "/api/v1/auth/register"
LOGIN_URL = "/api/v1/auth/login"
ME_URL = "/api/v1/auth/me"
LOGOUT_URL = "/api/v1/auth/logout"

VALID_REGISTRATION = {
    "name": "Alice",
    "email": "a@b.com",
    "phoneNumber": "1234567890",
    "password": "password123",
}


def register(client: TestClient, **overrides):
    return client.post(REGISTER_URL, json={**VALID_REGISTRATION, **overrides})


def assert_error(response, status_code: int, error_type: str, message: str | None = None):
    assert response.status_code == status_code
    body = response.json()
    assert body["success"] is False
    assert body["error"]["statusCode"] == status_code
    assert body["error"]["type"] == error_type
    assert "timestamp" in body["error"]
    assert "stack" not in body["error"]
    if message is not None:
        assert body["error"]["message"] == message


class TestRegister:
    def test_success(self, client):
        response = register(client)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert isinstance(body["token"], str)
        assert set(body.keys()) == {"success", "token"}

    def test_sets_token_cookie(self, client):
        response = register(client)
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"token={response.json()['token']};")
        assert "HttpOnly" in cookie

    @pytest.mark.parametrize("field", ["name", "email", "phoneNumber", "password"])
    def test_missing_field(self, client, user_repository, field):
        """Any missing field is a 400 before anything is stored."""
        payload = {key: value for key, value in VALID_REGISTRATION.items() if key != field}
        response = client.post(REGISTER_URL, json=payload)

        assert_error(response, 400, "ValidationError", "Please provide all required fields")
        assert user_repository.create_calls == 0

    def test_empty_body(self, client):
        response = client.post(REGISTER_URL)
        assert_error(response, 400, "ValidationError", "Please provide all required fields")

    def test_malformed_json(self, client):
        response = client.post(
            REGISTER_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert_error(response, 400, "ValidationError")

    def test_same_email_twice(self, client):
        """The second registration of an email is rejected."""
        assert register(client).status_code == 201
        response = register(client, phoneNumber="0987654321")

        assert_error(response, 400, "ValidationError")
        assert "already registered" in response.json()["error"]["message"]

    def test_same_phone_twice(self, client):
        assert register(client).status_code == 201
        response = register(client, email="other@b.com")
        assert_error(response, 400, "ValidationError", "Phone number is already registered")

    def test_short_phone_number(self, client, user_repository):
        """Phone format is checked before any persistence write."""
        response = register(client, phoneNumber="12345")

        assert_error(response, 400, "ValidationError", "Please provide a valid phone number")
        assert user_repository.create_calls == 0

    def test_invalid_email(self, client):
        response = register(client, email="not-an-email")
        assert_error(response, 400, "ValidationError", "Please provide a valid email address")

    def test_short_password(self, client):
        response = register(client, password="short")
        assert_error(response, 400, "ValidationError", "Password must be at least 8 characters")

    def test_long_name(self, client):
        response = register(client, name="x" * 51)
        assert_error(response, 400, "ValidationError", "Name cannot be more than 50 characters")


class TestLogin:
    def test_success(self, client):
        register(client)
        response = client.post(LOGIN_URL, json={"email": "a@b.com", "password": "password123"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["token"]

    def test_missing_password(self, client):
        response = client.post(LOGIN_URL, json={"email": "a@b.com"})
        assert_error(response, 400, "ValidationError", "Please provide an email and password")

    def test_wrong_password_and_unknown_email(self, client):
        """Both failures are indistinguishable to the client."""
        register(client)
        wrong_password = client.post(LOGIN_URL, json={"email": "a@b.com", "password": "wrong-password"})
        unknown_email = client.post(LOGIN_URL, json={"email": "x@b.com", "password": "password123"})

        for response in (wrong_password, unknown_email):
            assert_error(response, 401, "NotAuthenticated", "Invalid credentials")
            assert response.headers["www-authenticate"] == "Bearer"

        first = wrong_password.json()["error"]
        second = unknown_email.json()["error"]
        first.pop("timestamp")
        second.pop("timestamp")
        assert first == second


class TestMe:
    def test_register_then_me(self, auth_app):
        """The token from registration identifies the stored user."""
        client = TestClient(auth_app)
        token = register(client).json()["token"]

        response = TestClient(auth_app).get(ME_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["email"] == "a@b.com"
        assert data["name"] == "Alice"
        assert data["phoneNumber"] == "1234567890"
        assert not any("password" in key.lower() for key in data)

    def test_cookie_is_accepted(self, client):
        """The cookie set at registration authenticates follow-up requests."""
        register(client)
        response = client.get(ME_URL)
        assert response.status_code == 200
        assert response.json()["data"]["email"] == "a@b.com"

    def test_without_token(self, client):
        response = client.get(ME_URL)
        assert_error(response, 401, "NotAuthenticated", "Not authorized to access this route")

    def test_deleted_user(self, client, user_repository):
        token = register(client).json()["token"]
        user = user_repository.get_by_email("a@b.com")
        user_repository.delete(user.id)

        response = client.get(ME_URL, headers={"Authorization": f"Bearer {token}"})
        assert_error(response, 404, "NotFound")


class TestLogout:
    def test_logout_clears_cookie(self, client):
        token = register(client).json()["token"]

        response = client.get(LOGOUT_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {}}
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("token=none;")
        assert "HttpOnly" in cookie
        assert "samesite=strict" in cookie.lower()

    def test_cookie_no_longer_authenticates(self, client):
        register(client)
        assert client.get(LOGOUT_URL).status_code == 200

        response = client.get(ME_URL)
        assert_error(response, 401, "NotAuthenticated", "Not authorized to access this route")

    def test_token_still_valid_after_logout(self, client):
        """Logout does not revoke tokens."""
        token = register(client).json()["token"]
        client.get(LOGOUT_URL, headers={"Authorization": f"Bearer {token}"})

        response = client.get(ME_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200

    def test_requires_authentication(self, client):
        response = client.get(LOGOUT_URL)
        assert_error(response, 401, "NotAuthenticated")
