"""Tests for token issuance and verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from modules.auth.exceptions import ExpiredTokenError, InvalidTokenError
from modules.auth.models import User
from modules.auth.tokens import TokenIssuer, TOKEN_COOKIE, CLEARED_COOKIE_VALUE

from tests.helpers import TEST_JWT_SECRET, create_test_token


@pytest.fixture
def issuer():
    return TokenIssuer(secret=TEST_JWT_SECRET)


@pytest.fixture
def user():
    return User(
        id="user-1",
        name="Alice",
        email="a@b.com",
        phone_number="1234567890",
        password_hash="$2b$04$notarealhash",
    )


class TestIssue:
    def test_claims(self, issuer, user):
        """Tokens carry the public user attributes and nothing else."""
        token = issuer.issue(user)
        payload = jwt.decode(token, TEST_JWT_SECRET, algorithms=["HS256"])

        assert payload["id"] == "user-1"
        assert payload["email"] == "a@b.com"
        assert payload["name"] == "Alice"
        assert payload["phoneNumber"] == "1234567890"
        assert set(payload.keys()) == {"id", "email", "name", "phoneNumber", "iat", "exp"}

    def test_valid_for_exactly_seven_days(self, issuer, user):
        token = issuer.issue(user)
        payload = jwt.decode(token, TEST_JWT_SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60

    def test_signed_with_hs256(self, issuer, user):
        header = jwt.get_unverified_header(issuer.issue(user))
        assert header["alg"] == "HS256"


class TestVerify:
    def test_round_trip(self, issuer, user):
        claims = issuer.verify(issuer.issue(user))
        assert claims.id == "user-1"
        assert claims.phone_number == "1234567890"

    def test_accepted_just_before_expiry(self, issuer, user):
        """A token issued 6d23h59m ago is still valid."""
        issued_at = datetime.now(timezone.utc) - timedelta(days=6, hours=23, minutes=59)
        claims = issuer.verify(issuer.issue(user, issued_at=issued_at))
        assert claims.email == "a@b.com"

    def test_rejected_just_after_expiry(self, issuer, user):
        """A token issued 7d0h0m1s ago has expired."""
        issued_at = datetime.now(timezone.utc) - timedelta(days=7, seconds=1)
        with pytest.raises(ExpiredTokenError) as exc_info:
            issuer.verify(issuer.issue(user, issued_at=issued_at))
        assert exc_info.value.message == "Authentication token has expired"
        assert exc_info.value.status_code == 401

    def test_expired_test_token(self, issuer):
        with pytest.raises(ExpiredTokenError):
            issuer.verify(create_test_token(expired=True))

    def test_wrong_secret(self, issuer):
        token = create_test_token(secret="another-secret-of-sufficient-length-0123")
        with pytest.raises(InvalidTokenError) as exc_info:
            issuer.verify(token)
        assert exc_info.value.message == "Invalid authentication token"

    def test_garbage(self, issuer):
        with pytest.raises(InvalidTokenError):
            issuer.verify("not.a.token")

    def test_missing_claims(self, issuer):
        """A correctly signed token without the user claims is rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "x", "iat": now, "exp": now + timedelta(hours=1)},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            issuer.verify(token)

    def test_missing_expiry(self, issuer):
        token = jwt.encode(
            {"id": "1", "email": "a@b.com", "name": "A", "phoneNumber": "1234567890", "iat": 0},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            issuer.verify(token)

    def test_error_does_not_leak_token_or_secret(self, issuer):
        token = create_test_token(secret="another-secret-of-sufficient-length-0123")
        with pytest.raises(InvalidTokenError) as exc_info:
            issuer.verify(token)
        rendered = str(exc_info.value.to_dict())
        assert token not in rendered
        assert TEST_JWT_SECRET not in rendered


class TestResponses:
    def test_respond_with_token(self, issuer, user):
        response = issuer.respond_with_token(user, 201)

        assert response.status_code == 201
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{TOKEN_COOKIE}=")
        assert "HttpOnly" in cookie
        assert "samesite=strict" in cookie.lower()
        assert b"passwordHash" not in response.body
        assert b"password_hash" not in response.body

    def test_respond_with_logout(self, issuer):
        response = issuer.respond_with_logout()

        assert response.status_code == 200
        assert response.body == b'{"success":true,"data":{}}'
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{TOKEN_COOKIE}={CLEARED_COOKIE_VALUE};")
        assert "HttpOnly" in cookie
