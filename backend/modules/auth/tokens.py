"""
Bearer token issuance and verification.

Tokens are stateless HS256 JWTs carrying the user's public attributes.
They cannot be revoked: logout only asks the client to drop its cookie.

The signing secret must be non-empty; that is a startup precondition
checked by the application lifespan, not here.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ExpiredTokenError, InvalidTokenError
from .models import TokenClaims, TokenResponse, User, EmptyDataResponse

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
TOKEN_COOKIE = "token"
# Value written by logout; treated as "no token" by the auth gate
CLEARED_COOKIE_VALUE = "none"
LOGOUT_COOKIE_TTL = timedelta(seconds=10)
DEFAULT_TOKEN_TTL = timedelta(days=7)


class TokenIssuer:
    """
    Mints and verifies bearer tokens.

    Configuration is passed in explicitly so that the secret is never read
    from ambient state.
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta = DEFAULT_TOKEN_TTL,
        cookie_secure: bool = False,
    ):
        self._secret = secret
        self._expires_in = expires_in
        self._cookie_secure = cookie_secure

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, user: User, issued_at: Optional[datetime] = None) -> str:
        """
        Sign a token for a user.

        Args:
            user: The user the token identifies
            issued_at: Issuance time (defaults to now)

        Returns:
            Encoded JWT string valid for exactly ``expires_in``
        """
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "phoneNumber": user.phone_number,
            "iat": issued_at,
            "exp": issued_at + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry and return the claims.

        Raises:
            ExpiredTokenError: If the token is past its expiry
            InvalidTokenError: If the token is malformed, tampered with or
                missing required claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
            return TokenClaims.model_validate(payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except (jwt.InvalidTokenError, PydanticValidationError) as e:
            # Reason goes to the log only; clients get a fixed message
            logger.debug("Rejected token: %s", type(e).__name__)
            raise InvalidTokenError()

    def respond_with_token(self, user: User, status_code: int) -> JSONResponse:
        """
        Build the ``{success, token}`` response for a freshly authenticated user.

        The password hash is dropped before anything touches the user. The
        same token is set as an HttpOnly cookie so that logout's cookie
        clearing has something to clear.
        """
        user = user.without_password()
        token = self.issue(user)
        response = JSONResponse(
            status_code=status_code,
            content=TokenResponse(token=token).model_dump(),
        )
        response.set_cookie(
            TOKEN_COOKIE,
            token,
            max_age=int(self._expires_in.total_seconds()),
            httponly=True,
            secure=self._cookie_secure,
            samesite="strict",
        )
        return response

    def respond_with_logout(self) -> JSONResponse:
        """
        Build the logout response.

        Issued tokens stay valid until they expire; the client is only told
        to discard its cookie.
        """
        response = JSONResponse(status_code=200, content=EmptyDataResponse().model_dump())
        response.set_cookie(
            TOKEN_COOKIE,
            CLEARED_COOKIE_VALUE,
            expires=datetime.now(timezone.utc) + LOGOUT_COOKIE_TTL,
            httponly=True,
            secure=self._cookie_secure,
            samesite="strict",
        )
        return response
