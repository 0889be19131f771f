"""
Bearer token authentication gate.

Verifies the inbound token and exposes the resulting identity to
downstream handlers. Failures are raised as NotAuthenticated errors and
rendered by the central error handlers; neither the secret nor the raw
token ever appears in them.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.models import TokenClaims
from modules.auth.tokens import TokenIssuer, TOKEN_COOKIE, CLEARED_COOKIE_VALUE
from shared.models import AuthenticatedUser

from ..dependencies import get_token_issuer

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """
    Find the token of a request.

    The Authorization header wins; the ``token`` cookie is the fallback.
    The value logout writes into the cookie counts as no token.
    """
    if credentials is not None and credentials.credentials:
        return credentials.credentials

    cookie = request.cookies.get(TOKEN_COOKIE)
    if cookie and cookie != CLEARED_COOKIE_VALUE:
        return cookie
    return None


def get_user_from_claims(claims: TokenClaims) -> AuthenticatedUser:
    """
    Convert token claims to AuthenticatedUser model.

    Args:
        claims: Verified token claims

    Returns:
        AuthenticatedUser instance
    """
    return AuthenticatedUser(
        id=claims.id,
        email=claims.email,
        name=claims.name,
        phone_number=claims.phone_number,
    )


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user. The identity is
    also attached to ``request.state.user``.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = extract_token(request, credentials)
    if token is None:
        raise MissingTokenError()

    user = get_user_from_claims(issuer.verify(token))
    request.state.user = user
    return user


# Type alias for cleaner route definitions
RequireAuth = Depends(get_current_user)
