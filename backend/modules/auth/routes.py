"""
Auth API endpoints.

Registration and login answer with ``{success, token}``; the current-user
and logout endpoints sit behind the auth gate.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_service, get_token_issuer
from api.middleware.auth import get_current_user
from api.models.errors import ErrorEnvelope
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    UserResponse,
    EmptyDataResponse,
)
from .tokens import TokenIssuer

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope, "description": "Invalid input"},
    401: {"model": ErrorEnvelope, "description": "Not authenticated"},
}


@router.post("/register", response_model=TokenResponse, status_code=201, responses=ERROR_RESPONSES)
async def register(
    payload: Optional[RegisterRequest] = None,
    service: IAuthService = Depends(get_auth_service),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> JSONResponse:
    """
    Register a new user.

    Returns a bearer token valid for 7 days.
    """
    user = await service.register(payload or RegisterRequest())
    return issuer.respond_with_token(user, 201)


@router.post("/login", response_model=TokenResponse, responses=ERROR_RESPONSES)
async def login(
    payload: Optional[LoginRequest] = None,
    service: IAuthService = Depends(get_auth_service),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> JSONResponse:
    """
    Log a user in with email and password.
    """
    user = await service.login(payload or LoginRequest())
    return issuer.respond_with_token(user, 200)


@router.get("/me", response_model=UserResponse, responses=ERROR_RESPONSES)
async def get_me(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Get the current user's stored profile.

    Requires authentication.
    """
    user = await service.get_current_user(identity)
    return UserResponse(data=user.to_public())


@router.get("/logout", response_model=EmptyDataResponse, responses=ERROR_RESPONSES)
async def logout(
    identity: AuthenticatedUser = Depends(get_current_user),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> JSONResponse:
    """
    Log out by expiring the token cookie.

    Issued tokens remain valid until they expire.
    """
    return issuer.respond_with_logout()
