"""Authentication routes.

This module handles HTTP endpoints for registration and login, and provides
the bearer-token dependencies the other routers use.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import API_PREFIX
from core.dependencies import UserManagerDep
from core.exceptions import UnauthenticatedError
from core.security import decode_access_token
from schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{API_PREFIX}/auth", tags=["Auth"])

# Missing or non-Bearer headers are reported as 401 by the dependencies
# below rather than by FastAPI itself
security = HTTPBearer(auto_error=False)


def get_optional_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenClaims]:
    """Claims of the caller, or None for anonymous requests.

    A token that is present but invalid is still rejected.

    Raises:
        UnauthenticatedError: If a bearer token is present but invalid.
    """
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)


def get_current_claims(
    claims: Optional[TokenClaims] = Depends(get_optional_claims),
) -> TokenClaims:
    """Claims of the caller; the request must carry a valid bearer token.

    Raises:
        UnauthenticatedError: If the token is missing, malformed or expired.
    """
    if claims is None:
        raise UnauthenticatedError()
    return claims


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(
    req: RegisterRequest,
    user_manager: UserManagerDep,
) -> RegisterResponse:
    """Register a new user with the default 'user' role.

    Args:
        req: Registration request with username, email and password.
        user_manager: Injected UserManager instance.

    Returns:
        RegisterResponse with the new user id.
    """
    user = user_manager.register(
        username=req.username,
        email=req.email,
        password=req.password,
    )
    return RegisterResponse(user_id=user.user_id)


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep,
) -> LoginResponse:
    """Login with email and password.

    Args:
        req: Login request with email and password.
        user_manager: Injected UserManager instance.

    Returns:
        LoginResponse with a one-hour token and basic user information.
    """
    token, user = user_manager.login(req.email, req.password)
    return user_manager.build_login_response(token, user)


@router.get("/me", response_model=TokenClaims, summary="Current token claims")
def me(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
    return claims
