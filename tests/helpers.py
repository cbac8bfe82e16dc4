"""Helpers shared by the test modules."""
from typing import Dict

from core.security import create_access_token
from schemas.auth import TokenClaims
from schemas.user import User


def claims_for(user: User) -> TokenClaims:
    return TokenClaims(
        user_id=user.user_id,
        email=user.email,
        role=user.role,
        issued_at=0,
        expires_at=0,
    )


def auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token(user_id=user.user_id, email=user.email, role=user.role)
    return {"Authorization": f"Bearer {token}"}
