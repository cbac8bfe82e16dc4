"""Administration routes (admin role)."""

from typing import List

from fastapi import APIRouter, Depends

from api.routes.auth import get_current_claims
from config import API_PREFIX
from core.dependencies import UserManagerDep
from schemas.auth import TokenClaims
from schemas.user import MessageResponse, PublicUser, UpdateRoleRequest

router = APIRouter(prefix=f"{API_PREFIX}/admin", tags=["Admin"])


@router.get("/users", response_model=List[PublicUser], summary="List users")
def list_users(
    user_manager: UserManagerDep,
    claims: TokenClaims = Depends(get_current_claims),
) -> List[PublicUser]:
    return user_manager.list_users(claims)


@router.patch("/users/{user_id}/role", response_model=MessageResponse, summary="Change a user's role")
def update_user_role(
    user_id: str,
    req: UpdateRoleRequest,
    user_manager: UserManagerDep,
    claims: TokenClaims = Depends(get_current_claims),
) -> MessageResponse:
    user_manager.set_role(claims, user_id, req.role)
    return MessageResponse(message="Role updated")
