"""Authorization decisions for reports and administration.

The ``can_*`` functions are pure predicates over verified claims. The
``require_*`` helpers turn them into errors: no claims at all is
``UnauthenticatedError``; claims that fall short are ``ForbiddenError``.
"""

from typing import Optional

from config import PRIVILEGED_ROLES
from core.exceptions import ForbiddenError, UnauthenticatedError
from schemas.auth import TokenClaims
from schemas.report import Report


def can_mutate_report(claims: TokenClaims, report: Report) -> bool:
    """True for privileged roles and for the report's own reporter."""
    return claims.role in PRIVILEGED_ROLES or claims.user_id == report.reporter_id


def can_moderate(claims: TokenClaims) -> bool:
    return claims.role in PRIVILEGED_ROLES


def can_administer(claims: TokenClaims) -> bool:
    return claims.role == "admin"


def require_authenticated(claims: Optional[TokenClaims]) -> TokenClaims:
    if claims is None:
        raise UnauthenticatedError()
    return claims


def require_mutate_report(claims: Optional[TokenClaims], report: Report) -> None:
    if not can_mutate_report(require_authenticated(claims), report):
        raise ForbiddenError("You do not have permission to modify this report")


def require_moderator(claims: Optional[TokenClaims]) -> None:
    if not can_moderate(require_authenticated(claims)):
        raise ForbiddenError("Moderator or admin role required")


def require_admin(claims: Optional[TokenClaims]) -> None:
    if not can_administer(require_authenticated(claims)):
        raise ForbiddenError("Admin role required")
