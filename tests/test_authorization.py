import pytest

from core import authorization
from core.exceptions import ForbiddenError, UnauthenticatedError
from schemas.auth import TokenClaims
from schemas.report import Report


def _claims(user_id: str, role: str) -> TokenClaims:
    return TokenClaims(user_id=user_id, email=f"{user_id}@x.com", role=role, issued_at=0, expires_at=0)


REPORT = Report(
    report_id="r1",
    reporter_id="owner",
    title="Bug",
    description="d",
    type="bug",
    created_at="2024-01-01T00:00:00+00:00",
    updated_at="2024-01-01T00:00:00+00:00",
)


@pytest.mark.parametrize("role", ["user", "moderator", "admin"])
def test_owner_can_mutate_regardless_of_role(role):
    assert authorization.can_mutate_report(_claims("owner", role), REPORT)


@pytest.mark.parametrize("role", ["moderator", "admin"])
def test_privileged_roles_can_mutate_any_report(role):
    assert authorization.can_mutate_report(_claims("someone-else", role), REPORT)


def test_other_plain_user_cannot_mutate():
    assert not authorization.can_mutate_report(_claims("someone-else", "user"), REPORT)


@pytest.mark.parametrize(
    "role,moderate,administer",
    [("user", False, False), ("moderator", True, False), ("admin", True, True)],
)
def test_role_checks(role, moderate, administer):
    claims = _claims("u", role)
    assert authorization.can_moderate(claims) is moderate
    assert authorization.can_administer(claims) is administer


def test_missing_claims_are_unauthenticated_not_forbidden():
    with pytest.raises(UnauthenticatedError):
        authorization.require_moderator(None)
    with pytest.raises(UnauthenticatedError):
        authorization.require_admin(None)
    with pytest.raises(UnauthenticatedError):
        authorization.require_mutate_report(None, REPORT)


def test_insufficient_claims_are_forbidden():
    with pytest.raises(ForbiddenError):
        authorization.require_moderator(_claims("u", "user"))
    with pytest.raises(ForbiddenError):
        authorization.require_admin(_claims("u", "moderator"))
    with pytest.raises(ForbiddenError):
        authorization.require_mutate_report(_claims("u", "user"), REPORT)
