from datetime import datetime

import pytest
import pytz

from core.exceptions import (
    ForbiddenError,
    InvalidInputError,
    UnauthenticatedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from core.security import decode_access_token
from helpers import claims_for
from models.user import UserModel
from utils.identifiers import new_id


def test_register_defaults_to_user_role_and_hashes_password(user_manager, db_session):
    user = user_manager.register("alice", "a@x.com", "pw")

    stored = db_session.query(UserModel).filter(UserModel.user_id == user.user_id).one()
    assert stored.role == "user"
    assert stored.password_hash != "pw"
    assert stored.suspended_until is None


def test_register_duplicate_email_conflicts(user_manager, db_session):
    user_manager.register("alice", "a@x.com", "pw")

    with pytest.raises(UserAlreadyExistsError):
        user_manager.register("alice again", "a@x.com", "other")

    assert db_session.query(UserModel).filter(UserModel.email == "a@x.com").count() == 1


def test_email_is_case_sensitive_as_stored(user_manager):
    user_manager.register("alice", "a@x.com", "pw")
    user_manager.register("alice", "A@x.com", "pw")


@pytest.mark.parametrize(
    "username,email,password",
    [("", "a@x.com", "pw"), ("  ", "a@x.com", "pw"), ("alice", "", "pw"), ("alice", "a@x.com", "")],
)
def test_register_rejects_empty_fields(user_manager, username, email, password):
    with pytest.raises(InvalidInputError):
        user_manager.register(username, email, password)


def test_login_issues_token_with_identity(user_manager):
    user = user_manager.register("alice", "a@x.com", "pw")

    token, logged_in = user_manager.login("a@x.com", "pw")
    claims = decode_access_token(token)

    assert logged_in.user_id == user.user_id
    assert claims.user_id == user.user_id
    assert claims.email == "a@x.com"
    assert claims.role == "user"


def test_wrong_password_and_unknown_email_fail_identically(user_manager):
    user_manager.register("alice", "a@x.com", "pw")

    with pytest.raises(UnauthenticatedError) as wrong_password:
        user_manager.login("a@x.com", "nope")
    with pytest.raises(UnauthenticatedError) as unknown_email:
        user_manager.login("b@x.com", "pw")

    assert wrong_password.value.message == unknown_email.value.message


def test_list_users_requires_admin(user_manager, make_user):
    moderator = make_user("moderator")

    with pytest.raises(UnauthenticatedError):
        user_manager.list_users(None)
    with pytest.raises(ForbiddenError):
        user_manager.list_users(claims_for(moderator))


def test_list_users_newest_first_without_secret(user_manager, make_user, db_session):
    admin = make_user("admin")
    older = make_user()
    db_session.query(UserModel).filter(UserModel.user_id == older.user_id).update(
        {"created_at": datetime(2020, 1, 1, tzinfo=pytz.utc).isoformat()}
    )
    db_session.commit()

    users = user_manager.list_users(claims_for(admin))

    assert [u.user_id for u in users] == [admin.user_id, older.user_id]
    dumped = users[0].model_dump(by_alias=True)
    assert "passwordHash" not in dumped
    assert "password_hash" not in dumped


def test_set_role(user_manager, make_user):
    admin = make_user("admin")
    target = make_user()

    user_manager.set_role(claims_for(admin), target.user_id, "moderator")

    assert user_manager.get_user_by_id(target.user_id).role == "moderator"


def test_set_role_rejects_unknown_role(user_manager, make_user):
    admin = make_user("admin")
    target = make_user()

    with pytest.raises(InvalidInputError):
        user_manager.set_role(claims_for(admin), target.user_id, "superuser")

    assert user_manager.get_user_by_id(target.user_id).role == "user"


def test_set_role_unknown_user(user_manager, make_user):
    admin = make_user("admin")

    with pytest.raises(UserNotFoundError):
        user_manager.set_role(claims_for(admin), new_id(), "moderator")
    with pytest.raises(InvalidInputError):
        user_manager.set_role(claims_for(admin), "not-an-id", "moderator")


def test_set_role_requires_admin(user_manager, make_user):
    moderator = make_user("moderator")
    target = make_user()

    with pytest.raises(ForbiddenError):
        user_manager.set_role(claims_for(moderator), target.user_id, "admin")


def test_suspend_user_sets_future_timestamp(user_manager, make_user):
    target = make_user()

    until = user_manager.suspend_user(target.user_id, 3)

    delta = datetime.fromisoformat(until) - datetime.now(pytz.utc)
    assert 2.9 < delta.total_seconds() / 86400 <= 3
    assert user_manager.get_user_by_id(target.user_id).suspended_until == until


@pytest.mark.parametrize("days", [0, -1, None, True, 1.5])
def test_suspend_user_requires_positive_integer(user_manager, make_user, days):
    target = make_user()

    with pytest.raises(InvalidInputError):
        user_manager.suspend_user(target.user_id, days)


@pytest.mark.parametrize("days", [10**6, 10**9])
def test_suspend_user_rejects_days_past_calendar_range(user_manager, make_user, days):
    target = make_user()

    with pytest.raises(InvalidInputError):
        user_manager.suspend_user(target.user_id, days)

    assert user_manager.get_user_by_id(target.user_id).suspended_until is None
