"""User management utilities.

This module provides the credential store and everything built on it:
registration, login with token issuance, role administration and
suspensions.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import ACCESS_TOKEN_EXPIRE_SECONDS, DEFAULT_ROLE, ROLES
from core import security
from core.authorization import require_admin
from core.exceptions import (
    InvalidInputError,
    UnauthenticatedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from models.user import UserModel
from schemas.auth import LoginResponse, TokenClaims
from schemas.user import PublicUser, User
from utils.converters import model_to_user, user_to_model
from utils.identifiers import new_id, validate_id

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def register(self, username: str, email: str, password: str) -> User:
        """Create a new user with the default role.

        Args:
            username: Display name, not required to be unique.
            email: Unique email address, compared as stored.
            password: Plain text password; only its hash is kept.

        Returns:
            Created User object.

        Raises:
            InvalidInputError: If any field is missing or empty.
            UserAlreadyExistsError: If the email is already registered.
        """
        if not username or not username.strip():
            raise InvalidInputError("username is required")
        if not email or not email.strip():
            raise InvalidInputError("email is required")
        if not password:
            raise InvalidInputError("password is required")

        if self._get_model_by_email(email) is not None:
            raise UserAlreadyExistsError()

        user = User(
            user_id=new_id(),
            username=username.strip(),
            email=email,
            password_hash=security.hash_password(password),
            role=DEFAULT_ROLE,
        )

        # The unique index on email catches a concurrent registration that
        # passed the check above
        try:
            self.db.add(user_to_model(user))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError() from e

        logger.info("Registered user %s", user.user_id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Check credentials and return the matching user.

        Raises:
            UnauthenticatedError: If the email is unknown or the password
                does not match. Both cases are indistinguishable.
        """
        model = self._get_model_by_email(email)
        if model is None or not security.verify_password(password, model.password_hash):
            raise UnauthenticatedError(INVALID_CREDENTIALS)
        return model_to_user(model)

    def login(self, email: str, password: str) -> Tuple[str, User]:
        """Authenticate and issue a one-hour access token.

        Returns:
            Tuple of (encoded token, authenticated user).
        """
        user = self.authenticate(email, password)
        token = security.create_access_token(
            user_id=user.user_id, email=user.email, role=user.role
        )
        logger.info("User %s logged in", user.user_id)
        return token, user

    def build_login_response(self, token: str, user: User) -> LoginResponse:
        return LoginResponse(
            token=token,
            expires_in=ACCESS_TOKEN_EXPIRE_SECONDS,
            user_id=user.user_id,
            username=user.username,
            email=user.email,
            role=user.role,
        )

    def get_user_by_id(self, user_id: str) -> User:
        """Get a user by user ID.

        Raises:
            InvalidInputError: If the id is malformed.
            UserNotFoundError: If no such user exists.
        """
        return model_to_user(self._get_model(user_id))

    def list_users(self, claims: Optional[TokenClaims]) -> List[PublicUser]:
        """List all users, newest first, without password hashes.

        Raises:
            UnauthenticatedError: If no claims are given.
            ForbiddenError: If the caller is not an admin.
        """
        require_admin(claims)
        models = self.db.query(UserModel).order_by(UserModel.created_at.desc()).all()
        return [model_to_user(m).to_public() for m in models]

    def set_role(self, claims: Optional[TokenClaims], user_id: str, role: str) -> None:
        """Change a user's role.

        Raises:
            UnauthenticatedError: If no claims are given.
            ForbiddenError: If the caller is not an admin.
            InvalidInputError: If the role or the id is invalid.
            UserNotFoundError: If no such user exists.
        """
        require_admin(claims)
        if role not in ROLES:
            raise InvalidInputError(
                f"Invalid role: {role}. Must be one of: {', '.join(ROLES)}."
            )
        model = self._get_model(user_id)
        model.role = role
        self.db.commit()
        logger.info("User %s role set to %s by %s", model.user_id, role, claims.user_id)

    def suspend_user(self, user_id: str, days: int, commit: bool = True) -> str:
        """Suspend a user for a number of days from now.

        Args:
            user_id: User to suspend.
            days: Positive number of days.
            commit: Set to False to leave the change in the caller's
                transaction.

        Returns:
            The ISO timestamp the suspension lasts until.

        Raises:
            InvalidInputError: If days is not a positive integer or is too
                large to represent as a date.
            UserNotFoundError: If no such user exists.
        """
        if isinstance(days, bool) or not isinstance(days, int) or days < 1:
            raise InvalidInputError("suspendDays must be a positive integer")
        try:
            until = datetime.now(pytz.utc) + timedelta(days=days)
        except OverflowError as e:
            raise InvalidInputError("suspendDays is out of range") from e
        model = self._get_model(user_id)
        model.suspended_until = until.isoformat()
        if commit:
            self.db.commit()
        logger.info("User %s suspended until %s", model.user_id, model.suspended_until)
        return model.suspended_until

    def _get_model_by_email(self, email: str) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.email == email).first()

    def _get_model(self, user_id: str) -> UserModel:
        user_id = validate_id(user_id, "user")
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if model is None:
            raise UserNotFoundError(user_id)
        return model
