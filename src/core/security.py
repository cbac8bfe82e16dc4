"""Password hashing and bearer token handling.

Passwords are hashed with bcrypt; tokens are HS256 JWTs signed with the
server-held secret from ``JWT_SECRET_KEY``. Tokens are stateless: validity
depends only on the signature and the ``exp`` claim.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
import pytz
from jose import JWTError, jwt

from config import (
    ACCESS_TOKEN_EXPIRE_SECONDS,
    BCRYPT_ROUNDS,
    JWT_ALGORITHM,
    require_jwt_secret,
)
from core.exceptions import UnauthenticatedError
from schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password using bcrypt with a per-hash random salt.

    Args:
        password: Plain text password.

    Returns:
        Hashed password (bcrypt hash string).
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash.

    Args:
        plain_password: Plain text password to verify.
        hashed_password: Bcrypt hash string to verify against.

    Returns:
        True if password matches, False otherwise (including corrupt hashes).
    """
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password), hashed_password.encode("utf-8")
        )
    except ValueError:
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(
    user_id: str,
    email: str,
    role: str,
    issued_at: Optional[datetime] = None,
) -> str:
    """Create a signed access token.

    Args:
        user_id: Subject of the token.
        email: Email of the subject.
        role: Role of the subject at issuance.
        issued_at: Issuance time; defaults to now.

    Returns:
        Encoded JWT token string, valid for ACCESS_TOKEN_EXPIRE_SECONDS.

    Raises:
        ConfigurationError: If the signing secret is not configured.
    """
    secret = require_jwt_secret()
    issued_at = issued_at or datetime.now(pytz.utc)
    expire = issued_at + timedelta(seconds=ACCESS_TOKEN_EXPIRE_SECONDS)
    to_encode = {
        "sub": user_id,
        "email": email,
        "role": role,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(to_encode, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: Optional[str]) -> TokenClaims:
    """Verify a token and return its claims.

    Every failure (missing, malformed, expired, bad signature, incomplete
    claims) produces the same generic error.

    Args:
        token: Encoded JWT token string.

    Returns:
        Verified TokenClaims.

    Raises:
        UnauthenticatedError: If the token is not acceptable.
        ConfigurationError: If the signing secret is not configured.
    """
    if not token:
        raise UnauthenticatedError()
    secret = require_jwt_secret()
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.info("Rejected access token: %s", type(e).__name__)
        raise UnauthenticatedError() from e

    if not payload.get("sub") or not payload.get("role") or "exp" not in payload:
        raise UnauthenticatedError()

    return TokenClaims(
        user_id=payload["sub"],
        email=payload.get("email", ""),
        role=payload["role"],
        issued_at=payload.get("iat", 0),
        expires_at=payload["exp"],
    )
