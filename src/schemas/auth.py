"""Authentication schema definitions."""

from pydantic import Field

from schemas.base import CamelModel


class TokenClaims(CamelModel):
    """Verified payload of a bearer token."""

    user_id: str = Field(description="Subject of the token (user id).")
    email: str = Field(description="Email of the subject at issuance.")
    role: str = Field(description="Role of the subject at issuance.")
    issued_at: int = Field(description="Issuance time, seconds since epoch.")
    expires_at: int = Field(description="Expiry time, seconds since epoch.")


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterResponse(CamelModel):
    message: str = "User registered successfully"
    user_id: str


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(CamelModel):
    token: str
    expires_in: int = Field(description="Token lifetime in seconds.")
    user_id: str
    username: str
    email: str
    role: str
