"""User schema definitions.

``User`` is the internal record including the password hash; ``PublicUser``
is the only shape that ever leaves the API.
"""

from datetime import datetime
from typing import Optional

import pytz
from pydantic import Field

from schemas.base import CamelModel


class PublicUser(CamelModel):
    user_id: str = Field(alias="id")
    username: str
    email: str
    role: str = "user"
    suspended_until: Optional[str] = None
    created_at: str = Field(
        default_factory=lambda: datetime.now(pytz.utc).isoformat()
    )


class User(PublicUser):
    password_hash: str

    def to_public(self) -> PublicUser:
        return PublicUser.model_validate(self.model_dump(exclude={"password_hash"}))


class UpdateRoleRequest(CamelModel):
    role: str


class MessageResponse(CamelModel):
    message: str
