"""User schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from studyhub.schemas.base import BaseSchema


class UserRead(BaseSchema):
    """Schema for reading user data."""

    id: UUID
    email: str
    name: str | None
    access: bool
    role: str
    is_admin: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None


class CurrentUserRead(UserRead):
    """The signed-in user, with what they are allowed to do."""

    capabilities: list[str]


class AccessUpdate(BaseModel):
    """Set a user's content access flag."""

    access: bool


class AdminUpdate(BaseModel):
    """Promote or demote a user."""

    is_admin: bool
