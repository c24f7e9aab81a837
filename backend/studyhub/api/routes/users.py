"""
User administration routes (admin only).

Endpoints:
- GET /users - All users, newest first
- GET /users/{user_id} - One user
- POST /users/{user_id}/access/grant - Give content access (idempotent)
- POST /users/{user_id}/access/revoke - Take content access away (idempotent)
- PATCH /users/{user_id}/access - Set the access flag explicitly
- PATCH /users/{user_id}/admin - Promote/demote

Users are never deleted through the API.
"""

from uuid import UUID

from fastapi import APIRouter

from studyhub.api.deps import DbSession, UserManager, get_or_404
from studyhub.schemas.user import AccessUpdate, AdminUpdate, UserRead
from studyhub.services import access

router = APIRouter(prefix="/users", tags=["users"])

USER_NOT_FOUND = "User not found"


@router.get("/", response_model=list[UserRead])
async def list_users(
    admin: UserManager,
    db: DbSession,
) -> list[UserRead]:
    """List all users, newest first."""
    users = await access.list_users(db)
    return [UserRead.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: UUID,
    admin: UserManager,
    db: DbSession,
) -> UserRead:
    """Get a specific user by ID."""
    user = get_or_404(await access.get_user(db, user_id), USER_NOT_FOUND)
    return UserRead.model_validate(user)


@router.post("/{user_id}/access/grant", response_model=UserRead)
async def grant_access(
    user_id: UUID,
    admin: UserManager,
    db: DbSession,
) -> UserRead:
    """Grant content access."""
    user = get_or_404(await access.grant_access(db, user_id), USER_NOT_FOUND)
    await db.commit()
    return UserRead.model_validate(user)


@router.post("/{user_id}/access/revoke", response_model=UserRead)
async def revoke_access(
    user_id: UUID,
    admin: UserManager,
    db: DbSession,
) -> UserRead:
    """Revoke content access."""
    user = get_or_404(await access.revoke_access(db, user_id), USER_NOT_FOUND)
    await db.commit()
    return UserRead.model_validate(user)


@router.patch("/{user_id}/access", response_model=UserRead)
async def update_access(
    user_id: UUID,
    data: AccessUpdate,
    admin: UserManager,
    db: DbSession,
) -> UserRead:
    """Set the access flag to the given value."""
    user = get_or_404(await access.set_access(db, user_id, data.access), USER_NOT_FOUND)
    await db.commit()
    return UserRead.model_validate(user)


@router.patch("/{user_id}/admin", response_model=UserRead)
async def update_admin(
    user_id: UUID,
    data: AdminUpdate,
    admin: UserManager,
    db: DbSession,
) -> UserRead:
    """
    Promote or demote a user.

    An admin may demote themself; their next request runs without admin
    capabilities.
    """
    user = get_or_404(await access.set_admin(db, user_id, data.is_admin), USER_NOT_FOUND)
    await db.commit()
    return UserRead.model_validate(user)
