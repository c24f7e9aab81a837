"""
Identity and access gate.

Maps an authenticated email to its User row and derives what that user may
do. Capabilities are recomputed from the database row on every request, so
flag changes (including an admin demoting themself) apply to the very next
call without re-authentication.
"""

import logging
from datetime import datetime, timezone
from enum import Enum as PyEnum
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.config import get_settings
from studyhub.db.models import User, UserRole

logger = logging.getLogger(__name__)
settings = get_settings()


class Capability(str, PyEnum):
    """What a user is allowed to do."""

    READ_CONTENT = "read_content"
    WRITE_CONTENT = "write_content"
    MANAGE_USERS = "manage_users"


def capabilities_for(user: User) -> frozenset[Capability]:
    """
    Capability set for a user.

    - admins: everything (they can read content even without the access flag)
    - access=True: read_content
    - otherwise: nothing
    """
    if user.is_admin:
        return frozenset(Capability)
    if user.access:
        return frozenset({Capability.READ_CONTENT})
    return frozenset()


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def _create_user(db: AsyncSession, email: str, name: str | None) -> User:
    """
    Insert the User row for a first sign-in.

    If a concurrent sign-in inserted the same email first, the unique
    constraint rejects this row and the existing one is returned instead.
    """
    is_bootstrap_admin = email in settings.bootstrap_admin_emails
    user = User(
        email=email,
        name=name,
        access=is_bootstrap_admin,
        role=UserRole.ADMIN.value if is_bootstrap_admin else UserRole.USER.value,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        existing = await get_user_by_email(db, email)
        if existing is None:
            raise
        logger.info("User %s was created by a concurrent sign-in", email)
        return existing

    if is_bootstrap_admin:
        logger.info("Created bootstrap admin %s", email)
    else:
        logger.info("Created user %s without content access", email)
    return user


async def get_or_create_user(db: AsyncSession, email: str, name: str | None = None) -> User:
    """
    Look up the User for an authenticated email, creating it on first sign-in.

    New users start with access=False and role='user', unless the email is
    listed in settings.bootstrap_admin_emails.
    """
    email = normalize_email(email)
    now = datetime.now(timezone.utc)

    user = await get_user_by_email(db, email)
    if user is None:
        user = await _create_user(db, email, name)
    if name and not user.name:
        user.name = name

    user.last_login_at = now
    await db.flush()
    await db.refresh(user)
    return user


async def list_users(db: AsyncSession) -> list[User]:
    """All users, newest first."""
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.email))
    return list(result.scalars())


async def get_user(db: AsyncSession, user_id: UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def set_access(db: AsyncSession, user_id: UUID, access: bool) -> User | None:
    """
    Set a user's access flag. Idempotent.

    Returns the updated user, or None if no such user exists.
    """
    user = await get_user(db, user_id)
    if user is None:
        return None
    if user.access != access:
        user.access = access
        await db.flush()
        logger.info("Access %s for user %s", "granted" if access else "revoked", user.email)
    await db.refresh(user)
    return user


async def grant_access(db: AsyncSession, user_id: UUID) -> User | None:
    return await set_access(db, user_id, True)


async def revoke_access(db: AsyncSession, user_id: UUID) -> User | None:
    return await set_access(db, user_id, False)


async def set_admin(db: AsyncSession, user_id: UUID, is_admin: bool) -> User | None:
    """
    Promote or demote a user. Idempotent.

    Returns the updated user, or None if no such user exists.
    """
    user = await get_user(db, user_id)
    if user is None:
        return None
    role = UserRole.ADMIN.value if is_admin else UserRole.USER.value
    if user.role != role:
        user.role = role
        await db.flush()
        logger.info("Role of user %s set to %s", user.email, role)
    await db.refresh(user)
    return user
