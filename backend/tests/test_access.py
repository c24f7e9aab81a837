"""Tests for the identity and access gate service."""

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from studyhub.db.models import User, UserRole
from studyhub.services import access
from studyhub.services.access import Capability, capabilities_for


@pytest.mark.parametrize(
    ("user_access", "role", "expected"),
    [
        (False, "user", set()),
        (True, "user", {Capability.READ_CONTENT}),
        (True, "admin", set(Capability)),
        # Admins manage content even without the access flag
        (False, "admin", set(Capability)),
    ],
)
def test_capabilities_for(user_access, role, expected):
    user = User(email="someone@example.com", access=user_access, role=role)
    assert capabilities_for(user) == expected


async def test_get_or_create_user_creates_without_access(db):
    user = await access.get_or_create_user(db, "New.Person@Example.com", name="New Person")
    await db.commit()

    assert user.email == "new.person@example.com"
    assert user.access is False
    assert user.role == UserRole.USER.value
    assert user.is_admin is False
    assert user.last_login_at is not None
    assert user.created_at is not None


async def test_get_or_create_user_is_one_row_per_email(db):
    first = await access.get_or_create_user(db, "student@example.com")
    await db.commit()
    second = await access.get_or_create_user(db, "STUDENT@example.com ")
    await db.commit()

    assert first.id == second.id
    count = (await db.execute(select(func.count()).select_from(User))).scalar()
    assert count == 1


async def test_get_or_create_user_when_another_sign_in_wins(db, session_factory, monkeypatch):
    async with session_factory() as other:
        winner = await access.get_or_create_user(other, "race@example.com")
        await other.commit()

    # The first lookup misses the row the other sign-in just committed
    lookup = access.get_user_by_email
    calls = []

    async def stale_lookup(session, email):
        calls.append(email)
        if len(calls) == 1:
            return None
        return await lookup(session, email)

    monkeypatch.setattr(access, "get_user_by_email", stale_lookup)

    user = await access.get_or_create_user(db, "race@example.com", name="Racer")
    await db.commit()

    assert user.id == winner.id
    assert user.name == "Racer"
    assert len(calls) == 2
    count = (await db.execute(select(func.count()).select_from(User))).scalar()
    assert count == 1


async def test_get_or_create_user_keeps_flags_of_existing_user(db, make_user):
    existing, _ = await make_user("granted@example.com", access=True)

    user = await access.get_or_create_user(db, "granted@example.com")

    assert user.id == existing.id
    assert user.access is True


async def test_bootstrap_admin_email(db, monkeypatch):
    monkeypatch.setattr(access.settings, "bootstrap_admin_emails", ["boss@example.com"])

    boss = await access.get_or_create_user(db, "Boss@example.com")
    other = await access.get_or_create_user(db, "other@example.com")
    await db.commit()

    assert boss.is_admin is True
    assert boss.access is True
    assert other.is_admin is False
    assert other.access is False


async def test_grant_and_revoke_are_idempotent(db, make_user):
    user, _ = await make_user("learner@example.com")

    granted = await access.grant_access(db, user.id)
    assert granted.access is True
    granted_again = await access.grant_access(db, user.id)
    assert granted_again.access is True

    revoked = await access.revoke_access(db, user.id)
    assert revoked.access is False
    revoked_again = await access.revoke_access(db, user.id)
    assert revoked_again.access is False
    await db.commit()


async def test_set_admin(db, make_user):
    user, _ = await make_user("helper@example.com")

    promoted = await access.set_admin(db, user.id, True)
    assert promoted.role == UserRole.ADMIN.value
    assert capabilities_for(promoted) == set(Capability)

    demoted = await access.set_admin(db, user.id, False)
    assert demoted.role == UserRole.USER.value
    assert capabilities_for(demoted) == set()
    await db.commit()


async def test_flag_updates_for_unknown_user_return_none(db):
    missing = uuid4()
    assert await access.grant_access(db, missing) is None
    assert await access.revoke_access(db, missing) is None
    assert await access.set_admin(db, missing, True) is None


async def test_list_users_newest_first(db, make_user):
    await make_user("a@example.com")
    await make_user("b@example.com")

    users = await access.list_users(db)

    assert {u.email for u in users} == {"a@example.com", "b@example.com"}
    created = [u.created_at for u in users]
    assert created == sorted(created, reverse=True)
