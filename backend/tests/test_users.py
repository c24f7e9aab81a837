"""Tests for user administration routes."""

from uuid import uuid4


async def test_list_users_requires_admin(client, make_user):
    _, headers = await make_user("reader@example.com", access=True)

    response = await client.get("/users/", headers=headers)

    assert response.status_code == 403


async def test_admin_lists_users(client, make_user, admin_headers):
    await make_user("pending@example.com")

    response = await client.get("/users/", headers=admin_headers)

    assert response.status_code == 200
    emails = {u["email"] for u in response.json()}
    assert emails == {"admin@example.com", "pending@example.com"}


async def test_grant_then_revoke_access(client, make_user, admin_headers):
    user, user_headers = await make_user("pending@example.com")

    assert (await client.get("/subjects/", headers=user_headers)).status_code == 403

    granted = await client.post(f"/users/{user.id}/access/grant", headers=admin_headers)
    assert granted.status_code == 200
    assert granted.json()["access"] is True
    assert (await client.get("/subjects/", headers=user_headers)).status_code == 200

    # Granting twice is a no-op
    again = await client.post(f"/users/{user.id}/access/grant", headers=admin_headers)
    assert again.status_code == 200
    assert again.json()["access"] is True

    revoked = await client.post(f"/users/{user.id}/access/revoke", headers=admin_headers)
    assert revoked.json()["access"] is False
    assert (await client.get("/subjects/", headers=user_headers)).status_code == 403


async def test_patch_access(client, make_user, admin_headers):
    user, _ = await make_user("pending@example.com")

    response = await client.patch(
        f"/users/{user.id}/access", json={"access": True}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["access"] is True


async def test_non_admin_cannot_change_flags(client, make_user):
    user, headers = await make_user("sneaky@example.com", access=True)

    response = await client.patch(
        f"/users/{user.id}/admin", json={"is_admin": True}, headers=headers
    )

    assert response.status_code == 403
    me = (await client.get("/auth/me", headers=headers)).json()
    assert me["is_admin"] is False


async def test_flag_update_for_unknown_user_is_404(client, admin_headers):
    missing = uuid4()

    assert (await client.post(f"/users/{missing}/access/grant", headers=admin_headers)).status_code == 404
    assert (
        await client.patch(f"/users/{missing}/admin", json={"is_admin": True}, headers=admin_headers)
    ).status_code == 404
    assert (await client.get(f"/users/{missing}", headers=admin_headers)).status_code == 404


async def test_promote_user_to_admin(client, make_user, admin_headers):
    user, headers = await make_user("helper@example.com")

    response = await client.patch(
        f"/users/{user.id}/admin", json={"is_admin": True}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["is_admin"] is True
    assert (await client.get("/users/", headers=headers)).status_code == 200


async def test_self_demotion_applies_to_next_request(client, make_user):
    admin, headers = await make_user("solo-admin@example.com", access=True, admin=True)

    response = await client.patch(
        f"/users/{admin.id}/admin", json={"is_admin": False}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["role"] == "user"

    # Same token, no re-authentication: admin capabilities are gone
    assert (await client.get("/users/", headers=headers)).status_code == 403
    assert (
        await client.post("/subjects/", json={"name": "Physics"}, headers=headers)
    ).status_code == 403
    # Content access flag is untouched
    assert (await client.get("/subjects/", headers=headers)).status_code == 200


async def test_overview_counts(client, make_user, admin_headers):
    await make_user("reader@example.com", access=True)
    await make_user("pending@example.com")
    await client.post("/subjects/", json={"name": "Math"}, headers=admin_headers)

    response = await client.get("/admin/overview", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {
        "users": 3,
        "users_with_access": 2,
        "admins": 1,
        "subjects": 1,
        "chapters": 0,
        "notes": 0,
        "videos": 0,
    }
