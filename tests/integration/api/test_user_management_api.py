from uuid import uuid4

import pytest
from httpx import AsyncClient

from config import ApplicationConfig

ADMIN_HEADERS = {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}
PASSWORD = "SecurePass123!"


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
async def test_user_routes_require_api_key(client: AsyncClient, active_user):
    response = await client.get(f"/admin/users/{active_user['id']}")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_get_user_by_id_and_email(client: AsyncClient, active_user):
    by_id = await client.get(f"/admin/users/{active_user['id']}", headers=ADMIN_HEADERS)
    by_email = await client.get(
        f"/admin/users/by-email/{active_user['email']}", headers=ADMIN_HEADERS
    )

    assert by_id.status_code == by_email.status_code == 200
    assert by_id.json() == by_email.json()
    assert by_id.json()["first_name"] == "Ada"
    assert by_id.json()["email_verified"] is True
    assert "password_hash" not in by_id.json()
    assert "access_signing_key" not in by_id.json()


@pytest.mark.asyncio
async def test_get_unknown_user(client: AsyncClient):
    by_id = await client.get(f"/admin/users/{uuid4()}", headers=ADMIN_HEADERS)
    by_email = await client.get("/admin/users/by-email/nobody@acme.com", headers=ADMIN_HEADERS)

    assert by_id.status_code == by_email.status_code == 404
    assert by_id.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_check_email(client: AsyncClient, active_user):
    taken = await client.get(
        f"/admin/users/check-email/{active_user['email']}", headers=ADMIN_HEADERS
    )
    free = await client.get("/admin/users/check-email/new@acme.com", headers=ADMIN_HEADERS)

    assert taken.json() == {"email": active_user["email"], "available": False}
    assert free.json() == {"email": "new@acme.com", "available": True}


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, active_user):
    response = await client.put(
        f"/admin/users/{active_user['id']}",
        headers=ADMIN_HEADERS,
        json={"first_name": "Grace", "last_name": "Hopper"},
    )

    assert response.status_code == 200
    assert response.json()["first_name"] == "Grace"
    assert response.json()["last_name"] == "Hopper"
    assert response.json()["email"] == active_user["email"]


@pytest.mark.asyncio
async def test_email_change_needs_verification(client: AsyncClient, notifier, active_user):
    response = await client.put(
        f"/admin/users/{active_user['id']}",
        headers=ADMIN_HEADERS,
        json={"email": "ada@newco.com"},
    )
    assert response.status_code == 200
    assert response.json()["email"] == "ada@newco.com"
    assert response.json()["email_verified"] is False

    login = await client.post(
        "/auth/login", json={"email": "ada@newco.com", "password": PASSWORD}
    )
    assert login.status_code == 200

    verified = await client.post(
        "/registration/verify-email", json={"token": notifier.last_code("ada@newco.com")}
    )
    assert verified.status_code == 200

    user = await client.get(f"/admin/users/{active_user['id']}", headers=ADMIN_HEADERS)
    assert user.json()["email_verified"] is True


@pytest.mark.asyncio
async def test_email_change_to_taken_address(client: AsyncClient, active_user):
    await client.post(
        "/registration/register", json={"email": "other@acme.com", "password": PASSWORD}
    )

    response = await client.put(
        f"/admin/users/{active_user['id']}",
        headers=ADMIN_HEADERS,
        json={"email": "other@acme.com"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient, active_user, tokens):
    response = await client.delete(f"/admin/users/{active_user['id']}", headers=ADMIN_HEADERS)
    assert response.status_code == 200
    assert response.json() == {"user_id": active_user["id"], "deleted": True}

    lookup = await client.get(f"/admin/users/{active_user['id']}", headers=ADMIN_HEADERS)
    assert lookup.status_code == 404

    me = await client.get("/auth/me", headers=bearer(tokens["access_token"]))
    assert me.status_code == 401
    refresh = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refresh.status_code == 401
    login = await client.post(
        "/auth/login", json={"email": active_user["email"], "password": PASSWORD}
    )
    assert login.status_code == 401

    again = await client.delete(f"/admin/users/{active_user['id']}", headers=ADMIN_HEADERS)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_deactivate_and_restore(client: AsyncClient, active_user):
    deactivated = await client.post(
        f"/admin/users/{active_user['id']}/deactivate", headers=ADMIN_HEADERS
    )
    assert deactivated.json()["account"]["status"] == "inactive"

    login = await client.post(
        "/auth/login", json={"email": active_user["email"], "password": PASSWORD}
    )
    assert login.status_code == 403

    restored = await client.post(
        f"/admin/users/{active_user['id']}/restore", headers=ADMIN_HEADERS
    )
    assert restored.status_code == 200
    assert restored.json()["account"]["can_login"] is True

    login = await client.post(
        "/auth/login", json={"email": active_user["email"], "password": PASSWORD}
    )
    assert login.status_code == 200

    again = await client.post(f"/admin/users/{active_user['id']}/restore", headers=ADMIN_HEADERS)
    assert again.status_code == 409
