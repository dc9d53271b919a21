import pytest
from httpx import AsyncClient

PASSWORD = "SecurePass123!"
NEW_PASSWORD = "NewSecurePass456!"


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
async def test_renewal_replaces_password_and_kills_tokens(
    client: AsyncClient, notifier, active_user, tokens
):
    email = active_user["email"]

    response = await client.post("/auth/renew-signatures", json={"email": email})
    assert response.status_code == 200
    code = notifier.last_code(email)
    assert len(code) == 6

    response = await client.post(
        "/auth/confirm-renew-signatures",
        json={"email": email, "verification_code": code, "new_password": NEW_PASSWORD},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "renewed"

    me = await client.get("/auth/me", headers=bearer(tokens["access_token"]))
    assert me.status_code == 401
    refresh = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refresh.status_code == 401

    old = await client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert old.status_code == 401
    new = await client.post("/auth/login", json={"email": email, "password": NEW_PASSWORD})
    assert new.status_code == 200

    replay = await client.post(
        "/auth/confirm-renew-signatures",
        json={"email": email, "verification_code": code, "new_password": NEW_PASSWORD},
    )
    assert replay.status_code == 400
    assert replay.json()["error"]["code"] == "NO_RENEWAL_REQUESTED"


@pytest.mark.asyncio
async def test_renewal_unlocks_locked_account(client: AsyncClient, notifier, active_user):
    email = active_user["email"]
    for _ in range(5):
        await client.post("/auth/login", json={"email": email, "password": "WrongPassword!"})
    locked = await client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert locked.status_code == 423

    await client.post("/auth/renew-signatures", json={"email": email})
    await client.post(
        "/auth/confirm-renew-signatures",
        json={
            "email": email,
            "verification_code": notifier.last_code(email),
            "new_password": NEW_PASSWORD,
        },
    )

    response = await client.post("/auth/login", json={"email": email, "password": NEW_PASSWORD})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_request_for_unknown_email_looks_like_success(
    client: AsyncClient, notifier, active_user
):
    unknown = await client.post("/auth/renew-signatures", json={"email": "nobody@acme.com"})
    known = await client.post("/auth/renew-signatures", json={"email": active_user["email"]})

    assert unknown.status_code == known.status_code == 200
    assert unknown.json() == known.json()


@pytest.mark.asyncio
async def test_wrong_code(client: AsyncClient, active_user):
    await client.post("/auth/renew-signatures", json={"email": active_user["email"]})

    response = await client.post(
        "/auth/confirm-renew-signatures",
        json={
            "email": active_user["email"],
            "verification_code": "000000",
            "new_password": NEW_PASSWORD,
        },
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_CODE"


@pytest.mark.asyncio
async def test_confirm_without_request(client: AsyncClient, active_user):
    response = await client.post(
        "/auth/confirm-renew-signatures",
        json={
            "email": active_user["email"],
            "verification_code": "123456",
            "new_password": NEW_PASSWORD,
        },
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NO_RENEWAL_REQUESTED"


@pytest.mark.asyncio
async def test_confirm_unknown_user(client: AsyncClient):
    response = await client.post(
        "/auth/confirm-renew-signatures",
        json={
            "email": "nobody@acme.com",
            "verification_code": "123456",
            "new_password": NEW_PASSWORD,
        },
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_confirm_short_password(client: AsyncClient, active_user):
    response = await client.post(
        "/auth/confirm-renew-signatures",
        json={
            "email": active_user["email"],
            "verification_code": "123456",
            "new_password": "short",
        },
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PASSWORD"


@pytest.mark.asyncio
async def test_code_must_be_six_ascii_digits(client: AsyncClient, active_user):
    await client.post("/auth/renew-signatures", json={"email": active_user["email"]})

    for code in ("12345é", "１２３４５６", "12345", "abcdef"):
        response = await client.post(
            "/auth/confirm-renew-signatures",
            json={
                "email": active_user["email"],
                "verification_code": code,
                "new_password": NEW_PASSWORD,
            },
        )
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_repeated_wrong_codes_burn_the_code(client: AsyncClient, notifier, active_user):
    email = active_user["email"]
    await client.post("/auth/renew-signatures", json={"email": email})
    code = notifier.last_code(email)
    wrong = "100000" if code != "100000" else "100001"

    for _ in range(5):
        response = await client.post(
            "/auth/confirm-renew-signatures",
            json={"email": email, "verification_code": wrong, "new_password": NEW_PASSWORD},
        )
        assert response.json()["error"]["code"] == "INVALID_CODE"

    response = await client.post(
        "/auth/confirm-renew-signatures",
        json={"email": email, "verification_code": code, "new_password": NEW_PASSWORD},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NO_RENEWAL_REQUESTED"
