"""End-to-end HTTP flows over the users API with the in-memory store."""

from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from usercred.core.exceptions import UnavailableError
from usercred.domain.value_objects.token import UserClaims

REGISTER = {"username": "alice", "email": "alice@example.com", "password": "secret1"}


async def register_and_login(client, payload=REGISTER):
    response = await client.post("/users/register", json=payload)
    assert response.status_code == 201
    response = await client.post(
        "/users/login", json={"email": payload["email"], "password": payload["password"]}
    )
    assert response.status_code == 200
    body = response.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


def assert_no_password_fields(body):
    flat = str(body)
    assert "password_hash" not in flat
    assert "secret1" not in flat


@pytest.mark.asyncio
async def test_health(async_client):
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_register_returns_created_user(async_client):
    response = await async_client.post("/users/register", json=REGISTER)

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"
    assert body["active"] is True
    assert body["role"] == "user"
    assert_no_password_fields(body)


@pytest.mark.asyncio
async def test_register_ignores_role_in_payload(async_client):
    response = await async_client.post("/users/register", json={**REGISTER, "role": "admin", "active": False})

    assert response.status_code == 201
    assert response.json()["role"] == "user"
    assert response.json()["active"] is True


@pytest.mark.asyncio
async def test_register_validation_errors_list_every_field(async_client):
    response = await async_client.post(
        "/users/register", json={"username": "a", "email": "nope", "password": "1"}
    )

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "validation_error"
    assert set(body["errors"]) == {"username", "email", "password"}


@pytest.mark.asyncio
async def test_register_missing_field_uses_the_same_error_shape(async_client):
    response = await async_client.post("/users/register", json={"username": "alice"})

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "validation_error"
    assert {"email", "password"} <= set(body["errors"])


@pytest.mark.asyncio
async def test_register_duplicate_is_422(async_client):
    await async_client.post("/users/register", json=REGISTER)

    response = await async_client.post("/users/register", json=REGISTER)

    assert response.status_code == 422
    assert response.json()["code"] == "already_exists"


@pytest.mark.asyncio
async def test_login_returns_user_and_token(async_client, token_issuer):
    await async_client.post("/users/register", json=REGISTER)

    response = await async_client.post(
        "/users/login", json={"email": "ALICE@example.com", "password": "secret1"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_at"]
    claims = token_issuer.verify(body["token"])
    assert str(claims.id) == body["user"]["id"]
    assert_no_password_fields(body)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "credentials",
    [
        {"email": "alice@example.com", "password": "wrong-password"},
        {"email": "nobody@example.com", "password": "secret1"},
    ],
)
async def test_login_failures_look_the_same(async_client, credentials):
    await async_client.post("/users/register", json=REGISTER)

    response = await async_client.post("/users/login", json=credentials)

    assert response.status_code == 422
    assert response.json() == {"detail": "Email or password is invalid", "code": "invalid_credentials"}


@pytest.mark.asyncio
async def test_get_user_requires_a_token(async_client):
    user, _ = await register_and_login(async_client)

    response = await async_client.get(f"/users/{user['id']}")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_get_user_with_bad_token(async_client):
    user, _ = await register_and_login(async_client)

    response = await async_client.get(f"/users/{user['id']}", headers={"Authorization": "Bearer a.b.c"})

    assert response.status_code == 401
    assert response.json()["code"] == "token_invalid"


@pytest.mark.asyncio
async def test_get_user_with_expired_token(async_client, clock):
    user, headers = await register_and_login(async_client)

    clock.advance(minutes=16)
    response = await async_client.get(f"/users/{user['id']}", headers=headers)

    assert response.status_code == 401
    assert response.json()["code"] == "token_expired"


@pytest.mark.asyncio
async def test_get_user(async_client):
    user, headers = await register_and_login(async_client)

    response = await async_client.get(f"/users/{user['id']}", headers=headers)

    assert response.status_code == 200
    assert response.json() == user


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [str(uuid4()), "not-a-uuid"])
async def test_get_unknown_user_is_404(async_client, user_id):
    _, headers = await register_and_login(async_client)

    response = await async_client.get(f"/users/{user_id}", headers=headers)

    assert response.status_code == 404
    assert response.json() == {"detail": "User not found", "code": "not_found"}


@pytest.mark.asyncio
async def test_change_password_flow(async_client):
    user, headers = await register_and_login(async_client)

    response = await async_client.put(
        f"/users/{user['id']}/password",
        json={"old_password": "secret1", "new_password": "brand-new"},
        headers=headers,
    )

    assert response.status_code == 200
    assert "message" in response.json()
    old = await async_client.post("/users/login", json={"email": "alice@example.com", "password": "secret1"})
    assert old.status_code == 422
    new = await async_client.post("/users/login", json={"email": "alice@example.com", "password": "brand-new"})
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_change_password_with_wrong_old_password(async_client):
    user, headers = await register_and_login(async_client)

    response = await async_client.put(
        f"/users/{user['id']}/password",
        json={"old_password": "not-it", "new_password": "brand-new"},
        headers=headers,
    )

    assert response.status_code == 422
    assert response.json()["code"] == "invalid_password"


@pytest.mark.asyncio
async def test_change_password_policy_violation(async_client):
    user, headers = await register_and_login(async_client)

    response = await async_client.put(
        f"/users/{user['id']}/password",
        json={"old_password": "secret1", "new_password": "123"},
        headers=headers,
    )

    assert response.status_code == 422
    assert set(response.json()["errors"]) == {"new_password"}


@pytest.mark.asyncio
async def test_cannot_change_another_users_password(async_client):
    await register_and_login(async_client)
    _, bob_headers = await register_and_login(
        async_client, {"username": "bob", "email": "bob@example.com", "password": "secret1"}
    )
    alice = (await async_client.post("/users/login", json={"email": "alice@example.com", "password": "secret1"})).json()

    response = await async_client.put(
        f"/users/{alice['user']['id']}/password",
        json={"old_password": "secret1", "new_password": "hijacked"},
        headers=bob_headers,
    )

    assert response.status_code == 404
    still_works = await async_client.post("/users/login", json={"email": "alice@example.com", "password": "secret1"})
    assert still_works.status_code == 200


@pytest.mark.asyncio
async def test_token_for_deleted_subject_gets_404(async_client, token_issuer):
    ghost = UserClaims(id=uuid4(), username="ghost", email="ghost@example.com")
    token = token_issuer.issue(ghost, timedelta(minutes=5))

    response = await async_client.get(f"/users/{ghost.id}", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unavailable_store_is_503_with_retry_after(async_client, credential_service, mocker):
    mocker.patch.object(credential_service, "register", side_effect=UnavailableError())

    response = await async_client.post("/users/register", json=REGISTER)

    assert response.status_code == 503
    assert response.headers["Retry-After"]
    assert response.json()["code"] == "unavailable"


@pytest.mark.asyncio
async def test_unexpected_errors_are_500_without_internals(app, credential_service, mocker):
    mocker.patch.object(credential_service, "get", side_effect=RuntimeError("db password is hunter2"))
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        _, headers = await register_and_login(client)
        response = await client.get(f"/users/{uuid4()}", headers=headers)

    assert response.status_code == 500
    assert response.json()["code"] == "internal_error"
    assert "hunter2" not in response.text
