"""Auth API: registration, login and the authentication gate over HTTP."""

import pytest

from conftest import BOOTSTRAP_EMAIL, PASSWORD, bearer, login, register, signup

pytestmark = pytest.mark.anyio


async def test_register_created_as_learner(client):
    r = await register(client, "a@x.com", "alice")
    assert r.status_code == 201
    body = r.json()
    assert body["role"] == "LEARNER"
    assert set(body) == {"id", "email", "username", "role"}


async def test_register_bootstrap_admin(client):
    r = await register(client, BOOTSTRAP_EMAIL.upper(), "root")
    assert r.status_code == 201
    assert r.json()["role"] == "ADMIN"


async def test_register_conflicts(client):
    await register(client, "a@x.com", "alice")

    same_email = await register(client, "a@x.com", "alice2")
    same_username = await register(client, "b@x.com", "alice")
    for r in (same_email, same_username):
        assert r.status_code == 409
        assert r.json() == {"error": "Conflict", "message": "Email or username already exists"}


async def test_register_validation_lists_issues(client):
    r = await client.post(
        "/api/v1/auth/register",
        json={"email": "nope", "username": "al", "password": "short"},
    )
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "ValidationError"
    assert isinstance(body["message"], list)
    assert len(body["message"]) == 3
    assert {issue.split(":")[0] for issue in body["message"]} == {"email", "username", "password"}


async def test_register_missing_body_is_validation_error(client):
    r = await client.post("/api/v1/auth/register", json={})
    assert r.status_code == 400
    assert r.json()["error"] == "ValidationError"


async def test_login_returns_token_and_safe_user(client):
    user_id, _ = await signup(client, "a@x.com", "alice")
    r = await client.post("/api/v1/auth/login", json={"email": "a@x.com", "password": PASSWORD})
    assert r.status_code == 200
    body = r.json()
    assert body["token"]
    assert body["user"] == {"id": user_id, "email": "a@x.com", "username": "alice", "role": "LEARNER"}


async def test_login_failures_share_one_message(client):
    await register(client, "a@x.com", "alice")
    unknown = await client.post("/api/v1/auth/login", json={"email": "zz@x.com", "password": PASSWORD})
    wrong = await client.post("/api/v1/auth/login", json={"email": "a@x.com", "password": "nope-nope"})
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"error": "Unauthorized", "message": "Invalid credentials"}


async def test_login_malformed_input(client):
    r = await client.post("/api/v1/auth/login", json={"email": "a@x.com"})
    assert r.status_code == 400


async def test_protected_echoes_principal(client):
    user_id, token = await signup(client, "a@x.com", "alice")
    r = await client.get("/api/v1/protected", headers=bearer(token))
    assert r.status_code == 200
    assert r.json() == {
        "message": "You are authenticated",
        "user": {"id": user_id, "role": "LEARNER"},
    }


@pytest.mark.parametrize(
    "headers,message",
    [
        ({}, "Missing or invalid authorization header"),
        ({"Authorization": "Token abc"}, "Missing or invalid authorization header"),
        ({"Authorization": "Bearer "}, "Missing or invalid authorization header"),
        ({"Authorization": "Bearer a b"}, "Missing or invalid authorization header"),
        ({"Authorization": "Bearer not.a.token"}, "Invalid or expired token"),
    ],
)
async def test_protected_rejects_bad_credentials(client, headers, message):
    r = await client.get("/api/v1/protected", headers=headers)
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized", "message": message}


async def test_scheme_must_be_capitalized_bearer(client):
    _, token = await signup(client, "a@x.com", "alice")
    r = await client.get("/api/v1/protected", headers={"Authorization": f"bearer {token}"})
    assert r.status_code == 401
    assert r.json()["message"] == "Missing or invalid authorization header"


async def test_openapi_declares_bearer_scheme(client):
    r = await client.get("/openapi.json")
    schemes = r.json()["components"]["securitySchemes"]
    assert schemes["HTTPBearer"] == {"type": "http", "scheme": "bearer"}


async def test_me_returns_own_account(client):
    user_id, token = await signup(client, "a@x.com", "alice")
    r = await client.get("/api/v1/auth/me", headers=bearer(token))
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["id"] == user_id
    assert "password_hash" not in user
    assert "password" not in user


async def test_token_role_is_a_snapshot(client):
    _, admin = await signup(client, BOOTSTRAP_EMAIL, "root")
    user_id, old_token = await signup(client, "a@x.com", "alice")

    r = await client.patch(f"/api/v1/users/{user_id}/role", json={"role": "MENTOR"}, headers=bearer(admin))
    assert r.status_code == 200

    stale = await client.get("/api/v1/protected", headers=bearer(old_token))
    assert stale.json()["user"]["role"] == "LEARNER"
    fresh = await client.get("/api/v1/protected", headers=bearer(await login(client, "a@x.com")))
    assert fresh.json()["user"]["role"] == "MENTOR"
