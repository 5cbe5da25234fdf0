"""
Pytest configuration for the forum backend tests.

The environment is set before any application module is imported because
config values are read once at import time.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_BOOTSTRAP_EMAIL"] = "root@forum.io"
os.environ["BCRYPT_ROUNDS"] = "4"

import httpx  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport  # noqa: E402

import app as app_module  # noqa: E402
from core.database import SessionLocal, engine  # noqa: E402
from models.base import Base  # noqa: E402
from utils.password_hasher import PasswordHasher  # noqa: E402
from utils.token_service import TokenService  # noqa: E402
from utils.user_manager import UserManager  # noqa: E402

BOOTSTRAP_EMAIL = "root@forum.io"
PASSWORD = "password123"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service():
    return TokenService(secret_key="unit-test-secret")


@pytest.fixture
def user_manager(db, hasher):
    return UserManager(db, password_hasher=hasher, bootstrap_admin_email=BOOTSTRAP_EMAIL)


@pytest.fixture
async def client():
    transport = ASGITransport(app=app_module.app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register(client, email: str, username: str, password: str = PASSWORD):
    return await client.post(
        "/api/v1/auth/register",
        json={"email": email, "username": username, "password": password},
    )


async def login(client, email: str, password: str = PASSWORD) -> str:
    r = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


async def signup(client, email: str, username: str) -> tuple[str, str]:
    """Register and log in; returns (user_id, token)."""
    r = await register(client, email, username)
    assert r.status_code == 201, r.text
    return r.json()["id"], await login(client, email)


async def admin_token(client) -> str:
    _, token = await signup(client, BOOTSTRAP_EMAIL, "root")
    return token


async def mentor_signup(client, email: str, username: str, admin: str) -> tuple[str, str]:
    user_id, _ = await signup(client, email, username)
    r = await client.patch(
        f"/api/v1/users/{user_id}/role", json={"role": "MENTOR"}, headers=bearer(admin)
    )
    assert r.status_code == 200, r.text
    # Role lives in the token, so log in again to pick it up
    return user_id, await login(client, email)
