from urllib.parse import unquote

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.user import User
from storefront.scripts.seed import create_user
from storefront.services.auth.passwords import hash_password, verify_password


@pytest.fixture
async def admin(session: AsyncSession) -> User:
    return await create_user(session, name="Alex Admin", email="admin@example.com", password="s3cret", role="admin")


def test_password_hashing():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret", "not-a-bcrypt-hash")


async def test_login_sets_session_cookies(api: httpx.AsyncClient, admin: User):
    response = await api.post("/api/login", json={"email": "admin@example.com", "password": "s3cret"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "user": {"id": admin.id, "name": "Alex Admin", "email": "admin@example.com", "role": "admin"},
    }
    assert response.cookies["user_role"] == "admin"
    assert response.cookies["user_id"] == admin.id

    # The role cookie now unlocks the dashboard
    assert (await api.get("/api/dashboard")).status_code == 200


async def test_login_failures_look_the_same(api: httpx.AsyncClient, admin: User):
    wrong_password = await api.post("/api/login", json={"email": "admin@example.com", "password": "nope"})
    unknown_email = await api.post("/api/login", json={"email": "ghost@example.com", "password": "s3cret"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid email or password"}


async def test_login_requires_both_fields(api: httpx.AsyncClient):
    response = await api.post("/api/login", json={"email": "admin@example.com"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Email and password are required"}


async def test_user_without_role_logs_in_as_user(api: httpx.AsyncClient, session: AsyncSession):
    session.add(User(name="Sam", email="sam@example.com", password=hash_password("pw")))
    await session.commit()

    response = await api.post("/api/login", json={"email": "sam@example.com", "password": "pw"})

    assert response.json()["user"]["role"] == "user"


async def test_logout_clears_cookies(api: httpx.AsyncClient, admin: User):
    await api.post("/api/login", json={"email": "admin@example.com", "password": "s3cret"})

    response = await api.post("/api/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert "user_role" not in api.cookies
    assert (await api.get("/api/dashboard")).status_code == 401


async def test_login_with_non_latin1_name(api: httpx.AsyncClient, session: AsyncSession):
    await create_user(session, name="Łukasz Nowak", email="łukasz@example.com", password="pw", role="admin")

    response = await api.post("/api/login", json={"email": "łukasz@example.com", "password": "pw"})

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Łukasz Nowak"
    assert unquote(response.cookies["user_name"]) == "Łukasz Nowak"
    assert unquote(response.cookies["user_email"]) == "łukasz@example.com"
    assert (await api.get("/api/dashboard")).status_code == 200
