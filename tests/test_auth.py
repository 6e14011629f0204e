import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.models import RefreshToken, User
from meritboard.auth.security import hash_password
from meritboard.core.enums import Role


async def _login(client: AsyncClient, email: str, password: str):
    return await client.post("/api/v1/auth/login", json={"email": email, "password": password})


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, admin_user: User) -> None:
    response = await _login(client, "admin@school.edu.vn", "AdminPass123")
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["refresh_token"]
    assert data["user"]["role"] == "admin"

    session_resp = await client.get(
        "/api/v1/auth/session",
        headers={"Authorization": f"Bearer {data['access_token']}"},
    )
    assert session_resp.status_code == 200
    session = session_resp.json()
    assert session["user_id"] == admin_user.id
    assert session["role"] == "admin"
    assert session["is_super_admin"] is True
    assert "claims:manage" in session["capabilities"]


@pytest.mark.asyncio
async def test_login_is_case_insensitive_on_email(client: AsyncClient, admin_user: User) -> None:
    response = await _login(client, "ADMIN@School.edu.vn", "AdminPass123")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, admin_user: User) -> None:
    response = await _login(client, "admin@school.edu.vn", "wrong-password")
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_inactive_user(client: AsyncClient, db_session: AsyncSession) -> None:
    db_session.add(
        User(
            display_name="Former Teacher",
            email="former@school.edu.vn",
            password_hash=hash_password("Password123"),
            assigned_classes=[],
            claims={"role": "homeroom_teacher", "assigned_classes": []},
            status="INACTIVE",
        )
    )
    await db_session.commit()
    response = await _login(client, "former@school.edu.vn", "Password123")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_session_requires_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/auth/session")
    assert response.status_code == 401

    response = await client.get("/api/v1/auth/session", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_refresh_picks_up_new_claims(client: AsyncClient, db_session: AsyncSession) -> None:
    user = User(
        display_name="Proctor",
        email="proctor@school.edu.vn",
        password_hash=hash_password("Password123"),
        assigned_classes=[],
        claims={"role": "proctor", "assigned_classes": []},
        status="ACTIVE",
    )
    db_session.add(user)
    await db_session.commit()

    login = (await _login(client, "proctor@school.edu.vn", "Password123")).json()

    user.claims = {"role": Role.HOMEROOM_TEACHER.value, "assigned_classes": ["class_6_1"]}
    await db_session.commit()

    refreshed = await client.post("/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]})
    assert refreshed.status_code == 200
    token = refreshed.json()["access_token"]

    session = (await client.get("/api/v1/auth/session", headers={"Authorization": f"Bearer {token}"})).json()
    assert session["role"] == "homeroom_teacher"
    assert session["assigned_classes"] == ["class_6_1"]
    assert session["is_homeroom_teacher"] is True


@pytest.mark.asyncio
async def test_logout_revokes_refresh_token(client: AsyncClient, admin_user: User, db_session: AsyncSession) -> None:
    login = (await _login(client, "admin@school.edu.vn", "AdminPass123")).json()

    response = await client.post("/api/v1/auth/logout", json={"refresh_token": login["refresh_token"]})
    assert response.status_code == 204

    remaining = await db_session.execute(select(RefreshToken).where(RefreshToken.token == login["refresh_token"]))
    assert remaining.scalar_one_or_none() is None

    response = await client.post("/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_oauth_form(client: AsyncClient, admin_user: User) -> None:
    response = await client.post(
        "/api/v1/auth/login-oauth",
        data={"username": "admin@school.edu.vn", "password": "AdminPass123"},
    )
    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
