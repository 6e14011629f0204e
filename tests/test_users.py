import pytest
from httpx import AsyncClient

from meritboard.auth.models import User
from meritboard.auth.schemas import SetClaimsRequest
from meritboard.auth.services import set_user_claims
from meritboard.auth.session import AuthSession
from meritboard.core.enums import Role
from meritboard.core.exceptions import ServiceError


@pytest.mark.asyncio
async def test_create_user_with_claims_and_login(client: AsyncClient, school, admin_headers) -> None:
    response = await client.post(
        "/api/v1/users",
        json={
            "display_name": "Co Lan",
            "email": "Lan.Nguyen@school.edu.vn",
            "password": "Password123",
            "role": "homeroom_teacher",
            "assigned_classes": ["class_6_1"],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    user = response.json()
    assert user["email"] == "lan.nguyen@school.edu.vn"
    assert user["claims"] == {"role": "homeroom_teacher", "assigned_classes": ["class_6_1"]}
    assert user["role"] == "homeroom_teacher"

    login = await client.post(
        "/api/v1/auth/login", json={"email": "lan.nguyen@school.edu.vn", "password": "Password123"}
    )
    assert login.status_code == 200
    assert login.json()["user"]["assigned_classes"] == ["class_6_1"]

    dup = await client.post(
        "/api/v1/users",
        json={"display_name": "Again", "email": "LAN.NGUYEN@school.edu.vn", "password": "Password123"},
        headers=admin_headers,
    )
    assert dup.status_code == 409


@pytest.mark.asyncio
async def test_create_user_rejects_unknown_class(client: AsyncClient, admin_headers) -> None:
    response = await client.post(
        "/api/v1/users",
        json={
            "display_name": "Thay Minh",
            "email": "minh@school.edu.vn",
            "password": "Password123",
            "role": "homeroom_teacher",
            "assigned_classes": ["class_9_9"],
        },
        headers=admin_headers,
    )
    assert response.status_code == 400
    listed = await client.get("/api/v1/users", headers=admin_headers)
    assert listed.json() == []


@pytest.mark.asyncio
async def test_profile_update_does_not_change_claims(client: AsyncClient, admin_headers) -> None:
    created = (
        await client.post(
            "/api/v1/users",
            json={"display_name": "Staff", "email": "staff@school.edu.vn", "password": "Password123", "role": "proctor"},
            headers=admin_headers,
        )
    ).json()

    response = await client.put(
        f"/api/v1/users/{created['id']}",
        json={"display_name": "Staff Member", "role": "admin", "status": "INACTIVE"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["display_name"] == "Staff Member"
    assert body["role"] == "admin"
    assert body["status"] == "INACTIVE"
    assert body["claims"] == {"role": "proctor", "assigned_classes": []}


@pytest.mark.asyncio
async def test_claims_endpoint(client: AsyncClient, school, admin_headers, auth_headers) -> None:
    created = (
        await client.post(
            "/api/v1/users",
            json={"display_name": "Staff", "email": "staff2@school.edu.vn", "password": "Password123"},
            headers=admin_headers,
        )
    ).json()
    assert created["claims"] == {}

    response = await client.post(
        f"/api/v1/users/{created['id']}/claims",
        json={"role": "homeroom_teacher", "assigned_classes": ["class_6_2", "class_6_2"]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    user = (await client.get(f"/api/v1/users/{created['id']}", headers=admin_headers)).json()
    assert user["claims"] == {"role": "homeroom_teacher", "assigned_classes": ["class_6_2"]}

    denied = await client.post(
        f"/api/v1/users/{created['id']}/claims",
        json={"role": "admin"},
        headers=auth_headers(Role.PRINCIPAL),
    )
    assert denied.status_code == 403


@pytest.mark.asyncio
async def test_user_listing_permissions(client: AsyncClient, auth_headers) -> None:
    assert (await client.get("/api/v1/users", headers=auth_headers(Role.IT_STAFF))).status_code == 200
    assert (await client.get("/api/v1/users", headers=auth_headers(Role.PROCTOR))).status_code == 403
    assert (await client.get("/api/v1/users/01NOSUCHUSER00000000000000", headers=auth_headers(Role.IT_STAFF))).status_code == 404
    denied = await client.post(
        "/api/v1/users",
        json={"display_name": "X", "email": "x@school.edu.vn", "password": "Password123"},
        headers=auth_headers(Role.PRINCIPAL),
    )
    assert denied.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [Role.PRINCIPAL, Role.IT_STAFF])
async def test_set_user_claims_service_requires_claims_capability(db_session, admin_user, role) -> None:
    caller = AuthSession.from_claims({"sub": "u9", "role": role.value})
    with pytest.raises(ServiceError) as exc:
        await set_user_claims(db_session, caller, admin_user.id, SetClaimsRequest(role=Role.STUDENT))
    assert exc.value.status_code == 403
    stored = await db_session.get(User, admin_user.id)
    assert stored.claims["role"] == "admin"
