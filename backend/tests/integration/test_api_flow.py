"""End-to-end tests of the HTTP surface with an in-memory store."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from patent_auth.application.services import AppDataStore
from patent_auth.infrastructure.dependencies import get_app_data_store, get_password_hasher
from patent_auth.main import app

from conftest import FakeAppDataRepository, FakePasswordHasher


@pytest_asyncio.fixture
async def client():
    hasher = FakePasswordHasher()
    store = AppDataStore(FakeAppDataRepository(hasher))
    app.dependency_overrides[get_app_data_store] = lambda: store
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def _login(client: AsyncClient, username: str, password: str, role: str = "USER") -> dict:
    response = await client.post(
        "/api/v1/auth/login",
        json={"username": username, "password": password, "role": role},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.mark.asyncio
async def test_apply_and_download_flow(client: AsyncClient):
    headers = await _login(client, "tech_corp", "123")

    projects = (await client.get("/api/v1/projects", headers=headers)).json()
    assert {p["id"]: p["affordable"] for p in projects} == {"p1": True, "p2": True, "p3": True}

    response = await client.post("/api/v1/certificates", json={"project_id": "p2"}, headers=headers)
    assert response.status_code == 201
    certificate = response.json()
    assert certificate["is_paid"] is False
    assert (await client.get("/api/v1/auth/me", headers=headers)).json()["credits"] == 1000

    preview = await client.get(f"/api/v1/certificates/{certificate['id']}/preview", headers=headers)
    assert preview.status_code == 200
    assert preview.headers["content-disposition"].startswith("inline")

    download = await client.get(f"/api/v1/certificates/{certificate['id']}/download", headers=headers)
    assert download.status_code == 200
    assert download.content.startswith(b"%PDF")
    assert download.headers["content-disposition"].startswith("attachment")
    assert (await client.get("/api/v1/auth/me", headers=headers)).json()["credits"] == 800

    again = await client.get(f"/api/v1/certificates/{certificate['id']}/download", headers=headers)
    assert again.status_code == 200
    assert (await client.get("/api/v1/auth/me", headers=headers)).json()["credits"] == 800

    confirm = await client.post(
        f"/api/v1/certificates/{certificate['id']}/confirm-delivery", headers=headers
    )
    assert confirm.json()["status"] == "already_paid"

    listed = (await client.get("/api/v1/certificates", headers=headers)).json()
    assert listed[0]["is_paid"] is True
    assert listed[0]["charged_credits"] == 200


@pytest.mark.asyncio
async def test_unauthenticated_requests_rejected(client: AsyncClient):
    assert (await client.get("/api/v1/certificates")).status_code == 401
    bad = {"Authorization": "Bearer not-a-token"}
    assert (await client.get("/api/v1/auth/me", headers=bad)).status_code == 401


@pytest.mark.asyncio
async def test_login_role_gate(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth/login",
        json={"username": "tech_corp", "password": "123", "role": "ADMIN"},
    )
    assert response.status_code == 403

    response = await client.post(
        "/api/v1/auth/login",
        json={"username": "tech_corp", "password": "nope", "role": "USER"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_user_cannot_reach_admin_endpoints(client: AsyncClient):
    headers = await _login(client, "tech_corp", "123")
    assert (await client.get("/api/v1/admin/users", headers=headers)).status_code == 403


@pytest.mark.asyncio
async def test_apply_unaffordable_returns_402(client: AsyncClient):
    admin = await _login(client, "admin", "admin", role="ADMIN")
    response = await client.put("/api/v1/admin/users/user1", json={"credits": 30}, headers=admin)
    assert response.status_code == 200

    headers = await _login(client, "tech_corp", "123")
    response = await client.post("/api/v1/certificates", json={"project_id": "p3"}, headers=headers)
    assert response.status_code == 402
    assert response.json()["detail"]["required"] == 50


@pytest.mark.asyncio
async def test_admin_manages_projects_and_users(client: AsyncClient):
    admin = await _login(client, "admin", "admin", role="ADMIN")

    created = await client.post("/api/v1/admin/projects", json={}, headers=admin)
    assert created.status_code == 201
    assert created.json()["name"] == "新项目"

    response = await client.delete(f"/api/v1/admin/projects/{created.json()['id']}", headers=admin)
    assert response.status_code == 204

    response = await client.post("/api/v1/admin/users", json={"username": "tech_corp"}, headers=admin)
    assert response.status_code == 409

    response = await client.delete("/api/v1/admin/users/admin", headers=admin)
    assert response.status_code == 422

    response = await client.put("/api/v1/admin/config", json={"patent_no": "CN-1"}, headers=admin)
    assert response.json()["patent_no"] == "CN-1"

    assert (await client.post("/api/v1/admin/reset", headers=admin)).status_code == 204
    config = (await client.get("/api/v1/admin/config", headers=admin)).json()
    assert config["patent_no"] == "CN-2024-98765432"
