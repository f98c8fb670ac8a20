"""Tests for user management and project endpoints."""

from httpx import AsyncClient


class TestUserEndpoints:
    async def test_list(self, api_client: AsyncClient):
        data = (await api_client.get("/api/users")).json()
        assert data["total"] == 4
        assert {u["username"] for u in data["users"]} == {"admin", "director", "obra", "compras"}

    async def test_create(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/users",
            json={"username": "nuevo", "name": "Nuevo Residente", "role": "SITE_MANAGER", "assignedSiteId": "s4"},
        )

        assert response.status_code == 201
        user = response.json()
        assert user["id"] == "u5"
        assert user["assignedSiteId"] == "s4"
        assert "password" not in user
        assert (await api_client.get("/api/users")).json()["total"] == 5

    async def test_duplicate_username(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/users", json={"username": "ADMIN", "name": "Other", "role": "ADMIN"}
        )
        assert response.status_code == 400

    async def test_unknown_site(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/users",
            json={"username": "x", "name": "X", "role": "SITE_MANAGER", "assignedSiteId": "nope"},
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "SITE_NOT_FOUND"

    async def test_invalid_role(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/users", json={"username": "x", "name": "X", "role": "KING"}
        )
        assert response.status_code == 422


class TestProjectEndpoints:
    async def test_project_status(self, api_client: AsyncClient):
        response = await api_client.get("/api/projects/s3")

        assert response.status_code == 200
        data = response.json()
        assert data["siteId"] == "s3"
        assert data["siteName"] == "URB SALITRE LIVING BOG"
        assert all(m["wastagePercent"] >= 0 for m in data["materials"])

    async def test_unknown_project(self, api_client: AsyncClient):
        response = await api_client.get("/api/projects/nope")
        assert response.status_code == 404
        assert response.json()["error_code"] == "SITE_NOT_FOUND"
