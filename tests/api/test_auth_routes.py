"""Tests for login, demo switch and logout."""

from httpx import AsyncClient


class TestAuthEndpoints:
    async def test_login(self, api_client: AsyncClient):
        response = await api_client.post("/api/auth/login", json={"username": "admin", "password": "123"})

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "demo"
        assert data["user"]["role"] == "ADMIN"
        assert data["fetchedAt"] is not None
        assert data["polling"] is False

    async def test_login_rejected(self, api_client: AsyncClient):
        response = await api_client.post("/api/auth/login", json={"username": "ghost"})

        assert response.status_code == 401
        body = response.json()
        assert body["error_code"] == "AUTHENTICATION_FAILED"
        assert body["hint"]

    async def test_login_requires_username(self, api_client: AsyncClient):
        response = await api_client.post("/api/auth/login", json={"username": ""})
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_session_and_logout(self, api_client: AsyncClient):
        await api_client.post("/api/auth/login", json={"username": "director"})

        session = (await api_client.get("/api/auth/session")).json()
        assert session["user"]["username"] == "director"

        logged_out = (await api_client.post("/api/auth/logout")).json()
        assert logged_out["user"] is None

    async def test_switch_to_demo(self, api_client: AsyncClient):
        response = await api_client.post("/api/auth/demo")
        assert response.status_code == 200
        assert response.json()["mode"] == "demo"
        assert response.json()["demoFallbackAvailable"] is False
