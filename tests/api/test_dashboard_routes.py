"""Tests for the executive dashboard and tool endpoints."""

from httpx import AsyncClient


class TestDashboardEndpoints:
    async def test_overview(self, api_client: AsyncClient):
        response = await api_client.get("/api/dashboard")

        assert response.status_code == 200
        data = response.json()
        kpis = data["kpis"]
        assert kpis["totalStockValue"] > 0
        assert 0 <= kpis["healthScore"] <= 100
        assert 0 <= kpis["deadStockRate"] <= 1
        assert data["pendingBatches"] == 4
        assert len(data["topItems"]) == 10
        assert data["weeksOfSupply"]
        assert len(data["toolAlerts"]) <= 5
        assert data["transferSavings"] > 0

    async def test_site_investment_sorted(self, api_client: AsyncClient):
        rows = (await api_client.get("/api/dashboard")).json()["siteInvestment"]
        values = [r["inventoryValue"] for r in rows]
        assert values == sorted(values, reverse=True)

    async def test_refresh(self, api_client: AsyncClient):
        response = await api_client.post("/api/dashboard/refresh")
        assert response.status_code == 200


class TestToolEndpoints:
    async def test_list(self, api_client: AsyncClient):
        data = (await api_client.get("/api/tools")).json()
        assert data["stats"]["total"] == 80
        assert len(data["items"]) == 80
        assert "daysToMaintenance" in data["items"][0]

    async def test_status_filter(self, api_client: AsyncClient):
        data = (await api_client.get("/api/tools", params={"status": "MAINTENANCE"})).json()
        assert all(t["status"] == "MAINTENANCE" for t in data["items"])

    async def test_alerts_limit(self, api_client: AsyncClient):
        alerts = (await api_client.get("/api/tools/alerts", params={"limit": 3})).json()
        assert len(alerts) <= 3

    async def test_stats(self, api_client: AsyncClient):
        stats = (await api_client.get("/api/tools/stats")).json()
        assert stats["total"] == 80
        assert 0 <= stats["healthIndex"] <= 100

    async def test_update_status(self, api_client: AsyncClient, demo_provider):
        tool = next(t for t in demo_provider.tools if t.status.value == "OPERATIVE")
        before = (await api_client.get("/api/tools/stats")).json()

        response = await api_client.patch(f"/api/tools/{tool.id}/status", json={"status": "REPAIR"})

        assert response.status_code == 200
        detail = response.json()
        assert detail["id"] == tool.id
        assert detail["status"] == "REPAIR"
        assert "maintenanceAlert" in detail
        after = (await api_client.get("/api/tools/stats")).json()
        assert after["operative"] == before["operative"] - 1
        assert after["inMaintenance"] == before["inMaintenance"] + 1

    async def test_update_status_unknown_tool(self, api_client: AsyncClient):
        response = await api_client.patch("/api/tools/t999/status", json={"status": "MAINTENANCE"})
        assert response.status_code == 404
        assert response.json()["error_code"] == "TOOL_NOT_FOUND"

    async def test_update_status_rejects_unknown_value(self, api_client: AsyncClient):
        response = await api_client.patch("/api/tools/t0/status", json={"status": "LOST"})
        assert response.status_code == 422
