"""Tests for the AI advisory endpoints with a mocked LLM."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from src.api.dependencies import get_advisory
from src.api.main import app
from src.core.exceptions import LLMUnavailableError
from src.core.interfaces.llm import LLMResponse
from src.core.services import AdvisoryService


@pytest.fixture
def llm():
    return AsyncMock()


@pytest.fixture
def advisory_client(api_client: AsyncClient, llm):
    app.dependency_overrides[get_advisory] = lambda: AdvisoryService(llm)
    yield api_client
    app.dependency_overrides.pop(get_advisory, None)


class TestAdvisoryEndpoints:
    async def test_benchmarks(self, advisory_client: AsyncClient, llm):
        llm.generate.return_value = LLMResponse(
            text='{"benchmarks": {"itr": 0.4}, "analysis": "ok", "actionPlan": ["a"]}',
            model="llama3.1:8b",
        )

        response = await advisory_client.get("/api/advisory/benchmarks")

        assert response.status_code == 200
        data = response.json()
        assert data["available"] is True
        assert data["data"]["actionPlan"] == ["a"]

    async def test_llm_down_still_answers(self, advisory_client: AsyncClient, llm):
        llm.generate.side_effect = LLMUnavailableError("ollama", "refused")

        response = await advisory_client.get("/api/advisory/analysis")

        assert response.status_code == 200
        assert response.json()["available"] is False

    async def test_search_keeps_catalog_skus(self, advisory_client: AsyncClient, llm):
        llm.generate.return_value = LLMResponse(
            text='{"recommendedSkus": ["005644", "NOT-A-SKU"]}', model="llama3.1:8b"
        )

        response = await advisory_client.post("/api/advisory/search", json={"query": "tuercas"})

        assert response.json()["data"] == {"recommendedSkus": ["005644"]}

    async def test_site_report(self, advisory_client: AsyncClient, llm):
        llm.generate.return_value = LLMResponse(
            text='{"extractedItems": [{"itemName": "tuerca", "quantity": 50, "matchedSku": "005644"}], "summary": "s"}',
            model="llama3.1:8b",
        )

        response = await advisory_client.post(
            "/api/advisory/site-report", json={"text": "Instalamos 50 tuercas"}
        )

        assert response.json()["data"]["extractedItems"][0]["matchedSku"] == "005644"

    async def test_chat(self, advisory_client: AsyncClient, llm):
        llm.chat.return_value = LLMResponse(text="Transfer the cable.", model="llama3.1:8b")

        response = await advisory_client.post(
            "/api/advisory/chat",
            json={"message": "What now?", "history": [{"role": "user", "content": "hola"}]},
        )

        assert response.json()["text"] == "Transfer the cable."

    async def test_chat_rejects_unknown_role(self, advisory_client: AsyncClient):
        response = await advisory_client.post(
            "/api/advisory/chat",
            json={"message": "hi", "history": [{"role": "system", "content": "x"}]},
        )
        assert response.status_code == 422
