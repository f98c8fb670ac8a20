"""Tests for the Ollama provider over a mocked HTTP transport."""

import json

import httpx
import pytest

from src.config import LLMSettings
from src.core.exceptions import (
    CircuitBreakerOpenError,
    LLMResponseError,
    LLMUnavailableError,
    ModelNotFoundError,
)
from src.infrastructure.llm.ollama import OllamaProvider

HOST = "http://ollama.test"


def _provider(handler, **overrides) -> OllamaProvider:
    settings = LLMSettings(host=HOST, max_retries=1, retry_delay=0.01, **overrides)
    return OllamaProvider(settings, transport=httpx.MockTransport(handler))


class TestGenerate:
    async def test_json_mode_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"response": '{"ok": true}', "done": True, "prompt_eval_count": 10, "eval_count": 5},
            )

        response = await _provider(handler).generate(
            "prompt", system_prompt="system", temperature=0.1, max_tokens=64, json_mode=True
        )

        assert seen["path"] == "/api/generate"
        assert seen["body"]["format"] == "json"
        assert seen["body"]["system"] == "system"
        assert seen["body"]["stream"] is False
        assert seen["body"]["options"] == {"temperature": 0.1, "num_predict": 64}
        assert response.text == '{"ok": true}'
        assert response.total_tokens == 15

    async def test_defaults_from_settings(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": "hi"})

        await _provider(handler, temperature=0.7, max_tokens=99).generate("prompt")
        assert seen["body"]["options"] == {"temperature": 0.7, "num_predict": 99}
        assert "format" not in seen["body"]

    async def test_model_not_found(self):
        provider = _provider(lambda request: httpx.Response(404, text="model not found"))
        with pytest.raises(ModelNotFoundError):
            await provider.generate("prompt")
        # Bad answers do not trip the breaker
        assert provider.circuit_breaker.failures == 0

    async def test_empty_response(self):
        provider = _provider(lambda request: httpx.Response(200, json={"response": "  "}))
        with pytest.raises(LLMResponseError):
            await provider.generate("prompt")

    async def test_server_error(self):
        provider = _provider(lambda request: httpx.Response(500, text="oom"))
        with pytest.raises(LLMUnavailableError):
            await provider.generate("prompt")


class TestResilience:
    async def test_breaker_opens_after_repeated_connection_failures(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        provider = _provider(handler, failure_threshold=2, cooldown_seconds=60)

        for _ in range(2):
            with pytest.raises(LLMUnavailableError):
                await provider.generate("prompt")
        assert provider.circuit_breaker.is_open
        assert not provider.is_available()

        with pytest.raises(CircuitBreakerOpenError):
            await provider.generate("prompt")
        assert len(calls) == 2

    async def test_retries_connection_errors(self):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) < 2:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json={"message": {"content": "hola"}})

        settings = LLMSettings(host=HOST, max_retries=3, retry_delay=0.01)
        provider = OllamaProvider(settings, transport=httpx.MockTransport(handler))

        response = await provider.chat([{"role": "user", "content": "hola"}])

        assert response.text == "hola"
        assert len(attempts) == 2
        assert provider.circuit_breaker.failures == 0


class TestHealth:
    async def test_model_installed(self):
        provider = _provider(
            lambda request: httpx.Response(200, json={"models": [{"name": "llama3.1:8b"}]})
        )
        health = await provider.check_health()
        assert health.available
        assert health.model == "llama3.1:8b"

    async def test_model_missing(self):
        provider = _provider(lambda request: httpx.Response(200, json={"models": []}))
        health = await provider.check_health()
        assert not health.available
        assert "ollama pull" in health.error

    async def test_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        health = await _provider(handler).check_health()
        assert not health.available
        assert "ollama serve" in health.error
