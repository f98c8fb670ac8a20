"""
Ollama LLM provider.

Talks to the Ollama HTTP API for single-turn generation (optionally in JSON
mode) and chat.
"""

import time
from typing import Any

import httpx

from src.config import LLMSettings, get_logger
from src.core.exceptions import (
    LLMResponseError,
    LLMUnavailableError,
    ModelNotFoundError,
)
from src.core.interfaces import HealthStatus, LLMResponse
from src.infrastructure.llm.base import BaseLLMProvider

logger = get_logger(__name__)


class OllamaProvider(BaseLLMProvider):
    """Ollama HTTP API provider."""

    provider_name = "ollama"

    def __init__(
        self,
        settings: LLMSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(settings)
        self.host = self.settings.host.rstrip("/")
        self.model = self.settings.model_name
        self.timeout = self.settings.timeout
        self._transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.host}/{endpoint}"
        try:
            async with self._client(self.timeout + 5) as client:
                response = await client.post(url, json=payload, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise TimeoutError(str(e)) from e
        except httpx.TransportError as e:
            raise ConnectionError(f"{url}: {e}") from e

        if response.status_code == 404:
            raise ModelNotFoundError(payload.get("model", "unknown"), self.provider_name)
        if response.status_code != 200:
            raise LLMUnavailableError(
                self.provider_name, f"HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise LLMResponseError("Body is not JSON", response.text) from e

    def _options(self, temperature: float | None, max_tokens: int | None) -> dict[str, Any]:
        return {
            "temperature": temperature if temperature is not None else self.settings.temperature,
            "num_predict": max_tokens or self.settings.max_tokens,
        }

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": self._options(temperature, max_tokens),
        }
        if system_prompt:
            payload["system"] = system_prompt
        if json_mode:
            payload["format"] = "json"

        async def _do_generate() -> LLMResponse:
            start_time = time.time()
            result = await self._post("api/generate", payload)
            elapsed = time.time() - start_time

            text = result.get("response", "")
            if not text.strip():
                raise LLMResponseError(
                    f"Empty response (done_reason={result.get('done_reason')})", text
                )

            logger.info(
                "ollama_generate",
                model=self.model,
                json_mode=json_mode,
                prompt_len=len(prompt),
                response_len=len(text),
                elapsed_ms=int(elapsed * 1000),
            )
            return LLMResponse(
                text=text,
                model=self.model,
                done=result.get("done", True),
                done_reason=result.get("done_reason"),
                prompt_tokens=result.get("prompt_eval_count", 0),
                completion_tokens=result.get("eval_count", 0),
                total_tokens=result.get("prompt_eval_count", 0) + result.get("eval_count", 0),
            )

        return await self._with_resilience(_do_generate)

    async def chat(
        self,
        messages: list[dict[str, str]],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        payload = {
            "model": self.model,
            "messages": [
                {"role": m.get("role", "user"), "content": m.get("content", "")}
                for m in messages
            ],
            "stream": False,
            "options": self._options(temperature, max_tokens),
        }

        async def _do_chat() -> LLMResponse:
            start_time = time.time()
            result = await self._post("api/chat", payload)
            elapsed = time.time() - start_time

            text = result.get("message", {}).get("content", "")
            if not text.strip():
                raise LLMResponseError("Empty chat response", text)

            logger.info(
                "ollama_chat",
                model=self.model,
                messages=len(messages),
                response_len=len(text),
                elapsed_ms=int(elapsed * 1000),
            )
            return LLMResponse(text=text, model=self.model, done=result.get("done", True))

        return await self._with_resilience(_do_chat)

    async def check_health(self) -> HealthStatus:
        """Check that Ollama answers and the configured model is pulled."""
        start_time = time.time()

        try:
            async with self._client(10) as client:
                response = await client.get(f"{self.host}/api/tags")
        except httpx.ConnectError:
            return self._update_health_cache(
                HealthStatus(
                    available=False,
                    provider=self.provider_name,
                    error=f"Cannot connect to Ollama at {self.host}. Is 'ollama serve' running?",
                )
            )
        except httpx.HTTPError as e:
            return self._update_health_cache(
                HealthStatus(available=False, provider=self.provider_name, error=str(e))
            )

        if response.status_code != 200:
            return self._update_health_cache(
                HealthStatus(
                    available=False,
                    provider=self.provider_name,
                    error=f"HTTP {response.status_code}",
                )
            )

        models = [m.get("name", "") for m in response.json().get("models", [])]
        if not any(self.model in m for m in models):
            return self._update_health_cache(
                HealthStatus(
                    available=False,
                    provider=self.provider_name,
                    model=self.model,
                    error=f"Model '{self.model}' not installed. Run: ollama pull {self.model}",
                )
            )

        return self._update_health_cache(
            HealthStatus(
                available=True,
                provider=self.provider_name,
                model=self.model,
                response_time_ms=(time.time() - start_time) * 1000,
            )
        )


_ollama_provider: OllamaProvider | None = None


def get_ollama_provider() -> OllamaProvider:
    """Get or create the Ollama provider singleton."""
    global _ollama_provider
    if _ollama_provider is None:
        _ollama_provider = OllamaProvider()
    return _ollama_provider
