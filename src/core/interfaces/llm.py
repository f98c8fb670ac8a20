"""
Abstract interface for the LLM backing the advisory features.

Only text generation and chat are needed; answers that must be structured
are requested in JSON mode and validated by the caller.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class LLMProvider(str, Enum):
    """Supported LLM provider types."""

    OLLAMA = "ollama"


@dataclass
class LLMResponse:
    """Completed generation."""

    text: str
    model: str
    done: bool = True
    done_reason: str | None = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    error: str | None = None


@dataclass
class HealthStatus:
    """LLM provider health status."""

    available: bool
    provider: str
    model: str | None = None
    error: str | None = None
    response_time_ms: float | None = None


class ILLMProvider(ABC):
    """Port for an LLM provider. Implementations: OllamaProvider."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
        json_mode: bool = False,
    ) -> LLMResponse:
        """
        Single-turn completion.

        Args:
            prompt: User prompt
            system_prompt: Optional system prompt
            temperature: Sampling temperature (0-2)
            max_tokens: Maximum tokens to generate
            json_mode: Ask the model to emit a single JSON document

        Returns:
            LLMResponse with generated text
        """

    @abstractmethod
    async def chat(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.2,
        max_tokens: int = 2048,
    ) -> LLMResponse:
        """
        Multi-turn completion.

        Args:
            messages: [{"role": "system"|"user"|"assistant", "content": "..."}]
        """

    @abstractmethod
    async def check_health(self) -> HealthStatus:
        """Check the provider and report availability."""

    @abstractmethod
    def is_available(self) -> bool:
        """Cached availability from the last health check."""
