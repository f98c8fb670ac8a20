"""
Base LLM provider with retry and circuit breaker.

Transport timeouts and connection failures are retried with exponential
backoff; repeated failures open the breaker so the advisory endpoints fail
fast instead of piling up slow requests.
"""

import time
from abc import ABC
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar, cast

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import LLMSettings, get_logger, get_settings
from src.core.exceptions import (
    CircuitBreakerOpenError,
    LLMError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from src.core.interfaces import HealthStatus, ILLMProvider

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class CircuitBreakerState:
    """Consecutive-failure breaker with a cooldown before a half-open retry."""

    provider: str = "llm"
    failures: int = 0
    last_failure_time: float = 0.0
    is_open: bool = False
    cooldown_seconds: int = 60
    failure_threshold: int = 3

    def record_failure(self) -> None:
        self.failures += 1
        self.last_failure_time = time.time()

        if self.failures >= self.failure_threshold and not self.is_open:
            self.is_open = True
            logger.warning(
                "circuit_breaker_opened",
                provider=self.provider,
                failures=self.failures,
                cooldown=self.cooldown_seconds,
            )

    def record_success(self) -> None:
        if self.is_open:
            logger.info("circuit_breaker_closed", provider=self.provider)
        self.failures = 0
        self.is_open = False

    def check(self) -> None:
        """
        Raise CircuitBreakerOpenError while the cooldown is running.

        Once it has elapsed a single request is let through (half-open).
        """
        if not self.is_open:
            return

        if self.cooldown_remaining > 0:
            raise CircuitBreakerOpenError(self.provider, self.cooldown_remaining)

        logger.info("circuit_breaker_half_open", provider=self.provider)

    @property
    def cooldown_remaining(self) -> int:
        if not self.is_open:
            return 0
        elapsed = time.time() - self.last_failure_time
        return max(0, int(self.cooldown_seconds - elapsed))


class BaseLLMProvider(ILLMProvider, ABC):
    """
    Shared resilience for LLM providers.

    Subclasses raise the builtin TimeoutError / ConnectionError for transport
    problems so they are retried and counted by the breaker; any LLMError
    passes straight through.
    """

    provider_name = "llm"

    def __init__(self, settings: LLMSettings | None = None) -> None:
        self.settings = settings or get_settings().llm
        self.circuit_breaker = CircuitBreakerState(
            provider=self.provider_name,
            failure_threshold=self.settings.failure_threshold,
            cooldown_seconds=self.settings.cooldown_seconds,
        )
        self._health_cache: HealthStatus | None = None
        self._health_cache_time: float = 0.0
        self._health_cache_ttl: float = 30.0

    def _get_retry_decorator(self) -> Any:
        delay = self.settings.retry_delay
        return retry(
            stop=stop_after_attempt(self.settings.max_retries),
            wait=wait_exponential(
                multiplier=delay,
                min=delay,
                max=delay * (self.settings.retry_multiplier**3),
            ),
            retry=retry_if_exception_type((TimeoutError, ConnectionError)),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "llm_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _with_resilience(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Run an operation behind the breaker and the retry policy.

        Raises:
            CircuitBreakerOpenError: If the breaker is open
            LLMTimeoutError: If every attempt timed out
            LLMUnavailableError: If the provider could not be reached
        """
        self.circuit_breaker.check()

        try:
            result = await self._get_retry_decorator()(operation)(*args, **kwargs)
        except TimeoutError:
            self.circuit_breaker.record_failure()
            raise LLMTimeoutError(self.settings.timeout)
        except ConnectionError as e:
            self.circuit_breaker.record_failure()
            raise LLMUnavailableError(self.provider_name, str(e))
        except LLMError as e:
            # Bad answers do not trip the breaker
            logger.error("llm_error", error=e.message, code=e.code)
            raise

        self.circuit_breaker.record_success()
        return cast(T, result)

    def is_available(self) -> bool:
        if self.circuit_breaker.is_open:
            return False

        now = time.time()
        if self._health_cache and (now - self._health_cache_time) < self._health_cache_ttl:
            return self._health_cache.available

        # Optimistic until the next async health check
        return True

    def _update_health_cache(self, status: HealthStatus) -> HealthStatus:
        self._health_cache = status
        self._health_cache_time = time.time()
        return status
