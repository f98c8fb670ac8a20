"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from src.api.dependencies import get_llm, get_session
from src.application.dto.responses import HealthResponse, ProviderHealthResponse
from src.application.session import DashboardSession
from src.config import get_logger
from src.core.exceptions import DataProviderError, LLMError

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


async def _llm_status() -> ProviderHealthResponse:
    try:
        llm = get_llm()
        start = time.time()
        health_result = await llm.check_health()
        return ProviderHealthResponse(
            name=llm.__class__.__name__,
            available=health_result.available,
            latency_ms=(time.time() - start) * 1000,
            error=health_result.error,
        )
    except (LLMError, ValueError) as e:
        return ProviderHealthResponse(name="llm", available=False, error=str(e))


async def _data_status(session: DashboardSession) -> ProviderHealthResponse:
    try:
        start = time.time()
        await session.refresh()
        return ProviderHealthResponse(
            name=session.mode,
            available=True,
            latency_ms=(time.time() - start) * 1000,
        )
    except DataProviderError as e:
        logger.warning("data_provider_health_failed", error=e.code)
        return ProviderHealthResponse(name=session.mode, available=False, error=e.message)


@router.get("", response_model=HealthResponse)
async def health_check(session: DashboardSession = Depends(get_session)) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and the active data mode.
    """
    return HealthResponse(
        status="healthy",
        uptime_seconds=time.time() - _start_time,
        mode=session.mode,
    )


@router.get("/llm", response_model=HealthResponse)
async def llm_health() -> HealthResponse:
    """
    LLM provider health check.

    The dashboard works without the LLM; only advisory features degrade.
    """
    llm_status = await _llm_status()
    return HealthResponse(
        status="healthy" if llm_status.available else "degraded",
        uptime_seconds=time.time() - _start_time,
        llm=llm_status,
    )


@router.get("/data", response_model=HealthResponse)
async def data_health(session: DashboardSession = Depends(get_session)) -> HealthResponse:
    """
    Data provider health check.

    Performs a snapshot refresh and times it.
    """
    data_status = await _data_status(session)
    return HealthResponse(
        status="healthy" if data_status.available else "unhealthy",
        uptime_seconds=time.time() - _start_time,
        mode=session.mode,
        data_provider=data_status,
    )


@router.get("/full", response_model=HealthResponse)
async def full_health_check(session: DashboardSession = Depends(get_session)) -> HealthResponse:
    """Data provider and LLM together."""
    data_status = await _data_status(session)
    llm_status = await _llm_status()

    if not data_status.available:
        status_str = "unhealthy"
    elif not llm_status.available:
        status_str = "degraded"
    else:
        status_str = "healthy"

    return HealthResponse(
        status=status_str,
        uptime_seconds=time.time() - _start_time,
        mode=session.mode,
        llm=llm_status,
        data_provider=data_status,
    )
