"""
Session endpoints: login, demo switch, logout.

When the remote backend is unreachable the login answers 503 and the
session reports ``demoFallbackAvailable``; the client may then switch to
the demo dataset explicitly.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_session
from src.application.dto.requests import LoginRequest
from src.application.dto.responses import ErrorResponse, SessionResponse
from src.application.session import DashboardSession

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _session_response(session: DashboardSession) -> SessionResponse:
    return SessionResponse(
        mode=session.mode,
        user=session.user,
        fetched_at=session.snapshot.fetched_at if session.snapshot else None,
        demo_fallback_available=session.demo_fallback_available,
        polling=session.poller.running,
    )


@router.post(
    "/login",
    response_model=SessionResponse,
    responses={401: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    session: DashboardSession = Depends(get_session),
) -> SessionResponse:
    """Authenticate against the active data provider and load the first snapshot."""
    await session.login(request.username, request.password)
    return _session_response(session)


@router.post("/demo", response_model=SessionResponse)
async def switch_to_demo(session: DashboardSession = Depends(get_session)) -> SessionResponse:
    """Switch the session to the demo dataset. The user must log in again."""
    await session.switch_to_demo()
    return _session_response(session)


@router.post("/logout", response_model=SessionResponse)
async def logout(session: DashboardSession = Depends(get_session)) -> SessionResponse:
    await session.logout()
    return _session_response(session)


@router.get("/session", response_model=SessionResponse)
async def current_session(session: DashboardSession = Depends(get_session)) -> SessionResponse:
    """Current mode, user and snapshot age."""
    return _session_response(session)
