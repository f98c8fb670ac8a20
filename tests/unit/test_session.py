"""Tests for the dashboard session and snapshot poller."""

import asyncio
from unittest.mock import AsyncMock

import pytest
import structlog

from src.application.session import DashboardSession, SnapshotPoller
from src.config import DataSettings, KPISettings, Settings
from src.core.exceptions import AuthenticationError, ProviderConnectionError
from src.infrastructure.providers.demo_provider import DemoDataProvider


class RemoteLikeProvider(DemoDataProvider):
    """Demo data served under the remote mode name."""

    name = "remote"


class UnreachableProvider(RemoteLikeProvider):
    async def login(self, username, password):
        raise ProviderConnectionError("http://backend.test/api", "ConnectError")


@pytest.fixture
def slow_poll_settings():
    return Settings(data=DataSettings(poll_interval_seconds=3600))


class TestDashboardSession:
    """Tests for DashboardSession."""

    async def test_demo_login_loads_snapshot_without_polling(self, demo_session):
        user = await demo_session.login("director", "")

        assert user.username == "director"
        assert demo_session.user is user
        assert demo_session.snapshot is not None
        assert len(demo_session.catalog.sites) == 13
        assert not demo_session.poller.running

    async def test_rejected_login(self, demo_session):
        with pytest.raises(AuthenticationError):
            await demo_session.login("ghost", "")
        assert demo_session.user is None
        assert not demo_session.demo_fallback_available

    async def test_remote_login_starts_poller(self, now, slow_poll_settings):
        session = DashboardSession(RemoteLikeProvider(now=now), slow_poll_settings)

        await session.login("admin", "secret")
        assert session.poller.running

        await session.logout()
        assert not session.poller.running
        assert session.user is None
        await session.close()

    async def test_unreachable_backend_offers_demo(self, now, slow_poll_settings):
        session = DashboardSession(
            UnreachableProvider(now=now),
            slow_poll_settings,
            demo_factory=lambda: DemoDataProvider(now=now),
        )

        with pytest.raises(ProviderConnectionError):
            await session.login("admin", "secret")
        assert session.demo_fallback_available

        await session.switch_to_demo()

        assert session.is_demo
        assert not session.demo_fallback_available
        assert session.snapshot is not None
        await session.close()

    async def test_login_binds_log_context(self, now, slow_poll_settings):
        session = DashboardSession(RemoteLikeProvider(now=now), slow_poll_settings)

        await session.login("admin", "secret")
        context = structlog.contextvars.get_contextvars()
        assert context["data_mode"] == "remote"
        assert context["user"] == "admin"

        await session.logout()
        assert "user" not in structlog.contextvars.get_contextvars()
        await session.close()

    async def test_current_fetches_once(self, demo_session):
        first = await demo_session.current()
        assert await demo_session.current() is first

    async def test_decisions_survive_refresh(self, demo_session, now):
        approvals = await demo_session.approvals()
        assert len(approvals.pending_batches()) == 4

        approvals.reject_batch("batch-0", "Duplicate request", now)
        await demo_session.refresh()

        remaining = (await demo_session.approvals()).pending_batches()
        assert [b.id for b in remaining] == ["batch-1", "batch-2", "batch-3"]

    async def test_inventory_details_use_configured_threshold(self, demo_provider, now):
        session = DashboardSession(demo_provider, Settings(kpi=KPISettings(stagnant_days=10_000)))
        details = await session.inventory_details(now)
        assert details
        assert not any(d.is_stagnant for d in details)

    async def test_thresholds_follow_settings(self, demo_provider):
        session = DashboardSession(demo_provider, Settings(kpi=KPISettings(low_stock_quantity=7)))
        assert session.thresholds.low_stock_quantity == 7


class TestSnapshotPoller:
    async def test_failures_do_not_stop_polling(self):
        calls = []

        async def refresh():
            calls.append(1)
            if len(calls) == 1:
                raise ProviderConnectionError("http://backend.test/api")

        poller = SnapshotPoller(refresh, interval_seconds=0.01)

        poller.start()
        for _ in range(50):
            if len(calls) >= 2:
                break
            await asyncio.sleep(0.01)
        await poller.stop()

        assert len(calls) >= 2
        assert not poller.running

    async def test_start_is_idempotent(self):
        poller = SnapshotPoller(AsyncMock(), interval_seconds=3600)
        poller.start()
        task = poller._task
        poller.start()
        assert poller._task is task
        await poller.stop()
