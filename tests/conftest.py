"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import get_session
from src.api.main import app
from src.application.session import DashboardSession
from src.config import Settings, reset_settings
from src.core.entities import (
    InventoryRecord,
    Item,
    ItemCategory,
    MovementRequest,
    PricePoint,
    Site,
    SiteType,
    Transaction,
    TransactionType,
    User,
    UserRole,
)
from src.core.services import ReferenceCatalog
from src.infrastructure.providers.demo_provider import DemoDataProvider

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; start every test from the environment."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def sites() -> list[Site]:
    return [
        Site(id="s1", name="Central Warehouse", type=SiteType.CENTRAL_WAREHOUSE),
        Site(id="s2", name="Torre Norte", type=SiteType.RESIDENTIAL, budget=1_000_000),
        Site(id="s3", name="Planta Solar", type=SiteType.SOLAR, budget=500_000),
    ]


@pytest.fixture
def items() -> list[Item]:
    return [
        Item(
            id="i1",
            sku="CAB-12",
            name="CABLE THHN 12 AWG",
            category=ItemCategory.CABLES,
            unit="mts",
            cost=10,
            price_history=[
                PricePoint(date="2026-10", price=12),
                PricePoint(date="2026-09", price=9),
            ],
        ),
        Item(id="i2", sku="TUB-34", name="TUBO EMT 3/4", category=ItemCategory.PIPING, cost=20),
        Item(id="i3", sku="BRK-20", name="BREAKER 20A", category=ItemCategory.PROTECTION, cost=30),
    ]


@pytest.fixture
def users() -> list[User]:
    return [
        User(id="u1", username="admin", name="Admin", role=UserRole.ADMIN),
        User(
            id="u3",
            username="obra",
            name="Site Manager",
            role=UserRole.SITE_MANAGER,
            assigned_site_id="s2",
        ),
    ]


@pytest.fixture
def catalog(sites, items, users) -> ReferenceCatalog:
    """Catalog with one warehouse, two projects and three items."""
    return ReferenceCatalog.build(sites, items, users)


@pytest.fixture
def records() -> list[InventoryRecord]:
    return [
        InventoryRecord(id="r1", item_id="i1", site_id="s1", quantity=100, last_moved_date=days_ago(10)),
        InventoryRecord(id="r2", item_id="i2", site_id="s1", quantity=40, last_moved_date=days_ago(95)),
        InventoryRecord(id="r3", item_id="i3", site_id="s2", quantity=3, last_moved_date=days_ago(45)),
    ]


@pytest.fixture
def transactions() -> list[Transaction]:
    return [
        Transaction(id="t1", item_id="i1", site_id="s1", quantity=-30, date=days_ago(5), type=TransactionType.CONSUMPTION),
        Transaction(id="t2", item_id="i3", site_id="s2", quantity=-2, date=days_ago(20), type=TransactionType.CONSUMPTION),
        # Outside the 30 day window
        Transaction(id="t3", item_id="i2", site_id="s1", quantity=-10, date=days_ago(45), type=TransactionType.CONSUMPTION),
        Transaction(id="t4", item_id="i1", site_id="s1", quantity=130, date=days_ago(100), type=TransactionType.ENTRY),
    ]


@pytest.fixture
def make_movement():
    """Factory for pending transfer requests."""

    def _make(movement_id: str, **overrides) -> MovementRequest:
        data = {
            "id": movement_id,
            "item_id": "i1",
            "from_site_id": "s1",
            "to_site_id": "s2",
            "quantity": 1,
            "request_date": days_ago(1),
            "requester_id": "u3",
        }
        data.update(overrides)
        return MovementRequest(**data)

    return _make


@pytest.fixture
def demo_provider() -> DemoDataProvider:
    """Deterministic demo dataset pinned to NOW."""
    return DemoDataProvider(seed=42, now=NOW)


@pytest.fixture
def demo_session(demo_provider) -> DashboardSession:
    return DashboardSession(demo_provider, Settings(), demo_factory=lambda: DemoDataProvider(now=NOW))


@pytest_asyncio.fixture
async def api_client(demo_session) -> AsyncGenerator[AsyncClient, None]:
    """Async client over the app with the demo session injected."""
    app.dependency_overrides[get_session] = lambda: demo_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_session, None)
    await demo_session.close()
