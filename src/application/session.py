"""
Dashboard session.

Holds the active data provider, the logged-in user and the latest snapshot,
and hands out the engine objects (catalog, ledger, approval service) bound
to that snapshot. A SnapshotPoller keeps remote snapshots fresh.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime

from src.config import (
    Settings,
    bind_session_context,
    clear_session_context,
    get_logger,
    get_settings,
)
from src.core.entities.common import utc_now
from src.core.entities.inventory import (
    InventoryDetail,
    InventoryRecord,
    ProjectProgress,
    Thresholds,
    Transaction,
)
from src.core.entities.item import Item
from src.core.entities.movement import MovementRequest
from src.core.entities.site import Site
from src.core.entities.tool import Tool, ToolDetail
from src.core.entities.user import User
from src.core.exceptions import DataProviderError, ProviderConnectionError
from src.core.interfaces.data_provider import IDataProvider
from src.core.services.catalog import ReferenceCatalog
from src.core.services.enrichment import enrich_inventory, enrich_tools
from src.core.services.ledger import InventoryLedger
from src.core.services.movement_batches import MovementApprovalService

logger = get_logger(__name__)


@dataclass
class Snapshot:
    """Everything fetched from the provider in one refresh."""

    sites: list[Site] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)
    inventory: list[InventoryRecord] = field(default_factory=list)
    tools: list[Tool] = field(default_factory=list)
    movements: list[MovementRequest] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    progress: list[ProjectProgress] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    fetched_at: datetime = field(default_factory=utc_now)
    catalog: ReferenceCatalog = field(default_factory=ReferenceCatalog)


class SnapshotPoller:
    """
    Periodic refresh task.

    Refresh failures are logged and retried on the next tick; the previous
    snapshot stays in place.
    """

    def __init__(self, refresh: Callable[[], Awaitable[object]], interval_seconds: float):
        self._refresh = refresh
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="snapshot-poller")
        logger.info("snapshot_poller_started", interval=self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("snapshot_poller_stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self._refresh()
            except DataProviderError as e:
                logger.warning("snapshot_refresh_failed", error=e.code, message=e.message)


class DashboardSession:
    """
    One dashboard session over a data provider.

    Demo mode never polls: its dataset only changes through this session.
    """

    def __init__(
        self,
        provider: IDataProvider,
        settings: Settings | None = None,
        demo_factory: Callable[[], IDataProvider] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.provider = provider
        self.user: User | None = None
        self.snapshot: Snapshot | None = None
        self.demo_fallback_available = False
        self._demo_factory = demo_factory or self._default_demo_factory
        self._lock = asyncio.Lock()
        self.poller = SnapshotPoller(self.refresh, self.settings.data.poll_interval_seconds)

    def _default_demo_factory(self) -> IDataProvider:
        from src.infrastructure.providers.demo_provider import DemoDataProvider

        return DemoDataProvider(seed=self.settings.data.demo_seed)

    @property
    def mode(self) -> str:
        return self.provider.name

    @property
    def is_demo(self) -> bool:
        return self.mode == "demo"

    @property
    def catalog(self) -> ReferenceCatalog:
        return self.snapshot.catalog if self.snapshot else ReferenceCatalog()

    async def login(self, username: str, password: str) -> User:
        """
        Authenticate and load the first snapshot.

        A connection failure marks the demo fallback as available and is
        re-raised; rejected credentials propagate as AuthenticationError.
        """
        self.demo_fallback_available = False
        try:
            user = await self.provider.login(username, password)
        except ProviderConnectionError:
            self.demo_fallback_available = True
            logger.warning("login_backend_unreachable", mode=self.mode)
            raise

        self.user = user
        # The poller task copies this context, so its events carry it too
        bind_session_context(self.mode, user.username)
        await self.refresh()
        if not self.is_demo:
            self.poller.start()
        logger.info("session_login", username=user.username, mode=self.mode)
        return user

    async def logout(self) -> None:
        await self.poller.stop()
        self.user = None
        clear_session_context()

    async def switch_to_demo(self) -> None:
        """Replace the provider with the demo dataset and reload."""
        await self.poller.stop()
        if not self.is_demo:
            await self.provider.close()
        self.provider = self._demo_factory()
        self.user = None
        self.demo_fallback_available = False
        bind_session_context(self.mode)
        await self.refresh()
        logger.info("session_switched_to_demo")

    async def refresh(self) -> Snapshot:
        """Fetch reference data first, then the rest concurrently."""
        async with self._lock:
            sites = await self.provider.get_sites()
            (
                items,
                inventory,
                tools,
                movements,
                transactions,
                progress,
                users,
            ) = await asyncio.gather(
                self.provider.get_items(),
                self.provider.get_inventory(),
                self.provider.get_tools(),
                self.provider.get_movements(),
                self.provider.get_transactions(),
                self.provider.get_progress(),
                self.provider.get_users(),
            )

            self.snapshot = Snapshot(
                sites=sites,
                items=items,
                inventory=inventory,
                tools=tools,
                movements=movements,
                transactions=transactions,
                progress=progress,
                users=users,
                catalog=ReferenceCatalog.build(sites, items, users),
            )

        logger.debug(
            "snapshot_refreshed",
            mode=self.mode,
            records=len(inventory),
            movements=len(movements),
        )
        return self.snapshot

    async def current(self) -> Snapshot:
        """Latest snapshot, fetching one if none has been loaded yet."""
        if self.snapshot is None:
            return await self.refresh()
        return self.snapshot

    @property
    def thresholds(self) -> Thresholds:
        kpi = self.settings.kpi
        return Thresholds(
            stagnant_days=kpi.stagnant_days,
            low_stock_quantity=kpi.low_stock_quantity,
        )

    async def inventory_details(self, now: datetime | None = None) -> list[InventoryDetail]:
        snapshot = await self.current()
        return enrich_inventory(
            snapshot.inventory,
            snapshot.catalog,
            now=now,
            stagnant_days=self.settings.kpi.stagnant_days,
        )

    async def tool_details(self, now: datetime | None = None) -> list[ToolDetail]:
        snapshot = await self.current()
        return enrich_tools(
            snapshot.tools,
            snapshot.catalog,
            now=now,
            maintenance_soon_days=self.settings.kpi.maintenance_soon_days,
            warranty_expiring_days=self.settings.kpi.warranty_expiring_days,
        )

    async def ledger(self) -> InventoryLedger:
        snapshot = await self.current()
        return InventoryLedger(snapshot.inventory, snapshot.transactions)

    async def approvals(self) -> MovementApprovalService:
        snapshot = await self.current()
        return MovementApprovalService(
            snapshot.movements, snapshot.catalog, await self.ledger()
        )

    async def close(self) -> None:
        await self.poller.stop()
        await self.provider.close()
