"""
Demo data provider.

Generates a deterministic in-memory dataset (seeded random) shaped like the
production backend: two central warehouses, eleven project sites, a real
electrical-materials catalog spread across sites, entry and consumption
history, a tool fleet, thirty transfer requests and four users.

The dataset is live: the lists handed out are the provider's own, so
approvals and ledger changes made by the session persist across refreshes.
"""

import random
from datetime import datetime, timedelta
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.common import as_utc, utc_now
from src.core.entities.inventory import (
    InventoryRecord,
    ProjectProgress,
    Transaction,
    TransactionType,
)
from src.core.entities.item import Item, PricePoint
from src.core.entities.movement import MovementRequest, MovementStatus
from src.core.entities.site import Site
from src.core.entities.tool import Tool, ToolCategory, ToolStatus
from src.core.entities.user import User
from src.core.exceptions import AuthenticationError, ValidationError
from src.core.interfaces.data_provider import IDataProvider
from src.infrastructure.providers.demo_data import (
    CATALOG_ROWS,
    CITIES,
    REJECTION_REASONS,
    SITE_SEEDS,
    TOOL_BRANDS,
    USER_SEEDS,
    category_for,
    unit_for,
)

logger = get_logger(__name__)

TOOL_COUNT = 80
MOVEMENT_COUNT = 30
PENDING_MOVEMENTS = 10
APPROVED_MOVEMENTS = 15
# Pending requests are created in small orders of this size
PENDING_BATCH_SIZE = 3
PRICE_HISTORY_MONTHS = 6


def _month_key(when: datetime, months_back: int) -> str:
    year, month = when.year, when.month - months_back
    while month <= 0:
        month += 12
        year -= 1
    return f"{year:04d}-{month:02d}"


class DemoDataProvider(IDataProvider):
    """In-memory provider used for demos, tests and offline work."""

    name = "demo"

    def __init__(self, seed: int = 42, now: datetime | None = None) -> None:
        self._rng = random.Random(seed)
        self._now = as_utc(now) if now else utc_now()

        self.sites = self._generate_sites()
        self.items = self._generate_items()
        self.inventory: list[InventoryRecord] = []
        self.progress: list[ProjectProgress] = []
        self.transactions: list[Transaction] = []
        self._distribute_inventory()
        self._generate_transactions()
        self.tools = self._generate_tools()
        self.movements = self._generate_movements()
        self.users = self._generate_users()

        logger.info(
            "demo_dataset_generated",
            seed=seed,
            sites=len(self.sites),
            items=len(self.items),
            records=len(self.inventory),
            transactions=len(self.transactions),
            tools=len(self.tools),
            movements=len(self.movements),
        )

    def _days_ago(self, days: float) -> datetime:
        return self._now - timedelta(days=days)

    def _generate_sites(self) -> list[Site]:
        return [
            Site(
                id=f"s{index + 1}",
                name=name,
                type=site_type,
                location=CITIES[index % len(CITIES)],
                budget=budget,
            )
            for index, (name, site_type, budget) in enumerate(SITE_SEEDS)
        ]

    def _generate_items(self) -> list[Item]:
        items = []
        for sku, name, quantity, value in CATALOG_ROWS:
            cost = value / quantity if quantity > 0 else value
            # Newest month first
            history = [
                PricePoint(
                    date=_month_key(self._now, months_back),
                    price=round(cost * self._rng.uniform(0.95, 1.05)),
                )
                for months_back in range(PRICE_HISTORY_MONTHS)
            ]
            items.append(
                Item(
                    id=sku,
                    sku=sku,
                    name=name,
                    category=category_for(name),
                    unit=unit_for(name),
                    cost=round(cost),
                    image_url=f"https://placehold.co/100?text={name[:3].upper()}",
                    price_history=history,
                )
            )
        return items

    def _distribute_inventory(self) -> None:
        """Spread each catalog row over one to four random sites."""
        index: dict[tuple[str, str], InventoryRecord] = {}

        for sku, _name, quantity, _value in CATALOG_ROWS:
            remaining = quantity
            spread = self._rng.randint(1, 4)

            for i in range(spread):
                if remaining <= 0:
                    break
                site = self._rng.choice(self.sites)
                if i == spread - 1:
                    share = remaining
                else:
                    share = min(remaining, int(remaining * self._rng.uniform(0.2, 0.5)))
                if share == 0:
                    continue
                remaining -= share

                record = index.get((sku, site.id))
                if record is not None:
                    record.quantity += share
                else:
                    record = InventoryRecord(
                        id=f"inv-{sku}-{site.id}",
                        item_id=sku,
                        site_id=site.id,
                        quantity=share,
                        last_moved_date=self._days_ago(self._rng.randrange(60)),
                    )
                    index[(sku, site.id)] = record
                    self.inventory.append(record)

                if not site.is_warehouse:
                    self.progress.append(
                        ProjectProgress(
                            id=f"prog-{record.id}-{i}",
                            site_id=site.id,
                            item_id=sku,
                            quantity_installed=int(share * self._rng.uniform(0, 0.7)),
                            last_report_date=self._days_ago(2),
                        )
                    )

    def _generate_transactions(self) -> None:
        for record in self.inventory:
            self.transactions.append(
                Transaction(
                    id=f"tx_entry_{record.id}",
                    item_id=record.item_id,
                    site_id=record.site_id,
                    quantity=record.quantity + int(record.quantity * 0.1),
                    date=self._days_ago(self._rng.randrange(60, 180)),
                    type=TransactionType.ENTRY,
                )
            )
            consumed = int(record.quantity * 0.05)
            if self._rng.random() > 0.3 and consumed > 0:
                self.transactions.append(
                    Transaction(
                        id=f"tx_cons_{record.id}",
                        item_id=record.item_id,
                        site_id=record.site_id,
                        quantity=-consumed,
                        date=self._days_ago(self._rng.randrange(30)),
                        type=TransactionType.CONSUMPTION,
                    )
                )

    def _generate_tools(self) -> list[Tool]:
        tools = []
        for i in range(TOOL_COUNT):
            site = self._rng.choice(self.sites)
            brand = self._rng.choice(TOOL_BRANDS)
            problematic = self._rng.random() < 0.1
            tools.append(
                Tool(
                    id=f"t{i}",
                    name=f"{brand} Tool Type {chr(65 + i % 5)}",
                    serial_number=f"SN-{10000 + i}",
                    brand=brand,
                    site_id=site.id,
                    purchase_date=self._days_ago(self._rng.randrange(500)),
                    warranty_expiration_date=self._days_ago(self._rng.randrange(300) - 150),
                    next_maintenance_date=self._days_ago(5 if problematic else -30),
                    status=ToolStatus.MAINTENANCE if problematic else ToolStatus.OPERATIVE,
                    category=ToolCategory.ELECTRICAL if i % 2 == 0 else ToolCategory.MANUAL,
                )
            )
        return tools

    def _generate_movements(self) -> list[MovementRequest]:
        """Requests always draw on stock the origin actually holds."""
        movements = []
        route: tuple[str, str] | None = None
        stocked: list[InventoryRecord] = []

        for i in range(MOVEMENT_COUNT):
            pending = i < PENDING_MOVEMENTS
            if not pending or i % PENDING_BATCH_SIZE == 0 or route is None:
                origin = self._rng.choice(self.inventory).site_id
                destination = self._rng.choice([s.id for s in self.sites if s.id != origin])
                route = (origin, destination)
                stocked = [r for r in self.inventory if r.site_id == origin]
                request_date = self._days_ago(self._rng.randrange(15))

            record = self._rng.choice(stocked)
            quantity = max(1, min(self._rng.randrange(1, 20), int(record.quantity)))
            if pending:
                status = MovementStatus.PENDING
            elif i < PENDING_MOVEMENTS + APPROVED_MOVEMENTS:
                status = MovementStatus.APPROVED
            else:
                status = MovementStatus.REJECTED

            movements.append(
                MovementRequest(
                    id=f"mov{i}",
                    batch_id=f"batch-{i // PENDING_BATCH_SIZE}" if pending else None,
                    item_id=record.item_id,
                    from_site_id=route[0],
                    to_site_id=route[1],
                    quantity=quantity,
                    request_date=request_date,
                    requester_id="u3",
                    status=status,
                    approval_date=None if pending else self._days_ago(1),
                    rejection_reason=(
                        self._rng.choice(REJECTION_REASONS)
                        if status == MovementStatus.REJECTED
                        else None
                    ),
                )
            )
        return movements

    def _generate_users(self) -> list[User]:
        return [
            User(
                id=user_id,
                username=username,
                name=name,
                role=role,
                assigned_site_id=self.sites[site_index].id if site_index is not None else None,
            )
            for user_id, username, name, role, site_index in USER_SEEDS
        ]

    async def login(self, username: str, password: str) -> User:
        """Match the username case-insensitively. Passwords are not checked in demo mode."""
        wanted = username.strip().lower()
        for user in self.users:
            if user.username.lower() == wanted:
                logger.info("demo_login", username=user.username, role=user.role.value)
                return user
        raise AuthenticationError(username)

    async def get_sites(self) -> list[Site]:
        return self.sites

    async def get_items(self) -> list[Item]:
        return self.items

    async def get_inventory(self) -> list[InventoryRecord]:
        return self.inventory

    async def get_tools(self) -> list[Tool]:
        return self.tools

    async def get_movements(self) -> list[MovementRequest]:
        return self.movements

    async def get_transactions(self) -> list[Transaction]:
        return self.transactions

    async def get_progress(self) -> list[ProjectProgress]:
        return self.progress

    async def get_users(self) -> list[User]:
        return list(self.users)

    async def create_user(self, payload: dict[str, Any]) -> User:
        data = {k: v for k, v in payload.items() if k != "password"}
        username = str(data.get("username", "")).strip()
        if any(u.username.lower() == username.lower() for u in self.users):
            raise ValidationError("username", "Username already exists", username)

        try:
            user = User.model_validate({**data, "id": f"u{len(self.users) + 1}"})
        except PydanticValidationError as e:
            raise ValidationError("user", str(e.errors()[0]["msg"]), data) from e

        self.users.append(user)
        logger.info("demo_user_created", user_id=user.id, role=user.role.value)
        return user
