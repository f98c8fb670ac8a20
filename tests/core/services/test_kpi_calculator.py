"""Tests for KPI aggregation."""

from datetime import timedelta

import pytest

from src.core.entities import (
    InventoryRecord,
    Item,
    ItemCategory,
    MovementStatus,
    Site,
    SiteType,
    Transaction,
    TransactionType,
)
from src.core.services import (
    ReferenceCatalog,
    compute_kpis,
    enrich_inventory,
    health_score,
    site_investment,
    top_value_items,
    transfer_savings,
    weeks_of_supply,
)


@pytest.fixture
def details(records, catalog, now):
    return enrich_inventory(records, catalog, now=now)


class TestComputeKpis:
    """Tests for compute_kpis."""

    def test_worked_example_itr_and_dsi(self, now):
        catalog = ReferenceCatalog.build(
            sites=[Site(id="S1", name="Obra", type=SiteType.COMMERCIAL)],
            items=[Item(id="I1", sku="I1", name="Cable", cost=1000)],
        )
        record = InventoryRecord(
            id="r", item_id="I1", site_id="S1", quantity=1000, last_moved_date=now
        )
        consumption = Transaction(
            id="t", item_id="I1", site_id="S1", quantity=-300,
            date=now - timedelta(days=3), type=TransactionType.CONSUMPTION,
        )

        report = compute_kpis(
            enrich_inventory([record], catalog, now=now), [consumption], catalog, now=now
        )

        assert report.total_stock_value == 1_000_000
        assert report.consumption_value == 300_000
        assert report.itr == pytest.approx(0.3)
        assert report.dsi == pytest.approx(100)

    def test_fixture_snapshot(self, details, transactions, catalog, now):
        report = compute_kpis(details, transactions, catalog, now=now)

        assert report.total_stock_value == 1890
        # Only r2 has been idle more than 90 days
        assert report.dead_stock_value == 800
        assert report.dead_stock_rate == pytest.approx(800 / 1890)
        # t3 is outside the window, ENTRY rows never count
        assert report.consumption_value == 360
        assert report.itr == pytest.approx(360 / 1890)
        assert report.sell_through_rate == pytest.approx(360 / (1890 + 360))
        assert report.stockout_rate == pytest.approx(1 / 3)
        assert report.service_level == pytest.approx(2 / 3)
        assert report.record_count == 3
        assert 0 <= report.health_score <= 100

    def test_window_boundary_is_inclusive(self, details, catalog, now):
        on_boundary = Transaction(
            id="edge", item_id="i1", site_id="s1", quantity=-1,
            date=now - timedelta(days=30), type=TransactionType.CONSUMPTION,
        )
        report = compute_kpis(details, [on_boundary], catalog, now=now)
        assert report.consumption_value == 10

    def test_consumption_after_now_is_ignored(self, details, catalog, now):
        ahead = Transaction(
            id="late", item_id="i1", site_id="s1", quantity=-5,
            date=now + timedelta(days=2), type=TransactionType.CONSUMPTION,
        )
        assert compute_kpis(details, [ahead], catalog, now=now).consumption_value == 0

    def test_empty_inputs_are_all_zero(self, catalog, now):
        report = compute_kpis([], [], catalog, now=now)
        assert report.total_stock_value == 0
        assert report.itr == 0
        assert report.dsi == 0
        assert report.dead_stock_rate == 0
        assert report.sell_through_rate == 0
        assert report.stockout_rate == 0
        assert report.service_level == 0

    def test_dangling_consumption_is_worthless(self, details, catalog, now):
        ghost = Transaction(
            id="g", item_id="ghost", site_id="s1", quantity=-50,
            date=now - timedelta(days=1), type=TransactionType.CONSUMPTION,
        )
        assert compute_kpis(details, [ghost], catalog, now=now).consumption_value == 0


class TestHealthScore:
    def test_perfect(self):
        assert health_score(0, 0, 0) == 100

    def test_penalties(self):
        # 10% dead stock (-15) and 5% stockouts (-10)
        assert health_score(0.10, 0.05, 0) == pytest.approx(75)

    def test_rotation_bonus_capped(self):
        assert health_score(0.10, 0, itr=5.0, itr_target=0.5) == pytest.approx(100)
        assert health_score(0.20, 0, itr=0.75, itr_target=0.5) == pytest.approx(80)

    def test_clamped_at_zero(self):
        assert health_score(1.0, 1.0, 0) == 0


class TestWeeksOfSupply:
    def test_per_category(self, details, transactions, catalog, now):
        rows = {r.category: r for r in weeks_of_supply(details, transactions, catalog, now=now)}

        cables = rows[ItemCategory.CABLES]
        assert cables.stock_value == 1000
        assert cables.weekly_consumption == pytest.approx(300 / (30 / 7))
        assert cables.weeks_of_supply == pytest.approx(1000 / (300 / (30 / 7)))

        # Stock without consumption is capped
        assert rows[ItemCategory.PIPING].weeks_of_supply == 52

    def test_sorted_by_stock_value(self, details, transactions, catalog, now):
        rows = weeks_of_supply(details, transactions, catalog, now=now)
        values = [r.stock_value for r in rows]
        assert values == sorted(values, reverse=True)


class TestCapitalViews:
    def test_top_value_items(self, details):
        top = top_value_items(details, limit=2)
        assert [t.record_id for t in top] == ["r1", "r2"]
        assert top[0].share == pytest.approx(1000 / 1890)

    def test_site_investment(self, details, catalog):
        rows = site_investment(details, catalog)
        assert [(r.site_id, r.inventory_value, r.record_count) for r in rows] == [
            ("s1", 1800, 2),
            ("s2", 90, 1),
        ]
        assert rows[1].budget == 1_000_000

    def test_transfer_savings_counts_approved_only(self, make_movement, catalog):
        movements = [
            make_movement("a", quantity=5, status=MovementStatus.APPROVED),
            make_movement("b", quantity=5, status=MovementStatus.REJECTED),
            make_movement("c", quantity=5),
            make_movement("d", item_id="i3", quantity=2, status=MovementStatus.APPROVED),
        ]
        assert transfer_savings(movements, catalog) == 5 * 10 + 2 * 30
