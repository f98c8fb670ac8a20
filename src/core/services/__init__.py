"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. Engine functions are synchronous and pure;
the advisory service receives its LLM provider via constructor.
"""

from src.core.services.advisory_service import AdvisoryService
from src.core.services.catalog import ReferenceCatalog
from src.core.services.enrichment import (
    enrich_inventory,
    enrich_tools,
    filter_inventory,
    tool_alerts,
    tool_stats,
)
from src.core.services.kpi_calculator import (
    compute_kpis,
    health_score,
    site_investment,
    top_value_items,
    transfer_savings,
    weeks_of_supply,
)
from src.core.services.ledger import InventoryLedger
from src.core.services.movement_batches import (
    MovementApprovalService,
    batch_key,
    group_pending_movements,
)
from src.core.services.project_status import project_status
from src.core.services.purchasing_check import check_requisition, parse_requisition
from src.core.services.site_risk import rank_site_risk

__all__ = [
    # Catalog
    "ReferenceCatalog",
    # Enrichment
    "enrich_inventory",
    "enrich_tools",
    "filter_inventory",
    "tool_alerts",
    "tool_stats",
    # KPIs
    "compute_kpis",
    "health_score",
    "weeks_of_supply",
    "top_value_items",
    "site_investment",
    "transfer_savings",
    "rank_site_risk",
    # Movements
    "group_pending_movements",
    "batch_key",
    "MovementApprovalService",
    "InventoryLedger",
    # Projects / purchasing
    "project_status",
    "check_requisition",
    "parse_requisition",
    # Advisory
    "AdvisoryService",
]
