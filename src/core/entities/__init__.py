"""Core domain entities."""

from src.core.entities.advisory import (
    AdvisoryResult,
    Benchmarks,
    ChatTurn,
    CriticalItem,
    ExtractedItem,
    InventoryAnalysisAnswer,
    KPIBenchmarkAnswer,
    SemanticSearchAnswer,
    SiteReportAnswer,
    StrategicAction,
)
from src.core.entities.common import DomainModel, UTCDateTime, as_utc, utc_now
from src.core.entities.inventory import (
    InventoryDetail,
    InventoryRecord,
    InventoryStatus,
    ProjectProgress,
    Thresholds,
    Transaction,
    TransactionType,
)
from src.core.entities.item import Item, ItemCategory, PricePoint
from src.core.entities.kpi import (
    CategorySupply,
    KPIReport,
    SiteInvestment,
    SiteRisk,
    TopValueItem,
)
from src.core.entities.movement import (
    BatchDecision,
    MovementBatch,
    MovementLine,
    MovementRequest,
    MovementStatus,
    TransferOrderLine,
)
from src.core.entities.project import MaterialBalance, ProjectStatus
from src.core.entities.purchasing import (
    PriceAlert,
    RequisitionCheck,
    RequisitionLine,
    StockLocation,
)
from src.core.entities.site import Site, SiteType
from src.core.entities.tool import (
    MaintenanceAlert,
    Tool,
    ToolCategory,
    ToolDetail,
    ToolStats,
    ToolStatus,
    WarrantyAlert,
)
from src.core.entities.user import User, UserRole

__all__ = [
    # Common
    "DomainModel",
    "UTCDateTime",
    "as_utc",
    "utc_now",
    # Reference data
    "Site",
    "SiteType",
    "Item",
    "ItemCategory",
    "PricePoint",
    "User",
    "UserRole",
    # Inventory
    "InventoryRecord",
    "InventoryDetail",
    "InventoryStatus",
    "Transaction",
    "TransactionType",
    "ProjectProgress",
    "Thresholds",
    # Tools
    "Tool",
    "ToolDetail",
    "ToolStatus",
    "ToolCategory",
    "ToolStats",
    "MaintenanceAlert",
    "WarrantyAlert",
    # Movements
    "MovementRequest",
    "MovementStatus",
    "MovementLine",
    "MovementBatch",
    "TransferOrderLine",
    "BatchDecision",
    # KPIs
    "KPIReport",
    "CategorySupply",
    "SiteRisk",
    "TopValueItem",
    "SiteInvestment",
    # Projects / purchasing
    "MaterialBalance",
    "ProjectStatus",
    "RequisitionLine",
    "RequisitionCheck",
    "StockLocation",
    "PriceAlert",
    # Advisory
    "AdvisoryResult",
    "Benchmarks",
    "ChatTurn",
    "CriticalItem",
    "ExtractedItem",
    "InventoryAnalysisAnswer",
    "KPIBenchmarkAnswer",
    "SemanticSearchAnswer",
    "SiteReportAnswer",
    "StrategicAction",
]
