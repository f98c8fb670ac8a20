"""Tool and maintenance entities."""

from enum import Enum

from pydantic import Field

from src.core.entities.common import DomainModel, UTCDateTime

_LEGACY_STATUSES = {
    "OPERATIVA": "OPERATIVE",
    "MANTENIMIENTO": "MAINTENANCE",
    "REPARACION": "REPAIR",
    "BAJA": "DECOMMISSIONED",
}

_LEGACY_TOOL_CATEGORIES = {
    "ELECTRICA": "ELECTRICAL",
    "MEDICION": "MEASUREMENT",
    "SEGURIDAD": "SAFETY",
}


class ToolStatus(str, Enum):
    """Operational status of a tool."""

    OPERATIVE = "OPERATIVE"
    MAINTENANCE = "MAINTENANCE"
    REPAIR = "REPAIR"
    DECOMMISSIONED = "DECOMMISSIONED"

    @classmethod
    def _missing_(cls, value: object) -> "ToolStatus | None":
        if isinstance(value, str) and value in _LEGACY_STATUSES:
            return cls(_LEGACY_STATUSES[value])
        return None


class ToolCategory(str, Enum):
    """Tool family."""

    ELECTRICAL = "ELECTRICAL"
    MANUAL = "MANUAL"
    MEASUREMENT = "MEASUREMENT"
    SAFETY = "SAFETY"

    @classmethod
    def _missing_(cls, value: object) -> "ToolCategory | None":
        if isinstance(value, str) and value in _LEGACY_TOOL_CATEGORIES:
            return cls(_LEGACY_TOOL_CATEGORIES[value])
        # Old demo data tagged some tools with the material category
        if value == "HERRAMIENTA":
            return cls.MANUAL
        return None


class MaintenanceAlert(str, Enum):
    OK = "OK"
    SOON = "SOON"
    OVERDUE = "OVERDUE"


class WarrantyAlert(str, Enum):
    OK = "OK"
    EXPIRING = "EXPIRING"
    EXPIRED = "EXPIRED"


class Tool(DomainModel):
    """A serialized tool assigned to a site."""

    id: str
    name: str
    serial_number: str
    brand: str
    site_id: str
    purchase_date: UTCDateTime
    warranty_expiration_date: UTCDateTime
    next_maintenance_date: UTCDateTime
    status: ToolStatus = ToolStatus.OPERATIVE
    category: ToolCategory = ToolCategory.ELECTRICAL


class ToolDetail(Tool):
    """Tool with site name, signed day countdowns and alert levels."""

    site_name: str
    days_to_maintenance: int
    days_to_warranty: int
    maintenance_alert: MaintenanceAlert
    warranty_alert: WarrantyAlert


class ToolStats(DomainModel):
    """Tool fleet summary for the maintenance dashboard."""

    total: int = 0
    operative: int = 0
    in_maintenance: int = 0
    overdue_maintenance: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
    by_site: dict[str, int] = Field(default_factory=dict)
    health_index: float = 0.0
